"""
Chemistry
=========

Provides:

1. A Formula object that stores the composition of C, H, N, O, S, P and Cl.
2. A permissive formula parser and the canonical string representation used
   as identity key by the matching engine.

Objects
-------
- Formula
- ParseDiagnostics

Functions
---------
- add
- parse
- parse_with_diagnostics
- to_canonical_string

"""

from .formula import (
    Formula,
    InvalidFormula,
    ParseDiagnostics,
    add,
    parse,
    parse_with_diagnostics,
    to_canonical_string,
)
