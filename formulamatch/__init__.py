"""
formulamatch
============

A package to find formulas that coincide with other formulas of a catalog
after applying mass/atom corrections.

Provides
    1. The Formula object and a permissive formula parser.
    2. Readers for formula and correction catalogs.
    3. A matching engine that combines every formula with every correction.
    4. Functions to filter, sort and export matching results.
    5. The MatchingSession object that manages catalogs and results.

"""

__version__ = "0.1.0"

from . import chem
from . import fileio
from . import matching
from . import projection
from .chem import Formula, parse
from .config import SessionConfiguration
from .exceptions import *
from .matching import match, match_chunked
from .models import Correction, FormulaEntry, Match, MatchProgress
from .projection import SortDirection, SortKey, build_export_rows
from .session import MatchingSession
