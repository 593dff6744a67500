"""
Tools for working with elemental compositions.

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

Exceptions
----------

- InvalidFormula

"""


import re
import numpy as np
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple, Union
from .. import _constants as c


_ELEMENT_INDEX: Dict[str, int] = {s: k for k, s in enumerate(c.ELEMENTS)}
_CANONICAL_INDEX: List[int] = [_ELEMENT_INDEX[s] for s in c.CANONICAL_ORDER]
_TOKEN_RE = re.compile(r"([A-Z][a-z]?)(-?[0-9]*)")


class InvalidFormula(ValueError):
    pass


class Formula:
    """
    Represents an elemental composition as a fixed vector of element counts.

    The tracked elements are C, H, N, O, S, P and Cl. Counts are integers and
    may be negative when the formula is used as a correction delta. Formula
    objects are immutable: arithmetic operations always return new objects.

    Attributes
    ----------
    counts: numpy.ndarray
        Read-only array with the count of each element, in the order of
        ``formulamatch._constants.ELEMENTS``.

    Methods
    -------
    as_dict()
    to_canonical_string()
    zero()

    Examples
    --------
    >>> Formula("C3H8")
    Formula(C3H8Cl0N0O0P0S0)
    >>> Formula({"C": 1, "O": 2})
    Formula(C1H0Cl0N0O2P0S0)
    >>> Formula("C3H8") + Formula("H-2")
    Formula(C3H6Cl0N0O0P0S0)

    """

    __slots__ = ("_counts",)

    def __init__(self, composition: Union[str, Mapping[str, int], None] = None):
        counts = np.zeros(len(c.ELEMENTS), dtype=np.int64)
        if isinstance(composition, str):
            counts[:] = parse(composition).counts
        elif composition is not None:
            for symbol, coeff in composition.items():
                if symbol not in _ELEMENT_INDEX:
                    msg = "{} is not a tracked element".format(symbol)
                    raise InvalidFormula(msg)
                if not isinstance(coeff, (int, np.integer)):
                    msg = "Formula coefficients must be integers"
                    raise InvalidFormula(msg)
                if abs(coeff) > c.MAX_COEFFICIENT:
                    msg = "Formula coefficients must be at most {} in absolute value"
                    raise InvalidFormula(msg.format(c.MAX_COEFFICIENT))
                counts[_ELEMENT_INDEX[symbol]] = coeff
        counts.flags.writeable = False
        self._counts = counts

    @classmethod
    def _from_counts(cls, counts: np.ndarray) -> "Formula":
        f = cls.__new__(cls)
        counts = np.array(counts, dtype=np.int64)
        counts.flags.writeable = False
        f._counts = counts
        return f

    @classmethod
    def zero(cls) -> "Formula":
        """Creates the all-zero formula."""
        return cls()

    @property
    def counts(self) -> np.ndarray:
        return self._counts

    def __getitem__(self, symbol: str) -> int:
        try:
            return int(self._counts[_ELEMENT_INDEX[symbol]])
        except KeyError:
            msg = "{} is not a tracked element".format(symbol)
            raise InvalidFormula(msg)

    def __add__(self, other: "Formula") -> "Formula":
        if not isinstance(other, Formula):
            msg = "sum operation is defined only for Formula objects"
            raise ValueError(msg)
        return Formula._from_counts(self._counts + other._counts)

    def __sub__(self, other: "Formula") -> "Formula":
        if not isinstance(other, Formula):
            msg = "subtraction operation is defined only for Formula objects"
            raise ValueError(msg)
        return Formula._from_counts(self._counts - other._counts)

    def __neg__(self) -> "Formula":
        return Formula._from_counts(-self._counts)

    def __eq__(self, other):
        if not isinstance(other, Formula):
            return NotImplemented
        return bool(np.array_equal(self._counts, other._counts))

    def __hash__(self):
        return hash(tuple(self._counts.tolist()))

    def as_dict(self) -> Dict[str, int]:
        """
        Maps each tracked element symbol to its count.

        Returns
        -------
        dict

        Examples
        --------
        >>> Formula("C3H8").as_dict()
        {'C': 3, 'H': 8, 'N': 0, 'O': 0, 'S': 0, 'P': 0, 'Cl': 0}

        """
        return dict(zip(c.ELEMENTS, self._counts.tolist()))

    def to_canonical_string(self) -> str:
        """
        Computes the canonical string of the formula.

        All tracked elements are included in the order C, H, Cl, N, O, P, S,
        even if their count is zero or negative.

        Returns
        -------
        str

        Examples
        --------
        >>> Formula("C10H20N2O5SP").to_canonical_string()
        'C10H20Cl0N2O5P0S0'

        """
        return _get_formula_str(self._counts)

    def __repr__(self):
        return "Formula({})".format(str(self))

    def __str__(self):
        return self.to_canonical_string()


class ParseDiagnostics(NamedTuple):
    """
    Tokens that :func:`parse` could not use as written.

    Attributes
    ----------
    unknown: list of str
        Symbols that are not tracked elements. They are ignored.
    defaulted: list of str
        Tracked elements without a valid integer count, or with a count
        outside the supported range. Their count is set to zero.

    """

    unknown: List[str]
    defaulted: List[str]

    @property
    def is_clean(self) -> bool:
        return not (self.unknown or self.defaulted)


def add(a: Formula, b: Formula) -> Formula:
    """Element-wise sum of two formulas."""
    return a + b


def to_canonical_string(f: Formula) -> str:
    """Canonical string representation of a formula."""
    return f.to_canonical_string()


def parse(text: Optional[str]) -> Formula:
    """
    Parses a formula string into a Formula.

    The string is scanned for ``<Symbol><optional signed integer>`` tokens.
    If an element appears more than once, the last coefficient is used.
    Elements without a coefficient, or with a sign but no digits, are set to
    zero, and so are counts greater than 2147483647 in absolute value.
    Only ASCII digits are recognized. Unknown symbols are ignored. This
    function never fails: empty or unparseable strings produce the zero
    formula.

    Parameters
    ----------
    text: str or None

    Returns
    -------
    Formula

    Examples
    --------
    >>> parse("C3H8")
    Formula(C3H8Cl0N0O0P0S0)
    >>> parse("C")
    Formula(C0H0Cl0N0O0P0S0)

    """
    f, _ = parse_with_diagnostics(text)
    return f


def parse_with_diagnostics(text: Optional[str]) -> Tuple[Formula, ParseDiagnostics]:
    """
    Parses a formula string and reports tokens that were ignored or defaulted.

    See :func:`parse` for the parsing rules.

    Parameters
    ----------
    text: str or None

    Returns
    -------
    formula: Formula
    diagnostics: ParseDiagnostics

    """
    counts = np.zeros(len(c.ELEMENTS), dtype=np.int64)
    diagnostics = ParseDiagnostics(list(), list())
    if text:
        for symbol, coeff_str in _TOKEN_RE.findall(text):
            ind = _ELEMENT_INDEX.get(symbol)
            if ind is None:
                diagnostics.unknown.append(symbol)
                continue
            coeff = _get_coefficient(coeff_str)
            if coeff is None:
                diagnostics.defaulted.append(symbol)
                coeff = 0
            counts[ind] = coeff
    return Formula._from_counts(counts), diagnostics


def _get_coefficient(coeff_str: str) -> Optional[int]:
    """
    Converts a signed coefficient. Returns ``None`` if there are no digits or
    if the absolute value is greater than ``MAX_COEFFICIENT``.
    """
    try:
        coeff = int(coeff_str)
    except ValueError:
        return None
    if abs(coeff) > c.MAX_COEFFICIENT:
        return None
    return coeff


def _get_formula_str(counts: np.ndarray) -> str:
    return "".join(
        "{}{}".format(symbol, int(counts[ind]))
        for symbol, ind in zip(c.CANONICAL_ORDER, _CANONICAL_INDEX)
    )
