"""Exceptions raised by formulamatch."""

from typing import Sequence

__all__ = [
    "CatalogReadError",
    "EmptyCatalogError",
    "MatchingError",
    "NoCatalogError",
    "RunInProgressError",
    "SchemaError",
]


class SchemaError(ValueError):
    """Exception raised when a formula catalog lacks required columns."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        msg = "Missing required column(s): {}".format(", ".join(self.missing))
        super().__init__(msg)


class EmptyCatalogError(ValueError):
    """Exception raised when a formula catalog has no usable rows."""


class CatalogReadError(OSError):
    """Exception raised when a catalog file cannot be read or tokenized."""


class NoCatalogError(ValueError):
    """Exception raised when matching is requested without formulas or corrections."""


class RunInProgressError(RuntimeError):
    """Exception raised when a matching run is requested while another one is running."""


class MatchingError(RuntimeError):
    """Exception raised when a matching run fails unexpectedly."""
