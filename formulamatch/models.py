"""Data models used by formulamatch.

Correction : A formula delta applied to catalog entries.
FormulaEntry : An identified formula from a formula catalog.
Match : An entry that coincides with another entry after a correction.
MatchProgress : Progress report emitted by the chunked matching engine.

"""

from __future__ import annotations

import pydantic

from .chem import Formula


class FormulaEntry(pydantic.BaseModel):
    """
    A formula catalog entry.

    Attributes
    ----------
    id : str
        The identifier of the entry in the source catalog. Treated as an opaque
        string. Ids are expected to be unique but this is not enforced.
    formula : Formula
        The entry composition.

    """

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)
    id: str
    formula: Formula

    @property
    def canonical_formula(self) -> str:
        """The canonical string of the entry formula."""
        return self.formula.to_canonical_string()


class Correction(pydantic.BaseModel):
    """A formula delta applied additively to catalog entries."""

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)
    delta: Formula


class Match(pydantic.BaseModel):
    """
    Record that an entry plus a correction equals another entry.

    Attributes
    ----------
    original_entry : FormulaEntry
        The entry the correction is applied to.
    matched_entry : FormulaEntry
        The entry whose formula equals the corrected formula. Its id is always
        different from the original entry id.
    applied_correction : Formula
        The correction delta.

    """

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)
    original_entry: FormulaEntry
    matched_entry: FormulaEntry
    applied_correction: Formula


class MatchProgress(pydantic.BaseModel):
    """
    Progress of a chunked matching run.

    Attributes
    ----------
    processed : int
        Number of entries processed so far.
    total : int
        Total number of entries in the run.
    matches : list[Match] or None
        The complete match list. Only set on the last progress report.

    """

    model_config = pydantic.ConfigDict(frozen=True)
    processed: int
    total: int
    matches: list[Match] | None = None

    @property
    def done(self) -> bool:
        """``True`` for the final report of a run."""
        return self.matches is not None
