"""
Filtering, sorting and export of matching results.

All functions are pure: they operate on formula entries and the match list
produced by :func:`formulamatch.matching.match`, and never modify them.

Objects
-------
- SortKey
- SortDirection
- ExportRow

Functions
---------
- filter_entries
- sort_entries
- group_matches
- count_matches
- describe_match
- build_export_rows
- export_rows_to_frame

"""

from __future__ import annotations

import enum
from typing import Callable, Sequence

import pandas as pd
import pydantic

from . import _constants as c
from .models import FormulaEntry, Match


class SortKey(enum.Enum):
    """Available sort keys for formula entries."""

    ID = "id"
    FORMULA = "formula"
    MATCHES = "matches"


class SortDirection(enum.Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ExportRow(pydantic.BaseModel):
    """
    A formula entry with its matches, ready to be exported.

    Attributes
    ----------
    id : str
        The entry id.
    canonical_formula : str
        The canonical string of the entry formula.
    match_count : int
        Number of matches where the entry is the original entry.
    match_descriptions : list[str]
        A description of each match, in the order they were found.

    """

    model_config = pydantic.ConfigDict(frozen=True)
    id: str
    canonical_formula: str
    match_count: int
    match_descriptions: list[str]


def filter_entries(entries: Sequence[FormulaEntry], query: str | None) -> list[FormulaEntry]:
    """
    Keep entries whose id or canonical formula contains `query`.

    The comparison is case-insensitive. An empty query keeps all entries.

    """
    if not query:
        return list(entries)
    query = query.lower()
    return [
        x for x in entries if (query in x.id.lower()) or (query in x.canonical_formula.lower())
    ]


def group_matches(matches: Sequence[Match]) -> dict[str, list[Match]]:
    """Group matches by the id of the original entry, preserving their order."""
    groups: dict[str, list[Match]] = dict()
    for m in matches:
        groups.setdefault(m.original_entry.id, list()).append(m)
    return groups


def count_matches(entry: FormulaEntry, matches: Sequence[Match]) -> int:
    """Count the matches where `entry` is the original entry."""
    return sum(1 for m in matches if m.original_entry.id == entry.id)


def sort_entries(
    entries: Sequence[FormulaEntry],
    matches: Sequence[Match] = (),
    key: SortKey = SortKey.ID,
    direction: SortDirection = SortDirection.ASC,
) -> list[FormulaEntry]:
    """
    Stable sort of formula entries.

    Parameters
    ----------
    entries : Sequence[FormulaEntry]
    matches : Sequence[Match], default=()
        Used to compute the number of matches of each entry when sorting by
        :py:attr:`SortKey.MATCHES`.
    key : SortKey, default=SortKey.ID
        ``ID`` sorts by the integer value of the ids. Entries with
        non-numeric ids are placed after numeric ones, in their input order,
        for both sort directions. ``FORMULA`` sorts by canonical string.
        ``MATCHES`` sorts by number of matches.
    direction : SortDirection, default=SortDirection.ASC

    Returns
    -------
    list[FormulaEntry]

    """
    key = SortKey(key)
    reverse = SortDirection(direction) == SortDirection.DESC
    if key == SortKey.ID:
        numeric = [x for x in entries if _parse_id(x.id) is not None]
        non_numeric = [x for x in entries if _parse_id(x.id) is None]
        numeric = sorted(numeric, key=lambda x: _parse_id(x.id), reverse=reverse)
        return numeric + non_numeric

    key_func = _get_key_function(key, matches)
    return sorted(entries, key=key_func, reverse=reverse)


def describe_match(match: Match) -> str:
    """
    Create a text description of a match.

    Examples
    --------
    ``correction=C0H1Cl0N0O0P0S0 result=(ID 2) C10H21Cl0N2O5P0S1``

    """
    return "correction={} result=(ID {}) {}".format(
        match.applied_correction.to_canonical_string(),
        match.matched_entry.id,
        match.matched_entry.canonical_formula,
    )


def build_export_rows(
    entries: Sequence[FormulaEntry],
    matches: Sequence[Match],
    query: str | None = None,
    key: SortKey = SortKey.ID,
    direction: SortDirection = SortDirection.ASC,
) -> list[ExportRow]:
    """
    Create export rows for the filtered and sorted entries.

    Parameters
    ----------
    entries : Sequence[FormulaEntry]
    matches : Sequence[Match]
    query : str or None, default=None
        Filter query. See :func:`filter_entries`.
    key : SortKey, default=SortKey.ID
    direction : SortDirection, default=SortDirection.ASC

    Returns
    -------
    list[ExportRow]

    """
    groups = group_matches(matches)
    selected = sort_entries(filter_entries(entries, query), matches, key, direction)
    rows = list()
    for entry in selected:
        entry_matches = groups.get(entry.id, list())
        row = ExportRow(
            id=entry.id,
            canonical_formula=entry.canonical_formula,
            match_count=len(entry_matches),
            match_descriptions=[describe_match(m) for m in entry_matches],
        )
        rows.append(row)
    return rows


def export_rows_to_frame(rows: Sequence[ExportRow]) -> pd.DataFrame:
    """
    Convert export rows into a DataFrame.

    The match descriptions are joined into a single bracketed string. Entries
    without matches have an empty string.

    """
    data = [
        {
            c.EXPORT_ID: row.id,
            c.EXPORT_FORMULA: row.canonical_formula,
            c.EXPORT_N_MATCHES: row.match_count,
            c.EXPORT_MATCHES: _join_descriptions(row.match_descriptions),
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=c.EXPORT_COLUMNS)


def _join_descriptions(descriptions: list[str]) -> str:
    if not descriptions:
        return ""
    return "[" + ", ".join(descriptions) + "]"


def _parse_id(entry_id: str) -> int | None:
    try:
        return int(entry_id.strip())
    except ValueError:
        return None


def _get_key_function(key: SortKey, matches: Sequence[Match]) -> Callable[[FormulaEntry], str | int]:
    if key == SortKey.FORMULA:
        return lambda x: x.canonical_formula
    groups = group_matches(matches)
    return lambda x: len(groups.get(x.id, ()))
