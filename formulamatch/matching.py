"""
Matching engine.

Finds pairs of catalog entries whose formulas coincide after adding a
correction delta to one of them.

Functions
---------
build_index(entries): Maps canonical formula strings to entries.
match(entries, corrections): Computes all matches.
match_chunked(entries, corrections, chunk_size): Computes all matches in
batches, reporting progress after each batch.

"""

from __future__ import annotations

from typing import Generator, Sequence

from . import _constants as c
from .models import Correction, FormulaEntry, Match, MatchProgress


def build_index(entries: Sequence[FormulaEntry]) -> dict[str, FormulaEntry]:
    """
    Map the canonical formula string of each entry to the entry.

    Entries are inserted in input order. If several entries share a formula,
    the last one is kept: earlier entries with the same formula cannot be
    reached as match targets.

    Parameters
    ----------
    entries : Sequence[FormulaEntry]

    Returns
    -------
    dict[str, FormulaEntry]

    """
    index = dict()
    for entry in entries:
        index[entry.canonical_formula] = entry
    return index


def match(
    entries: Sequence[FormulaEntry],
    corrections: Sequence[Correction],
    symmetric: bool = False,
) -> list[Match]:
    """
    Find entries that coincide with other entries after applying a correction.

    For each entry and each correction, in input order, the corrected formula
    ``entry.formula + correction.delta`` is searched in the catalog. A match
    is created if an entry with a different id is found. Matches are not
    deduplicated.

    Parameters
    ----------
    entries : Sequence[FormulaEntry]
    corrections : Sequence[Correction]
    symmetric : bool, default=False
        If ``True``, also search ``entry.formula - correction.delta``, i.e.,
        entries that become `entry` after the correction. These matches are
        reported with the negated delta as applied correction.

    Returns
    -------
    list[Match]
        Matches sorted by entry and then by correction, in input order.

    """
    index = build_index(entries)
    return _match_batch(entries, corrections, index, symmetric)


def match_chunked(
    entries: Sequence[FormulaEntry],
    corrections: Sequence[Correction],
    chunk_size: int = c.DEFAULT_CHUNK_SIZE,
    symmetric: bool = False,
) -> Generator[MatchProgress, None, None]:
    """
    Compute matches in batches of entries.

    Yields a progress report after each batch, giving control back to the
    caller between batches. The last report contains the complete match list,
    which is equal to the output of :func:`match` for any chunk size.

    Parameters
    ----------
    entries : Sequence[FormulaEntry]
    corrections : Sequence[Correction]
    chunk_size : int, default=100
        Number of entries processed in each batch.
    symmetric : bool, default=False
        See :func:`match`.

    Yields
    ------
    MatchProgress

    Raises
    ------
    ValueError
        If `chunk_size` is lower than one.

    """
    if chunk_size < 1:
        msg = f"chunk_size must be a positive integer. Got {chunk_size}."
        raise ValueError(msg)

    index = build_index(entries)
    total = len(entries)
    results: list[Match] = list()
    for start in range(0, total, chunk_size):
        batch = entries[start:start + chunk_size]
        results.extend(_match_batch(batch, corrections, index, symmetric))
        processed = min(start + chunk_size, total)
        if processed < total:
            yield MatchProgress(processed=processed, total=total)
    yield MatchProgress(processed=total, total=total, matches=results)


def _match_batch(
    entries: Sequence[FormulaEntry],
    corrections: Sequence[Correction],
    index: dict[str, FormulaEntry],
    symmetric: bool,
) -> list[Match]:
    results = list()
    for entry in entries:
        for correction in corrections:
            corrected = entry.formula + correction.delta
            matched = index.get(corrected.to_canonical_string())
            if (matched is not None) and (matched.id != entry.id):
                m = Match(original_entry=entry, matched_entry=matched, applied_correction=correction.delta)
                results.append(m)

            if symmetric:
                reverse = entry.formula - correction.delta
                matched = index.get(reverse.to_canonical_string())
                if (matched is not None) and (matched.id != entry.id):
                    m = Match(original_entry=entry, matched_entry=matched, applied_correction=-correction.delta)
                    results.append(m)
    return results
