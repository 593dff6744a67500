"""Matching sessions.

MatchingSession :
    Hold the formula and correction catalogs, run the matching engine and
    build export rows from the latest results.

"""

from __future__ import annotations

import logging
import pathlib
from typing import Any, Generator, Iterable, Mapping, Sequence, TextIO

from . import fileio
from .config import SessionConfiguration
from .exceptions import MatchingError, NoCatalogError, RunInProgressError
from .matching import match_chunked
from .models import Correction, FormulaEntry, Match, MatchProgress
from .projection import ExportRow, SortDirection, SortKey, build_export_rows
from .utils import get_export_filename, get_progress_bar

logger = logging.getLogger(__file__)


class MatchingSession:
    """
    Manage catalogs and matching results.

    Every load or clear operation discards the current results. Matching is
    never performed automatically: call :py:meth:`run` or :py:meth:`iter_run`
    after loading both catalogs.

    Parameters
    ----------
    config : SessionConfiguration or None, default=None
        If ``None``, the default configuration is used.

    """

    def __init__(self, config: SessionConfiguration | None = None):
        self._config = SessionConfiguration() if config is None else config
        self._entries: list[FormulaEntry] = list()
        self._corrections: list[Correction] | None = None
        self._matches: list[Match] = list()
        self._running = False

    @property
    def config(self) -> SessionConfiguration:
        """Config getter."""
        return self._config

    @property
    def entries(self) -> list[FormulaEntry]:
        """The formula catalog."""
        return list(self._entries)

    @property
    def corrections(self) -> list[Correction]:
        """The correction catalog. Empty if no catalog was loaded."""
        return list(self._corrections or ())

    @property
    def matches(self) -> list[Match]:
        """Matches found in the latest run."""
        return list(self._matches)

    @property
    def is_running(self) -> bool:
        return self._running

    def load_formulas(self, records: Iterable[Mapping[str, Any]], fields: Sequence[str]) -> list[FormulaEntry]:
        """
        Load the formula catalog from tabular records.

        See :func:`formulamatch.fileio.load_formula_entries`.

        """
        return self._set_formulas(fileio.load_formula_entries, records, fields)

    def read_formulas(self, path: str | pathlib.Path | TextIO) -> list[FormulaEntry]:
        """
        Load the formula catalog from a delimited text file.

        See :func:`formulamatch.fileio.read_formula_catalog`.

        """
        return self._set_formulas(fileio.read_formula_catalog, path, self.config.delimiter)

    def load_corrections(self, text: str) -> list[Correction]:
        """
        Load the correction catalog from line-delimited text.

        See :func:`formulamatch.fileio.load_corrections`.

        """
        return self._set_corrections(fileio.load_corrections, text)

    def read_corrections(self, path: str | pathlib.Path | TextIO) -> list[Correction]:
        """
        Load the correction catalog from a text file.

        See :func:`formulamatch.fileio.read_correction_catalog`.

        """
        return self._set_corrections(fileio.read_correction_catalog, path)

    def clear_formulas(self):
        """Remove the formula catalog and the current results."""
        self._check_not_running()
        self._entries = list()
        self._matches = list()

    def clear_corrections(self):
        """Remove the correction catalog and the current results."""
        self._check_not_running()
        self._corrections = None
        self._matches = list()

    def reset(self):
        """Remove both catalogs and the current results."""
        self.clear_formulas()
        self.clear_corrections()

    def iter_run(self) -> Generator[MatchProgress, None, None]:
        """
        Compute matches, reporting progress after each batch of entries.

        The results are stored in the session after the last report. If the
        run fails, the session results are cleared.

        Yields
        ------
        MatchProgress

        Raises
        ------
        NoCatalogError
            If the formula catalog or the correction catalog was not loaded.
        RunInProgressError
            If another run is in progress.
        MatchingError
            If an unexpected error occurs during matching.

        """
        self._check_not_running()
        if not self._entries or (self._corrections is None):
            raise NoCatalogError("No formulas or corrections loaded")

        # catalogs are snapshots for the duration of the run
        entries = tuple(self._entries)
        corrections = tuple(self._corrections)
        self._running = True
        self._matches = list()
        msg = "Matching %d entries with %d corrections."
        logger.info(msg, len(entries), len(corrections))
        try:
            for progress in match_chunked(
                entries,
                corrections,
                chunk_size=self.config.chunk_size,
                symmetric=self.config.symmetric,
            ):
                if progress.done:
                    self._matches = list(progress.matches)
                    logger.info("Found %d matches.", len(self._matches))
                yield progress
        except Exception as e:
            self._matches = list()
            logger.error("Error applying corrections: %s", e)
            raise MatchingError(f"Error applying corrections: {e}") from e
        finally:
            self._running = False

    def run(self) -> list[Match]:
        """
        Compute matches between the loaded catalogs.

        If the configuration `show_progress` is set, displays a progress bar.

        Returns
        -------
        list[Match]

        """
        if self.config.show_progress:
            tqdm_func = get_progress_bar()
            bar = tqdm_func(total=len(self._entries))
            bar.set_description("Matching")
        else:
            bar = None

        try:
            for progress in self.iter_run():
                if bar is not None:
                    bar.update(progress.processed - bar.n)
        finally:
            if bar is not None:
                bar.close()
        return self.matches

    def get_export_rows(
        self,
        query: str | None = None,
        key: SortKey | None = None,
        direction: SortDirection | None = None,
    ) -> list[ExportRow]:
        """
        Build export rows from the current results.

        Parameters
        ----------
        query : str or None, default=None
            Keep only entries whose id or formula contains the query.
        key : SortKey or None, default=None
            If ``None``, uses the configuration sort key.
        direction : SortDirection or None, default=None
            If ``None``, uses the configuration sort direction.

        Returns
        -------
        list[ExportRow]

        """
        key = self.config.sort_by if key is None else key
        direction = self.config.direction if direction is None else direction
        return build_export_rows(self._entries, self._matches, query, key, direction)

    def export(
        self,
        path: str | pathlib.Path | TextIO | None = None,
        query: str | None = None,
        key: SortKey | None = None,
        direction: SortDirection | None = None,
    ) -> str | pathlib.Path | TextIO:
        """
        Write export rows to a delimited text file.

        Parameters
        ----------
        path : str, Path, file or None, default=None
            If ``None``, a timestamped file is created in the working
            directory.
        query, key, direction :
            See :py:meth:`get_export_rows`.

        Returns
        -------
        str, Path or file
            The export destination.

        """
        if path is None:
            path = pathlib.Path(get_export_filename())
        rows = self.get_export_rows(query, key, direction)
        fileio.write_export(rows, path, self.config.delimiter)
        return path

    def _check_not_running(self):
        if self._running:
            raise RunInProgressError("A matching run is already in progress")

    def _set_formulas(self, loader, *args) -> list[FormulaEntry]:
        self._check_not_running()
        try:
            entries = loader(*args)
        except Exception:
            if self.config.clear_on_error:
                self.clear_formulas()
            raise
        self._entries = entries
        self._matches = list()
        return list(entries)

    def _set_corrections(self, loader, *args) -> list[Correction]:
        self._check_not_running()
        try:
            corrections = loader(*args)
        except Exception:
            if self.config.clear_on_error:
                self.clear_corrections()
            raise
        self._corrections = corrections
        self._matches = list()
        return list(corrections)
