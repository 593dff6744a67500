"""
Functions to read formula and correction catalogs and to write match results.

Functions
---------
load_formula_entries(records, fields): Creates formula entries from tabular
records.
load_corrections(text): Creates corrections from line-delimited text.
read_formula_catalog(path, delimiter): Reads a formula catalog from a
delimited text file.
read_correction_catalog(path): Reads a correction catalog from a text file.
write_export(rows, path, delimiter): Writes export rows to a delimited text
file.

See Also
--------
formulamatch.projection.build_export_rows

"""

import logging
import math
import pandas as pd
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TextIO, Union
from . import _constants as c
from .chem import parse_with_diagnostics
from .exceptions import CatalogReadError, EmptyCatalogError, SchemaError
from .models import Correction, FormulaEntry
from .projection import ExportRow, export_rows_to_frame

logger = logging.getLogger(__file__)


def validate_catalog_fields(fields: Optional[Sequence[str]]) -> None:
    """
    Checks that the header of a formula catalog contains the required columns.

    Parameters
    ----------
    fields: sequence of str or None
        Column names. Surrounding whitespace is ignored.

    Raises
    ------
    SchemaError: if any of the required columns is missing.

    """
    stripped = {str(x).strip() for x in (fields or list())}
    missing = [x for x in c.REQUIRED_COLUMNS if x not in stripped]
    if missing:
        raise SchemaError(missing)


def load_formula_entries(
    records: Iterable[Mapping[str, Any]],
    fields: Sequence[str]
) -> List[FormulaEntry]:
    """
    Creates formula entries from tabular records.

    Rows without an ``ID`` or a ``formulas`` value are discarded. Formula
    strings are parsed with :func:`formulamatch.chem.parse`, which never
    fails, so only the header and the number of valid rows are checked.

    Parameters
    ----------
    records: iterable of mappings
        Each record maps column names to values.
    fields: sequence of str
        The column names of the catalog. Must contain ``ID`` and
        ``formulas``.

    Returns
    -------
    list[FormulaEntry]

    Raises
    ------
    SchemaError: if the required columns are missing.
    EmptyCatalogError: if there are no valid rows.

    """
    validate_catalog_fields(fields)
    # records are keyed by the raw header names
    column_map = dict()
    for field in fields:
        column_map.setdefault(str(field).strip(), field)
    id_col = column_map[c.ID_COLUMN]
    formula_col = column_map[c.FORMULA_COLUMN]

    entries = list()
    n_dropped = 0
    unknown = set()
    n_defaulted = 0
    for row in records:
        row_id = row.get(id_col)
        formula_str = row.get(formula_col)
        if _is_missing(row_id) or _is_missing(formula_str):
            n_dropped += 1
            continue
        formula, diagnostics = parse_with_diagnostics(str(formula_str).strip())
        unknown.update(diagnostics.unknown)
        n_defaulted += len(diagnostics.defaulted)
        entries.append(FormulaEntry(id=str(row_id), formula=formula))

    if not entries:
        msg = "No valid formulas found in the formula catalog"
        raise EmptyCatalogError(msg)

    msg = "Loaded %d formula entries, %d rows without ID or formula were dropped."
    logger.info(msg, len(entries), n_dropped)
    _log_diagnostics("formula catalog", unknown, n_defaulted)
    return entries


def load_corrections(text: str) -> List[Correction]:
    """
    Creates corrections from line-delimited text.

    Each non-empty line is parsed as a formula delta. An empty text produces
    an empty list.

    Parameters
    ----------
    text: str

    Returns
    -------
    list[Correction]

    """
    corrections = list()
    unknown = set()
    n_defaulted = 0
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        delta, diagnostics = parse_with_diagnostics(line)
        unknown.update(diagnostics.unknown)
        n_defaulted += len(diagnostics.defaulted)
        corrections.append(Correction(delta=delta))
    logger.info("Loaded %d corrections.", len(corrections))
    _log_diagnostics("correction catalog", unknown, n_defaulted)
    return corrections


def read_formula_catalog(
    path: Union[str, Path, TextIO],
    delimiter: str = c.DEFAULT_DELIMITER
) -> List[FormulaEntry]:
    """
    Reads a formula catalog from a delimited text file.

    Parameters
    ----------
    path: str, Path or file
    delimiter: str, default=";"
        Field delimiter.

    Returns
    -------
    list[FormulaEntry]

    Raises
    ------
    CatalogReadError: if the file cannot be read.
    SchemaError: if the required columns are missing.
    EmptyCatalogError: if there are no valid rows.

    """
    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            dtype=str,
            index_col=False,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        # no header row
        raise SchemaError(c.REQUIRED_COLUMNS)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        msg = "Error parsing formula catalog {}: {}".format(_get_name(path), e)
        raise CatalogReadError(msg) from e
    fields = [str(x) for x in df.columns]
    return load_formula_entries(df.to_dict(orient="records"), fields)


def read_correction_catalog(path: Union[str, Path, TextIO]) -> List[Correction]:
    """
    Reads a correction catalog from a text file with one formula per line.

    Parameters
    ----------
    path: str, Path or file

    Returns
    -------
    list[Correction]

    Raises
    ------
    CatalogReadError: if the file cannot be read.

    """
    try:
        if hasattr(path, "read"):
            text = path.read()
        else:
            with open(path, "rt", encoding="utf-8") as fin:
                text = fin.read()
    except (OSError, UnicodeDecodeError) as e:
        msg = "Error parsing corrections file {}: {}".format(_get_name(path), e)
        raise CatalogReadError(msg) from e
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    return load_corrections(text)


def write_export(
    rows: Sequence[ExportRow],
    path: Union[str, Path, TextIO],
    delimiter: str = c.DEFAULT_DELIMITER
) -> None:
    """
    Writes export rows to a delimited text file.

    Parameters
    ----------
    rows: sequence of ExportRow
    path: str, Path or file
    delimiter: str, default=";"

    """
    df = export_rows_to_frame(rows)
    df.to_csv(path, sep=delimiter, index=False)
    logger.info("Exported %d rows to %s.", len(rows), _get_name(path))


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and (not value)


def _get_name(path) -> str:
    return str(getattr(path, "name", path))


def _log_diagnostics(source: str, unknown: set, n_defaulted: int):
    if unknown:
        msg = "Ignored unknown element symbols in %s: %s."
        logger.warning(msg, source, ", ".join(sorted(unknown)))
    if n_defaulted:
        msg = "%d element(s) in %s had a missing or out of range count and were set to zero."
        logger.warning(msg, n_defaulted, source)
