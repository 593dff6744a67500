from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Iterable

import yaml

from formulamatch import __version__
from formulamatch.config import SessionConfiguration
from formulamatch.exceptions import CatalogReadError, EmptyCatalogError, MatchingError, SchemaError
from formulamatch.projection import SortKey
from formulamatch.session import MatchingSession
from formulamatch.validation import validate_projection_params, validate_run_params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formulamatch",
        description=(
            "Find formula catalog entries that become equal to other entries "
            "after applying a correction, and export the matches to CSV."
        ),
    )
    parser.add_argument(
        "formulas",
        type=pathlib.Path,
        help="Delimited text file with ID and formulas columns.",
    )
    parser.add_argument(
        "corrections",
        type=pathlib.Path,
        help="Text file with one correction formula per line.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=pathlib.Path,
        help="Output CSV path (default: matches_<timestamp>.csv).",
    )
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        help="YAML file with session configuration.",
    )
    parser.add_argument(
        "--search",
        dest="query",
        help="Export only entries whose ID or formula contains this text.",
    )
    parser.add_argument(
        "--sort-by",
        dest="sort_by",
        choices=[x.value for x in SortKey],
        help="Sort key for exported rows (default: id).",
    )
    parser.add_argument(
        "--descending",
        action="store_true",
        default=None,
        help="Sort exported rows in descending order.",
    )
    parser.add_argument(
        "--chunk-size",
        dest="chunk_size",
        type=int,
        help="Number of entries processed between progress updates.",
    )
    parser.add_argument(
        "--symmetric",
        action="store_true",
        default=None,
        help="Also report entries that become the current entry after a correction.",
    )
    parser.add_argument(
        "--delimiter",
        help="Field delimiter for the formula catalog and the export (default: ';').",
    )
    parser.add_argument(
        "--progress",
        dest="show_progress",
        action="store_true",
        default=None,
        help="Display a progress bar.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log loading and matching details.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_config(args: argparse.Namespace) -> SessionConfiguration:
    """Merge the configuration file with command line overrides."""
    if args.config is not None:
        config = SessionConfiguration.from_yaml(args.config)
    else:
        config = SessionConfiguration()

    run_params = {
        "chunk_size": config.chunk_size if args.chunk_size is None else args.chunk_size,
        "symmetric": config.symmetric if args.symmetric is None else args.symmetric,
        "delimiter": config.delimiter if args.delimiter is None else args.delimiter,
    }
    run_params = validate_run_params(run_params)

    descending = config.descending if args.descending is None else args.descending
    projection_params = {
        "query": args.query,
        "sort_by": args.sort_by or config.sort_by.value,
        "direction": "desc" if descending else "asc",
    }
    projection_params = validate_projection_params(projection_params)

    show_progress = config.show_progress if args.show_progress is None else args.show_progress
    return config.model_copy(
        update={
            **run_params,
            "sort_by": projection_params["sort_by"],
            "descending": descending,
            "show_progress": show_progress,
        }
    )


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.INFO if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        config = build_config(args)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    session = MatchingSession(config)
    try:
        session.read_formulas(args.formulas)
        session.read_corrections(args.corrections)
        session.run()
    except (SchemaError, EmptyCatalogError, CatalogReadError, MatchingError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)

    try:
        output = session.export(args.output, query=args.query)
    except OSError as exc:
        print(f"Error writing results: {exc}", file=sys.stderr)
        sys.exit(1)

    matches = session.matches
    n_entries = len({m.original_entry.id for m in matches})
    print(f"Found {len(matches)} matches for {n_entries} entries. Results written to {output}.")


if __name__ == "__main__":  # pragma: no cover
    main()
