"""Command line entry point: load a price file and print one column."""

from __future__ import annotations

import argparse
import sys

from pairbacktest.csv_parser import ColumnType, load_csv

__all__ = ["main"]

DEFAULT_PATH = "data/Bitfinex_ETHUSD_d.csv"

FIELDS = {
    "unix": ColumnType.INT64,
    "open": ColumnType.FLOAT64,
    "high": ColumnType.FLOAT64,
    "low": ColumnType.FLOAT64,
    "close": ColumnType.FLOAT64,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pairbacktest", description="Print one column of a price CSV file."
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH, help="CSV file to load")
    parser.add_argument(
        "--column", default="open", choices=list(FIELDS), help="column to print"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the price file and print the chosen column, one value per line."""
    args = _build_parser().parse_args(argv)

    try:
        data = load_csv(args.path, FIELDS)
    except OSError as exc:
        print(f"failed to open {args.path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"failed to parse {args.path}: {exc}", file=sys.stderr)
        return 1

    column = data.get(args.column)
    if column is None:
        print(f"{args.path} has no column {args.column!r}", file=sys.stderr)
        return 1

    for value in column.values:
        print(f"{value:f} ")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())