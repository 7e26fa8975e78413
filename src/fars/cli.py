"""
FARS Command-Line Interface

Exposes two subcommands:

    fars summarize --years <Y> [<Y> ...] [...]   Monthly counts per year
    fars map --state <CODE> --year <Y> [...]     Accident map for one state

The package must be installed (``pip install -e .``) for the ``fars``
entry point to be available.

Package Location: src/fars/cli.py
"""

from __future__ import annotations

import argparse
import sys
import traceback
import webbrowser
from pathlib import Path
from typing import List, Optional

from .analysis.state import InvalidStateError, state_name
from .data.reader import SchemaError
from .reports.generators import ReportGenerator, summarize_years
from .utils.coerce import as_integer
from .utils.logging import configure_logging


# ===========================================================================
# Shared helpers
# ===========================================================================

def _die(message: str) -> None:
    """Print an error message and exit with status 1.

    Args:
        message: Human-readable error text.
    """
    print(f"\n❌  Error: {message}", file=sys.stderr)
    sys.exit(1)


# ===========================================================================
# Subcommand handlers
# ===========================================================================

def handle_summarize(args: argparse.Namespace) -> None:
    """Print the month x year accident count table.

    With ``--output-dir`` the table is also written to CSV.  Invalid years
    are reported as warnings by the loader and do not fail the command.

    Args:
        args: Parsed CLI arguments.
    """
    table = summarize_years(args.years, data_dir=args.data_dir)
    if table.columns.empty:
        print("No valid years to summarize.")
    else:
        print(table.to_string())

    if args.output_dir:
        gen = ReportGenerator(data_dir=args.data_dir, output_dir=args.output_dir)
        out_path = gen.save_summary(table)
        print(f"✅  Summary written → {out_path}")


def handle_map(args: argparse.Namespace) -> None:
    """Write the accident map for one state and year to HTML.

    Args:
        args: Parsed CLI arguments.
    """
    gen = ReportGenerator(data_dir=args.data_dir, output_dir=args.output_dir)
    try:
        out_path = gen.write_state_map(args.state, args.year)
    except (FileNotFoundError, InvalidStateError, SchemaError) as exc:
        _die(str(exc))

    if out_path is None:
        print(f"No accidents to plot for {state_name(as_integer(args.state))} in {args.year}.")
        return

    print(f"✅  Map written → {out_path}")
    if args.show:
        webbrowser.open(out_path.resolve().as_uri())


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser.

    Returns:
        Configured ``ArgumentParser`` with ``summarize`` and ``map``
        subcommands attached.
    """
    parser = argparse.ArgumentParser(
        prog="fars",
        description=(
            "FARS – Fatality Analysis Reporting System toolkit\n"
            "Summarise monthly accident counts and map accidents by state."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=False,
        help="Emit log records as single-line JSON.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Print full tracebacks for unexpected errors.",
    )

    subs = parser.add_subparsers(dest="command", metavar="<command>")
    subs.required = True

    # ------------------------------------------------------------------
    # summarize
    # ------------------------------------------------------------------
    p_sum = subs.add_parser(
        "summarize",
        help="Monthly accident counts for one or more years.",
        description=(
            "Count accidents per month for each requested year.\n\n"
            "Reads accident_<year>.csv.bz2 from --data-dir (default: cwd).\n"
            "Missing years are reported as warnings and skipped."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_sum.add_argument(
        "--years",
        required=True,
        nargs="+",
        metavar="YEAR",
        help="One or more years, e.g. --years 2013 2014 2015",
    )
    p_sum.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Directory holding the accident files (default: cwd).",
    )
    p_sum.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Also write the table to CSV in DIR.",
    )
    p_sum.set_defaults(func=handle_summarize)

    # ------------------------------------------------------------------
    # map
    # ------------------------------------------------------------------
    p_map = subs.add_parser(
        "map",
        help="Map accident locations for one state and year.",
        description=(
            "Plot every accident of one state in one year over the US state\n"
            "boundaries and save it as standalone HTML:\n"
            "  <output-dir>/fars_state_<state>_<year>.html"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_map.add_argument(
        "--state",
        required=True,
        metavar="CODE",
        help="FARS state code, e.g. 1 (Alabama) or 54 (West Virginia).",
    )
    p_map.add_argument(
        "--year",
        required=True,
        metavar="YEAR",
        help="Single data year, e.g. 2015.",
    )
    p_map.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help="Directory holding the accident files (default: cwd).",
    )
    p_map.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        metavar="DIR",
        help="Directory for the HTML map (default: cwd).",
    )
    p_map.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Open the saved map in a web browser.",
    )
    p_map.set_defaults(func=handle_map)

    return parser


# ===========================================================================
# Entry point
# ===========================================================================

def main(argv: Optional[List[str]] = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate handler.

    This function is registered as the ``fars`` console script entry point
    in ``pyproject.toml``.
    """
    parser = _build_parser()
    args   = parser.parse_args(argv)
    configure_logging(args.log_level, json_format=args.json_logs)

    try:
        args.func(args)
    except ValueError as exc:
        if args.verbose:
            traceback.print_exc()
        _die(str(exc))


if __name__ == "__main__":
    main()
