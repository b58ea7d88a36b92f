"""
CLI entry point. Run as: python -m prooftrans --database <name>
"""

import argparse
import logging

from .catalogs import TransformationCatalogs
from .database import AssertionDatabase
from .domains import DATABASES
from .visualization import print_catalogs, print_skipped, export_dot


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Mine closure and equivalence rules from an assertion database",
    )
    parser.add_argument(
        "--database",
        choices=list(DATABASES.keys()),
        default="arithmetic",
        help="Which demonstration database to mine",
    )
    parser.add_argument("--load",    type=str, default=None, help="Load the database from a JSON file")
    parser.add_argument("--save",    type=str, default=None, help="Save the database to a JSON file")
    parser.add_argument("--demo",    action="store_true",    help="Synthesize the database's demo goals")
    parser.add_argument("--skipped", action="store_true",    help="Show why assertions were not cataloged")
    parser.add_argument("--dot",     type=str, default=None, help="Export the demo worksheet as DOT")
    parser.add_argument("--debug",   action="store_true",    help="Debug logging")
    parser.add_argument("--quiet",   action="store_true",    help="Less output")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # --- Load or build the database ---
    if args.load:
        database = AssertionDatabase.from_file(args.load)
        print(f"Loaded {len(database)} assertions from {args.load}")
    else:
        database = DATABASES[args.database]["make_database"]()
        print(f"Database: {args.database} ({len(database)} assertions)")

    catalogs = TransformationCatalogs.build(database)

    if not args.quiet:
        print_catalogs(catalogs)
    if args.skipped:
        print_skipped(catalogs)

    if args.demo or args.dot:
        run_demo = DATABASES[args.database].get("run_demo")
        if run_demo is None:
            print(f"\nNo demo for database {args.database}.")
        else:
            worksheet, results = run_demo(catalogs, verbose=not args.quiet)
            print(f"\nSynthesized {len(results)} goals in {len(worksheet)} worksheet steps.")
            if args.dot:
                export_dot(worksheet, args.dot)

    if args.save:
        database.to_file(args.save)
        print(f"Database saved to {args.save}")
    return 0


if __name__ == "__main__":
    main()
