"""HealthyAura database management CLI.

Creates and drops the relational schema for the reviews domain. Only does
anything when PROTEAN_ENV selects a relational database provider.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    from reviews.domain import reviews
    from reviews.utils.db import setup_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Creating reviews database schema...")
    setup_db(reviews)
    print("Done.")


def drop_databases():
    from reviews.domain import reviews
    from reviews.utils.db import drop_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Dropping reviews database schema...")
    drop_db(reviews)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="HealthyAura database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
