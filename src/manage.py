"""Kamisori database and access management CLI.

Usage:
    python src/manage.py setup-db                    # Create all tables
    python src/manage.py drop-db                     # Drop all tables
    python src/manage.py grant-role USER_ID admin    # Bootstrap an admin
"""

import argparse
import sys


def _domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


def setup_database():
    from ordering.utils.db import setup_db

    domain = _domain()
    print("Creating ordering database schema...")
    touched = setup_db(domain)
    if not touched:
        print("  No SQL provider configured (set PROTEAN_ENV=production); nothing to create.")
    else:
        print(f"  Schema ready on: {', '.join(touched)}.")
    print("Done.")


def drop_database():
    from ordering.utils.db import drop_db

    domain = _domain()
    print("Dropping ordering database schema...")
    touched = drop_db(domain)
    if not touched:
        print("  No SQL provider configured; nothing to drop.")
    else:
        print(f"  Schema dropped on: {', '.join(touched)}.")
    print("Done.")


def grant_role(user_id, role):
    """Assign a role without an admin caller, to bootstrap the first admin."""
    from protean.core.unit_of_work import UnitOfWork

    from ordering.access.management import assign_role

    domain = _domain()
    with domain.domain_context():
        with UnitOfWork():
            assign_role(user_id, role)
    print(f"Granted {role} to {user_id}.")


def main():
    parser = argparse.ArgumentParser(description="Kamisori database and access management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    role_parser = subparsers.add_parser("grant-role", help="Assign a role to a user")
    role_parser.add_argument("user_id", help="User id as issued by the auth provider")
    role_parser.add_argument("role", choices=["admin", "customer"])

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-role":
        grant_role(args.user_id, args.role)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
