"""Create an admin account, or promote an existing one.

Usage:
    python -m agenda.create_admin --username admin --email admin@example.com --password '...'

If a user with ``--username`` already exists it is promoted to ``admin`` and
its email and password are left untouched.
"""
import argparse
import sys

from agenda.core.errors import AgendaError
from agenda.database import SessionLocal, init_db
from agenda.schemas.auth import RegisterRequest
from agenda.services.user_service import ensure_admin


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, session_factory=SessionLocal) -> int:
    args = parse_args(argv)
    try:
        data = RegisterRequest(username=args.username, email=args.email, password=args.password)
    except ValueError as exc:
        print(f"Invalid admin details: {exc}", file=sys.stderr)
        return 1

    if session_factory is SessionLocal:
        init_db()

    db = session_factory()
    try:
        user, created = ensure_admin(db, data.username, data.email, data.password)
    except AgendaError as exc:
        print(f"Could not create admin: {exc.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    action = "Created" if created else "Promoted"
    print(f"{action} admin user {user.username} (id={user.id}, email={user.email})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
