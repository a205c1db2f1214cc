"""Operator utilities for the configured Care Kit database."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from care_kit.core.settings import settings
from care_kit.db.session import SessionLocal, create_tables
from care_kit.models import ROLE_ADMIN, ROLE_USER
from care_kit.services import user_service
from care_kit.services.participant_ids import SqlCounterStore


def init_db(_: argparse.Namespace, __: Session) -> int:
    """Create every table that does not exist yet."""
    create_tables()
    print("[manage] tables created")
    return 0


def promote(args: argparse.Namespace, db: Session) -> int:
    """Grant (or with --revoke, remove) the admin role."""
    user = user_service.get_user_by_email(db, args.email)
    if user is None:
        print(f"[manage] no account for {args.email}", file=sys.stderr)
        return 1
    role = ROLE_USER if args.revoke else ROLE_ADMIN
    user_service.set_role(db, user, role)
    print(f"[manage] {user.email} ({user.participant_id}) is now {role}")
    return 0


def show_counter(_: argparse.Namespace, db: Session) -> int:
    """Print the last allocated participant number."""
    current = SqlCounterStore(db).read(settings.participant_counter_name)
    if current is None:
        print(
            f"[manage] counter {settings.participant_counter_name!r} unset; "
            f"first ID will be {settings.participant_id_prefix}{settings.participant_id_start + 1}"
        )
    else:
        print(f"[manage] counter {settings.participant_counter_name!r} = {current}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the Care Kit database")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing tables").set_defaults(handler=init_db)

    promote_parser = sub.add_parser("promote", help="Give an account the admin role")
    promote_parser.add_argument("email")
    promote_parser.add_argument(
        "--revoke",
        action="store_true",
        help="Demote the account back to a regular participant.",
    )
    promote_parser.set_defaults(handler=promote)

    sub.add_parser("counter", help="Show the participant ID counter").set_defaults(
        handler=show_counter
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    db = SessionLocal()
    try:
        return args.handler(args, db)
    except SQLAlchemyError as exc:
        print(f"[manage] ERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
