# src/care_kit/scripts/migrate.py
from __future__ import annotations

import os

from alembic import command
from alembic.config import Config

from care_kit.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config() -> Config:
    """Return an Alembic config pointed at the project's migrations folder."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    return cfg


def run_upgrade_head() -> None:
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
