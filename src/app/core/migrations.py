"""Apply Alembic migrations.

Run with:
    python -m src.app.core.migrations           # upgrade to head
    python -m src.app.core.migrations 001       # upgrade to a given revision
"""

import sys

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head") -> None:
    """Run Alembic migrations synchronously up to ``revision``."""
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, revision)


if __name__ == "__main__":
    run_migrations_sync(sys.argv[1] if len(sys.argv) > 1 else "head")
