"""Alembic schema upgrades run at application startup.

``run_migrations`` shares the caller's engine with Alembic, so the SQLite
foreign key pragma and the connection settings of ``Database`` apply to the
migrations as well. All pending revisions run in one transaction.
"""

from pathlib import Path
from typing import List, Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from invoicer.app.core.logging import get_logger

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def revision_chain(config: Config) -> List[str]:
    """Revision ids from the first migration to head."""
    script = ScriptDirectory.from_config(config)
    chain = [revision.revision for revision in script.walk_revisions()]
    chain.reverse()
    return chain


def current_revision(engine: Engine) -> Optional[str]:
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def run_migrations(engine: Engine, target: str = "head") -> List[str]:
    """Upgrade the database to ``target``; returns the revisions applied, oldest first."""
    config = alembic_config()
    chain = revision_chain(config)
    current = current_revision(engine)
    start = chain.index(current) + 1 if current else 0
    end = len(chain) if target == "head" else chain.index(target) + 1
    pending = chain[start:end]
    if not pending:
        logger.info("Database schema is up to date at revision %s", current)
        return []

    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, target)
    for revision in pending:
        logger.info("Applied migration %s", revision)
    return pending
