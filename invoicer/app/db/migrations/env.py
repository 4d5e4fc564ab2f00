"""Alembic environment for the invoicer schema.

``run_migrations`` passes an open connection through ``config.attributes``;
the ``alembic`` command line connects to ``INVOICER_DATABASE_URL`` instead.
"""

from alembic import context

from invoicer.app.core.settings import get_settings
from invoicer.app.db.base import Base
from invoicer.app.db.session import Database

config = context.config
target_metadata = Base.metadata


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_settings().database_url


def _run_with(connection) -> None:
    # Batch mode lets ALTER-style operations work on SQLite
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_with(connection)
        return

    database = Database(_database_url())
    try:
        with database.engine.begin() as connection:
            _run_with(connection)
    finally:
        database.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
