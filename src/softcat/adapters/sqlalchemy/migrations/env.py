"""Alembic environment for the catalog schema."""

from __future__ import annotations

from logging.config import fileConfig
from typing import TYPE_CHECKING

from alembic import context
from sqlalchemy import create_engine, pool

from softcat.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from softcat.config import get_database_uri

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

# Only the alembic CLI passes an ini file; upgrade_head() configures in code.
if config.config_file_name is not None and config.config_file_name.endswith(".ini"):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

start_mappers()
target_metadata = mapper_registry.metadata

# SQLite cannot ALTER most things, batch mode recreates tables instead.
CONFIGURE_OPTIONS = {"render_as_batch": True, "compare_type": True}


def _database_uri() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_uri()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, **CONFIGURE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    context.configure(
        url=_database_uri(),
        target_metadata=target_metadata,
        literal_binds=True,
        **CONFIGURE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()
elif (shared_connection := config.attributes.get("connection")) is not None:
    _migrate(shared_connection)
else:
    engine = create_engine(_database_uri(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _migrate(connection)
    finally:
        engine.dispose()
