"""Alembic environment runner shared by both services' ``alembic/env.py``.

Migrations run synchronously using psycopg3; the async dialect in the
configured URL is swapped for its sync counterpart.
"""

from __future__ import annotations

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import MetaData, create_engine, pool

from switchboard.shared.db import normalize_sync_url


def include_object(obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any) -> bool:
    """Exclude tables that exist in the database but not in our models.

    Prevents autogenerate from emitting DROP TABLE for foreign tables.
    """
    return not (type_ == "table" and reflected and compare_to is None)


def run_migrations(
    target_metadata: MetaData,
    database_url: str | None,
    *,
    env_var: str,
    version_table: str,
) -> None:
    """Run migrations offline or online depending on the Alembic context.

    Each service keeps its revision in its own *version_table* so both
    schemas can live in one database.
    """
    config = context.config
    if config.config_file_name is not None and config.attributes.get("configure_logger", True):
        fileConfig(config.config_file_name, disable_existing_loggers=False)

    if not database_url:
        msg = f"{env_var} is not set. Cannot run migrations."
        raise RuntimeError(msg)
    url = normalize_sync_url(database_url)

    options: dict[str, Any] = {
        "target_metadata": target_metadata,
        "include_object": include_object,
        "compare_type": True,
        "compare_server_default": True,
        "version_table": version_table,
    }

    if context.is_offline_mode():
        context.configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"}, **options)
        with context.begin_transaction():
            context.run_migrations()
        return

    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **options)
        with context.begin_transaction():
            context.run_migrations()
