from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

import os

from eventhub.db import Base, DB_URL, _normalize_db_url
from eventhub import models  # noqa: F401  (registers events/bookings on Base.metadata)

# Alembic config object
config = context.config

# DATABASE_URL (loaded from .env by the eventhub package) wins over alembic.ini
_url = _normalize_db_url(os.getenv("DATABASE_URL") or DB_URL)
config.set_main_option("sqlalchemy.url", _url.replace("%", "%%"))

# Setup logging (skipped when the app runs migrations with its own logging)
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Assign metadata for autogenerate support
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
