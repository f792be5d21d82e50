from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

import trustlink.models  # noqa: F401  (registers every table on Base.metadata)
from trustlink.config import Settings
from trustlink.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# same DATABASE_URL (and .env) the app reads
database_url = Settings.from_env().database_url
config.set_main_option("sqlalchemy.url", database_url)

target_metadata = Base.metadata


def _context_options() -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # sqlite has no ALTER COLUMN; batch mode rebuilds the table instead
        "render_as_batch": database_url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_context_options())
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
