from callwindow.repositories.models import Base as CoreBase
from callwindow.core.config import settings

from logging.config import fileConfig

from sqlalchemy import create_engine
from sqlalchemy import pool

from alembic import context

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

# Interpret the config file for Python logging (tolerates a minimal ini)
try:
    if config.config_file_name is not None:
        fileConfig(config.config_file_name, disable_existing_loggers=False)
except KeyError:
    # no [formatters]/[handlers]/[loggers] sections: leave logging unconfigured
    pass

# tenants/business_hours metadata for 'autogenerate'
target_metadata = CoreBase.metadata


def run_migrations_offline() -> None:
    """Emit the tenants/business_hours DDL as SQL without a DB connection."""
    url = settings.DATABASE_URL
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations against settings.DATABASE_URL."""
    # use the app URL directly instead of parsing alembic.ini
    connectable = create_engine(settings.DATABASE_URL, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
