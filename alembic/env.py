from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

from invix.core.config import settings
from invix.db.base import Base
from invix.models.master import *  # noqa: F401,F403

# Alembic Config object
config = context.config

# Logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# autogenerate bu metadata ile karşılaştırır
target_metadata = Base.metadata


def run_migrations_offline():
    context.configure(
        url=settings.MASTER_DB_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        {
            "sqlalchemy.url": settings.MASTER_DB_URL
        },
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
