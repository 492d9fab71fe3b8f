"""Alembic environment for the Nutricare schema (users, headers)."""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

# Migrations share DATABASE_URL with the app; a missing JWT_SECRET is fine here.
os.environ.setdefault("APP_ENV", "dev")
from nutricare.core.config import settings
from nutricare.models import Base
from nutricare.models import Header, User  # noqa: F401

config = context.config
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        # alembic.ini without logging sections
        pass

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL for the pending revisions without connecting."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply pending revisions against DATABASE_URL."""
    connectable = create_engine(settings.DATABASE_URL, poolclass=NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
