from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool  # type: ignore[import-not-found]

from alembic import context
from roopsnap.auth.models import Base
from roopsnap.contacts import models as _contacts_models  # noqa: F401
from roopsnap.core.settings import settings
from roopsnap.photos import models as _photos_models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Photo and contact tables register on the shared Base when imported above.
target_metadata = Base.metadata


def _get_url() -> str:
    # Same DSN as the app; psycopg 3 serves both the async app and sync migrations.
    return settings.DATABASE_URL


def run_migrations_offline() -> None:
    url = _get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = _get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

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
