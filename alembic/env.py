from logging.config import fileConfig
from sqlalchemy import create_engine
from alembic import context

from barbershop.config import settings
from barbershop.models import Base

config = context.config
fileConfig(config.config_file_name)
target_metadata = Base.metadata


def _connect_args() -> dict:
    if settings.resolved_database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def run_migrations_offline():
    url = settings.resolved_database_url
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(
        settings.resolved_database_url,
        connect_args=_connect_args(),
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
