from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from bizdesk.core.config import settings
from bizdesk.database.database import Base

# Register every model on Base.metadata
import bizdesk.modules.auth.models
import bizdesk.modules.products.models
import bizdesk.modules.customers.models
import bizdesk.modules.sales.models
import bizdesk.modules.expenses.models
import bizdesk.modules.transactions.models
import bizdesk.modules.deposits.models
import bizdesk.modules.files.models
import bizdesk.modules.settings.models
import bizdesk.modules.staff.models

config = context.config
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline():
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
