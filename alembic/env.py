"""
Alembic migration environment – **async-safe**

• opens an *async* engine built from the application settings
• unwraps it to a regular sync Connection for Alembic
• no `metadata.create_all()` – schema is created by migrations only
"""

from logging.config import fileConfig
import asyncio
import sys
import pathlib

# ── make sure “eventhub” is importable when Alembic is invoked directly ────────
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from alembic import context  # noqa: E402
from eventhub.core.config import get_settings  # noqa: E402
from eventhub.db.database import create_engine  # noqa: E402
from eventhub.models import Base  # noqa: E402

# ── Alembic config -------------------------------------------------------------
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata


# ── helpers --------------------------------------------------------------------
def run_migrations_sync(sync_connection):
    """
    This runs inside a real synchronous Connection that Alembic understands.
    """
    context.configure(
        connection=sync_connection,
        target_metadata=target_metadata,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    """
    Open the async engine, unwrap to sync connection, run migrations.
    """
    engine = create_engine(get_settings())
    async with engine.begin() as async_conn:
        await async_conn.run_sync(run_migrations_sync)
    await engine.dispose()


# ── entry-point ----------------------------------------------------------------
if context.is_offline_mode():
    raise SystemExit("Offline migrations are not supported, run online only.")
else:
    asyncio.run(run_migrations_online())
