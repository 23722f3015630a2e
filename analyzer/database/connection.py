from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from analyzer.analysis.exceptions import PersistenceFailureError
from analyzer.config.settings import Settings
from analyzer.logging.logger import Log

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: ConnectionPool | None = None


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool from settings."""
    global _pool  # noqa: PLW0603
    conninfo = (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password}"
    )
    _pool = ConnectionPool(conninfo, min_size=1, max_size=settings.db_pool_max_size)


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn


@contextmanager
def storage_errors(action: str) -> Generator[None, None, None]:
    """Re-raise driver and pool failures as PersistenceFailureError."""
    try:
        yield
    except (psycopg.Error, PoolTimeout) as exc:
        raise PersistenceFailureError(f"Failed to {action}: {exc}") from exc


def apply_schema(path: Path | None = None) -> None:
    """Create the users and analysis_reports tables if they do not exist."""
    schema_sql = (path or SCHEMA_PATH).read_text(encoding="utf-8")
    with get_connection() as conn:
        conn.execute(schema_sql)
        conn.commit()
    Log.info("Database schema applied")
