"""
Database connection management
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
import asyncpg
from typing import Optional

from shared.config import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

# Global connection pool
_pool: Optional[asyncpg.Pool] = None


async def init_database() -> None:
    """
    Initialize database connection pool
    """
    global _pool

    if _pool is not None:
        logger.warning("Database pool already initialized")
        return

    try:
        logger.info("Initializing database connection pool...")

        _pool = await asyncpg.create_pool(
            dsn=settings.DATABASE_URL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            command_timeout=settings.COMMAND_TIMEOUT,
            max_inactive_connection_lifetime=300
        )

        logger.info("Database connection pool initialized successfully")

        async with _pool.acquire() as conn:
            version = await conn.fetchval("SELECT version()")
            logger.info(f"Connected to PostgreSQL: {version}")

    except Exception as e:
        logger.error(f"Failed to initialize database pool: {e}", exc_info=True)
        raise


async def close_database() -> None:
    """
    Close database connection pool
    """
    global _pool

    if _pool is None:
        logger.warning("Database pool is not initialized")
        return

    logger.info("Closing database connection pool...")
    await _pool.close()
    _pool = None
    logger.info("Database connection pool closed")


@asynccontextmanager
async def get_db_connection():
    """
    Get database connection from pool

    Usage:
        async with get_db_connection() as conn:
            result = await conn.fetch("SELECT * FROM users")
    """
    if _pool is None:
        await init_database()

    if _pool is None:
        raise RuntimeError("Database pool is not initialized")

    async with _pool.acquire() as connection:
        yield connection


async def execute_sql_file(file_path: Path) -> None:
    """
    Execute SQL from file

    Args:
        file_path: Path to SQL file
    """
    try:
        logger.info(f"Executing SQL file: {file_path.name}")

        sql = file_path.read_text(encoding='utf-8')

        async with get_db_connection() as conn:
            await conn.execute(sql)

        logger.info(f"SQL file executed successfully: {file_path.name}")

    except Exception as e:
        logger.error(f"Error executing SQL file {file_path}: {e}", exc_info=True)
        raise


async def run_migrations() -> None:
    """
    Run all database migrations in file name order
    """
    logger.info("Running database migrations...")

    for migration_file in sorted(MIGRATIONS_DIR.glob("*.sql")):
        await execute_sql_file(migration_file)

    logger.info("All migrations completed successfully")
