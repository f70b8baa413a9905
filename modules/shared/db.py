import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
import asyncpg
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


def get_database_credentials():
    """
    Return the (endpoint, public key) pair for the report store.
    Neither value is validated here; a missing or malformed value
    surfaces as a connection failure on first use.
    """
    return os.getenv("DATABASE_URL"), os.getenv("DATABASE_ANON_KEY")


async def create_pool(dsn, password):
    """
    Create an asynchronous connection pool for the report store.
    """
    logger.info("Initializing database connection pool...")
    pool = await asyncpg.create_pool(
        dsn=dsn,
        password=password,
        min_size=1,
        max_size=20,
        command_timeout=60,
    )
    logger.info("Database connection pool initialized successfully.")
    return pool


async def close_pool(pool):
    """
    Close the database connection pool.
    """
    if pool:
        logger.info("Closing database connection pool...")
        await pool.close()
        logger.info("Database connection pool closed.")


async def connect(dsn, password):
    """
    Open a dedicated connection outside the pool.
    Used for LISTEN channels, which must not be handed back to the pool while listening.
    """
    logger.debug("Opening dedicated database connection...")
    return await asyncpg.connect(dsn=dsn, password=password)


@asynccontextmanager
async def get_db_connection(pool):
    """
    Asynchronous context manager for acquiring and releasing database connections from the pool.
    Use with 'async with get_db_connection(pool) as conn:'
    """
    conn = None
    try:
        logger.debug("Acquiring database connection from pool...")
        conn = await pool.acquire()
        logger.debug("Database connection acquired.")
        yield conn
    finally:
        if conn:
            logger.debug("Releasing database connection back to pool...")
            await pool.release(conn)
            logger.debug("Database connection released.")


async def execute_query(pool, sql, params=None, fetch_one=False):
    """
    Execute an asynchronous SQL query and return results.
    Note: Use $1, $2, ... as placeholders in your SQL queries for parameters (not %s or %(name)s).
    """
    logger.info(f"Executing SQL query: {sql.strip().splitlines()[0][:100]}... | Params: {params}")
    async with get_db_connection(pool) as conn:
        if fetch_one:
            result = await conn.fetchrow(sql, *(params or []))
        else:
            result = await conn.fetch(sql, *(params or []))
        logger.info("SQL query executed successfully.")
        return result
