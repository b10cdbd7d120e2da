"""Async SQLite engine setup and schema helpers."""

import sqlalchemy
from sqlalchemy import text as sa_text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for one SQLite database file."""
    engine = create_async_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False},  # Needed for SQLite
    )

    @sqlalchemy.event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


async def get_table_columns(conn: AsyncConnection, table_name: str) -> set[str]:
    """Get actual column names from the database for a table.

    Returns an empty set when the table does not exist.
    """
    result = await conn.execute(sa_text(f"PRAGMA table_info('{table_name}')"))
    rows = result.fetchall()
    return {row[1] for row in rows}  # column name is at index 1

