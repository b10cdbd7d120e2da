"""Core pytest fixtures for schema patch tests.

Every test gets its own SQLite file under tmp_path; nothing touches
backend/database/codelab.db.
"""

import pytest
from loguru import logger
from sqlalchemy import text

from codelab.config import sqlite_url
from codelab.database import create_engine

ASSIGNMENTS_DDL = """
    CREATE TABLE assignments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title VARCHAR(200) NOT NULL,
        description TEXT,
        teacher_id INTEGER NOT NULL,
        due_date DATETIME,
        total_marks INTEGER DEFAULT 100,
        status VARCHAR(20) DEFAULT 'active',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
"""

STUDENT_ASSIGNMENTS_DDL = """
    CREATE TABLE student_assignments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        student_id INTEGER NOT NULL,
        assignment_id INTEGER NOT NULL,
        status TEXT DEFAULT 'not_started',
        score INTEGER DEFAULT 0
    )
"""


async def execute_sql(database_path, *statements, params=None):
    """Run statements against a database file in one transaction."""
    engine = create_engine(sqlite_url(database_path))
    try:
        async with engine.begin() as conn:
            for statement in statements:
                await conn.execute(text(statement), params or {})
    finally:
        await engine.dispose()


async def read_columns(database_path, table_name):
    """Return {column: declared default} for a table."""
    engine = create_engine(sqlite_url(database_path))
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text(f"PRAGMA table_info('{table_name}')"))
            return {row[1]: row[4] for row in result.fetchall()}  # dflt_value is at index 4
    finally:
        await engine.dispose()


async def fetch_scalar(database_path, query):
    """Return the first column of the first row of a query."""
    engine = create_engine(sqlite_url(database_path))
    try:
        async with engine.connect() as conn:
            return (await conn.execute(text(query))).scalar()
    finally:
        await engine.dispose()


@pytest.fixture
def database_path(tmp_path):
    """Path of a not-yet-created database inside an existing directory."""
    db_dir = tmp_path / "database"
    db_dir.mkdir()
    return db_dir / "codelab.db"


@pytest.fixture
async def assignments_db(database_path):
    """Database with assignments tables as they were before the teacher features."""
    await execute_sql(database_path, ASSIGNMENTS_DDL, STUDENT_ASSIGNMENTS_DDL)
    await execute_sql(
        database_path,
        "INSERT INTO assignments (title, teacher_id) VALUES ('Loops', 1)",
    )
    return database_path


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
