"""Add the teacher dashboard columns to assignments and student_assignments.

Run from backend/ with:  python scripts/add_teacher_columns.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import codelab modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from codelab.core.logging import setup_logging  # noqa: E402
from codelab.migrations.catalog import TEACHER_COLUMNS  # noqa: E402
from codelab.patch import run_patch  # noqa: E402


async def main(database_path: Path | None = None) -> int:
    logger.info("Adding teacher-specific columns to database...")
    return await run_patch(TEACHER_COLUMNS, database_path=database_path)


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(main()))
