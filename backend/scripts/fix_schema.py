"""Add the access_type column to the assignments table.

Run from backend/ with:  python scripts/fix_schema.py
Safe to run repeatedly: an existing column is reported and left alone.
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path to import codelab modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from codelab.core.logging import setup_logging  # noqa: E402
from codelab.migrations.catalog import ASSIGNMENT_ACCESS_TYPE  # noqa: E402
from codelab.patch import run_patch  # noqa: E402


async def main(database_path: Path | None = None) -> int:
    """Apply the access_type patch and return the process exit code."""
    return await run_patch(ASSIGNMENT_ACCESS_TYPE, database_path=database_path)


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(main()))
