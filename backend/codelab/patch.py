"""Entry point shared by the schema patch scripts.

Maps a run to a process exit code:

- ``EXIT_OK`` (0): every statement was attempted. Statement errors are
  logged but do not change the exit code unless ``strict`` is on.
- ``EXIT_CONNECTION_FAILED`` (1): the database could not be opened; no
  statement was attempted.
- ``EXIT_STATEMENT_ERRORS`` (2): strict mode only, at least one statement
  failed with something other than "column already exists".
"""

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from codelab.config import settings, sqlite_url
from codelab.core.errors import DatabaseConnectionError
from codelab.migrations.models import GuardStrategy, Statement
from codelab.migrations.runner import MigrationRunner

EXIT_OK = 0
EXIT_CONNECTION_FAILED = 1
EXIT_STATEMENT_ERRORS = 2


async def run_patch(
    statements: Iterable[Statement | str],
    database_path: Path | str | None = None,
    guard_strategy: GuardStrategy | str | None = None,
    strict: bool | None = None,
) -> int:
    """Apply ``statements`` to the configured database and return an exit code."""
    database_url = sqlite_url(database_path) if database_path is not None else settings.database_url
    if guard_strategy is None:
        guard_strategy = settings.guard_strategy
    if strict is None:
        strict = settings.strict

    runner = MigrationRunner(
        database_url,
        statements,
        guard_strategy=guard_strategy,
        echo=settings.debug,
    )
    try:
        report = await runner.run()
    except DatabaseConnectionError:
        return EXIT_CONNECTION_FAILED

    logger.debug(
        f"Applied {report.applied}, already present {report.already_applied}, "
        f"errors {report.errors} ({report.completed}/{report.total})"
    )
    if strict and report.has_errors:
        return EXIT_STATEMENT_ERRORS
    return EXIT_OK
