"""Migration runner: apply a fixed list of schema statements to one database.

Lifecycle::

    NOT_CONNECTED -> CONNECTED -> APPLYING -> CLOSED

Every statement is attempted exactly once, in order, whatever happened to
the ones before it. The connection is closed as soon as the completion
counter reaches the number of statements.
"""

from collections.abc import Iterable

from loguru import logger
from sqlalchemy import text as sa_text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from codelab.core.errors import (
    DatabaseConnectionError,
    DuplicateColumnError,
    MigrationStateError,
    StatementError,
    classify_statement_error,
    error_context,
)
from codelab.database import create_engine, get_table_columns
from codelab.migrations.models import (
    ColumnChange,
    GuardStrategy,
    MigrationReport,
    RawStatement,
    RunnerState,
    Statement,
    StatementOutcome,
    StatementResult,
)


class MigrationRunner:
    """Runs one ordered list of idempotent schema changes over a single connection."""

    VALID_TRANSITIONS = {
        RunnerState.NOT_CONNECTED: {RunnerState.CONNECTED, RunnerState.CLOSED},
        RunnerState.CONNECTED: {RunnerState.APPLYING, RunnerState.CLOSED},
        RunnerState.APPLYING: {RunnerState.CLOSED},
        RunnerState.CLOSED: set(),  # Terminal state
    }

    def __init__(
        self,
        database_url: str,
        statements: Iterable[Statement | str],
        guard_strategy: GuardStrategy | str = GuardStrategy.INTROSPECT,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.statements: tuple[Statement, ...] = tuple(
            RawStatement(s) if isinstance(s, str) else s for s in statements
        )
        self.guard_strategy = GuardStrategy(guard_strategy)
        self.echo = echo
        self.state = RunnerState.NOT_CONNECTED
        self.completed = 0
        self._engine: AsyncEngine | None = None
        self._conn: AsyncConnection | None = None

    def _transition(self, to_state: RunnerState) -> None:
        if to_state not in self.VALID_TRANSITIONS[self.state]:
            raise MigrationStateError(
                f"Invalid runner transition: {self.state.value} -> {to_state.value}"
            )
        self.state = to_state

    async def connect(self) -> None:
        """Open the database, creating the file if it does not exist.

        Raises:
            DatabaseConnectionError: the file could not be opened for any reason
        """
        if self.state is not RunnerState.NOT_CONNECTED:
            raise MigrationStateError(f"Cannot connect a runner in state {self.state.value}")

        engine = create_engine(self.database_url, echo=self.echo)
        try:
            with error_context(
                error_types=(SQLAlchemyError, OSError),
                default_message="Failed to open database",
                log_level="debug",
                wrap_as=DatabaseConnectionError,
            ):
                self._conn = await engine.connect()
        except DatabaseConnectionError as e:
            await engine.dispose()
            logger.error(f"Error connecting to database: {e}")
            raise

        self._engine = engine
        self._transition(RunnerState.CONNECTED)
        logger.info("Connected to database")

    async def apply_all(self) -> MigrationReport:
        """Attempt every statement in order and close the connection afterwards.

        Statement failures never abort the run; they are recorded in the
        returned report.
        """
        if self.state is not RunnerState.CONNECTED:
            raise MigrationStateError(f"Cannot apply statements in state {self.state.value}")
        self._transition(RunnerState.APPLYING)

        report = MigrationReport(total=len(self.statements))
        if not self.statements:
            await self._finish(report)
            return report

        for statement in self.statements:
            report.results.append(await self._apply_one(statement))
            self.completed += 1
            if self.completed == len(self.statements):
                await self._finish(report)

        return report

    async def run(self) -> MigrationReport:
        """Connect, apply all statements, and make sure the connection is closed."""
        await self.connect()
        try:
            return await self.apply_all()
        finally:
            await self.close()

    async def close(self) -> None:
        """Close the connection and dispose the engine. Safe to call twice."""
        if self.state is RunnerState.CLOSED:
            return
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        self._transition(RunnerState.CLOSED)

    def _introspects(self, statement: Statement) -> bool:
        return self.guard_strategy is GuardStrategy.INTROSPECT and isinstance(
            statement, ColumnChange
        )

    async def _apply_one(self, statement: Statement) -> StatementResult:
        skipped = False
        try:
            async with self._conn.begin():
                if self._introspects(statement) and statement.column in await get_table_columns(
                    self._conn, statement.table
                ):
                    skipped = True
                else:
                    await self._conn.execute(sa_text(statement.sql))
        except (SQLAlchemyError, StatementError) as e:
            error = classify_statement_error(e, statement.sql)
            if isinstance(error, DuplicateColumnError):
                logger.info(f"Column already exists: {statement.describe()}")
                return StatementResult(statement, StatementOutcome.ALREADY_APPLIED)
            logger.error(f"Error: {error}")
            return StatementResult(statement, StatementOutcome.ERRORED, str(error))

        if skipped:
            logger.info(f"Column already exists: {statement.describe()}")
            return StatementResult(statement, StatementOutcome.ALREADY_APPLIED)

        logger.info(f"Success: {statement.sql}")
        return StatementResult(statement, StatementOutcome.APPLIED)

    async def _finish(self, report: MigrationReport) -> None:
        await self.close()
        if report.has_errors:
            logger.warning(f"Completed with {report.errors} error(s)")
        logger.info("Done")
