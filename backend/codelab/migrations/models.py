"""Change descriptors, outcomes and run report for schema patches."""

from dataclasses import dataclass, field
from enum import Enum


class GuardStrategy(str, Enum):
    """How a column addition is made safe to repeat."""

    INTROSPECT = "introspect"  # Check PRAGMA table_info before ALTER
    ERROR_MATCH = "error_match"  # ALTER unconditionally, treat "duplicate column" as applied


class RunnerState(str, Enum):
    NOT_CONNECTED = "not_connected"
    CONNECTED = "connected"
    APPLYING = "applying"
    CLOSED = "closed"


class StatementOutcome(str, Enum):
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    ERRORED = "errored"


def sql_literal(value: str | int | float | bool) -> str:
    """Render a Python value as a SQLite literal for a DEFAULT clause."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int | float):
        return repr(value)
    return "'" + str(value).replace("'", "''") + "'"


@dataclass(frozen=True)
class ColumnChange:
    """Add one column to one table.

    ``default=None`` means no DEFAULT clause.
    """

    table: str
    column: str
    type: str
    default: str | int | float | bool | None = None

    @property
    def sql(self) -> str:
        ddl = f"ALTER TABLE {self.table} ADD COLUMN {self.column} {self.type}"
        if self.default is not None:
            ddl += f" DEFAULT {sql_literal(self.default)}"
        return ddl

    def describe(self) -> str:
        return f"{self.table}.{self.column}"


@dataclass(frozen=True)
class RawStatement:
    """Fixed DDL text executed verbatim. Only error matching can guard it."""

    sql: str

    def describe(self) -> str:
        return self.sql


Statement = ColumnChange | RawStatement


@dataclass
class StatementResult:
    statement: Statement
    outcome: StatementOutcome
    error: str | None = None


@dataclass
class MigrationReport:
    """Per-statement outcomes of one run, in execution order."""

    total: int
    results: list[StatementResult] = field(default_factory=list)

    @property
    def completed(self) -> int:
        return len(self.results)

    @property
    def applied(self) -> int:
        return self._count(StatementOutcome.APPLIED)

    @property
    def already_applied(self) -> int:
        return self._count(StatementOutcome.ALREADY_APPLIED)

    @property
    def errors(self) -> int:
        return self._count(StatementOutcome.ERRORED)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    def _count(self, outcome: StatementOutcome) -> int:
        return sum(1 for result in self.results if result.outcome is outcome)
