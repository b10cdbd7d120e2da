"""Idempotent schema patches for the CodeLab database."""

from codelab.migrations.models import (
    ColumnChange,
    GuardStrategy,
    MigrationReport,
    RawStatement,
    RunnerState,
    StatementOutcome,
    StatementResult,
)
from codelab.migrations.runner import MigrationRunner

__all__ = [
    "ColumnChange",
    "GuardStrategy",
    "MigrationReport",
    "MigrationRunner",
    "RawStatement",
    "RunnerState",
    "StatementOutcome",
    "StatementResult",
]
