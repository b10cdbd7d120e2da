"""Patch-runner configuration from environment variables.

Every field has a default, so no .env file is needed. Out of the box
the runner patches ``backend/database/codelab.db`` next to this
package, guards column additions by introspecting the live schema, and
exits 0 even when a statement fails (see ``strict``).

The CODELAB_* variables and .env file are optional overrides; with none
set, a run uses exactly the built-in path and behaviour.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from codelab.migrations.models import GuardStrategy

PACKAGE_DIR = Path(__file__).resolve().parent


def _default_database_path() -> Path:
    """Return ``<package-dir>/../database/codelab.db``."""
    return PACKAGE_DIR.parent / "database" / "codelab.db"


def _default_log_file() -> Path:
    return Path.home() / ".codelab" / "schema_patch.log"


def sqlite_url(path: Path | str) -> str:
    """Build an async SQLite URL for a database file."""
    return f"sqlite+aiosqlite:///{path}"


class Settings(BaseSettings):
    """Runner settings. Loaded from CODELAB_* environment variables; optionally from .env."""

    model_config = SettingsConfigDict(
        env_prefix="CODELAB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_path: Path = _default_database_path()

    # Migration behaviour
    guard_strategy: GuardStrategy = GuardStrategy.INTROSPECT
    strict: bool = False  # Exit non-zero when any statement errored

    # Logging
    debug: bool = False
    log_file: Path = _default_log_file()

    @property
    def database_url(self) -> str:
        return sqlite_url(self.database_path)


settings = Settings()
