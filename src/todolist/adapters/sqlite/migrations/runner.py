"""Forward-only schema migrations.

Each migration is a numbered list of statements. Applied versions are kept in
``schema_version``; a migration and its bookkeeping row commit together or
not at all.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import UTC, datetime

from todolist.utils.logger import get_logger


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    statements: tuple[str, ...]


class MigrationRunner:
    """Applies pending migrations to one connection."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self.logger = get_logger("sqlite")
        self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                description TEXT NOT NULL,
                applied_at TEXT NOT NULL
            )
            """
        )
        self.connection.commit()

    def current_version(self) -> int:
        """Highest applied version, 0 for a fresh database."""
        row = self.connection.execute("SELECT MAX(version) FROM schema_version").fetchone()
        return row[0] or 0

    def apply(self, migration: Migration) -> None:
        """Apply one migration inside a transaction.

        Raises:
            ValueError: If *migration* is not newer than the database
            RuntimeError: If a statement fails; nothing is left half applied
        """
        current = self.current_version()
        if migration.version <= current:
            raise ValueError(
                f"Migration {migration.version} is not newer than version {current}"
            )

        # DDL does not open a transaction implicitly
        if not self.connection.in_transaction:
            self.connection.execute("BEGIN")
        try:
            for statement in migration.statements:
                self.connection.execute(statement)
            self.connection.execute(
                "INSERT INTO schema_version (version, description, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.description, datetime.now(UTC).isoformat()),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            raise RuntimeError(f"Migration {migration.version} failed: {e}") from e

        self.logger.info("applied migration %s: %s", migration.version, migration.description)

    def run(self, migrations: list[Migration] | tuple[Migration, ...]) -> int:
        """Apply every migration newer than the database, in order.

        Returns:
            How many were applied
        """
        current = self.current_version()
        pending = sorted(
            (m for m in migrations if m.version > current), key=lambda m: m.version
        )
        for migration in pending:
            self.apply(migration)
        return len(pending)
