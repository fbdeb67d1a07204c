"""Applies the SQL files in db/migrations in filename order."""

import sqlite3
from pathlib import Path
from typing import List, Set
from logger import get_logger

logger = get_logger()


class Migrator:
    """Tracks and applies schema migrations on one SQLite connection.

    Applied files are recorded in the schema_migrations table so each runs
    at most once.

    Args:
        conn: Open SQLite connection.
        migrations_dir: Directory holding the *.sql files.
    """

    def __init__(self, conn: sqlite3.Connection, migrations_dir: Path):
        self.conn = conn
        self.migrations_dir = migrations_dir
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                migration_file TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self.conn.commit()

    def available(self) -> List[str]:
        if not self.migrations_dir.exists():
            return []
        return sorted(path.name for path in self.migrations_dir.glob("*.sql"))

    def applied(self) -> Set[str]:
        cursor = self.conn.execute("SELECT migration_file FROM schema_migrations")
        return {row[0] for row in cursor.fetchall()}

    def pending(self) -> List[str]:
        applied = self.applied()
        return [name for name in self.available() if name not in applied]

    def apply(self, migration_file: str) -> None:
        """Run one migration file and record it.

        Raises:
            sqlite3.Error: If the SQL fails; the connection is rolled back.
        """
        sql = (self.migrations_dir / migration_file).read_text()

        try:
            self.conn.executescript(sql)
            self.conn.execute(
                "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                (migration_file,),
            )
            self.conn.commit()
            logger.info(f"Applied migration: {migration_file}")
        except sqlite3.Error as e:
            self.conn.rollback()
            logger.error(f"Error applying migration {migration_file}: {e}")
            raise

    def apply_pending(self) -> List[str]:
        """Apply every pending migration.

        Returns:
            Names of the migrations that were applied.
        """
        pending = self.pending()
        for migration_file in pending:
            self.apply(migration_file)
        return pending
