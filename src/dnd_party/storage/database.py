"""SQLite persistence for character sheets.

Each character is stored as one JSON snapshot keyed by its name, the same
shape Character.serialize() produces.

Default location: data/characters.db (see StorageSettings.database_path)
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator

from dnd_party.core.exceptions import StorageError
from dnd_party.core.logging import get_logger
from dnd_party.engine.sheet import Character

logger = get_logger(__name__)


# =============================================================================
# Database Class
# =============================================================================


class CharacterDatabase:
    """SQLite-backed character repository."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize database.

        Args:
            db_path: Path to the database file; parent directories are created.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.info("Character database initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection that commits on success and rolls back on error."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot open character database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(
                f"Character database error: {exc}",
                details={"path": str(self.db_path)},
            ) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    name TEXT PRIMARY KEY,
                    state_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_updated
                ON characters(updated_at DESC)
            """)

            cursor.execute("""
                INSERT OR REPLACE INTO schema_version (version) VALUES (?)
            """, (self.SCHEMA_VERSION,))

    # =========================================================================
    # Repository Operations
    # =========================================================================

    def load(self, name: str) -> Character | None:
        """Load a character by name, or None if it was never saved."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT state_json FROM characters WHERE name = ?", (name,)
            ).fetchone()
        return Character.model_validate(json.loads(row[0])) if row else None

    def save(self, character: Character) -> None:
        """Insert or replace the snapshot stored under the character's name."""
        now = datetime.now().isoformat()
        state_json = json.dumps(character.serialize())

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO characters (name, state_json, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    state_json = excluded.state_json,
                    updated_at = excluded.updated_at
            """, (character.name, state_json, now, now))

        logger.debug("Character saved", character=character.name)

    def delete(self, name: str) -> bool:
        """Delete a character.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM characters WHERE name = ?", (name,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Character deleted", character=name)

        return deleted

    def list_names(self) -> list[str]:
        """Return stored character names, most recently updated first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT name FROM characters ORDER BY updated_at DESC, name"
            ).fetchall()
        return [row[0] for row in rows]


__all__ = [
    "CharacterDatabase",
]
