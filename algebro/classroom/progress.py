"""
ProgressStore - Persist lesson history and the API key in ~/.algebro/progress.db.

The database is a small key-value table holding whole JSON blobs:
- PROGRESS_KEY: the full UserProgress ({"records": [...]})
- API_KEY_KEY: the Gemini API key entered on the welcome screen

Every write stores the complete snapshot. Storage faults are logged and
replaced by defaults so a broken disk never blocks taking a lesson.
"""

import json
import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from algebro.config import API_KEY_ENV, API_KEY_KEY, DEFAULT_STORE_DB, PROGRESS_KEY
from algebro.schemas import LessonRecord, UserProgress


logger = logging.getLogger(__name__)


class ProgressStore:
    """
    Key-value blob store backed by SQLite.

    Progress lives outside the app directory so that regenerating lessons or
    reinstalling never loses history.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            db_path: Path to progress.db (default: ~/.algebro/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STORE_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT
                    )
                """)
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to initialize progress store at {self.db_path}: {e}")

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Raw key-value access
    # -------------------------------------------------------------------------

    def get_item(self, key: str) -> Optional[str]:
        """Get the stored value for `key`, or None."""
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_item(self, key: str, value: str):
        """Store `value` under `key`, replacing any previous value."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(key) DO UPDATE SET
                     value = excluded.value,
                     updated_at = excluded.updated_at""",
                (key, value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str):
        """Delete `key` if present."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Lesson history
    # -------------------------------------------------------------------------

    def load_progress(self) -> UserProgress:
        """Load the lesson history, or an empty one if missing or unreadable."""
        try:
            data = self.get_item(PROGRESS_KEY)
            if data:
                return UserProgress.model_validate(json.loads(data))
        except (sqlite3.Error, OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to load progress: {e}")
        return UserProgress(records=[])

    def save_progress(self, progress: UserProgress) -> bool:
        """
        Save the full lesson history.

        Returns:
            True if written, False if the write failed (already logged)
        """
        try:
            self.set_item(PROGRESS_KEY, progress.model_dump_json(by_alias=True))
            logger.info(f"Progress saved: {len(progress.records)} lessons")
            return True
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to save progress: {e}")
            return False

    def append_record(
        self,
        record: LessonRecord,
        progress: Optional[UserProgress] = None,
    ) -> UserProgress:
        """
        Append a completed lesson and persist the whole history.

        Args:
            record: The completed lesson
            progress: History already held in memory; read from the store if omitted

        Returns:
            The new history (even if the write failed)
        """
        if progress is None:
            progress = self.load_progress()
        progress = progress.with_record(record)
        self.save_progress(progress)
        return progress

    # -------------------------------------------------------------------------
    # API key
    # -------------------------------------------------------------------------

    def load_api_key(self) -> Optional[str]:
        """Stored API key, falling back to the GEMINI_API_KEY environment variable."""
        try:
            key = self.get_item(API_KEY_KEY)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to load API key: {e}")
            key = None
        return key or os.environ.get(API_KEY_ENV) or None

    def save_api_key(self, api_key: str) -> bool:
        """Store the API key entered by the user."""
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty.")
        try:
            self.set_item(API_KEY_KEY, api_key)
            return True
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to save API key: {e}")
            return False

    def clear_api_key(self):
        """Forget the stored API key (after the service rejected it)."""
        try:
            self.remove_item(API_KEY_KEY)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to clear API key: {e}")
