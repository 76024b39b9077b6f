"""Key-value blob storage on top of SQLite.

Each blob is a JSON document stored under a name (the movie collection and
the history log). A missing or unreadable blob reads as None.
"""

import datetime
import json
import logging
import os
import sqlite3
from typing import Any, Iterable, Optional

from .constants import DB_NAME

logger = logging.getLogger(__name__)


def init_db(target_dir: str = '.', db_name: str = DB_NAME) -> sqlite3.Connection:
    """Initialize the SQLite database and create the blob table if it doesn't exist."""
    db_path = os.path.join(target_dir, db_name)
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS blobs (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        conn.commit()
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def move_aside(target_dir: str = '.', db_name: str = DB_NAME) -> Optional[str]:
    """
    Rename an unreadable database file with a timestamp so a fresh one can be created.
    Returns the new path, or None if the file could not be moved.
    """
    db_path = os.path.join(target_dir, db_name)
    timestamp = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')
    aside_path = f"{db_path}.corrupt_{timestamp}"
    try:
        os.replace(db_path, aside_path)
    except OSError as e:
        logger.warning("Could not move %s aside: %s", db_path, e)
        return None
    return aside_path


def load_blob(conn: sqlite3.Connection, key: str) -> Optional[Any]:
    """Load and decode a blob. Returns None if it is absent or corrupt."""
    try:
        cursor = conn.cursor()
        cursor.execute('SELECT value FROM blobs WHERE key = ?', (key,))
        row = cursor.fetchone()
    except sqlite3.DatabaseError as e:
        logger.warning("Could not read %s: %s", key, e)
        return None

    if row is None:
        return None

    try:
        return json.loads(row[0])
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug("Ignoring corrupt blob %s: %s", key, e)
        return None


def save_blob(conn: sqlite3.Connection, key: str, value: Any) -> None:
    """Encode and write a blob, replacing any previous value."""
    cursor = conn.cursor()
    cursor.execute(
        '''INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
           ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP''',
        (key, json.dumps(value))
    )
    conn.commit()


def delete_blobs(conn: sqlite3.Connection, keys: Iterable[str]) -> None:
    """Remove the given blobs in one transaction."""
    cursor = conn.cursor()
    cursor.executemany('DELETE FROM blobs WHERE key = ?', [(key,) for key in keys])
    conn.commit()
