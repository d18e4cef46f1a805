"""Database initialization and connection management."""
import os
import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = os.environ.get(
    "LEITNER_CARDS_DB", str(Path.home() / ".leitner_cards" / "cards.db")
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS flashcards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    front TEXT NOT NULL,
    back TEXT NOT NULL,
    hint TEXT DEFAULT '',
    tags TEXT DEFAULT '[]',
    bucket INTEGER NOT NULL DEFAULT 0,
    created_at TEXT,
    UNIQUE(front, back)
);

CREATE TABLE IF NOT EXISTS practice_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    flashcard_id INTEGER NOT NULL REFERENCES flashcards(id) ON DELETE CASCADE,
    day INTEGER NOT NULL,
    difficulty INTEGER NOT NULL,
    previous_bucket INTEGER,
    new_bucket INTEGER,
    reviewed_at TEXT
);

CREATE TABLE IF NOT EXISTS deck_state (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    current_day INTEGER NOT NULL DEFAULT 0 CHECK (current_day >= 0)
);

INSERT OR IGNORE INTO deck_state (id, current_day) VALUES (1, 0);
"""


def get_connection(db_path: str) -> sqlite3.Connection:
    """Open the deck database; rows come back as sqlite3.Row, cascades are enforced."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the deck tables and the day counter row if they are missing."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
