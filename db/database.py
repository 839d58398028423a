import sqlite3
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

from config import CONFIG_DIR
from .schema import SCHEMA_SQL, INDEXES_SQL, SCHEMA_VERSION

DB_PATH = CONFIG_DIR / "linguatron.db"

def init_db():
    """Initialize the database by creating tables and indexes if they don't exist."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with get_conn() as conn:
        conn.execute("PRAGMA journal_mode = WAL")
        conn.executescript(SCHEMA_SQL)
        conn.executescript(INDEXES_SQL)
        ensure_last_reviewed_column(conn)
        ensure_card_due_dates(conn)
        ensure_schema_version(conn)
        conn.commit()
    logger.info("Database ready at {}", DB_PATH)

def ensure_last_reviewed_column(conn: sqlite3.Connection) -> None:
    """Ensure cards table has last_reviewed_at for installs created before it existed."""
    cursor = conn.cursor()
    cursor.execute("PRAGMA table_info(cards)")
    columns = {row[1] for row in cursor.fetchall()}
    if "last_reviewed_at" not in columns:
        cursor.execute("ALTER TABLE cards ADD COLUMN last_reviewed_at TEXT")

def ensure_card_due_dates(conn: sqlite3.Connection) -> None:
    """Backfill blank due dates with the card's creation instant."""
    cursor = conn.cursor()
    cursor.execute(
        """
        UPDATE cards
        SET review_due_date = created_at
        WHERE (review_due_date IS NULL OR review_due_date = '')
        AND created_at IS NOT NULL AND created_at != ''
        """
    )
    if cursor.rowcount:
        logger.warning("Backfilled {} cards with a blank due date", cursor.rowcount)

def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the SQLite schema version from PRAGMA user_version."""
    cursor = conn.cursor()
    cursor.execute("PRAGMA user_version")
    row = cursor.fetchone()
    return int(row[0]) if row else 0

def set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Set the SQLite schema version via PRAGMA user_version."""
    conn.execute(f"PRAGMA user_version = {int(version)}")

def ensure_schema_version(conn: sqlite3.Connection) -> None:
    """Ensure the current schema version is written to the database."""
    current = get_schema_version(conn)
    if current != SCHEMA_VERSION:
        set_schema_version(conn, SCHEMA_VERSION)

def connect(path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn

@contextmanager
def get_conn():
    """Context manager for SQLite connection, using row_factory for dict-like rows."""
    conn = connect(DB_PATH)
    try:
        yield conn
    finally:
        conn.close()

def get_db():
    """FastAPI dependency that yields a DB connection and closes it afterwards."""
    with get_conn() as conn:
        yield conn
