# SQL schema for Linguatron database

SCHEMA_VERSION = 2

SCHEMA_SQL = """
-- Decks (grouping key only, duplicate names allowed)
CREATE TABLE IF NOT EXISTS decks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);

-- Cards (timestamps use the fixed-width UTC form from utils.timestamps)
CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    deck_id INTEGER NOT NULL,
    correct INTEGER NOT NULL DEFAULT 0 CHECK(correct >= 0),
    incorrect INTEGER NOT NULL DEFAULT 0 CHECK(incorrect >= 0),
    lapses INTEGER NOT NULL DEFAULT 0 CHECK(lapses >= 0),
    ease INTEGER NOT NULL DEFAULT 1 CHECK(ease >= 1),
    stage TEXT NOT NULL DEFAULT 'learning' CHECK(stage IN ('learning', 'review')),
    created_at TEXT NOT NULL,
    last_reviewed_at TEXT,
    review_due_date TEXT NOT NULL,
    question TEXT NOT NULL,
    answer TEXT NOT NULL,
    FOREIGN KEY (deck_id) REFERENCES decks (id) ON DELETE CASCADE
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_cards_deck_stage ON cards (deck_id, stage);
CREATE INDEX IF NOT EXISTS idx_cards_due ON cards (review_due_date);
"""
