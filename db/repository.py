from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from loguru import logger

from models.card import Card, Stage
from models.deck import Deck
from utils.errors import CardNotFound, DeckNotFound, StaleCard, StorageFailure
from utils.timestamps import format_instant, parse_due_date, parse_instant, parse_optional_instant

CARD_COLUMNS = """
    id, deck_id, correct, incorrect, lapses, ease, stage,
    created_at, last_reviewed_at, review_due_date, question, answer
"""


def card_from_row(row) -> Card:
    card_id = row["id"]
    return Card(
        id=card_id,
        deck_id=row["deck_id"],
        correct=row["correct"],
        incorrect=row["incorrect"],
        lapses=row["lapses"],
        ease=row["ease"],
        stage=Stage(row["stage"]),
        created_at=parse_instant(row["created_at"], card_id),
        last_reviewed_at=parse_optional_instant(row["last_reviewed_at"], card_id),
        review_due_date=parse_due_date(row["review_due_date"], card_id),
        question=row["question"],
        answer=row["answer"],
    )


def _optional(value: Optional[datetime]) -> Optional[str]:
    return format_instant(value) if value is not None else None


class CardRepository:
    """Reads and writes decks and cards on one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    @contextmanager
    def _storage(self, action: str):
        try:
            yield self.conn.cursor()
        except sqlite3.Error as e:
            logger.error("Storage failure while {}: {}", action, e)
            raise StorageFailure(f"Storage failure while {action}: {e}") from e

    # Decks

    def create_deck(self, name: str) -> Deck:
        with self._storage("creating deck") as cursor:
            cursor.execute("INSERT INTO decks (name) VALUES (?)", (name,))
            deck_id = cursor.lastrowid
            self.conn.commit()
        logger.debug("Created deck {} ({})", deck_id, name)
        return Deck(id=deck_id, name=name)

    def list_decks(self) -> List[Deck]:
        with self._storage("listing decks") as cursor:
            cursor.execute("SELECT id, name FROM decks ORDER BY id")
            rows = cursor.fetchall()
        return [Deck(id=row["id"], name=row["name"]) for row in rows]

    def get_deck(self, deck_id: int) -> Deck:
        with self._storage("reading deck") as cursor:
            cursor.execute("SELECT id, name FROM decks WHERE id = ?", (deck_id,))
            row = cursor.fetchone()
        if not row:
            raise DeckNotFound(deck_id)
        return Deck(id=row["id"], name=row["name"])

    def delete_deck(self, deck_id: int) -> None:
        with self._storage("deleting deck") as cursor:
            cursor.execute("DELETE FROM decks WHERE id = ?", (deck_id,))
            deleted = cursor.rowcount
            self.conn.commit()
        if not deleted:
            raise DeckNotFound(deck_id)
        logger.debug("Deleted deck {}", deck_id)

    # Cards

    def create_card(self, deck_id: int, question: str, answer: str, now: datetime) -> Card:
        """Insert a card in its initial Learning state, due at creation."""
        self.get_deck(deck_id)
        created = format_instant(now)
        with self._storage("creating card") as cursor:
            cursor.execute(
                """
                INSERT INTO cards (deck_id, question, answer, created_at, review_due_date)
                VALUES (?, ?, ?, ?, ?)
                """,
                (deck_id, question, answer, created, created),
            )
            card_id = cursor.lastrowid
            self.conn.commit()
        logger.debug("Created card {} in deck {}", card_id, deck_id)
        return self.get_card(card_id)

    def get_card(self, card_id: int) -> Card:
        with self._storage("reading card") as cursor:
            cursor.execute(f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,))
            row = cursor.fetchone()
        if not row:
            raise CardNotFound(card_id)
        return card_from_row(row)

    def list_cards(
        self,
        deck_id: int,
        stage: Optional[Stage] = None,
        due_before: Optional[datetime] = None,
    ) -> List[Card]:
        """Cards of a deck in insertion order, optionally filtered."""
        filters = ["deck_id = ?"]
        params: list[object] = [deck_id]
        if stage is not None:
            filters.append("stage = ?")
            params.append(Stage(stage).value)
        if due_before is not None:
            filters.append("review_due_date <= ?")
            params.append(format_instant(due_before))
        where_clause = " AND ".join(filters)
        with self._storage("listing cards") as cursor:
            cursor.execute(
                f"SELECT {CARD_COLUMNS} FROM cards WHERE {where_clause} ORDER BY id",
                params,
            )
            rows = cursor.fetchall()
        return [card_from_row(row) for row in rows]

    def save_card(self, card: Card, expected: Optional[Card] = None) -> None:
        """Persist scheduling fields of ``card``.

        With ``expected`` the write only happens if the stored counters still
        match that snapshot, otherwise StaleCard is raised.
        """
        sql = """
            UPDATE cards
            SET correct = ?, incorrect = ?, lapses = ?, ease = ?, stage = ?,
                review_due_date = ?, last_reviewed_at = ?
            WHERE id = ?
        """
        params: list[object] = [
            card.correct,
            card.incorrect,
            card.lapses,
            card.ease,
            card.stage.value,
            format_instant(card.review_due_date),
            _optional(card.last_reviewed_at),
            card.id,
        ]
        if expected is not None:
            sql += """
            AND correct = ? AND incorrect = ? AND ease = ?
            AND last_reviewed_at IS ?
            """
            params.extend(
                [expected.correct, expected.incorrect, expected.ease, _optional(expected.last_reviewed_at)]
            )
        with self._storage("saving card") as cursor:
            cursor.execute(sql, params)
            updated = cursor.rowcount
            self.conn.commit()
        if not updated:
            if expected is not None and self._card_exists(card.id):
                raise StaleCard(card.id)
            raise CardNotFound(card.id)
        logger.debug("Saved card {}", card.id)

    def _card_exists(self, card_id: int) -> bool:
        with self._storage("reading card") as cursor:
            cursor.execute("SELECT 1 FROM cards WHERE id = ?", (card_id,))
            return cursor.fetchone() is not None
