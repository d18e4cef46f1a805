"""Stored deck: cards, bucket assignments, practice history and the day counter."""
import json
import logging
from datetime import datetime

from leitner_cards.buckets import to_bucket_sets
from leitner_cards.db import get_connection
from leitner_cards.hints import get_hint
from leitner_cards.leitner import find_bucket, practice, update
from leitner_cards.models import (
    AnswerDifficulty, BucketMap, Flashcard, HintRequest, PracticeRecord,
    PracticeSession, ProgressStats, UpdateRequest,
)
from leitner_cards.progress import compute_progress

logger = logging.getLogger(__name__)


class CardNotFound(LookupError):
    """No stored card matches the given front/back pair."""


class DuplicateCard(ValueError):
    """A card with the same front/back pair is already stored."""


def _row_to_card(row) -> Flashcard:
    return Flashcard(
        front=row["front"],
        back=row["back"],
        hint=row["hint"] or "",
        tags=tuple(json.loads(row["tags"] or "[]")),
    )


def add_card(db_path: str, front: str, back: str, hint: str = "", tags=()) -> Flashcard:
    if not front.strip() or not back.strip():
        raise ValueError("A card needs both a front and a back")
    conn = get_connection(db_path)
    exists = conn.execute(
        "SELECT 1 FROM flashcards WHERE front = ? AND back = ?", (front, back)
    ).fetchone()
    if exists:
        conn.close()
        raise DuplicateCard(f"Card already exists: {front!r}")
    conn.execute(
        "INSERT INTO flashcards (front, back, hint, tags, bucket, created_at) VALUES (?, ?, ?, ?, 0, ?)",
        (front, back, hint, json.dumps(list(tags)), datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.info("Added card %r", front)
    return Flashcard(front=front, back=back, hint=hint, tags=tuple(tags))


def delete_card(db_path: str, front: str, back: str) -> None:
    conn = get_connection(db_path)
    deleted = conn.execute(
        "DELETE FROM flashcards WHERE front = ? AND back = ?", (front, back)
    ).rowcount
    conn.commit()
    conn.close()
    if deleted == 0:
        raise CardNotFound(f"No card with front {front!r} and back {back!r}")
    logger.info("Deleted card %r", front)


def find_card(db_path: str, front: str, back: str) -> Flashcard:
    """Resolve a front/back pair to the stored card."""
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT * FROM flashcards WHERE front = ? AND back = ?", (front, back)
    ).fetchone()
    conn.close()
    if row is None:
        raise CardNotFound(f"No card with front {front!r} and back {back!r}")
    return _row_to_card(row)


def load_buckets(db_path: str) -> BucketMap:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM flashcards ORDER BY id").fetchall()
    conn.close()
    buckets = {}
    for row in rows:
        buckets.setdefault(row["bucket"], set()).add(_row_to_card(row))
    return buckets


def _write_buckets(conn, buckets: BucketMap) -> None:
    for bucket, cards in buckets.items():
        for card in cards:
            conn.execute(
                "UPDATE flashcards SET bucket = ? WHERE front = ? AND back = ?",
                (bucket, card.front, card.back),
            )


def save_buckets(db_path: str, buckets: BucketMap) -> None:
    conn = get_connection(db_path)
    _write_buckets(conn, buckets)
    conn.commit()
    conn.close()


def load_history(db_path: str) -> list[PracticeRecord]:
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT r.day, r.difficulty, r.previous_bucket, r.new_bucket,
        f.front, f.back, f.hint, f.tags
        FROM practice_records r JOIN flashcards f ON r.flashcard_id = f.id
        ORDER BY r.id"""
    ).fetchall()
    conn.close()
    return [
        PracticeRecord(
            day=row["day"],
            card=_row_to_card(row),
            difficulty=AnswerDifficulty(row["difficulty"]),
            previous_bucket=row["previous_bucket"],
            new_bucket=row["new_bucket"],
        )
        for row in rows
    ]


def get_current_day(db_path: str) -> int:
    conn = get_connection(db_path)
    row = conn.execute("SELECT current_day FROM deck_state WHERE id = 1").fetchone()
    conn.close()
    return row["current_day"] if row else 0


def set_current_day(db_path: str, day: int) -> None:
    if day < 0:
        raise ValueError(f"Day must be non-negative, got {day}")
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO deck_state (id, current_day) VALUES (1, ?) ON CONFLICT(id) DO UPDATE SET current_day = excluded.current_day",
        (day,),
    )
    conn.commit()
    conn.close()


def advance_day(db_path: str) -> int:
    day = get_current_day(db_path) + 1
    set_current_day(db_path, day)
    logger.info("Advanced to day %d", day)
    return day


def get_practice_session(db_path: str, day: int | None = None) -> PracticeSession:
    if day is None:
        day = get_current_day(db_path)
    due = practice(to_bucket_sets(load_buckets(db_path)), day)
    return PracticeSession(cards=sorted(due, key=lambda c: c.key), day=day)


def record_practice(db_path: str, request: UpdateRequest, day: int | None = None) -> PracticeRecord:
    """Apply a review outcome to a stored card and append it to the history.

    Raises:
        CardNotFound: if the front/back pair does not match a stored card.
        InvalidDifficulty: if the difficulty is not recognised.
    """
    difficulty = AnswerDifficulty.parse(request.difficulty)
    card = find_card(db_path, request.card_front, request.card_back)
    if day is None:
        day = get_current_day(db_path)
    buckets = load_buckets(db_path)
    previous = find_bucket(buckets, card)
    updated = update(buckets, card, difficulty)
    new = find_bucket(updated, card)
    # The bucket move and its history row commit together or not at all
    conn = get_connection(db_path)
    try:
        _write_buckets(conn, updated)
        card_id = conn.execute(
            "SELECT id FROM flashcards WHERE front = ? AND back = ?", (card.front, card.back)
        ).fetchone()["id"]
        conn.execute(
            """INSERT INTO practice_records
            (flashcard_id, day, difficulty, previous_bucket, new_bucket, reviewed_at)
            VALUES (?, ?, ?, ?, ?, ?)""",
            (card_id, day, int(difficulty), previous, new, datetime.now().isoformat()),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
    logger.info("Card %r answered %s: bucket %s -> %s", card.front, difficulty.name, previous, new)
    return PracticeRecord(
        day=day, card=card, difficulty=difficulty, previous_bucket=previous, new_bucket=new,
    )


def get_card_hint(db_path: str, request: HintRequest) -> str:
    return get_hint(find_card(db_path, request.card_front, request.card_back))


def get_progress(db_path: str) -> ProgressStats:
    return compute_progress(load_buckets(db_path), load_history(db_path))
