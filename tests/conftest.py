import pytest

from leitner_cards.models import Flashcard


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_cards.db")
    return db_path


@pytest.fixture
def cards():
    """Three distinct cards, A, B and C."""
    return (
        Flashcard(front="A", back="a"),
        Flashcard(front="B", back="b"),
        Flashcard(front="C", back="c"),
    )
