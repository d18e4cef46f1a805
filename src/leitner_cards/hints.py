"""Hint generation for flashcards."""
from leitner_cards.models import Flashcard

NO_HINT = "No hint available"


def get_hint(card: Flashcard) -> str:
    if card.hint.strip():
        return card.hint
    if not card.front.strip():
        return NO_HINT
    if len(card.front) <= 2:
        return card.front
    # Mask everything between the first and last character
    return card.front[0] + "*" * (len(card.front) - 2) + card.front[-1]
