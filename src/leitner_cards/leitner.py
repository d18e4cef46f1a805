"""Modified-Leitner scheduling: due-card selection and bucket updates."""
from leitner_cards.models import AnswerDifficulty, BucketMap, Flashcard, InvalidDifficulty

MAX_BUCKET = 4


def practice(bucket_sets: list[set[Flashcard]], day: int) -> set[Flashcard]:
    """Select the cards to practice on a given day.

    Bucket i is due every 2**i days, so bucket 0 is due daily.

    Args:
        bucket_sets: Dense bucket array, index = bucket number.
        day: Day number, starting from 0.

    Returns:
        Set of every card in a due bucket.
    """
    due = set()
    for bucket, cards in enumerate(bucket_sets):
        if day % (2 ** bucket) == 0:
            due |= cards
    return due


def find_bucket(buckets: BucketMap, card: Flashcard) -> int | None:
    for bucket in sorted(buckets):
        if card in buckets[bucket]:
            return bucket
    return None


def next_bucket(current: int, difficulty: AnswerDifficulty) -> int:
    difficulty = AnswerDifficulty.parse(difficulty)
    if difficulty is AnswerDifficulty.WRONG:
        return 0
    elif difficulty is AnswerDifficulty.HARD:
        return min(current + 1, MAX_BUCKET)
    elif difficulty is AnswerDifficulty.EASY:
        return min(current + 2, MAX_BUCKET)
    raise InvalidDifficulty(f"Unknown difficulty: {difficulty!r}")


def update(buckets: BucketMap, card: Flashcard, difficulty: AnswerDifficulty) -> BucketMap:
    """Move a card after a practice trial and return the new bucket map.

    The caller's map and sets are left untouched. A card found in no bucket
    is treated as new and starts from bucket 0.

    Raises:
        InvalidDifficulty: if difficulty is not a known AnswerDifficulty.
    """
    updated = {bucket: set(cards) for bucket, cards in buckets.items()}
    current = find_bucket(updated, card)
    if current is None:
        current = 0
    else:
        updated[current].discard(card)
    target = next_bucket(current, difficulty)
    updated.setdefault(target, set()).add(card)
    return updated
