"""Progress statistics over bucket occupancy and practice history."""
from collections import Counter

from leitner_cards.models import BucketMap, PracticeRecord, ProgressStats


def compute_progress(buckets: BucketMap, history: list[PracticeRecord]) -> ProgressStats:
    """Summarize how far the learner has progressed.

    Args:
        buckets: Current bucket map.
        history: Past practice attempts; only day and difficulty are read.

    Returns:
        ProgressStats with card totals, per-bucket counts, the occupancy
        weighted average bucket, per-day practice counts and the percentage
        of correct (HARD or EASY) answers.
    """
    total_cards = 0
    bucket_distribution = {}
    bucket_sum = 0
    for bucket, cards in buckets.items():
        count = len(cards)
        total_cards += count
        bucket_distribution[bucket] = count
        bucket_sum += bucket * count
    average_bucket = bucket_sum / total_cards if total_cards else 0.0

    practice_history = {}
    correct = 0
    for record in history:
        practice_history[record.day] = practice_history.get(record.day, 0) + 1
        if record.difficulty.is_correct:
            correct += 1
    accuracy_rate = (correct / len(history)) * 100 if history else 0.0

    return ProgressStats(
        total_cards=total_cards,
        bucket_distribution=bucket_distribution,
        average_bucket=average_bucket,
        practice_history=practice_history,
        accuracy_rate=accuracy_rate,
    )


def reviews_per_bucket(buckets: BucketMap, history: list[PracticeRecord]) -> dict[int, int]:
    """Count history entries per bucket, using each card's bucket right now.

    Cards that are no longer in any bucket are not counted.
    """
    reviews = Counter(record.card for record in history)
    return {
        bucket: sum(reviews[card] for card in cards)
        for bucket, cards in buckets.items()
    }


def get_progress_label(stats: ProgressStats) -> str:
    if stats.total_cards == 0:
        return "EMPTY DECK"
    if stats.average_bucket >= 3:
        return "MASTERED"
    elif stats.average_bucket >= 2:
        return "SOLID"
    elif stats.average_bucket >= 1:
        return "LEARNING"
    return "NEW"


def get_progress_color(stats: ProgressStats) -> str:
    if stats.average_bucket >= 3:
        return "green"
    elif stats.average_bucket >= 2:
        return "yellow"
    elif stats.average_bucket >= 1:
        return "dark_orange"
    return "red"
