"""Conversions between the sparse bucket map and the dense bucket array."""
from leitner_cards.models import BucketMap, Flashcard


def to_bucket_sets(buckets: BucketMap) -> list[set[Flashcard]]:
    """Convert a bucket map into a list indexed by bucket number.

    Args:
        buckets: Map of bucket number to the set of cards in that bucket.

    Returns:
        List of length max(bucket number) + 1. Buckets missing from the map
        hold their own empty set. An empty map gives an empty list.
    """
    if not buckets:
        return []
    result = [set() for _ in range(max(buckets) + 1)]
    for bucket, cards in buckets.items():
        result[bucket] = set(cards)
    return result


def get_bucket_range(bucket_sets: list[set[Flashcard]]) -> tuple[int, int] | None:
    """Return (lowest, highest) occupied bucket, or None when no bucket has cards."""
    occupied = [i for i, cards in enumerate(bucket_sets) if cards]
    if not occupied:
        return None
    return occupied[0], occupied[-1]
