import pytest

from leitner_cards.leitner import MAX_BUCKET, find_bucket, next_bucket, practice, update
from leitner_cards.models import AnswerDifficulty, Flashcard, InvalidDifficulty


def _bucket_of(buckets, card):
    return [b for b, cs in buckets.items() if card in cs]


@pytest.mark.parametrize("day, expected", [
    (0, {"A", "B", "C"}),
    (1, {"A"}),
    (2, {"A", "B"}),
    (3, {"A"}),
    (4, {"A", "B", "C"}),
    (6, {"A", "B"}),
])
def test_practice_doubling_intervals(cards, day, expected):
    a, b, c = cards
    due = practice([{a}, {b}, {c}], day)
    assert {card.front for card in due} == expected


def test_practice_bucket_zero_always_due(cards):
    a, b, _ = cards
    for day in range(10):
        assert a in practice([{a}, set(), set(), set(), {b}], day)


def test_practice_bucket_four_every_sixteen_days(cards):
    a, _, _ = cards
    bucket_sets = [set(), set(), set(), set(), {a}]
    assert practice(bucket_sets, 16) == {a}
    assert practice(bucket_sets, 8) == set()


def test_practice_duplicates_collapse(cards):
    a, _, _ = cards
    assert practice([{a}, {a}], 0) == {a}


def test_practice_empty():
    assert practice([], 5) == set()


def test_practice_does_not_modify_input(cards):
    a, b, _ = cards
    bucket_sets = [{a}, {b}]
    practice(bucket_sets, 0)
    assert bucket_sets == [{a}, {b}]


def test_update_new_card_easy_goes_to_bucket_two():
    card = Flashcard("Q", "A")
    result = update({}, card, AnswerDifficulty.EASY)
    assert result == {2: {card}}


def test_update_easy_caps_at_max_bucket():
    card = Flashcard("Q", "A")
    buckets = update({}, card, AnswerDifficulty.EASY)
    buckets = update(buckets, card, AnswerDifficulty.EASY)
    assert _bucket_of(buckets, card) == [4]
    buckets = update(buckets, card, AnswerDifficulty.EASY)
    assert _bucket_of(buckets, card) == [MAX_BUCKET]


def test_update_hard_moves_up_one(cards):
    a, _, _ = cards
    result = update({1: {a}}, a, AnswerDifficulty.HARD)
    assert _bucket_of(result, a) == [2]
    assert result[1] == set()


def test_update_hard_caps_at_max_bucket(cards):
    a, _, _ = cards
    result = update({4: {a}}, a, AnswerDifficulty.HARD)
    assert _bucket_of(result, a) == [4]


def test_update_wrong_resets_to_zero(cards):
    a, b, _ = cards
    result = update({0: {b}, 3: {a}}, a, AnswerDifficulty.WRONG)
    assert result[0] == {a, b}
    assert result[3] == set()


def test_update_never_exceeds_max_bucket(cards):
    a, _, _ = cards
    buckets = {}
    for difficulty in [AnswerDifficulty.HARD, AnswerDifficulty.EASY] * 5:
        buckets = update(buckets, a, difficulty)
        assert max(_bucket_of(buckets, a)) <= MAX_BUCKET


def test_update_conserves_card_count(cards):
    a, b, c = cards
    buckets = {0: {a}, 1: {b}, 2: {c}}
    for difficulty in AnswerDifficulty:
        result = update(buckets, b, difficulty)
        assert sum(len(s) for s in result.values()) == 3
        assert len(_bucket_of(result, b)) == 1


def test_update_does_not_mutate_input(cards):
    a, b, _ = cards
    bucket_zero = {a, b}
    buckets = {0: bucket_zero}
    update(buckets, a, AnswerDifficulty.EASY)
    assert buckets == {0: {a, b}}
    assert buckets[0] is bucket_zero


def test_update_matches_by_value():
    buckets = {1: {Flashcard("Q", "A")}}
    result = update(buckets, Flashcard("Q", "A"), AnswerDifficulty.HARD)
    assert result == {1: set(), 2: {Flashcard("Q", "A")}}


def test_update_rejects_unknown_difficulty(cards):
    a, _, _ = cards
    with pytest.raises(InvalidDifficulty):
        update({0: {a}}, a, 7)


def test_update_accepts_difficulty_name(cards):
    a, _, _ = cards
    result = update({0: {a}}, a, "hard")
    assert _bucket_of(result, a) == [1]


def test_find_bucket(cards):
    a, b, c = cards
    buckets = {0: {a}, 2: {b}}
    assert find_bucket(buckets, b) == 2
    assert find_bucket(buckets, c) is None


@pytest.mark.parametrize("current, difficulty, expected", [
    (0, AnswerDifficulty.WRONG, 0),
    (3, AnswerDifficulty.WRONG, 0),
    (0, AnswerDifficulty.HARD, 1),
    (3, AnswerDifficulty.HARD, 4),
    (0, AnswerDifficulty.EASY, 2),
    (3, AnswerDifficulty.EASY, 4),
])
def test_next_bucket(current, difficulty, expected):
    assert next_bucket(current, difficulty) == expected
