"""Data classes for the flashcard domain model."""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class InvalidDifficulty(ValueError):
    """Raised when a review outcome is not one of the known difficulties."""


@dataclass(frozen=True)
class Flashcard:
    front: str
    back: str
    hint: str = ""
    tags: tuple[str, ...] = field(default=(), compare=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.front, self.back)


class AnswerDifficulty(IntEnum):
    WRONG = 0
    HARD = 1
    EASY = 2

    @property
    def is_correct(self) -> bool:
        return self in (AnswerDifficulty.HARD, AnswerDifficulty.EASY)

    @classmethod
    def parse(cls, value) -> "AnswerDifficulty":
        """Accept a member, its integer value or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            if name.isdigit():
                value = int(name)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidDifficulty(f"Unknown difficulty: {value!r}")


BucketMap = dict[int, set[Flashcard]]


@dataclass
class PracticeRecord:
    day: int
    card: Flashcard
    difficulty: AnswerDifficulty
    previous_bucket: Optional[int] = None
    new_bucket: Optional[int] = None


@dataclass
class ProgressStats:
    total_cards: int
    bucket_distribution: dict[int, int]
    average_bucket: float
    practice_history: dict[int, int]
    accuracy_rate: float


@dataclass
class PracticeSession:
    cards: list[Flashcard]
    day: int


@dataclass
class UpdateRequest:
    card_front: str
    card_back: str
    difficulty: AnswerDifficulty


@dataclass
class HintRequest:
    card_front: str
    card_back: str
