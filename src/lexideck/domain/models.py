"""
Domain models for items, ratings and review progress.

These are pure data structures with no I/O or external dependencies.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


class LearningDirection(str, Enum):
    """Which side of an item is shown as the prompt."""

    PRIMARY = "primary"  # front -> back
    REVERSE = "reverse"  # back -> front


class Rating(str, Enum):
    """Self-reported recall strength, weakest first."""

    FAIL = "FAIL"
    HARD = "HARD"
    GOOD = "GOOD"
    EASY = "EASY"

    @classmethod
    def _missing_(cls, value: object) -> "Rating | None":
        # Accept lowercase names and the legacy "AGAIN" spelling of FAIL.
        if isinstance(value, str):
            upper = value.strip().upper()
            if upper == "AGAIN":
                return cls.FAIL
            for member in cls:
                if member.value == upper:
                    return member
        return None

    @property
    def is_failure(self) -> bool:
        return self in (Rating.FAIL, Rating.HARD)


class CardState(str, Enum):
    """
    Informal lifecycle of a progress record.

    UNSEEN has no record at all; every other state is derived from the
    record's last rating and rep count.
    """

    UNSEEN = "unseen"
    LEARNING = "learning"
    YOUNG = "young"
    MATURE = "mature"
    MASTERED = "mastered"


@dataclass(frozen=True)
class Item:
    """
    A single learning unit.

    Attributes:
        id: Content-derived identifier (see catalog.make_item_id).
        front: Text shown first in the primary direction.
        back: Text shown first in the reverse direction.
    """

    id: str
    front: str
    back: str

    def prompt(self, direction: LearningDirection) -> str:
        return self.front if direction == LearningDirection.PRIMARY else self.back

    def answer(self, direction: LearningDirection) -> str:
        return self.back if direction == LearningDirection.PRIMARY else self.front


@dataclass(frozen=True)
class ProgressRecord:
    """
    Review schedule for one item in one direction.

    Attributes:
        key: Progress key (item id, suffixed for the reverse direction).
        next_review_at: Epoch milliseconds when the item becomes due.
        interval_ms: Interval assigned at the last rating.
        reps: Consecutive successful reviews (reset by FAIL/HARD).
        last_rating: The rating given last time.
    """

    key: str
    next_review_at: int
    interval_ms: int
    reps: int
    last_rating: Rating | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "cardId": self.key,
            "nextReview": self.next_review_at,
            "interval": self.interval_ms,
            "reps": self.reps,
        }
        if self.last_rating is not None:
            data["lastStatus"] = self.last_rating.value
        return data

    @classmethod
    def from_dict(cls, key: str, data: Any) -> "ProgressRecord":
        """
        Build a record from its stored form.

        Raises:
            ValueError: If a required field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Progress entry for {key!r} is not an object")

        try:
            next_review = data["nextReview"]
            interval = data["interval"]
            reps = data["reps"]
        except KeyError as e:
            raise ValueError(f"Progress entry for {key!r} is missing {e.args[0]!r}") from e

        for name, value in (("nextReview", next_review), ("interval", interval), ("reps", reps)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Progress entry for {key!r} has non-numeric {name!r}")
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"Progress entry for {key!r} has non-finite {name!r}")

        if reps < 0:
            raise ValueError(f"Progress entry for {key!r} has negative reps")

        status = data.get("lastStatus")
        last_rating = Rating(status) if status is not None else None

        return cls(
            key=key,
            next_review_at=int(next_review),
            interval_ms=int(interval),
            reps=int(reps),
            last_rating=last_rating,
        )


# Progress key -> record. Passed and replaced as a whole, never mutated in place.
ProgressMapping = dict[str, ProgressRecord]
