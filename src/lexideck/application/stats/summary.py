"""
Per-direction progress summary.

This is a pure computation module with no I/O.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from lexideck.application.scheduler import classify, count_active_learning, now_ms, progress_key
from lexideck.domain.models import CardState, Item, LearningDirection, ProgressMapping, Rating


@dataclass
class ProgressSummary:
    """
    Counts of catalog items by last rating for one direction.
    """

    direction: LearningDirection
    total: int
    new: int = 0
    fail: int = 0
    hard: int = 0
    good: int = 0
    easy: int = 0

    # Derived
    due: int = 0  # Rated items whose review time has passed
    active: int = 0  # Rated but not mastered (the admission-gate load)
    states: dict[CardState, int] | None = None

    @property
    def reviewed(self) -> int:
        return self.fail + self.hard + self.good + self.easy

    def fraction(self, bucket: str) -> float:
        """
        Share of reviewed items in a rating bucket ("fail", "hard", "good", "easy").

        Returns 0.0 when nothing has been reviewed yet.
        """
        if bucket not in ("fail", "hard", "good", "easy"):
            raise ValueError(f"Unknown bucket: {bucket}")
        if self.reviewed == 0:
            return 0.0
        return getattr(self, bucket) / self.reviewed

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "total": self.total,
            "new": self.new,
            "fail": self.fail,
            "hard": self.hard,
            "good": self.good,
            "easy": self.easy,
            "reviewed": self.reviewed,
            "due": self.due,
            "active": self.active,
            "states": {state.value: count for state, count in (self.states or {}).items()},
        }


_BUCKETS = {
    Rating.FAIL: "fail",
    Rating.HARD: "hard",
    Rating.GOOD: "good",
    Rating.EASY: "easy",
}


def summarize(
    catalog: Sequence[Item],
    progress: ProgressMapping,
    direction: LearningDirection,
    now: int | None = None,
) -> ProgressSummary:
    """
    Tally catalog items by their progress in one direction.

    Records without a last rating count as new, matching how they are
    treated when shown again.
    """
    if now is None:
        now = now_ms()

    summary = ProgressSummary(direction=direction, total=len(catalog))
    states = {state: 0 for state in CardState}

    for item in catalog:
        record = progress.get(progress_key(item.id, direction))
        states[classify(record)] += 1

        if record is None or record.last_rating is None:
            summary.new += 1
        else:
            bucket = _BUCKETS[record.last_rating]
            setattr(summary, bucket, getattr(summary, bucket) + 1)

        if record is not None and record.next_review_at <= now:
            summary.due += 1

    summary.active = count_active_learning(catalog, progress, direction)
    summary.states = states
    return summary
