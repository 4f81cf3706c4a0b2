"""
Spaced-repetition scheduler.

Pure functions over the catalog and the progress mapping:
1. Derive direction-qualified progress keys
2. Purge progress for items that left the catalog
3. Pick the next item (due first, then new items behind an admission gate)
4. Recompute an item's schedule after a rating

Nothing here performs I/O or keeps state between calls.
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from lexideck.domain.constants import (
    EASY_FIRST_INTERVAL_DAYS,
    EASY_GROWTH_BASE,
    FAIL_INTERVAL_MINUTES,
    GOOD_FIRST_INTERVAL_HOURS,
    GOOD_GROWTH_BASE,
    GOOD_SECOND_INTERVAL_DAYS,
    HARD_INTERVAL_MINUTES,
    MAX_ACTIVE_LEARNING_ITEMS,
    MAX_INTERVAL_DAYS,
    ONE_DAY_MS,
    ONE_HOUR_MS,
    ONE_MINUTE_MS,
    REVERSE_KEY_SUFFIX,
)
from lexideck.domain.models import (
    CardState,
    Item,
    LearningDirection,
    ProgressMapping,
    ProgressRecord,
    Rating,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulerTuning:
    """
    Heuristic constants for interval growth and new-item admission.

    Defaults mirror lexideck.domain.constants; AppConfig can override them.
    """

    fail_interval_minutes: float = FAIL_INTERVAL_MINUTES
    hard_interval_minutes: float = HARD_INTERVAL_MINUTES
    good_first_interval_hours: float = GOOD_FIRST_INTERVAL_HOURS
    good_second_interval_days: float = GOOD_SECOND_INTERVAL_DAYS
    good_growth_base: float = GOOD_GROWTH_BASE
    easy_first_interval_days: float = EASY_FIRST_INTERVAL_DAYS
    easy_growth_base: float = EASY_GROWTH_BASE
    max_active_learning: int = MAX_ACTIVE_LEARNING_ITEMS


DEFAULT_TUNING = SchedulerTuning()


def now_ms() -> int:
    return int(time.time() * 1000)


# ---------- Progress keys ----------


def progress_key(item_id: str, direction: LearningDirection) -> str:
    """Key under which an item's progress is stored for a direction."""
    if direction == LearningDirection.REVERSE:
        return f"{item_id}{REVERSE_KEY_SUFFIX}"
    return item_id


def base_item_id(key: str) -> str:
    """Recover the item id from a progress key."""
    if key.endswith(REVERSE_KEY_SUFFIX):
        return key[: -len(REVERSE_KEY_SUFFIX)]
    return key


def cleanup(progress: ProgressMapping, catalog: Sequence[Item]) -> ProgressMapping:
    """
    Drop progress entries whose item is no longer in the catalog.

    Returns the same mapping object when nothing was dropped, so callers
    can use an identity check to decide whether to persist.
    """
    valid_ids = {item.id for item in catalog}
    kept = {key: record for key, record in progress.items() if base_item_id(key) in valid_ids}

    if len(kept) == len(progress):
        return progress

    logger.info(f"Purged {len(progress) - len(kept)} orphaned progress entries")
    return kept


# ---------- Selection ----------


def count_active_learning(
    catalog: Sequence[Item],
    progress: ProgressMapping,
    direction: LearningDirection,
) -> int:
    """Number of catalog items rated in this direction but not yet mastered."""
    active = 0
    for item in catalog:
        record = progress.get(progress_key(item.id, direction))
        if record is not None and record.last_rating != Rating.EASY:
            active += 1
    return active


def select_next(
    catalog: Sequence[Item],
    progress: ProgressMapping,
    direction: LearningDirection,
    now: int | None = None,
    tuning: SchedulerTuning = DEFAULT_TUNING,
) -> Item | None:
    """
    Pick the item the user should see next.

    Priority:
    1. The most overdue item (earliest next_review_at; catalog order breaks ties).
    2. The first unseen item, if fewer than tuning.max_active_learning items
       are in rotation.
    3. None. Items scheduled in the future are never shown early.
    """
    if not catalog:
        return None

    if now is None:
        now = now_ms()

    best: Item | None = None
    best_due: int | None = None
    for item in catalog:
        record = progress.get(progress_key(item.id, direction))
        if record is None or record.next_review_at > now:
            continue
        # Strict comparison keeps the earliest catalog position on ties.
        if best_due is None or record.next_review_at < best_due:
            best, best_due = item, record.next_review_at

    if best is not None:
        return best

    if count_active_learning(catalog, progress, direction) < tuning.max_active_learning:
        for item in catalog:
            if progress_key(item.id, direction) not in progress:
                return item

    return None


# ---------- Interval recalculation ----------


def _grown_interval_ms(base: float, reps: int) -> float:
    try:
        return base**reps * ONE_DAY_MS
    except OverflowError:
        return float("inf")


def next_interval_ms(rating: Rating, reps: int, tuning: SchedulerTuning = DEFAULT_TUNING) -> int:
    """
    Interval for a rating, given the rep count *after* the rating is applied.
    Never longer than MAX_INTERVAL_DAYS.
    """
    if rating == Rating.FAIL:
        interval = tuning.fail_interval_minutes * ONE_MINUTE_MS
    elif rating == Rating.HARD:
        interval = tuning.hard_interval_minutes * ONE_MINUTE_MS
    elif rating == Rating.GOOD:
        if reps == 1:
            interval = tuning.good_first_interval_hours * ONE_HOUR_MS
        elif reps == 2:
            interval = tuning.good_second_interval_days * ONE_DAY_MS
        else:
            interval = _grown_interval_ms(tuning.good_growth_base, reps)
    else:
        if reps == 1:
            interval = tuning.easy_first_interval_days * ONE_DAY_MS
        else:
            interval = _grown_interval_ms(tuning.easy_growth_base, reps)
    return int(round(min(interval, MAX_INTERVAL_DAYS * ONE_DAY_MS)))


def record_review(
    key: str,
    rating: Rating,
    previous: ProgressRecord | None = None,
    now: int | None = None,
    tuning: SchedulerTuning = DEFAULT_TUNING,
) -> ProgressRecord:
    """
    Compute the new progress record after a rating.

    Args:
        key: Direction-qualified progress key (see progress_key).
        rating: The rating the user gave.
        previous: The existing record, or None if the item was unseen.
        now: Epoch milliseconds of the rating; defaults to the clock.
        tuning: Interval constants.

    Returns:
        A fresh record. Persisting it is the caller's job.
    """
    if now is None:
        now = now_ms()

    if rating.is_failure:
        reps = 0
    else:
        reps = (previous.reps if previous else 0) + 1

    interval = next_interval_ms(rating, reps, tuning)

    return ProgressRecord(
        key=key,
        next_review_at=now + interval,
        interval_ms=interval,
        reps=reps,
        last_rating=rating,
    )


def classify(record: ProgressRecord | None) -> CardState:
    """Map a record (or its absence) to the informal card lifecycle."""
    if record is None:
        return CardState.UNSEEN
    if record.last_rating == Rating.EASY:
        return CardState.MASTERED
    if record.last_rating == Rating.GOOD:
        return CardState.MATURE if record.reps >= 3 else CardState.YOUNG
    return CardState.LEARNING
