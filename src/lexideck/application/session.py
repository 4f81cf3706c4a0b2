"""
Study Session: Application layer orchestrator.

Sequences catalog fetch, progress load/save and scheduler calls for one
interactive learner. The scheduler stays pure; every mutation here is a
pass-and-replace of the whole progress mapping.
"""

import logging

from lexideck.application import scheduler
from lexideck.application.scheduler import DEFAULT_TUNING, SchedulerTuning
from lexideck.application.stats.summary import ProgressSummary, summarize
from lexideck.domain.exceptions import CatalogError, UnknownItemError
from lexideck.domain.models import (
    Item,
    LearningDirection,
    ProgressMapping,
    ProgressRecord,
    Rating,
)
from lexideck.domain.ports import CatalogProvider, ProgressStore

logger = logging.getLogger(__name__)


class StudySession:
    """
    Holds the current catalog and progress mapping for a single writer.

    Depends on the CatalogProvider and ProgressStore abstractions,
    not concrete adapter implementations.
    """

    def __init__(
        self,
        catalog_provider: CatalogProvider,
        store: ProgressStore,
        tuning: SchedulerTuning = DEFAULT_TUNING,
    ):
        self._provider = catalog_provider
        self._store = store
        self._tuning = tuning
        self._catalog: list[Item] = []
        self._by_id: dict[str, Item] = {}
        self._progress: ProgressMapping = {}
        self._purged = 0

    @property
    def catalog(self) -> list[Item]:
        return self._catalog

    @property
    def progress(self) -> ProgressMapping:
        return self._progress

    @property
    def purged(self) -> int:
        """Orphaned progress entries removed by the last reload."""
        return self._purged

    async def reload(self) -> int:
        """
        Fetch the catalog, load progress and purge orphaned entries.

        Returns:
            The number of orphaned entries removed.

        Raises:
            CatalogError: If the provider fails or returns no items.
        """
        catalog = await self._provider.fetch_items()
        if not catalog:
            raise CatalogError("No items found in catalog.")

        stored = self._store.load()
        cleaned = scheduler.cleanup(stored, catalog)
        if cleaned is not stored:
            self._store.save(cleaned)

        self._catalog = catalog
        self._by_id = {item.id: item for item in catalog}
        self._progress = cleaned
        self._purged = len(stored) - len(cleaned)
        logger.info(f"Session ready: {len(catalog)} items, {len(cleaned)} progress entries")
        return self._purged

    def get_item(self, item_id: str) -> Item:
        try:
            return self._by_id[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def next_item(self, direction: LearningDirection, now: int | None = None) -> Item | None:
        return scheduler.select_next(
            self._catalog, self._progress, direction, now=now, tuning=self._tuning
        )

    def rate(
        self,
        item_id: str,
        direction: LearningDirection,
        rating: Rating,
        now: int | None = None,
    ) -> ProgressRecord:
        """
        Record a rating for an item and persist the updated mapping.

        Raises:
            UnknownItemError: If item_id is not in the current catalog.
        """
        item = self.get_item(item_id)
        key = scheduler.progress_key(item.id, direction)
        record = scheduler.record_review(
            key, rating, self._progress.get(key), now=now, tuning=self._tuning
        )

        updated = {**self._progress, key: record}
        self._store.save(updated)
        self._progress = updated

        logger.debug(
            f"Rated {key} {rating.value}: reps={record.reps} interval_ms={record.interval_ms}"
        )
        return record

    def summary(self, direction: LearningDirection, now: int | None = None) -> ProgressSummary:
        return summarize(self._catalog, self._progress, direction, now=now)
