"""
Ports (interfaces) for the scheduler's collaborators.

These define the contract that infrastructure adapters must implement.
The scheduler itself never calls them; the study session sequences
load -> scheduler call(s) -> save.
"""

from abc import ABC, abstractmethod

from .models import Item, ProgressMapping


class CatalogProvider(ABC):
    """
    Port for fetching the ordered item catalog.

    Implementations:
        - HttpCatalogProvider: Downloads a CSV export over HTTP.
        - FileCatalogProvider: Reads a local CSV file.
        - SampleCatalogProvider: Parses the bundled sample deck.
    """

    @abstractmethod
    async def fetch_items(self) -> list[Item]:
        """
        Fetch the catalog.

        Returns:
            Items in source order, already deduplicated by id.
        """
        pass


class ProgressStore(ABC):
    """
    Port for persisting the progress mapping as a single unit.

    Implementations:
        - JsonProgressStore: One JSON document on disk.
    """

    @abstractmethod
    def load(self) -> ProgressMapping:
        """
        Read the whole mapping.

        Returns:
            The stored mapping, or an empty one when nothing usable is stored.
        """
        pass

    @abstractmethod
    def save(self, progress: ProgressMapping) -> None:
        """Replace the stored mapping with the given one."""
        pass
