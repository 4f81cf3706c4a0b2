"""Errors raised outside the pure scheduling core."""


class LexideckError(Exception):
    """Base class for user-facing lexideck errors."""


class CatalogError(LexideckError):
    """The item catalog could not be fetched or contained no items."""


class UnknownItemError(LexideckError):
    """A rating referenced an item id that is not in the current catalog."""

    def __init__(self, item_id: str):
        super().__init__(f"Unknown item: {item_id}")
        self.item_id = item_id
