# Domain Package
from .exceptions import CatalogError, LexideckError, UnknownItemError
from .models import CardState, Item, LearningDirection, ProgressMapping, ProgressRecord, Rating
from .ports import CatalogProvider, ProgressStore

__all__ = [
    "CardState",
    "CatalogError",
    "CatalogProvider",
    "Item",
    "LearningDirection",
    "LexideckError",
    "ProgressMapping",
    "ProgressRecord",
    "ProgressStore",
    "Rating",
    "UnknownItemError",
]
