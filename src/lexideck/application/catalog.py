"""Catalog parsing: turn a two-column vocabulary CSV into items."""

import csv
import hashlib
import io
import logging

from lexideck.domain.constants import DEFAULT_BACK_COLUMN, DEFAULT_FRONT_COLUMN, ITEM_ID_LENGTH
from lexideck.domain.models import Item

logger = logging.getLogger(__name__)


def make_item_id(front: str, back: str) -> str:
    """Stable content-derived id for an item."""
    digest = hashlib.sha256(f"{front}\x1f{back}".encode()).hexdigest()
    return digest[:ITEM_ID_LENGTH]


def parse_catalog_csv(
    text: str,
    front_column: int = DEFAULT_FRONT_COLUMN,
    back_column: int = DEFAULT_BACK_COLUMN,
) -> list[Item]:
    """
    Parse CSV text into items, in file order.

    The first row is a header and is always skipped. Blank rows, short rows
    and rows with an empty front or back are ignored. Rows whose content
    hashes to an id already seen are dropped, keeping the first occurrence.
    """
    text = text.lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text, newline=""))
    needed = max(front_column, back_column) + 1

    items: list[Item] = []
    seen: set[str] = set()
    skipped = 0

    for index, row in enumerate(reader):
        if index == 0:
            continue
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < needed:
            skipped += 1
            continue

        front = row[front_column].strip()
        back = row[back_column].strip()
        if not front or not back:
            skipped += 1
            continue

        item_id = make_item_id(front, back)
        if item_id in seen:
            continue
        seen.add(item_id)
        items.append(Item(id=item_id, front=front, back=back))

    if skipped:
        logger.debug(f"Skipped {skipped} incomplete catalog rows")

    return items
