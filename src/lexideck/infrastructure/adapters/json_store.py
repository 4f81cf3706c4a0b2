"""
JSON Progress Store: Infrastructure adapter for a local progress file.

Implements ProgressStore by reading and writing one JSON document.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from lexideck.domain.models import ProgressMapping, ProgressRecord
from lexideck.domain.ports import ProgressStore

logger = logging.getLogger(__name__)


class JsonProgressStore(ProgressStore):
    """
    Stores the progress mapping as a JSON object keyed by progress key.

    Unreadable files load as an empty mapping; individual malformed entries
    are dropped so the item simply shows up as unseen again.
    """

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> ProgressMapping:
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read progress file {self.path}: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring progress file {self.path}: expected a JSON object")
            return {}

        progress: ProgressMapping = {}
        for key, data in raw.items():
            try:
                progress[key] = ProgressRecord.from_dict(key, data)
            except ValueError as e:
                logger.warning(f"Dropping unreadable progress entry: {e}")

        logger.debug(f"Loaded {len(progress)} progress entries from {self.path}")
        return progress

    def save(self, progress: ProgressMapping) -> None:
        payload = {key: record.to_dict() for key, record in progress.items()}
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write to a sibling temp file, then swap it in.
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(progress)} progress entries to {self.path}")
