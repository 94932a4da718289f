"""File-based todo storage adapter."""

import json
import logging
from pathlib import Path

from todoview.errors import StorageError

logger = logging.getLogger(__name__)


class FileTodoStore:
    """
    File-based storage for locally created todos.

    Implements TodoStore protocol. The named slot is a single JSON file
    holding an array of records, rewritten in full on every save.
    """

    def __init__(self, data_dir: Path | str, slot: str = "user_added_todos"):
        self.data_dir = Path(data_dir).expanduser()
        self.slot = slot

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.slot}.json"

    def load(self) -> list[dict]:
        """Read stored records. Missing or corrupt files read as empty."""
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Error loading todos from {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Ignoring {self.path}: expected a JSON array")
            return []
        return [record for record in data if isinstance(record, dict)]

    def save(self, records: list[dict]) -> None:
        """Overwrite the slot with these records."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

