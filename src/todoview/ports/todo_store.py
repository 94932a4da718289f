"""Persisted todo store interface."""

from typing import Protocol


class TodoStore(Protocol):
    """Interface for the slot holding locally created todos."""

    def load(self) -> list[dict]:
        """Read stored records. Missing or corrupt data reads as empty."""
        ...

    def save(self, records: list[dict]) -> None:
        """Overwrite the slot with these records."""
        ...
