"""Todo repository interface."""

from typing import Protocol


class TodoRepository(Protocol):
    """Interface for the remote todo service."""

    def fetch_all(self) -> list[dict]:
        """Fetch every remote todo record, in service order."""
        ...

    def create(self, text: str, completed: bool, user_id: int) -> dict:
        """Create a todo remotely. Returns the created record with its assigned id."""
        ...
