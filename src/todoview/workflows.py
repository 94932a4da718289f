"""Shared workflow layer between the one-shot CLI commands and the browse session.

TodoManager performs the I/O around the pure TodoCollection. Every operation
recovers its own errors and returns an Outcome; nothing raised by an adapter
escapes load(), add_task() or toggle_complete().
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from .adapters.dummyjson_api import DummyJsonAdapter
from .adapters.file_store import FileTodoStore
from .config import Config
from .core.collection import TodoCollection
from .core.tasks import FilterCriteria, Origin, Task
from .errors import NetworkError, StorageError, TodoError, ValidationError
from .ports import TodoRepository, TodoStore

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """Result of a manager operation, ready to show as a notification."""

    ok: bool
    message: str = ""
    error: TodoError | None = None
    task: Task | None = None


class TodoManager:
    """
    Keeps a TodoCollection in step with the remote service and the local store.

    Local tasks are written to the store before they enter the collection, so
    a failed remote call never leaves a partial insert behind.
    """

    def __init__(
        self,
        repo: TodoRepository,
        store: TodoStore,
        collection: TodoCollection | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repo = repo
        self.store = store
        self.collection = collection or TodoCollection()
        self._today = today

    def _load_persisted(self) -> list[dict]:
        """Stored records that parse as local tasks; unreadable ones are dropped."""
        try:
            records = self.store.load()
        except StorageError as e:
            logger.error(f"Error loading todos from storage: {e}")
            return []

        readable = []
        for record in records:
            try:
                Task.from_record(record, Origin.LOCAL)
            except TodoError as e:
                logger.warning(f"Dropping unreadable stored todo: {e}")
                continue
            readable.append(record)
        return readable

    def _save_persisted(self, records: list[dict]) -> None:
        try:
            self.store.save(records)
        except StorageError as e:
            logger.error(f"Error saving todos to storage: {e}")

    def load(self) -> Outcome:
        """Fetch remote todos, read stored ones, and merge them."""
        try:
            remote = self.repo.fetch_all()
            self.collection.merge(remote, self._load_persisted())
        except TodoError as e:
            logger.error(f"Error loading todos: {e}")
            return Outcome(ok=False, message=f"Failed to load todos: {e}", error=e)

        return Outcome(ok=True, message=self.collection.summary())

    def add_task(self, text: str, user_id: int) -> Outcome:
        """Create a todo remotely, then keep it locally ahead of every other task."""
        text = (text or "").strip()
        if not text:
            error = ValidationError("Please enter a task description")
            return Outcome(ok=False, message=str(error), error=error)

        try:
            record = self.repo.create(text, completed=False, user_id=user_id)
            task = Task.from_record(
                {"todo": text, **record},
                Origin.LOCAL,
                created_at=self._today().isoformat(),
            )
        except NetworkError as e:
            logger.error(f"Error adding todo: {e}")
            return Outcome(ok=False, message=f"Network error: {e}", error=e)
        except TodoError as e:
            logger.error(f"Error adding todo: {e}")
            return Outcome(ok=False, message=f"Failed to add todo: {e}", error=e)

        persisted = self._load_persisted()
        persisted.insert(0, task.to_record())
        self._save_persisted(persisted)

        self.collection.prepend_local(task)
        logger.info(f"Added todo {task.id}. Total todos: {len(self.collection.all)}")
        return Outcome(ok=True, message="Todo added successfully!", task=task)

    def toggle_complete(self, task_id: int, completed: bool) -> Outcome:
        """
        Set a task's completion flag.

        Only local tasks are written back to the store. An unknown id is a
        silent no-op: the outcome is ok with no task and no message.
        """
        task = self.collection.set_completed(task_id, completed)
        if task is None:
            logger.debug(f"Toggle ignored, no todo with id {task_id}")
            return Outcome(ok=True)

        if task.is_local:
            persisted = self._load_persisted()
            for record in persisted:
                if record.get("id") == task_id:
                    record["completed"] = completed
                    self._save_persisted(persisted)
                    break

        action = "completed" if completed else "marked as pending"
        return Outcome(ok=True, message=f"Todo {action} successfully!", task=task)

    def apply_filter(self, criteria: FilterCriteria | None = None) -> None:
        self.collection.apply_filter(criteria)

    def clear_filter(self) -> None:
        self.collection.clear_filter()

    def page(self, n: int) -> list[Task]:
        return self.collection.page_slice(n)


def build_manager(config: Config) -> TodoManager:
    """Wire the default adapters from config."""
    return TodoManager(
        repo=DummyJsonAdapter(config),
        store=FileTodoStore(config.data_dir, config.storage_slot),
        collection=TodoCollection(page_size=config.page_size),
    )
