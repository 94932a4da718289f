"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from todoview.errors import InvalidSourceData, ValidationError

# Remote records carry no creation date; they are bucketed by fetch order.
DATE_BUCKET_SIZE = 10
DATE_EPOCH = date(2024, 1, 1)


class Origin(Enum):
    """Where a task came from - decides which persistence path it uses."""

    REMOTE = "remote"
    LOCAL = "local"


@dataclass
class Task:
    """A single to-do entry."""

    id: int
    text: str
    completed: bool
    created_at: str
    origin: Origin
    user_id: int | None = None

    @property
    def is_local(self) -> bool:
        return self.origin is Origin.LOCAL

    def matches(self, criteria: "FilterCriteria") -> bool:
        """Search text (case-insensitive) AND inclusive date range."""
        if criteria.search_text and criteria.search_text not in self.text.lower():
            return False
        if criteria.date_from and self.created_at < criteria.date_from:
            return False
        if criteria.date_to and self.created_at > criteria.date_to:
            return False
        return True

    def to_record(self) -> dict:
        """Persisted representation, using the remote API field names."""
        return {
            "id": self.id,
            "todo": self.text,
            "completed": self.completed,
            "userId": self.user_id,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(
        cls,
        data: dict,
        origin: Origin,
        created_at: str | None = None,
    ) -> "Task":
        """Create Task from a remote or persisted record."""
        if not isinstance(data, dict):
            raise InvalidSourceData(f"Expected a todo object, got {type(data).__name__}")

        task_id = data.get("id")
        text = data.get("todo")
        # bool is an int subclass; reject it as an id
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise InvalidSourceData(f"Todo has no integer id: {data!r}")
        if not isinstance(text, str) or not text:
            raise InvalidSourceData(f"Todo {task_id} has no text")

        created = created_at or data.get("createdAt")
        if not created:
            raise InvalidSourceData(f"Todo {task_id} has no creation date")

        user_id = data.get("userId")
        return cls(
            id=task_id,
            text=text,
            completed=bool(data.get("completed", False)),
            created_at=normalize_date(created),
            origin=origin,
            user_id=user_id if isinstance(user_id, int) else None,
        )


def normalize_date(value: date | str) -> str:
    """
    Coerce a date or ISO string to zero-padded YYYY-MM-DD.

    Date filtering compares strings, which is only order-correct when every
    value has this exact shape.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            # Accept full timestamps ("2024-01-05T10:00:00Z") by taking the date part
            return date.fromisoformat(value.strip().split("T")[0]).isoformat()
        except ValueError:
            pass
    raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


@dataclass(frozen=True)
class FilterCriteria:
    """Active search text and optional inclusive date range."""

    search_text: str = ""
    date_from: str | None = None
    date_to: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "search_text", (self.search_text or "").strip().lower())
        if self.date_from:
            object.__setattr__(self, "date_from", normalize_date(self.date_from))
        else:
            object.__setattr__(self, "date_from", None)
        if self.date_to:
            object.__setattr__(self, "date_to", normalize_date(self.date_to))
        else:
            object.__setattr__(self, "date_to", None)

    @property
    def is_active(self) -> bool:
        return bool(self.search_text or self.date_from or self.date_to)


def synthetic_created_date(index: int, epoch: date = DATE_EPOCH) -> str:
    """Records 0-9 share the epoch date, 10-19 the next day, and so on."""
    return (epoch + timedelta(days=index // DATE_BUCKET_SIZE)).isoformat()


def filter_tasks(tasks: list[Task], criteria: FilterCriteria) -> list[Task]:
    """
    Filter tasks by criteria, keeping their relative order.

    Pure function - no I/O.
    """
    if not criteria.is_active:
        return list(tasks)
    return [t for t in tasks if t.matches(criteria)]


def find_task(tasks: list[Task], task_id: int) -> Task | None:
    """First task with a matching id, regardless of origin."""
    return next((t for t in tasks if t.id == task_id), None)
