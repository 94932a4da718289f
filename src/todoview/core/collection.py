"""In-memory todo collection - merge, filter and paginate. No I/O."""

import logging
from typing import Sequence

from todoview.errors import InvalidSourceData, TodoError

from .paging import (
    DEFAULT_PAGE_SIZE,
    PageInfo,
    clamp_page,
    count_summary,
    page_info,
    page_slice,
    page_window,
    total_pages,
)
from .tasks import FilterCriteria, Origin, Task, filter_tasks, find_task, synthetic_created_date

logger = logging.getLogger(__name__)


class TodoCollection:
    """
    Authoritative list of tasks plus the derived filtered view.

    Local tasks always come first in `all`, followed by remote tasks in
    fetch order. `filtered` is recomputed from `all` on every change and is
    never edited directly.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.page_size = page_size
        self.criteria = FilterCriteria()
        self.page = 1
        self._all: list[Task] = []
        self._filtered: list[Task] = []

    @property
    def all(self) -> tuple[Task, ...]:
        return tuple(self._all)

    @property
    def filtered(self) -> tuple[Task, ...]:
        return tuple(self._filtered)

    def merge(self, remote_records: object, persisted_records: Sequence[dict]) -> "TodoCollection":
        """
        Replace the collection with persisted tasks followed by remote tasks.

        Filters are cleared so that `filtered` is the whole list again.

        Remote records get a synthetic creation date from their position.
        Raises InvalidSourceData if the remote payload is malformed, in which
        case the collection is left as it was.
        """
        if not isinstance(remote_records, list):
            raise InvalidSourceData(
                f"Expected a list of todos, got {type(remote_records).__name__}"
            )

        remote = [
            Task.from_record(record, Origin.REMOTE, synthetic_created_date(index))
            for index, record in enumerate(remote_records)
        ]

        local = []
        for record in persisted_records:
            try:
                local.append(Task.from_record(record, Origin.LOCAL))
            except TodoError as e:
                logger.warning(f"Skipping unreadable stored todo: {e}")

        self._all = local + remote
        self.clear_filter()
        logger.debug(f"Merged {len(local)} local and {len(remote)} remote todos")
        return self

    def apply_filter(self, criteria: FilterCriteria | None = None) -> None:
        """Recompute `filtered` for the given (or current) criteria and go back to page 1."""
        if criteria is not None:
            self.criteria = criteria
        self._filtered = filter_tasks(self._all, self.criteria)
        self.page = 1

    def clear_filter(self) -> None:
        self.criteria = FilterCriteria()
        self._filtered = list(self._all)
        self.page = 1

    def prepend_local(self, task: Task) -> None:
        """Put a newly created local task ahead of everything else."""
        if not task.is_local:
            raise ValueError(f"Only local tasks can be prepended, got {task.origin}")
        self._all.insert(0, task)
        self.apply_filter()

    def find(self, task_id: int) -> Task | None:
        return find_task(self._all, task_id)

    def set_completed(self, task_id: int, completed: bool) -> Task | None:
        """
        Set the completion flag on the first task with this id.

        Ids are not unique across origins, so a local id that collides with a
        remote one hits whichever comes first. Unknown ids are a silent no-op.
        """
        task = self.find(task_id)
        if task is None:
            return None
        task.completed = completed
        self.apply_filter()
        return task

    # ============== Pagination ==============

    def page_slice(self, n: int) -> list[Task]:
        """Tasks on page n of the filtered view. Does not change `page`."""
        return page_slice(self._filtered, n, self.page_size)

    def current_page(self) -> list[Task]:
        return self.page_slice(self.page)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._filtered), self.page_size)

    def go_to(self, n: int) -> int:
        """Move to page n, clamped to the pages that exist."""
        self.page = clamp_page(n, len(self._filtered), self.page_size)
        return self.page

    def next_page(self) -> int:
        if self.page < self.total_pages:
            self.page += 1
        return self.page

    def previous_page(self) -> int:
        if self.page > 1:
            self.page -= 1
        return self.page

    def page_info(self) -> PageInfo:
        return page_info(self.page, len(self._filtered), self.page_size)

    def page_numbers(self) -> list[int]:
        return page_window(self.page, self.total_pages)

    def summary(self) -> str:
        return count_summary(len(self._filtered), len(self._all), self.criteria.is_active)
