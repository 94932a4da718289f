"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Origin, FilterCriteria, filter_tasks, normalize_date, synthetic_created_date
from .paging import PageInfo, page_slice, page_info, page_window, count_summary
from .collection import TodoCollection

__all__ = [
    # Tasks
    "Task",
    "Origin",
    "FilterCriteria",
    "filter_tasks",
    "normalize_date",
    "synthetic_created_date",
    # Paging
    "PageInfo",
    "page_slice",
    "page_info",
    "page_window",
    "count_summary",
    # Collection
    "TodoCollection",
]
