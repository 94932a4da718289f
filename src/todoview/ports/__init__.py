"""Ports - interfaces/protocols for external dependencies."""

from .todo_repo import TodoRepository
from .todo_store import TodoStore

__all__ = [
    "TodoRepository",
    "TodoStore",
]
