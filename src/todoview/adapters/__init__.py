"""Adapters - I/O implementations of ports."""

from .dummyjson_api import DummyJsonAdapter
from .file_store import FileTodoStore

__all__ = [
    "DummyJsonAdapter",
    "FileTodoStore",
]
