"""todoview - terminal task list backed by a remote todo API."""

__version__ = "0.1.0"
