"""Error taxonomy shared by adapters and the manager."""


class TodoError(Exception):
    """Base class for all todoview failures."""

    pass


class InvalidSourceData(TodoError):
    """Raised when a remote payload is not a well-formed sequence of records."""

    pass


class NetworkError(TodoError):
    """Raised when the remote endpoint cannot be reached."""

    pass


class RemoteError(TodoError):
    """Raised when the remote endpoint rejects a write."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body}" if body else f"HTTP {status}")


class ValidationError(TodoError):
    """Raised when user input is rejected before any mutation."""

    pass


class StorageError(TodoError):
    """Raised when the persisted store cannot be read or written."""

    pass
