class StorageError(Exception):
    """Raised when the object store cannot return a file."""


class ObjectNotFoundError(StorageError):
    """Raised when no object exists at the requested bucket/path."""
