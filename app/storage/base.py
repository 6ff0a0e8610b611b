from abc import ABC, abstractmethod


class BaseObjectStore(ABC):
    """Contract for all object store adapters."""

    @abstractmethod
    def download(self, bucket: str, path: str) -> bytes:
        """Return the raw bytes stored under ``path`` in ``bucket``.

        Raises:
            ObjectNotFoundError: if nothing is stored at that path.
            StorageError: on any other failure.
        """
