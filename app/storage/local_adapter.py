from pathlib import Path

from app.storage.base import BaseObjectStore
from app.storage.exceptions import ObjectNotFoundError, StorageError


class LocalObjectStore(BaseObjectStore):
    """Reads objects from a directory tree laid out as {root}/{bucket}/{path}."""

    DEFAULT_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.DEFAULT_ROOT

    def download(self, bucket: str, path: str) -> bytes:
        target = self._resolve_path(bucket, path)
        if not target.is_file():
            raise ObjectNotFoundError(f"Object not found: {bucket}/{path}")
        try:
            return target.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {bucket}/{path}: {exc}") from exc

    def _resolve_path(self, bucket: str, path: str) -> Path:
        bucket_dir = (self._root / bucket).resolve()
        target = (bucket_dir / path.lstrip("/")).resolve()
        if not target.is_relative_to(bucket_dir):
            raise StorageError(f"Path '{path}' escapes bucket '{bucket}'")
        return target
