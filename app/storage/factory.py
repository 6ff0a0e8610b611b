from pathlib import Path

from app.config.settings import Settings
from app.storage.base import BaseObjectStore
from app.storage.local_adapter import LocalObjectStore
from app.storage.supabase_adapter import SupabaseObjectStore


class ObjectStoreFactory:
    """Creates the configured object store adapter."""

    BACKENDS = ("local", "supabase")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalObjectStore(root=Path(settings.storage_root))
        if backend == "supabase":
            return SupabaseObjectStore(
                base_url=settings.supabase_url,
                service_role_key=settings.supabase_service_role_key,
                timeout_seconds=settings.storage_timeout_seconds,
            )
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
