from urllib.parse import quote

import httpx

from app.storage.base import BaseObjectStore
from app.storage.exceptions import ObjectNotFoundError, StorageError


class SupabaseObjectStore(BaseObjectStore):
    """Downloads objects through the Supabase Storage REST API.

    Uses the service role key, so bucket policies do not apply.
    """

    def __init__(
        self,
        *,
        base_url: str,
        service_role_key: str,
        timeout_seconds: int = 30,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("supabase_url is required for storage_backend=supabase")
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout_seconds)
        self._headers = {
            "Authorization": f"Bearer {service_role_key}",
            "apikey": service_role_key,
        }

    def download(self, bucket: str, path: str) -> bytes:
        url = f"{self._base_url}/storage/v1/object/{quote(bucket)}/{quote(path.lstrip('/'))}"
        try:
            response = self._client.get(url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise StorageError(f"Storage request failed for {bucket}/{path}: {exc}") from exc

        # Supabase answers 400 with a "not_found" body for missing objects
        if response.status_code == 404 or (
            response.status_code == 400 and "not_found" in response.text
        ):
            raise ObjectNotFoundError(f"Object not found: {bucket}/{path}")
        if response.is_error:
            raise StorageError(
                f"Storage returned {response.status_code} for {bucket}/{path}: "
                f"{response.text}"
            )
        return response.content
