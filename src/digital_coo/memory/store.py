"""HTTP client for the Supermemory document store."""

from typing import Any

import httpx

from .models import MemoryDocument

SUPERMEMORY_BASE_URL = "https://api.supermemory.ai/v1"


class ArchiveError(Exception):
    """The memory store rejected or failed a request."""


class DocumentNotFoundError(ArchiveError):
    """No document exists with the requested id."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


class SupermemoryStore:
    """Append-only access to a Supermemory workspace.

    Chat archives go to the account-level ``/documents`` endpoint, explicit
    saves and all reads go through the configured workspace.
    """

    def __init__(
        self,
        api_key: str | None,
        workspace_id: str = "default",
        base_url: str = SUPERMEMORY_BASE_URL,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            api_key: Supermemory API key. The store is disabled without one.
            workspace_id: Workspace used for saves, search and recall.
            base_url: API root, overridable for tests.
            client: Optional shared HTTP client.
        """
        self.api_key = api_key
        self.workspace_id = workspace_id
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=30.0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def _workspace_url(self) -> str:
        return f"{self.base_url}/workspaces/{self.workspace_id}"

    def _headers(self, json_body: bool = False) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        document_id: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Raises:
            DocumentNotFoundError: On a 404 when ``document_id`` is given.
            ArchiveError: On transport errors, error statuses, and bodies that
                are not a JSON object.
        """
        if not self.is_configured:
            raise ArchiveError("SUPERMEMORY_API_KEY not set")
        try:
            response = await self._client.request(method, url, **kwargs)
            if document_id is not None and response.status_code == 404:
                raise DocumentNotFoundError(document_id)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ArchiveError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise ArchiveError(f"{method} {url} returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ArchiveError(f"{method} {url} returned {type(data).__name__}, expected an object")
        return data

    @staticmethod
    def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
        records = data.get(key) or []
        if not isinstance(records, list):
            raise ArchiveError(f"Store response field '{key}' is not a list")
        return [record for record in records if isinstance(record, dict)]

    async def create_document(self, document: MemoryDocument, workspace: bool = False) -> str:
        """Create a document and return the id assigned by the store."""
        url = f"{self._workspace_url}/documents" if workspace else f"{self.base_url}/documents"
        data = await self._request(
            "POST",
            url,
            json=document.to_payload(),
            headers=self._headers(json_body=True),
        )
        if data.get("id") is None:
            raise ArchiveError("Store response did not include a document id")
        return str(data["id"])

    async def search(self, query: str, limit: int = 10) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            f"{self._workspace_url}/search",
            params={"q": query, "limit": limit},
            headers=self._headers(),
        )
        return self._records(data, "results")

    async def get_document(self, document_id: str) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"{self._workspace_url}/documents/{document_id}",
            document_id=document_id,
            headers=self._headers(),
        )

    async def list_documents(self, limit: int = 100) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            f"{self._workspace_url}/documents",
            params={"limit": limit},
            headers=self._headers(),
        )
        return self._records(data, "documents")

    async def stats(self) -> dict[str, Any]:
        return await self._request(
            "GET",
            f"{self._workspace_url}/stats",
            headers=self._headers(),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
