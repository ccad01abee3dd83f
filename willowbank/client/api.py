# willowbank/client/api.py
"""
Async HTTP client for the willowbank API.

Thin wrappers over httpx that unwrap the response envelope and raise
ApiClientError on error responses or transport failures.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_TIMEOUT = 10.0


class ApiClientError(Exception):
    """Error reported by the API, or a transport failure (status_code None)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class _Resource:
    """Base for resource namespaces bound to one client."""

    path = ""

    def __init__(self, client: "WillowbankClient") -> None:
        self._client = client

    def _url(self, *parts: Any) -> str:
        return "/".join([self.path, *(str(part) for part in parts)])

    async def get_all(self, **filters: Any) -> dict[str, Any]:
        """List records; None-valued filters are omitted from the query."""
        params = {key: _query_value(value) for key, value in filters.items() if value is not None}
        return await self._client.request("GET", self.path, params=params or None)

    async def get_by_id(self, record_id: int) -> dict[str, Any]:
        return await self._client.request("GET", self._url(record_id))

    async def create(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._client.request("POST", self.path, json=data)

    async def update(self, record_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return await self._client.request("PUT", self._url(record_id), json=data)

    async def delete(self, record_id: int) -> dict[str, Any]:
        return await self._client.request("DELETE", self._url(record_id))


class RequirementsApi(_Resource):
    path = "/requirements"

    async def reorder(self, category: str, ordered_ids: list[int]) -> dict[str, Any]:
        """Reorder requirements within one category."""
        return await self._client.request(
            "POST", self._url("reorder"), json={"category": category, "orderedIds": ordered_ids}
        )


class PhasesApi(_Resource):
    path = "/phases"

    async def reorder(self, ordered_ids: list[int]) -> dict[str, Any]:
        return await self._client.request(
            "POST", self._url("reorder"), json={"orderedIds": ordered_ids}
        )

    async def add_task(self, phase_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return await self._client.request("POST", self._url(phase_id, "tasks"), json=data)

    async def update_task(
        self, phase_id: int, task_id: int, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._client.request(
            "PUT", self._url(phase_id, "tasks", task_id), json=data
        )

    async def delete_task(self, phase_id: int, task_id: int) -> dict[str, Any]:
        return await self._client.request("DELETE", self._url(phase_id, "tasks", task_id))

    async def reorder_tasks(self, phase_id: int, ordered_ids: list[int]) -> dict[str, Any]:
        return await self._client.request(
            "POST", self._url(phase_id, "tasks", "reorder"), json={"orderedIds": ordered_ids}
        )


class PlantsApi(_Resource):
    path = "/plants"

    async def get_by_category(self, category: str) -> dict[str, Any]:
        return await self.get_all(category=category)

    async def recommended(self) -> dict[str, Any]:
        return await self._client.request("GET", self._url("recommended"))

    async def native(self) -> dict[str, Any]:
        return await self._client.request("GET", self._url("native"))

    async def seed(self, force: bool = False) -> dict[str, Any]:
        url = self._url("seed", "force") if force else self._url("seed")
        return await self._client.request("POST", url)


class ComplianceApi(_Resource):
    path = "/compliance"

    async def get_by_type(self, requirement_type: str) -> dict[str, Any]:
        return await self.get_all(type=requirement_type)


def _query_value(value: Any) -> Any:
    # Booleans go over the wire as true/false
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class WillowbankClient:
    """
    Async client for the willowbank REST API.

    Usage:
        async with WillowbankClient("http://localhost:3001") as client:
            envelope = await client.requirements.get_all()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Server root (the /api prefix is added here)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (e.g. ASGITransport for tests)
        """
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=f"{self.base_url}/api",
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._transport = transport

        self.requirements = RequirementsApi(self)
        self.phases = PhasesApi(self)
        self.plants = PlantsApi(self)
        self.compliance = ComplianceApi(self)

    async def __aenter__(self) -> "WillowbankClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        """
        Send a request and return the decoded envelope.

        Raises:
            ApiClientError: On a non-2xx response or a transport failure
        """
        logger.debug(f"API Request: {method} {url}")
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"API transport error on {method} {url}: {e}")
            raise ApiClientError("Network error - please check your connection") from e

        return _unwrap(response)

    async def health_check(self) -> dict[str, Any]:
        """Call GET /health on the server root (outside /api)."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=5.0, transport=self._transport
            ) as http:
                response = await http.get("/health")
        except httpx.TransportError as e:
            raise ApiClientError("Network error - please check your connection") from e

        return _unwrap(response)


def _unwrap(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        body = None

    if response.is_success:
        return body if isinstance(body, dict) else {"success": True, "data": body}

    message = "Server error occurred"
    if isinstance(body, dict) and body.get("error"):
        message = body["error"]
    logger.warning(f"API error {response.status_code}: {message}")
    raise ApiClientError(message, status_code=response.status_code)
