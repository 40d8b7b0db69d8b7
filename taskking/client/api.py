"""HTTP client for the task API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """Raised when a task API call fails (transport error or non-2xx status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        if body.get("error"):
            return f"{body['message']}: {body['error']}"
        return str(body["message"])
    return resp.reason_phrase


class TaskApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            resp = await self._client.request(method, path, json=json)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            logger.warning("%s %s -> %s %s", method, path, exc.response.status_code, message)
            raise TaskApiError(message, status_code=exc.response.status_code, cause=exc) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TaskApiError(f"Could not reach {self.base_url}: {exc}", cause=exc) from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise TaskApiError(f"Invalid JSON from {method} {path}", status_code=resp.status_code, cause=exc) from exc

    async def list_tasks(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/tasks")
        if not isinstance(data, list):
            raise TaskApiError("Expected a list of tasks")
        return data

    async def create_task(self, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/tasks", json=fields)

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/tasks/{task_id}", json=fields)

    async def delete_task(self, task_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{task_id}")
