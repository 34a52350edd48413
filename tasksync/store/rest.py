"""HTTP task store speaking the PostgREST query dialect.

Rows are addressed through query-string filters (``id=eq.<uuid>``) and the
server enforces row-level ownership from the bearer token. The client adds
the ``user_id`` filter as well so a misconfigured policy cannot leak rows
into the local list.
"""

import logging
from typing import Any
from uuid import UUID

import httpx
from pydantic import ValidationError

from tasksync.errors import LoadFailure, StoreError, WriteFailure
from tasksync.models.task import TaskCreate, TaskRecord, TaskUpdate
from tasksync.store.base import TaskStore

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"


def _error_message(response: httpx.Response) -> str:
    """Pull the server's error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error_description", "error", "hint"):
            if body.get(key):
                return str(body[key])

    return response.text or f"HTTP {response.status_code}"


class RestTaskStore(TaskStore):
    """Task store backed by a PostgREST-compatible HTTP endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        table: str = "todos",
        access_token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Project URL, without the ``/rest/v1`` suffix
            api_key: Project API key sent with every request
            table: Name of the task collection
            access_token: The signed-in user's token; falls back to api_key
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["apikey"] = self.api_key
            bearer = self.access_token or self.api_key
            if bearer:
                headers["Authorization"] = f"Bearer {bearer}"

            self._client = httpx.AsyncClient(
                base_url=f"{self.base_url}{REST_PATH}",
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def list_tasks(
        self,
        user_id: UUID,
        completed: bool | None = None,
    ) -> list[TaskRecord]:
        params = {
            "select": "*",
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
        }
        if completed is not None:
            params["completed"] = f"eq.{str(completed).lower()}"

        rows = await self._request("GET", "load tasks", params=params)
        if not isinstance(rows, list):
            raise LoadFailure("Unexpected response while loading tasks")
        return [self._to_record(row) for row in rows]

    async def insert_task(self, user_id: UUID, data: TaskCreate) -> TaskRecord:
        payload = {"user_id": str(user_id), **data.model_dump(mode="json")}
        rows = await self._request(
            "POST",
            "create task",
            params={"select": "*"},
            json=[payload],
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise WriteFailure("The store did not return the created task")
        return self._to_record(rows[0])

    async def update_task(self, user_id: UUID, task_id: UUID, changes: TaskUpdate) -> None:
        await self._request(
            "PATCH",
            "update task",
            params=self._row_filter(user_id, task_id),
            json=changes.model_dump(mode="json", exclude_unset=True),
            headers={"Prefer": "return=minimal"},
        )

    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        await self._request(
            "DELETE",
            "delete task",
            params=self._row_filter(user_id, task_id),
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _row_filter(self, user_id: UUID, task_id: UUID) -> dict[str, str]:
        return {"id": f"eq.{task_id}", "user_id": f"eq.{user_id}"}

    def _to_record(self, row: Any) -> TaskRecord:
        try:
            return TaskRecord.model_validate(row)
        except ValidationError as e:
            logger.error("Malformed task row from store: %s", e)
            raise StoreError("The store returned a malformed task") from e

    async def _request(
        self,
        method: str,
        action: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send one request and decode its JSON body.

        Raises:
            LoadFailure: If a GET fails in transport, status or decoding
            WriteFailure: If any other method fails the same way
        """
        error_cls = LoadFailure if method == "GET" else WriteFailure
        try:
            response = await self.client.request(
                method,
                f"/{self.table}",
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed (%s): %s", action, method, e)
            raise error_cls(str(e) or e.__class__.__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Store rejected %s with status %s: %s",
                action,
                response.status_code,
                message,
            )
            raise error_cls(message, status_code=response.status_code)

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise error_cls(f"Invalid JSON while trying to {action}") from e
