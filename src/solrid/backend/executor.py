"""Executors — Send prepared requests to a Solr request handler.

The default executor talks to Solr over HTTP using ``httpx`` (async)::

    executor = HttpExecutor(base_url="http://localhost:8983/solr", collection="biblio")
    await executor.initialize()
    data = await executor.execute("select", ParamBag({"q": 'id:"123"'}))
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field

from solrid.backend.exceptions import ConnectionError, QueryError
from solrid.backend.params import ParamBag

logger = logging.getLogger(__name__)


class Executor(Protocol):
    """Executes a request against a handler and returns the backend response."""

    async def execute(self, handler: str, params: ParamBag) -> Any: ...


class BackendHealth(BaseModel):
    """Health status of the Solr backend."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class HttpExecutor:
    """Executor for Apache Solr over HTTP.

    Args:
        base_url: Solr base URL, e.g. ``"http://localhost:8983/solr"``.
        collection: Solr collection/core name.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8983/solr",
        collection: str = "biblio",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._collection = collection
        self._username = username
        self._password = password
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the ``httpx.AsyncClient``."""
        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )
        logger.info("Solr executor ready for collection '%s' at %s", self._collection, self._base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(self, handler: str, params: ParamBag) -> dict[str, Any]:
        """Send *params* to ``/<collection>/<handler>`` and return the JSON body."""
        if not self._client:
            raise ConnectionError("Solr client not initialized.")

        try:
            start = time.monotonic()
            resp = await self._client.get(
                f"/{self._collection}/{handler.lstrip('/')}",
                params=params.to_query_params(),
            )
            resp.raise_for_status()
            logger.debug(
                "Solr %s request took %d ms",
                handler,
                int((time.monotonic() - start) * 1000),
            )
            return resp.json()
        except httpx.HTTPError as e:
            raise QueryError(f"Solr request to '{handler}' failed: {e}") from e
        except ValueError as e:
            raise QueryError(f"Solr returned a non-JSON response for '{handler}': {e}") from e

    async def health_check(self) -> BackendHealth:
        """Ping the Solr admin endpoint."""
        if not self._client:
            return BackendHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get(f"/{self._collection}/admin/ping")
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                solr_status = resp.json().get("status", "unknown")
                return BackendHealth(
                    status="healthy" if solr_status == "OK" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Collection: {self._collection}, status: {solr_status}",
                )
            return BackendHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Solr returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return BackendHealth(status="unhealthy", message=str(e))
