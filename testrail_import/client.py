"""Client for the TestRail API."""

import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from yarl import URL

from testrail_import.config import TestRailConfig
from testrail_import.models.result import ResultPayload

log = logging.getLogger(__name__)


class TestRailAPIError(Exception):
    """Raised when TestRail rejects a request or cannot be reached."""

    __test__ = False

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def api_url(base_url: str, uri: str) -> URL:
    """Return the full URL of an API endpoint.

    TestRail routes API calls through the query string of its entry point,
    e.g. ``https://host/index.php?/api/v2/get_case/1``.
    """
    return URL(f"{base_url.rstrip('/')}?/api/v2/{uri}", encoded=True)


@dataclass(frozen=True, kw_only=True)
class TestRailClient:
    """Authenticated TestRail API client."""

    __test__ = False

    config: TestRailConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: TestRailConfig
    ) -> AsyncGenerator["TestRailClient", None]:
        """Create client with managed session lifecycle."""
        async with aiohttp.ClientSession(
            auth=aiohttp.BasicAuth(
                config.username, config.password.get_secret_value()
            ),
            headers={"Content-Type": "application/json"},
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            yield cls(config=config, session=session)

    async def send_post(self, uri: str, data: Mapping[str, Any]) -> Any:
        """POST JSON to an API endpoint and return the decoded response.

        Raises:
            TestRailAPIError: On a non-success status or a transport failure

        """
        url = api_url(self.config.url, uri)
        log.debug("POST %s %s", url, data)

        try:
            async with self.session.post(url, json=data) as response:
                if response.status != 200:
                    raise TestRailAPIError(
                        f"TestRail API returned HTTP {response.status} "
                        f"({await self._error_detail(response)})",
                        status=response.status,
                    )
                return await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            raise TestRailAPIError(f"TestRail API request failed: {e!r}") from e

    async def add_result_for_case(
        self, run_id: str, case_id: str, payload: ResultPayload
    ) -> Any:
        """Add a result for the test of ``case_id`` in run ``run_id``."""
        return await self.send_post(
            f"add_result_for_case/{run_id}/{case_id}", payload.to_body()
        )

    @staticmethod
    async def _error_detail(response: aiohttp.ClientResponse) -> str:
        """Extract the error message TestRail puts in failed responses."""
        text = await response.text()
        try:
            body = await response.json(content_type=None)
        except ValueError:
            return text or "No additional error message received"

        if isinstance(body, dict) and "error" in body:
            return str(body["error"])
        return text
