"""Shared REST/JSON plumbing for HTTP catalog connectors."""

import logging
import os
from abc import abstractmethod
from typing import Any
from urllib.parse import urlparse

import httpx

from career_reco.core.config import SourceConfig
from career_reco.core.errors import SourceInvalidResponse, SourceRateLimited, SourceUnavailable
from career_reco.core.schemas import Query, RawItem
from career_reco.sources.base import SourceConnector

logger = logging.getLogger(__name__)


class HttpRequest:
    """Method, path, and httpx keyword arguments for one search call."""

    def __init__(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        self.method = method
        self.path = path
        self.json = json
        self.params = params


class HttpCatalogConnector(SourceConnector):
    """Connector for a catalog reachable over REST/JSON.

    Subclasses describe the request and where the items sit in the response;
    transport errors and status codes are mapped to the SourceError taxonomy
    here. An httpx.AsyncClient can be injected (tests, connection reuse);
    otherwise one is opened per call.
    """

    default_endpoint: str = ""
    requires_api_key: bool = True

    def __init__(self, config: SourceConfig, client: httpx.AsyncClient | None = None) -> None:
        super().__init__(config)
        self._client = client

    @property
    def endpoint(self) -> str:
        return (self._config.endpoint or self.default_endpoint).rstrip("/")

    @abstractmethod
    def build_request(self, query: Query, limit: int) -> HttpRequest:
        """Describe the search call for this catalog."""

    @abstractmethod
    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        """Pull the list of item objects out of the decoded response body.

        Raises:
            ValueError: If the body does not have the expected shape.
        """

    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        env_var = self._config.api_key_env
        if env_var:
            api_key = os.environ.get(env_var)
            if api_key:
                headers["X-RapidAPI-Key"] = api_key
                headers["X-RapidAPI-Host"] = urlparse(self.endpoint).netloc
        return headers

    def _check_credentials(self) -> None:
        env_var = self._config.api_key_env
        if self.requires_api_key and env_var and not os.environ.get(env_var):
            msg = f"{env_var} environment variable is required"
            raise SourceUnavailable(self.source_id, msg)

    async def search(self, query: Query, limit: int) -> list[RawItem]:
        self._check_credentials()
        request = self.build_request(query, limit)
        url = f"{self.endpoint}{request.path}"

        logger.info("Searching %s for '%s'", self.source_id, query.search_text)
        if self._client is not None:
            response = await self._send(self._client, request, url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                response = await self._send(client, request, url)

        try:
            data = response.json()
        except ValueError as e:
            msg = f"response is not JSON: {e}"
            raise SourceInvalidResponse(self.source_id, msg) from e

        try:
            items = self.extract_items(data)
        except (ValueError, TypeError, KeyError) as e:
            msg = f"unexpected response shape: {e}"
            raise SourceInvalidResponse(self.source_id, msg) from e

        raw_items = [self._raw(item) for item in items[:limit] if isinstance(item, dict)]
        logger.debug("%s returned %d items", self.source_id, len(raw_items))
        return raw_items

    async def _send(
        self,
        client: httpx.AsyncClient,
        request: HttpRequest,
        url: str,
    ) -> httpx.Response:
        try:
            response = await client.request(
                request.method,
                url,
                json=request.json,
                params=request.params,
                headers=self.headers(),
                timeout=self.timeout_s,
            )
        except httpx.TimeoutException as e:
            msg = f"timed out after {self.timeout_s}s"
            raise SourceUnavailable(self.source_id, msg) from e
        except httpx.HTTPError as e:
            msg = f"request failed: {e}"
            raise SourceUnavailable(self.source_id, msg) from e

        if response.status_code == 429:
            msg = "rate limited (HTTP 429)"
            raise SourceRateLimited(self.source_id, msg)
        if response.is_error:
            msg = f"HTTP {response.status_code}"
            raise SourceUnavailable(self.source_id, msg)
        return response


def items_at(data: Any, key: str) -> list[dict[str, Any]]:
    """Return data[key] when it is a list; a missing key means no results."""
    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)
    items = data.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        msg = f"'{key}' is not a list"
        raise ValueError(msg)
    return items
