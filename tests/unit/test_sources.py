"""Tests for catalog connectors, the HTTP error mapping, and the registry."""

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from career_reco.core.config import SourceConfig
from career_reco.core.errors import (
    SourceInvalidResponse,
    SourceRateLimited,
    SourceUnavailable,
)
from career_reco.core.schemas import Query, WeightedTerm
from career_reco.sources import available_types, build_connector, build_connectors
from career_reco.sources.courses import EdxConnector, UdemyConnector
from career_reco.sources.http import items_at
from career_reco.sources.jobs import IndeedConnector, LinkedInJobsConnector
from career_reco.sources.static_catalog import (
    StaticCatalogConnector,
    catalog_items,
    fallback_connector,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text())


def _query(*terms: str, region: str = "") -> Query:
    keywords = tuple(WeightedTerm(term=t, weight=30) for t in terms)
    return Query(keywords=keywords, raw_text=" ".join(terms), region=region)


def _config(type_: str, kind: str = "course", **overrides: object) -> SourceConfig:
    defaults: dict[str, object] = {
        "name": type_,
        "type": type_,
        "kind": kind,
        "api_key_env": "RAPIDAPI_KEY",
    }
    defaults.update(overrides)
    return SourceConfig(**defaults)  # type: ignore[arg-type]


def _client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _json_handler(body: object, status: int = 200, seen: list | None = None):  # type: ignore[no-untyped-def]
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body)

    return handler


# ---------------------------------------------------------------------------
# HTTP connectors
# ---------------------------------------------------------------------------
class TestUdemyConnector:
    async def test_search_returns_raw_items(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler(_load_fixture("udemy_response.json"), seen=seen))
        connector = UdemyConnector(_config("udemy"), client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "test-key"}):
            items = await connector.search(_query("machine learning"), 10)

        assert len(items) == 3
        assert items[0].source_id == "udemy"
        assert items[0].schema_name == "udemy"
        assert items[0].payload["title"] == "Machine Learning A-Z"

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/udemy/search-courses"
        assert request.headers["X-RapidAPI-Key"] == "test-key"
        assert request.headers["X-RapidAPI-Host"] == "udemy-api2.p.rapidapi.com"
        assert json.loads(request.content)["query"] == "machine learning"

    async def test_results_truncated_to_limit(self) -> None:
        client = _client(_json_handler(_load_fixture("udemy_response.json")))
        connector = UdemyConnector(_config("udemy"), client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "test-key"}):
            items = await connector.search(_query("sql"), 1)

        assert len(items) == 1

    async def test_missing_api_key_is_unavailable(self) -> None:
        client = _client(_json_handler({"courses": []}))
        connector = UdemyConnector(_config("udemy"), client=client)

        with (
            patch.dict("os.environ", {}, clear=True),
            pytest.raises(SourceUnavailable, match="RAPIDAPI_KEY"),
        ):
            await connector.search(_query("python"), 10)

    async def test_empty_query_uses_default_search_text(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler({"courses": []}, seen=seen))
        connector = UdemyConnector(_config("udemy"), client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "k"}):
            items = await connector.search(Query(), 10)

        assert items == []
        assert json.loads(seen[0].content)["query"] == "professional development"

    async def test_configured_endpoint_overrides_default(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler({"courses": []}, seen=seen))
        config = _config("udemy", endpoint="http://localhost:9000/")
        connector = UdemyConnector(config, client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "k"}):
            await connector.search(_query("python"), 10)

        assert str(seen[0].url) == "http://localhost:9000/v1/udemy/search-courses"


class TestEdxConnector:
    async def test_no_api_key_required(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler(_load_fixture("edx_response.json"), seen=seen))
        connector = EdxConnector(_config("edx", api_key_env=None), client=client)

        with patch.dict("os.environ", {}, clear=True):
            items = await connector.search(_query("artificial intelligence"), 5)

        assert len(items) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.params["search"] == "artificial intelligence"
        assert request.url.params["page_size"] == "5"
        assert "X-RapidAPI-Key" not in request.headers


class TestJobConnectors:
    async def test_indeed_location_from_region(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler(_load_fixture("indeed_response.json"), seen=seen))
        connector = IndeedConnector(_config("indeed", kind="job"), client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "k"}):
            items = await connector.search(_query("ai consultant", region="Abu Dhabi"), 10)

        assert len(items) == 2
        assert json.loads(seen[0].content)["location"] == "Abu Dhabi"

    async def test_configured_location_wins(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler({"data": []}, seen=seen))
        config = _config("linkedin", kind="job", params={"location": "Doha"})
        connector = LinkedInJobsConnector(config, client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "k"}):
            await connector.search(_query("analyst", region="Dubai"), 10)

        body = json.loads(seen[0].content)
        assert body["location"] == "Doha"
        assert body["remoteFilter"] == "all"

    async def test_source_default_location(self) -> None:
        seen: list[httpx.Request] = []
        client = _client(_json_handler({"jobs": []}, seen=seen))
        connector = IndeedConnector(_config("indeed", kind="job"), client=client)

        with patch.dict("os.environ", {"RAPIDAPI_KEY": "k"}):
            await connector.search(_query("analyst"), 10)

        assert json.loads(seen[0].content)["location"] == "Dubai, AE"


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
class TestHttpErrorMapping:
    async def _search(self, handler) -> None:  # type: ignore[no-untyped-def]
        connector = EdxConnector(_config("edx", api_key_env=None), client=_client(handler))
        await connector.search(_query("python"), 10)

    async def test_429_is_rate_limited(self) -> None:
        with pytest.raises(SourceRateLimited, match=r"\[edx\] rate limited"):
            await self._search(_json_handler({}, status=429))

    async def test_5xx_is_unavailable(self) -> None:
        with pytest.raises(SourceUnavailable, match="HTTP 503"):
            await self._search(_json_handler({}, status=503))

    async def test_timeout_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SourceUnavailable, match="timed out"):
            await self._search(handler)

    async def test_connect_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SourceUnavailable, match="request failed"):
            await self._search(handler)

    async def test_non_json_is_invalid_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(SourceInvalidResponse, match="not JSON"):
            await self._search(handler)

    async def test_wrong_shape_is_invalid_response(self) -> None:
        with pytest.raises(SourceInvalidResponse, match="unexpected response shape"):
            await self._search(_json_handler({"results": "nope"}))

    async def test_source_error_carries_source_id(self) -> None:
        with pytest.raises(SourceUnavailable) as exc_info:
            await self._search(_json_handler({}, status=500))
        assert exc_info.value.source_id == "edx"


class TestItemsAt:
    def test_missing_key_is_no_results(self) -> None:
        assert items_at({}, "jobs") == []

    def test_non_object_raises(self) -> None:
        with pytest.raises(ValueError, match="expected a JSON object"):
            items_at([1, 2], "jobs")

    def test_non_list_raises(self) -> None:
        with pytest.raises(ValueError, match="'jobs' is not a list"):
            items_at({"jobs": {}}, "jobs")


# ---------------------------------------------------------------------------
# Static catalog
# ---------------------------------------------------------------------------
class TestStaticCatalog:
    def test_catalog_is_deterministic(self) -> None:
        assert catalog_items("course") == catalog_items("course")
        assert len(catalog_items("course")) == 24
        assert len(catalog_items("job")) == 18

    def test_ids_unique(self) -> None:
        for kind in ("course", "job"):
            ids = [item["id"] for item in catalog_items(kind)]  # type: ignore[arg-type]
            assert len(ids) == len(set(ids))

    async def test_filters_by_query_terms(self) -> None:
        connector = fallback_connector("job")
        items = await connector.search(_query("ai consultant"), 20)
        titles = [i.payload["title"] for i in items]
        assert titles == ["AI Consultant"]

    async def test_no_match_returns_full_catalog(self) -> None:
        connector = fallback_connector("course")
        items = await connector.search(_query("underwater basket weaving"), 100)
        assert len(items) == 24

    async def test_empty_query_returns_catalog_up_to_limit(self) -> None:
        connector = fallback_connector("course")
        items = await connector.search(Query(), 5)
        assert len(items) == 5
        assert items[0].schema_name == "static"
        assert items[0].source_id == "static-courses"

    async def test_payload_is_a_copy(self) -> None:
        connector = fallback_connector("course")
        items = await connector.search(Query(), 1)
        items[0].payload["title"] = "changed"
        assert catalog_items("course")[0]["title"] != "changed"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class TestSourceRegistry:
    def test_available_types(self) -> None:
        assert available_types() == [
            "classcentral", "coursera", "edx", "indeed", "jobsapi", "linkedin", "static", "udemy",
        ]

    def test_build_connector(self) -> None:
        connector = build_connector(_config("coursera"))
        assert connector.source_id == "coursera"
        assert connector.schema_name == "coursera"
        assert connector.kind == "course"

    def test_build_static(self) -> None:
        connector = build_connector(_config("static", kind="job", name="builtin"))
        assert isinstance(connector, StaticCatalogConnector)
        assert connector.source_id == "builtin"

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown source type 'monster'"):
            build_connector(_config("monster"))

    def test_build_connectors_keeps_order(self) -> None:
        connectors = build_connectors([_config("edx"), _config("udemy")])
        assert [c.source_id for c in connectors] == ["edx", "udemy"]
