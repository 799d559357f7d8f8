"""Job board connectors (Indeed, LinkedIn, generic Jobs API)."""

from typing import Any

from career_reco.core.schemas import Query
from career_reco.sources.http import HttpCatalogConnector, HttpRequest, items_at


def _location(query: Query, params: dict[str, Any], default: str) -> str:
    """Configured location wins, then the profile region, then the source default."""
    return str(params.get("location") or query.region or default)


class IndeedConnector(HttpCatalogConnector):
    """Indeed job search via RapidAPI."""

    default_endpoint = "https://indeed12.p.rapidapi.com"

    @property
    def schema_name(self) -> str:
        return "indeed"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        params = self._config.params
        return HttpRequest(
            "POST",
            "/jobs/search",
            json={
                "query": query.search_text,
                "location": _location(query, params, "Dubai, AE"),
                "page_id": "1",
            },
        )

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "jobs")


class LinkedInJobsConnector(HttpCatalogConnector):
    """LinkedIn job search via RapidAPI."""

    default_endpoint = "https://linkedin-jobs-search.p.rapidapi.com"

    @property
    def schema_name(self) -> str:
        return "linkedin"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        params = self._config.params
        return HttpRequest(
            "POST",
            "/jobs",
            json={
                "query": query.search_text,
                "location": _location(query, params, "United Arab Emirates"),
                "remoteFilter": params.get("remote_filter", "all"),
                "limit": limit,
            },
        )

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "data")


class JobsApiConnector(HttpCatalogConnector):
    """General-purpose Jobs API via RapidAPI."""

    default_endpoint = "https://jobs-api14.p.rapidapi.com"

    @property
    def schema_name(self) -> str:
        return "jobsapi"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        params = self._config.params
        return HttpRequest(
            "POST",
            "/job/search",
            json={
                "query": query.search_text,
                "location": _location(query, params, "Middle East"),
                "remoteOnly": bool(params.get("remote_only", True)),
            },
        )

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "jobs")
