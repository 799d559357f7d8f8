"""Course marketplace connectors (Udemy, Coursera, edX, Class Central)."""

from typing import Any

from career_reco.core.schemas import Query
from career_reco.sources.http import HttpCatalogConnector, HttpRequest, items_at


class UdemyConnector(HttpCatalogConnector):
    """Udemy search via RapidAPI."""

    default_endpoint = "https://udemy-api2.p.rapidapi.com"

    @property
    def schema_name(self) -> str:
        return "udemy"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        return HttpRequest(
            "POST",
            "/v1/udemy/search-courses",
            json={"query": query.search_text, "page": 1, "limit": limit},
        )

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "courses")


class CourseraConnector(HttpCatalogConnector):
    """Coursera search via RapidAPI."""

    default_endpoint = "https://coursera-courses.p.rapidapi.com"

    @property
    def schema_name(self) -> str:
        return "coursera"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        return HttpRequest("POST", "/search", json={"query": query.search_text, "limit": limit})

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "courses")


class EdxConnector(HttpCatalogConnector):
    """edX public course catalog API."""

    default_endpoint = "https://courses.edx.org"
    requires_api_key = False

    @property
    def schema_name(self) -> str:
        return "edx"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        return HttpRequest(
            "GET",
            "/api/courses/v1/courses/",
            params={"search": query.search_text, "page_size": limit},
        )

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "results")


class ClassCentralConnector(HttpCatalogConnector):
    """Class Central free course search."""

    default_endpoint = "https://www.classcentral.com"
    requires_api_key = False

    @property
    def schema_name(self) -> str:
        return "classcentral"

    def build_request(self, query: Query, limit: int) -> HttpRequest:
        return HttpRequest("GET", "/api/courses", params={"q": query.search_text, "limit": limit})

    def extract_items(self, data: Any) -> list[dict[str, Any]]:
        return items_at(data, "results")
