"""Catalog connector registry with lazy loading.

Usage:
    from career_reco.sources import build_connectors

    connectors = build_connectors(settings.sources_for("course"))
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from career_reco.sources.base import SourceConnector

if TYPE_CHECKING:
    import httpx

    from career_reco.core.config import SourceConfig

__all__ = ["SourceConnector", "available_types", "build_connector", "build_connectors"]

# Lazy registry: maps source type → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "udemy": ("career_reco.sources.courses", "UdemyConnector"),
    "coursera": ("career_reco.sources.courses", "CourseraConnector"),
    "edx": ("career_reco.sources.courses", "EdxConnector"),
    "classcentral": ("career_reco.sources.courses", "ClassCentralConnector"),
    "indeed": ("career_reco.sources.jobs", "IndeedConnector"),
    "linkedin": ("career_reco.sources.jobs", "LinkedInJobsConnector"),
    "jobsapi": ("career_reco.sources.jobs", "JobsApiConnector"),
    "static": ("career_reco.sources.static_catalog", "StaticCatalogConnector"),
}


def build_connector(
    config: SourceConfig,
    client: httpx.AsyncClient | None = None,
) -> SourceConnector:
    """Instantiate the connector for a configured source.

    Args:
        config: The source entry from settings.
        client: Optional shared httpx client for HTTP connectors.

    Raises:
        ValueError: If the source type is unknown.
    """
    if config.type not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown source type '{config.type}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[config.type]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    if config.type == "static":
        return cls(config)  # type: ignore[no-any-return]
    return cls(config, client=client)  # type: ignore[no-any-return]


def build_connectors(
    configs: list[SourceConfig],
    client: httpx.AsyncClient | None = None,
) -> list[SourceConnector]:
    """Instantiate connectors, preserving the given (priority) order."""
    return [build_connector(c, client) for c in configs]


def available_types() -> list[str]:
    """Return sorted list of registered source types."""
    return sorted(_REGISTRY)
