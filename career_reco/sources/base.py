"""Abstract base class for catalog connectors."""

from abc import ABC, abstractmethod

from career_reco.core.config import CandidateKind, SourceConfig
from career_reco.core.schemas import Query, RawItem


class SourceConnector(ABC):
    """Base class that every catalog connector must implement.

    A connector is read-only and idempotent. It must return within its
    configured timeout and signal failure through SourceError subclasses.
    """

    def __init__(self, config: SourceConfig) -> None:
        self._config = config

    @property
    def config(self) -> SourceConfig:
        return self._config

    @property
    def source_id(self) -> str:
        """Unique identifier for this connector (the configured name)."""
        return self._config.name

    @property
    def kind(self) -> CandidateKind:
        return self._config.kind

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def timeout_s(self) -> float:
        return self._config.timeout_s

    @property
    @abstractmethod
    def schema_name(self) -> str:
        """Payload schema tag the normalizer dispatches on (e.g. 'udemy')."""

    @abstractmethod
    async def search(self, query: Query, limit: int) -> list[RawItem]:
        """Run a search and return raw (unnormalized) items."""

    def _raw(self, payload: dict) -> RawItem:
        return RawItem(source_id=self.source_id, schema_name=self.schema_name, payload=payload)
