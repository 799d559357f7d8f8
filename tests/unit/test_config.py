"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from career_reco.core.config import (
    AggregatorConfig,
    ExtractorConfig,
    RankingConfig,
    RankingSettings,
    Settings,
    SourceConfig,
)

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"


class TestSourceConfig:
    def test_defaults(self) -> None:
        sc = SourceConfig(name="udemy", type="udemy", kind="course")
        assert sc.enabled is True
        assert sc.timeout_s == 8.0
        assert sc.priority == 0
        assert sc.endpoint is None
        assert sc.params == {}

    def test_name_stripped(self) -> None:
        sc = SourceConfig(name="  edx  ", type="edx", kind="course")
        assert sc.name == "edx"

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            SourceConfig(name="  ", type="edx", kind="course")

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(ValidationError):
            SourceConfig(name="x", type="edx", kind="podcast")  # type: ignore[arg-type]

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SourceConfig(name="x", type="edx", kind="course", timeout_s=0)


class TestAggregatorConfig:
    def test_defaults(self) -> None:
        a = AggregatorConfig()
        assert a.per_source_timeout_s == 8.0
        assert a.per_source_limit == 10
        assert a.request_deadline_s is None
        assert a.max_candidates == 50

    def test_per_source_limit_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AggregatorConfig(per_source_limit=0)
        with pytest.raises(ValidationError):
            AggregatorConfig(per_source_limit=101)


class TestExtractorConfig:
    def test_default_weights(self) -> None:
        e = ExtractorConfig()
        assert (e.high_weight, e.medium_weight, e.low_weight) == (30, 20, 10)

    def test_unordered_weights_raise(self) -> None:
        with pytest.raises(ValidationError, match="high_weight >= medium_weight"):
            ExtractorConfig(high_weight=10, medium_weight=20, low_weight=5)

    def test_equal_weights_ok(self) -> None:
        e = ExtractorConfig(high_weight=10, medium_weight=10, low_weight=10)
        assert e.low_weight == 10


class TestRankingSettings:
    def test_defaults_keyword_only(self) -> None:
        r = RankingConfig()
        assert r.semantic_enabled is False
        assert r.llm_provider == "gemini"
        assert r.top_n == 3

    def test_for_kind(self) -> None:
        rs = RankingSettings(courses=RankingConfig(top_n=5), jobs=RankingConfig(top_n=2))
        assert rs.for_kind("course").top_n == 5
        assert rs.for_kind("job").top_n == 2

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown LLM provider 'gpt5'"):
            RankingConfig(llm_provider="gpt5")

    def test_unknown_provider_rejected_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(dedent("""\
            ranking:
              courses:
                semantic_enabled: false
                llm_provider: claude
        """))
        with pytest.raises(ValidationError, match="Available: anthropic, gemini, ollama, openai"):
            Settings.from_yaml(config_file)


class TestSettings:
    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            sources:
              - name: udemy
                type: udemy
                kind: course
                api_key_env: RAPIDAPI_KEY
              - name: indeed
                type: indeed
                kind: job
                timeout_s: 3
                params:
                  location: Doha
            aggregator:
              request_deadline_s: 10
            ranking:
              jobs:
                semantic_enabled: true
                llm_provider: openai
        """)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml_content)

        settings = Settings.from_yaml(config_file)

        assert len(settings.sources) == 2
        assert settings.sources[1].timeout_s == 3.0
        assert settings.sources[1].params == {"location": "Doha"}
        assert settings.aggregator.request_deadline_s == 10.0
        assert settings.ranking.jobs.semantic_enabled is True
        assert settings.ranking.jobs.llm_provider == "openai"
        assert settings.ranking.courses.semantic_enabled is False

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        settings = Settings.from_yaml(config_file)
        assert settings.sources == []
        assert settings.fallback_catalog.enabled is True

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            Settings.from_yaml("/nonexistent/path.yaml")

    def test_duplicate_source_names_raise(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            sources:
              - {name: udemy, type: udemy, kind: course}
              - {name: udemy, type: coursera, kind: course}
        """)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml_content)

        with pytest.raises(ValidationError, match="duplicate source names: udemy"):
            Settings.from_yaml(config_file)

    def test_sources_for_orders_by_priority(self) -> None:
        settings = Settings(
            sources=[
                SourceConfig(name="b", type="edx", kind="course", priority=2),
                SourceConfig(name="j", type="indeed", kind="job", priority=0),
                SourceConfig(name="a", type="udemy", kind="course", priority=1),
                SourceConfig(name="c", type="coursera", kind="course", priority=2),
            ],
        )
        assert [s.name for s in settings.sources_for("course")] == ["a", "b", "c"]
        assert [s.name for s in settings.sources_for("job")] == ["j"]

    def test_load_example_settings(self) -> None:
        """The shipped example config must be valid."""
        settings = Settings.from_yaml(CONFIG_DIR / "settings.example.yaml")
        assert [s.name for s in settings.sources_for("course")] == [
            "udemy", "coursera", "edx", "classcentral",
        ]
        assert settings.ranking.courses.semantic_enabled is True
