"""Tests for profile -> weighted Query extraction."""

from career_reco.core.config import ExtractorConfig
from career_reco.core.schemas import DEFAULT_SEARCH_TEXT
from career_reco.profile.extractor import extract_query, normalize_term
from career_reco.profile.schema import UserProfile


def _make_profile(**overrides: object) -> UserProfile:
    defaults: dict[str, object] = {
        "dream_job": "AI Consultant",
        "specialization": "Machine Learning",
        "career_goal": "Lead AI projects",
        "field_experience": ["Data Analysis"],
        "technical_skills": ["Python"],
        "desired_fields": ["Business"],
        "interests": ["Public Speaking"],
        "region": "Dubai",
        "experience_level": "Mid Level",
    }
    defaults.update(overrides)
    return UserProfile(**defaults)  # type: ignore[arg-type]


def _weights(profile: UserProfile, config: ExtractorConfig | None = None) -> dict[str, int]:
    return {k.term: k.weight for k in extract_query(profile, config).keywords}


class TestNormalizeTerm:
    def test_lowercases_and_collapses(self) -> None:
        assert normalize_term("  AI   Consultant ") == "ai consultant"


class TestExtractQuery:
    def test_weight_tiers(self) -> None:
        weights = _weights(_make_profile())
        assert weights["ai consultant"] == 30
        assert weights["machine learning"] == 30
        assert weights["data analysis"] == 20
        assert weights["python"] == 20
        assert weights["lead ai projects"] == 10
        assert weights["business"] == 10
        assert weights["public speaking"] == 10

    def test_facets(self) -> None:
        query = extract_query(_make_profile())
        assert query.region == "Dubai"
        assert query.experience_level == "Mid Level"

    def test_experience_level_falls_back_to_experience(self) -> None:
        query = extract_query(_make_profile(experience_level="", experience="5 years"))
        assert query.experience_level == "5 years"

    def test_duplicate_keeps_highest_weight(self) -> None:
        profile = _make_profile(interests=["Machine learning"], technical_skills=["PYTHON"])
        weights = _weights(profile)
        assert weights["machine learning"] == 30
        assert list(weights).count("machine learning") == 1

    def test_duplicates_keep_first_seen_position(self) -> None:
        profile = UserProfile(
            field_experience=["SQL", "Excel"], interests=["excel", "Travel"],
        )
        query = extract_query(profile)
        assert [(k.term, k.weight) for k in query.keywords] == [
            ("sql", 20), ("excel", 20), ("travel", 10),
        ]

    def test_empty_profile_gives_empty_query(self) -> None:
        query = extract_query(UserProfile())
        assert query.is_empty
        assert query.raw_text == ""
        assert query.search_text == DEFAULT_SEARCH_TEXT

    def test_raw_text_ordered_by_weight(self) -> None:
        profile = UserProfile(interests=["Chess"], technical_skills=["Go"], dream_job="Engineer")
        query = extract_query(profile)
        assert query.raw_text == "engineer go chess"

    def test_raw_text_capped_at_max_terms(self) -> None:
        profile = UserProfile(interests=[f"topic {i}" for i in range(20)])
        query = extract_query(profile, ExtractorConfig(max_terms=3))
        assert query.raw_text == "topic 0 topic 1 topic 2"
        assert len(query.keywords) == 20

    def test_custom_weights(self) -> None:
        config = ExtractorConfig(high_weight=50, medium_weight=25, low_weight=5)
        weights = _weights(_make_profile(), config)
        assert weights["ai consultant"] == 50
        assert weights["python"] == 25
        assert weights["business"] == 5

    def test_deterministic(self) -> None:
        profile = _make_profile()
        assert extract_query(profile) == extract_query(profile)

    def test_whitespace_only_terms_skipped(self) -> None:
        query = extract_query(UserProfile(dream_job="   ", specialization="Data"))
        assert [k.term for k in query.keywords] == ["data"]
