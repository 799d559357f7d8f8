"""CLI entry point for the course and job recommendation engine."""

import argparse
import asyncio
import logging
import sys

from career_reco.core.config import Settings
from career_reco.core.errors import NoCandidatesAvailable
from career_reco.core.schemas import Recommendations
from career_reco.llm import available_providers, get_provider
from career_reco.pipeline.analysis import CandidateAnalysis, analyze_candidate
from career_reco.pipeline.orchestrator import RecommendationEngine, export_recommendations_json
from career_reco.profile.extractor import extract_query
from career_reco.profile.schema import UserProfile


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recommend courses and jobs from a user profile",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- recommend subcommand (default) ---
    recommend_parser = subparsers.add_parser("recommend", help="Build recommendations")
    recommend_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    recommend_parser.add_argument(
        "--profile",
        default="config/profile.yaml",
        help="Path to a profile snapshot, YAML or JSON (default: config/profile.yaml)",
    )
    recommend_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the query and sources without calling any service",
    )
    recommend_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    recommend_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- sources subcommand ---
    sources_parser = subparsers.add_parser("sources", help="List configured catalog sources")
    sources_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    sources_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- analyze subcommand ---
    analyze_parser = subparsers.add_parser(
        "analyze", help="Write a personalized analysis of recommended items",
    )
    analyze_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    analyze_parser.add_argument(
        "--profile",
        default="config/profile.yaml",
        help="Path to a profile snapshot, YAML or JSON (default: config/profile.yaml)",
    )
    analyze_parser.add_argument(
        "--item-id",
        help="Analyze only this recommended item (default: every recommended item)",
    )
    analyze_parser.add_argument(
        "--provider",
        choices=available_providers(),
        help="LLM provider for the analysis (default: keyword-based analysis, no LLM)",
    )
    analyze_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    args = parser.parse_args(argv)

    # Default to recommend when no subcommand given
    if args.command is None:
        args = parser.parse_args(["recommend"])

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def list_sources(settings: Settings) -> None:
    """Print configured sources in the order the aggregator queries them."""
    for kind in ("course", "job"):
        sources = settings.sources_for(kind)
        print(f"{kind} sources: {len(sources)}")
        for s in sources:
            status = "enabled" if s.enabled else "disabled"
            print(f"  [{s.priority}] {s.name} ({s.type}) {status}, timeout {s.timeout_s}s")
    fallback = "on" if settings.fallback_catalog.enabled else "off"
    print(f"static catalog fallback: {fallback}")


def dry_run(settings: Settings, profile: UserProfile) -> None:
    """Print what would happen without calling any service."""
    query = extract_query(profile, settings.extractor)
    print(f"[DRY RUN] Query: '{query.search_text}'")
    for kw in query.keywords:
        print(f"  {kw.weight:>3}  {kw.term}")
    for kind in ("course", "job"):
        ranking = settings.ranking.for_kind(kind)
        scorer = f"semantic ({ranking.llm_provider})" if ranking.semantic_enabled else "keyword"
        names = [s.name for s in settings.sources_for(kind) if s.enabled]
        print(f"[DRY RUN] {kind}s: sources {names or 'none'}, scorer {scorer}, top {ranking.top_n}")


def print_recommendations(recs: Recommendations) -> None:
    sections = (
        ("Courses", recs.courses, recs.courses_degraded),
        ("Jobs", recs.jobs, recs.jobs_degraded),
    )
    for label, items, degraded in sections:
        print(f"\n{label}:")
        if not items:
            print("  (none)")
        elif degraded:
            print("  (ranked by keyword match)")
        for s in items:
            c = s.candidate
            print(f"  {s.rank}. {c.title} - {c.provider or 'unknown'} "
                  f"[{s.score:.0f}, {s.score_source}]")
            if s.rationale:
                print(f"     {s.rationale}")


async def run(settings: Settings, profile: UserProfile, export_format: str | None) -> None:
    """Run the recommendation pipeline and print the results."""
    engine = RecommendationEngine(settings)
    recs = await engine.recommend(profile)

    print_recommendations(recs)
    if export_format == "json":
        print(f"\n{export_recommendations_json(recs)}")


async def analyze(
    settings: Settings,
    profile: UserProfile,
    item_id: str | None,
    provider_name: str | None,
) -> list[CandidateAnalysis]:
    """Analyze recommended items, or only ``item_id`` when given.

    Without a provider the deterministic keyword analysis is used.
    """
    engine = RecommendationEngine(settings)
    recs = await engine.recommend(profile)

    candidates = [s.candidate for s in [*recs.courses, *recs.jobs]]
    if item_id is not None:
        candidates = [c for c in candidates if c.id == item_id]

    provider = get_provider(provider_name) if provider_name else None
    analyses = []
    for candidate in candidates:
        ranking = settings.ranking.for_kind(candidate.kind)
        analyses.append(
            await analyze_candidate(
                candidate,
                profile,
                provider,
                model=ranking.llm_model,
                timeout_s=ranking.timeout_s,
                extractor_config=settings.extractor,
            ),
        )
    return analyses


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "sources":
        list_sources(settings)
        return

    try:
        profile = UserProfile.load(args.profile)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading profile: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "analyze":
        try:
            analyses = asyncio.run(analyze(settings, profile, args.item_id, args.provider))
        except NoCandidatesAvailable:
            print("No recommendations yet: no courses or jobs are available right now.")
            return
        if not analyses:
            print(f"Error: '{args.item_id}' is not among the recommended items", file=sys.stderr)
            sys.exit(1)
        for analysis in analyses:
            print(analysis.model_dump_json(by_alias=True, indent=2))
        return

    if args.dry_run:
        dry_run(settings, profile)
        return

    try:
        asyncio.run(run(settings, profile, args.export))
    except NoCandidatesAvailable:
        print("No recommendations yet: no courses or jobs are available right now.")


if __name__ == "__main__":
    main()
