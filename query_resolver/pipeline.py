"""Command-line entry point.

Resolves a query plan against the configured knowledge base and prints
the resolved query:

    query-resolver data/plan_director.json --kb-dir data/
    query-resolver --question "Who directed Inception?"

The plan file holds a single plan: {"patterns": [...], "bindings": [...]}.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, KnowledgeBaseConfig, PlannerConfig, get_config
from .container import Container
from .domain.errors import QueryPlanError, QueryResolverError
from .domain.models import QueryPlan, ResolvedQuery
from .logging_setup import configure_logging
from .services import QueryResolverService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="query-resolver",
        description="Resolve a triple-pattern query plan against a knowledge base.",
    )
    parser.add_argument("plan", nargs="?", type=Path, help="Plan JSON file")
    parser.add_argument(
        "-q", "--question", help="Resolve the stored plan for a question"
    )
    parser.add_argument(
        "--kb-dir", type=Path, help="Directory holding entities.csv and triples.csv"
    )
    parser.add_argument("--plans-file", type=Path, help="Question-to-plan JSON file")
    parser.add_argument("--log-level", help="Override QR_LOG_LEVEL")
    return parser


def load_plan(path: Path) -> QueryPlan:
    """Read a single plan from a JSON file.

    Raises:
        QueryPlanError: If the file cannot be read or parsed.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        return QueryPlan.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise QueryPlanError(f"Cannot load plan from {path}", cause=e)


def _configure(args: argparse.Namespace) -> AppConfig:
    config = get_config()
    updates = {}
    if args.kb_dir is not None:
        updates["knowledge_base"] = KnowledgeBaseConfig(data_dir=args.kb_dir)
    if args.plans_file is not None:
        updates["planner"] = PlannerConfig(plans_file=args.plans_file)
    if args.log_level is not None:
        updates["observability"] = config.observability.model_copy(
            update={"level": args.log_level}
        )
    return config.model_copy(update=updates) if updates else config


def run(args: argparse.Namespace) -> ResolvedQuery:
    config = _configure(args)
    configure_logging(config.observability)

    container = Container.create_default(config)
    service: QueryResolverService = container.resolve(QueryResolverService)

    if args.question:
        return service.answer(args.question)
    return service.resolve(load_plan(args.plan))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.plan is None and not args.question:
        parser.error("either a plan file or --question is required")

    try:
        query = run(args)
    except QueryResolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(query.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
