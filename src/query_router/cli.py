"""
Command-line entry point: route a question and print the decision.

    query-router "Average order value by month"
    query-router "Find tickets similar to this one" --rules rules.json --channel chat

Prints the RouteDecision as JSON on stdout. Exit codes:
    0: routed
    2: empty question or bad rule configuration (message on stderr)
"""

import argparse
import sys
from typing import Optional

from loguru import logger

from query_router.config import RouterConfig, load_rule_set
from query_router.errors import ConfigurationError, InvalidInputError
from query_router.models.query import Query
from query_router.query.routing import RuleBasedRouter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="query-router",
        description="Decide whether a support question goes to the SQL pipeline, the RAG pipeline, or both.",
    )
    parser.add_argument("question", help="The natural-language question to route")
    parser.add_argument("--rules", help="JSON rules file (default: $QUERY_ROUTER_RULES or built-in rules)")
    parser.add_argument("--channel", help="Ingress channel metadata, e.g. chat, email")
    parser.add_argument("--customer-id", help="Customer id metadata")
    parser.add_argument("--log-level", help="Log level for stderr output (default: WARNING)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = RouterConfig.from_env()
        overrides = {}
        if args.rules:
            overrides["rules_path"] = args.rules
        if args.log_level:
            overrides["log_level"] = args.log_level
        if overrides:
            config = RouterConfig(**{**config.model_dump(), **overrides})
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: invalid option: {e}", file=sys.stderr)
        return 2

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)

    try:
        router = RuleBasedRouter(load_rule_set(config))
        decision = router.route(
            Query(text=args.question, channel=args.channel, customer_id=args.customer_id)
        )
    except (InvalidInputError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(decision.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
