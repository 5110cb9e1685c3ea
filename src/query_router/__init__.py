"""
Query Router: send customer-support questions to the right pipeline.

Some questions are answered best by a text-to-SQL agent ("average order
value by month"), some by retrieval-augmented generation ("how do I reset
my password?"), and some by both. The router makes that call with a
weighted, deterministic rule set.

Quick start:
    from query_router import RuleBasedRouter, load_rule_set

    router = RuleBasedRouter(load_rule_set())
    decision = router.route("Average order value by month")
    print(decision.target, decision.confidence, decision.rationale)

To also execute the query, wrap your pipelines and use QueryDispatcher:
    from query_router import QueryDispatcher, RunnableRetrievalPipeline, RunnableStructuredPipeline
"""

from query_router.config import RouterConfig, load_rule_set, load_rules
from query_router.errors import (
    ConfigurationError,
    InvalidInputError,
    PipelineError,
    QueryRouterError,
)
from query_router.models import (
    DispatchResult,
    PipelineResponse,
    Query,
    RouteDecision,
    RouteTarget,
    RoutingRule,
    RuleKind,
    RuleSet,
)
from query_router.base import RetrievalPipeline, StructuredQueryPipeline
from query_router.pipelines import (
    QueryDispatcher,
    RunnableRetrievalPipeline,
    RunnableStructuredPipeline,
)
from query_router.query import RuleBasedRouter, default_rules, route

__all__ = [
    # Routing (public API)
    "route",
    "RuleBasedRouter",
    "default_rules",
    # Models
    "Query",
    "RouteDecision",
    "RouteTarget",
    "RoutingRule",
    "RuleKind",
    "RuleSet",
    "PipelineResponse",
    "DispatchResult",
    # Pipelines
    "StructuredQueryPipeline",
    "RetrievalPipeline",
    "RunnableStructuredPipeline",
    "RunnableRetrievalPipeline",
    "QueryDispatcher",
    # Config
    "RouterConfig",
    "load_rules",
    "load_rule_set",
    # Errors
    "QueryRouterError",
    "InvalidInputError",
    "ConfigurationError",
    "PipelineError",
]

__version__ = "0.1.0"
