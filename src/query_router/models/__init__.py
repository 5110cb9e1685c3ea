"""
Pydantic models shared across the query router.

Import from here rather than reaching into submodules:
    from query_router.models import Query, RouteDecision, RoutingRule
"""

from .query import Query, RouteDecision, RouteTarget
from .rule import RoutingRule, RuleKind, RuleSet
from .result import DispatchResult, PipelineResponse

__all__ = [
    # Query
    "Query",
    "RouteDecision",
    "RouteTarget",
    # Rules
    "RoutingRule",
    "RuleKind",
    "RuleSet",
    # Results
    "DispatchResult",
    "PipelineResponse",
]
