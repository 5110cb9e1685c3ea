"""
Query classification and routing.

Usage:
    from query_router.query import RuleBasedRouter, route, default_rules
"""

from .default_rules import default_rules
from .matching import compile_rule
from .routing import NO_MATCH_TAG, TIE_TAG, RuleBasedRouter, route

__all__ = [
    "RuleBasedRouter",
    "route",
    "compile_rule",
    "default_rules",
    "NO_MATCH_TAG",
    "TIE_TAG",
]
