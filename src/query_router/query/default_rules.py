"""
Built-in routing rules for customer-support traffic.

One rule per row of the RAG-vs-SQL recommendation matrix:

    Query type                        Pipeline      Example
    --------------------------------  ------------  -----------------------------------
    Aggregations / metrics            structured    "Average order value by month"
    Exact lookup by identifier        structured    "Status of order #48213"
    Filtering and ranking             structured    "Top 10 customers by spend"
    Time-window reports               structured    "Refunds issued last quarter"
    How-to and policy questions       retrieval     "How do I reset my password?"
    Troubleshooting                   retrieval     "The app crashes when I upload"
    Similarity search                 retrieval     "Tickets similar to this complaint"
    Open-ended explanation            retrieval     "Explain the warranty terms"

Structured-side identifiers get a heavier weight: an order number in the
question is a much stronger signal than a generic "how".

Use these as a starting point and replace them with a rules file (see
config.load_rules) once you have real traffic to tune against.
"""

from typing import Union

from query_router.models.query import RouteTarget
from query_router.models.rule import RoutingRule, RuleKind, RuleSet

_STRUCTURED = RouteTarget.STRUCTURED
_RETRIEVAL = RouteTarget.RETRIEVAL

# (name, kind, target, weight, keywords-or-pattern)
_DEFAULTS: list[tuple[str, RuleKind, RouteTarget, float, Union[tuple[str, ...], str]]] = [
    ("aggregation", RuleKind.KEYWORD, _STRUCTURED, 1.0,
     ("average", "avg", "sum", "total", "count", "how many", "how much", "number of",
      "mean", "median", "percentage", "ratio", "revenue", "per month", "by month")),
    ("identifier-lookup", RuleKind.PATTERN, _STRUCTURED, 1.5,
     r"(#\d{3,}|\b(order|invoice|ticket|account|customer)\s+(id|no\.?|number)?\s*#?\d{3,}\b)"),
    ("filter-rank", RuleKind.PATTERN, _STRUCTURED, 1.0,
     r"\b(top \d+|bottom \d+|rank(ed|ing)?|sort(ed)? by|group(ed)? by|list all|highest|lowest|more than \d+|less than \d+)\b"),
    ("time-window", RuleKind.PATTERN, _STRUCTURED, 0.5,
     r"\b(last|this|previous|past) (day|week|month|quarter|year)\b|\b(since|between) \d{4}\b|\byear[- ]over[- ]year\b"),
    ("how-to-policy", RuleKind.KEYWORD, _RETRIEVAL, 1.0,
     ("how do i", "how can i", "how to", "policy", "guideline", "terms", "allowed to",
      "can i", "procedure", "instructions")),
    ("troubleshooting", RuleKind.KEYWORD, _RETRIEVAL, 1.0,
     ("error", "crash", "crashes", "not working", "doesn't work", "broken", "fails",
      "failed", "issue", "problem", "troubleshoot", "fix")),
    ("similarity", RuleKind.KEYWORD, _RETRIEVAL, 1.0,
     ("similar to", "similar", "like this", "related to", "resembling", "same as")),
    ("explanation", RuleKind.KEYWORD, _RETRIEVAL, 0.5,
     ("why", "explain", "what is", "what does", "describe", "difference between", "meaning of")),
]


def default_rules() -> RuleSet:
    """
    The built-in customer-support rule set.

    Returns:
        A validated RuleSet. A fresh instance each call, though it's
        immutable so sharing one is fine too.
    """
    rules = []
    for name, kind, target, weight, predicate in _DEFAULTS:
        if kind == RuleKind.KEYWORD:
            rules.append(RoutingRule(name=name, kind=kind, target=target, weight=weight, keywords=predicate))
        else:
            rules.append(RoutingRule(name=name, kind=kind, target=target, weight=weight, pattern=predicate))
    return RuleSet(rules=tuple(rules))
