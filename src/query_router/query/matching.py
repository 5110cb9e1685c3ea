"""
Rule predicates.

Turns a RoutingRule into a plain callable `Query -> bool`. Rules are
compiled once when a router is built, so the per-query cost is just a
few regex searches and the compiled predicates are never mutated.

Keyword matching is whole-word and case-insensitive: "sum" matches
"sum of refunds" but not "summary". Multi-word keywords tolerate any
run of whitespace between words ("group   by" still matches "group by").
"""

import re
from typing import Callable

from query_router.models.query import Query
from query_router.models.rule import RoutingRule, RuleKind

Predicate = Callable[[Query], bool]


def _keyword_regex(keywords: tuple[str, ...]) -> re.Pattern:
    alternatives = []
    for keyword in keywords:
        words = keyword.strip().split()
        alternatives.append(r"\s+".join(re.escape(word) for word in words))
    # \w lookarounds instead of \b so keywords ending in punctuation still work
    return re.compile(r"(?<!\w)(?:" + "|".join(alternatives) + r")(?!\w)", re.IGNORECASE)


def compile_rule(rule: RoutingRule) -> Predicate:
    """
    Build the predicate for a rule.

    Args:
        rule: A validated RoutingRule.

    Returns:
        A function that takes a Query and returns True if the rule matches.
    """
    if rule.kind == RuleKind.KEYWORD:
        regex = _keyword_regex(rule.keywords)
        return lambda query: regex.search(query.text) is not None

    if rule.kind == RuleKind.PATTERN:
        regex = re.compile(rule.pattern, re.IGNORECASE)
        return lambda query: regex.search(query.text) is not None

    if rule.kind == RuleKind.METADATA:
        field = rule.field
        accepted = frozenset(v.lower() for v in rule.values)

        def matches_metadata(query: Query) -> bool:
            value = query.metadata_value(field)
            if value is None:
                return False
            return str(value).lower() in accepted

        return matches_metadata

    raise ValueError(f"Unknown rule kind: {rule.kind}")
