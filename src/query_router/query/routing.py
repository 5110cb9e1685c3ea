"""
Weighted rule routing.

The router scores a query against every rule and sends it to the
pipeline that collected the most weight:

    rules = [
        RoutingRule(name="aggregation", keywords=["average", "total"], target="structured"),
        RoutingRule(name="similar-to", keywords=["similar to"], target="retrieval"),
    ]
    router = RuleBasedRouter(rules)
    router.route("Average order value by month")
    # → RouteDecision(target=STRUCTURED, confidence=1.0, rationale=["aggregation"])

Decision policy:
    - Every matching rule adds its weight to its target's score.
    - Nothing matched       → BOTH, confidence 0.0, "no-match-default-hybrid"
    - Scores tied (nonzero) → BOTH, confidence 0.5, "tie-hybrid-fallback"
    - Otherwise the higher score wins, confidence = winner / total, and the
      rationale lists matching rules by descending weight, then name.

The module-level route() is the functional form; RuleBasedRouter
validates the rule set once up front and is what long-lived services
should hold on to.
"""

import math
from typing import Iterable, Union

from loguru import logger
from pydantic import ValidationError

from query_router.base.router import BaseRouter
from query_router.errors import ConfigurationError, InvalidInputError
from query_router.models.query import Query, RouteDecision, RouteTarget
from query_router.models.rule import RoutingRule, RuleSet

from .matching import compile_rule

NO_MATCH_TAG = "no-match-default-hybrid"
TIE_TAG = "tie-hybrid-fallback"

RulesLike = Union[RuleSet, Iterable[RoutingRule]]


def as_query(query: Union[Query, str]) -> Query:
    """
    Normalise router input to a Query and reject empty text.

    Raises:
        InvalidInputError: If the text is empty or whitespace-only.
    """
    if isinstance(query, str):
        query = Query(text=query)
    elif not isinstance(query, Query):
        raise InvalidInputError(f"Expected a Query or str, got {type(query).__name__}")

    if not query.text.strip():
        raise InvalidInputError("Query text must not be empty.")
    return query


def as_rule_set(rules: RulesLike) -> RuleSet:
    """
    Validate a rule collection into a RuleSet.

    Accepts a RuleSet, or any iterable of RoutingRule (or rule dicts).

    Raises:
        ConfigurationError: If the collection is empty or any rule is malformed.
    """
    if isinstance(rules, RuleSet):
        return rules
    if rules is None:
        raise ConfigurationError("No routing rules configured.")

    try:
        rules = list(rules)
    except TypeError as e:
        raise ConfigurationError(f"Routing rules must be a sequence, got {type(rules).__name__}") from e
    if not rules:
        raise ConfigurationError("No routing rules configured.")

    try:
        return RuleSet.model_validate({"rules": rules})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid routing rules: {e}") from e


class RuleBasedRouter(BaseRouter):
    """
    Deterministic router over a fixed, weighted rule set.

    The rule set is validated and compiled in __init__ and never touched
    again, so one instance can serve any number of threads without locks.

    Raises:
        ConfigurationError: At construction, for an empty or malformed rule set.
    """

    def __init__(self, rules: RulesLike):
        """
        Args:
            rules: RuleSet or sequence of RoutingRule, in evaluation order.
        """
        self._rule_set = as_rule_set(rules)
        self._compiled = tuple((rule, compile_rule(rule)) for rule in self._rule_set)

    @property
    def rules(self) -> RuleSet:
        return self._rule_set

    def route(self, query: Union[Query, str]) -> RouteDecision:
        query = as_query(query)

        scores = {RouteTarget.STRUCTURED: 0.0, RouteTarget.RETRIEVAL: 0.0}
        matched: list[RoutingRule] = []
        for rule, matches in self._compiled:
            if matches(query):
                scores[rule.target] += rule.weight
                matched.append(rule)

        matched.sort(key=lambda rule: (-rule.weight, rule.name))
        matched_names = [rule.name for rule in matched]
        structured = scores[RouteTarget.STRUCTURED]
        retrieval = scores[RouteTarget.RETRIEVAL]
        score_map = {t.value: s for t, s in scores.items()}

        if structured == 0.0 and retrieval == 0.0:
            decision = RouteDecision(
                target=RouteTarget.BOTH,
                confidence=0.0,
                rationale=[NO_MATCH_TAG],
                matched_rules=matched_names,
                scores=score_map,
            )
        elif math.isclose(structured, retrieval):
            decision = RouteDecision(
                target=RouteTarget.BOTH,
                confidence=0.5,
                rationale=[TIE_TAG],
                matched_rules=matched_names,
                scores=score_map,
            )
        else:
            if structured > retrieval:
                target, winning = RouteTarget.STRUCTURED, structured
            else:
                target, winning = RouteTarget.RETRIEVAL, retrieval
            decision = RouteDecision(
                target=target,
                confidence=min(1.0, winning / (structured + retrieval)),
                rationale=list(matched_names),
                matched_rules=matched_names,
                scores=score_map,
            )

        logger.debug(
            f"Routed {query.text[:50]!r} -> {decision.target.value} "
            f"(confidence={decision.confidence:.2f}, scores={score_map})"
        )
        return decision


def route(query: Union[Query, str], rules: RulesLike) -> RouteDecision:
    """
    Route one query against a rule set.

    The query is checked before the rules, so empty text is always an
    InvalidInputError no matter what the rule set looks like.

    Args:
        query: The incoming Query, or its raw text.
        rules: Ordered, non-empty rule collection.

    Returns:
        RouteDecision for the query.

    Raises:
        InvalidInputError: Empty or whitespace-only query text.
        ConfigurationError: Empty or malformed rule set.
    """
    query = as_query(query)
    return RuleBasedRouter(rules).route(query)
