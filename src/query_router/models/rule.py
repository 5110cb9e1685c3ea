"""
Routing rule models.

A RoutingRule is a named predicate over the query plus the target it
votes for and how much its vote weighs. A RuleSet is the ordered,
immutable collection the router is built from.

Rules are usually loaded from configuration (see config.load_rules), but
they're plain Pydantic models, so tests can build synthetic ones inline:

    RoutingRule(
        name="aggregation",
        kind="keyword",
        keywords=["average", "total"],
        target="structured",
    )
"""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .query import RouteTarget


class RuleKind(str, Enum):
    """How a rule inspects the query."""

    KEYWORD = "keyword"    # any listed phrase, whole-word, case-insensitive
    PATTERN = "pattern"    # regular expression search, case-insensitive
    METADATA = "metadata"  # metadata field equals one of the listed values


class RoutingRule(BaseModel):
    """
    One vote in the routing decision.

    Which fields are required depends on kind:
        keyword   → keywords
        pattern   → pattern
        metadata  → field + values
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Unique rule name, reported in the rationale")
    kind: RuleKind = Field(default=RuleKind.KEYWORD)
    target: RouteTarget = Field(description="Pipeline this rule votes for")
    weight: float = Field(default=1.0, gt=0.0, allow_inf_nan=False, description="Vote weight added on match")
    keywords: tuple[str, ...] = Field(default=())
    pattern: Optional[str] = Field(default=None)
    field: Optional[str] = Field(default=None, description="Metadata field name (metadata rules)")
    values: tuple[str, ...] = Field(default=(), description="Accepted metadata values")

    @field_validator("target")
    @classmethod
    def validate_target(cls, target: RouteTarget) -> RouteTarget:
        """BOTH is a router outcome, not something a rule can vote for."""
        if target == RouteTarget.BOTH:
            raise ValueError("rules must target 'structured' or 'retrieval', not 'both'")
        return target

    @model_validator(mode="after")
    def validate_predicate(self) -> "RoutingRule":
        if self.kind == RuleKind.KEYWORD:
            if not self.keywords or any(not k.strip() for k in self.keywords):
                raise ValueError(f"keyword rule '{self.name}' needs non-blank keywords")
        elif self.kind == RuleKind.PATTERN:
            if not self.pattern:
                raise ValueError(f"pattern rule '{self.name}' needs a pattern")
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"pattern rule '{self.name}' has an invalid regex: {e}") from e
        elif self.kind == RuleKind.METADATA:
            if not self.field or not self.values:
                raise ValueError(f"metadata rule '{self.name}' needs a field and values")
        return self


class RuleSet(BaseModel):
    """
    Ordered, non-empty, immutable collection of rules.

    Built once at process start and shared read-only by every routing
    call, which is what makes concurrent routing safe without locks.
    """

    model_config = ConfigDict(frozen=True)

    rules: tuple[RoutingRule, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_unique_names(self) -> "RuleSet":
        """Names identify rules in the rationale, so they must not collide."""
        seen = set()
        for rule in self.rules:
            if rule.name in seen:
                raise ValueError(f"duplicate rule name: '{rule.name}'")
            seen.add(rule.name)
        return self

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)
