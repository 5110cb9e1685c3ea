"""
Query and routing-decision models.

Query is what arrives at ingress; RouteDecision is what the router hands
back. Both are frozen: a query is never mutated on its way through the
router, and a decision is a value the caller can pass around or log.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class RouteTarget(str, Enum):
    """
    Where a query should go.

    Rules only ever vote for STRUCTURED or RETRIEVAL. BOTH is produced by
    the router itself, when nothing matched or the vote was tied.
    """

    STRUCTURED = "structured"  # natural language → SQL agent
    RETRIEVAL = "retrieval"    # retrieve documents → generate
    BOTH = "both"              # hybrid: call both pipelines


class Query(BaseModel):
    """
    An incoming natural-language support request.

    Emptiness of text is not checked here; route() rejects it with
    InvalidInputError so the caller gets one error type regardless of
    how the Query was built.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="The raw user question")
    customer_id: Optional[str] = Field(
        default=None,
        description="Customer the request belongs to, if known",
    )
    channel: Optional[str] = Field(
        default=None,
        description="Ingress channel, e.g. 'chat', 'email', 'phone'",
    )
    attributes: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Any other request metadata that metadata rules can inspect",
    )

    @field_validator("attributes")
    @classmethod
    def freeze_attributes(cls, attributes: Mapping[str, Any]) -> Mapping[str, Any]:
        """Copy into a read-only view so metadata can't change after ingress."""
        return MappingProxyType(dict(attributes))

    @field_serializer("attributes")
    def serialize_attributes(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        return dict(attributes)

    def metadata_value(self, field: str) -> Any:
        """Look up a metadata field by name: channel, customer_id, or an attribute."""
        if field in ("channel", "customer_id"):
            return getattr(self, field)
        return self.attributes.get(field)


class RouteDecision(BaseModel):
    """
    The router's answer for one query.

    rationale explains the decision: the matching rule names when one
    target won, or a single fallback tag ("no-match-default-hybrid",
    "tie-hybrid-fallback") when the router fell back to BOTH.
    matched_rules always lists the rules that fired, in rationale order.
    """

    model_config = ConfigDict(frozen=True)

    target: RouteTarget
    confidence: float = Field(ge=0.0, le=1.0, description="Share of the vote the target received")
    rationale: tuple[str, ...] = Field(default=())
    matched_rules: tuple[str, ...] = Field(default=())
    scores: dict[str, float] = Field(
        default_factory=dict,
        description="Accumulated rule weight per voting target",
    )

    @field_serializer("rationale", "matched_rules")
    def serialize_tags(self, tags: tuple[str, ...]) -> list[str]:
        return list(tags)
