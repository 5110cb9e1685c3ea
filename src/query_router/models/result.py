"""
Result models for pipeline and dispatch outputs.

PipelineResponse is what either pipeline hands back; DispatchResult is
what the caller gets from QueryDispatcher: the routing decision plus
one response per pipeline that ran.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .query import Query, RouteDecision, RouteTarget


class PipelineResponse(BaseModel):
    """
    A natural-language answer produced by one pipeline.

    Both pipelines return the same shape, so callers presenting a hybrid
    answer don't need to care which backend produced which part.
    """

    answer: str = Field(description="The natural-language answer")
    pipeline: str = Field(description="Name of the pipeline that produced the answer")
    sources: list[str] = Field(
        default_factory=list,
        description="Source identifiers (documents, tables) the answer was built from",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Pipeline-specific details (generated SQL, retrieval scores, etc.)",
    )


class DispatchResult(BaseModel):
    """
    Everything that happened for one dispatched query.

    responses is keyed by target value ("structured" / "retrieval"). For a
    BOTH decision it holds two entries; merging them is left to the caller.
    """

    query: Query
    decision: RouteDecision
    responses: dict[str, PipelineResponse] = Field(default_factory=dict)

    def response_for(self, target: RouteTarget) -> Optional[PipelineResponse]:
        """The response from one pipeline, or None if it wasn't called."""
        return self.responses.get(target.value)

    @property
    def is_hybrid(self) -> bool:
        return self.decision.target == RouteTarget.BOTH
