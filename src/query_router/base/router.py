"""
Abstract base class for query routers.

The router is the decision-maker. It looks at a support request and
decides which pipeline should answer it:
    - STRUCTURED: translate to SQL and query the relational store
    - RETRIEVAL:  retrieve relevant documents and generate an answer
    - BOTH:       call both and let the caller combine the answers

Routing is its own component, separate from the pipelines, so you can:
    - Swap routing logic without touching either pipeline
    - Test routing with synthetic rule sets and no backends at all
    - Reuse one router behind several dispatchers
"""

from abc import ABC, abstractmethod
from typing import Union

from query_router.models.query import Query, RouteDecision


class BaseRouter(ABC):
    """
    Contract for query routers.

    A router receives the incoming query and returns a RouteDecision
    telling the dispatcher:
        - target: structured / retrieval / both
        - confidence: how one-sided the decision was
        - rationale: which rules (or which fallback) produced it

    Implementations must be side-effect free: the same query always
    yields the same decision.
    """

    @abstractmethod
    def route(self, query: Union[Query, str]) -> RouteDecision:
        """
        Decide which pipeline(s) should handle a query.

        Args:
            query: The incoming Query, or its raw text.

        Returns:
            RouteDecision with target, confidence, and rationale.
        """
        ...
