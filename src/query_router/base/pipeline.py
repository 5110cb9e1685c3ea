"""
Capability interfaces for the two answering pipelines.

The router never looks inside a pipeline. Anything that can take a Query
and return a PipelineResponse can sit behind one of these: an existing
RAG chain, a text-to-SQL agent, or a stub in tests.

Both contracts are identical; they're separate types so a dispatcher can't
be wired with the pipelines swapped.
"""

from abc import ABC, abstractmethod

from query_router.models.query import Query
from query_router.models.result import PipelineResponse


class BasePipeline(ABC):
    """
    Contract shared by both pipelines.

    execute() either returns a PipelineResponse or raises PipelineError.
    Implementations should wrap their own backend failures in
    PipelineError so callers only ever catch one collaborator error type.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def execute(self, query: Query) -> PipelineResponse:
        """
        Answer a query.

        Args:
            query: The original, unmodified Query.

        Returns:
            PipelineResponse with the natural-language answer.

        Raises:
            PipelineError: Schema mapping, execution, or retrieval failure.
        """
        ...


class StructuredQueryPipeline(BasePipeline):
    """Answers by translating the question into SQL and running it."""


class RetrievalPipeline(BasePipeline):
    """Answers by retrieving relevant documents and generating from them."""
