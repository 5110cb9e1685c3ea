"""
LangChain adapters for the pipeline interfaces.

Most RAG chains and text-to-SQL agents are already LangChain Runnables.
RunnablePipeline lets you plug one in behind StructuredQueryPipeline or
RetrievalPipeline without writing a wrapper class:

    from langchain_core.runnables import RunnableLambda

    rag_chain = prompt | llm | StrOutputParser()
    retrieval = RunnableRetrievalPipeline(rag_chain, name="support_docs")
    structured = RunnableStructuredPipeline(sql_agent, name="orders_db")

The runnable is invoked with a dict:
    {"question": <text>, "customer_id": <id or None>, "channel": <channel or None>}

Accepted outputs:
    - str                               → the answer
    - a chat message (AIMessage, ...)   → its content
    - dict with an "answer" key         → answer, optional "sources", rest → metadata
    - PipelineResponse                  → used as is

Any exception the runnable raises is wrapped in PipelineError (with the
original chained as __cause__). A PipelineError raised inside the chain
is passed through unchanged.
"""

from typing import Any, Optional

from langchain_core.messages import BaseMessage
from langchain_core.runnables import Runnable

from query_router.base.pipeline import BasePipeline, RetrievalPipeline, StructuredQueryPipeline
from query_router.errors import PipelineError
from query_router.models.query import Query
from query_router.models.result import PipelineResponse


class RunnablePipeline(BasePipeline):
    """
    Wraps a LangChain Runnable as a pipeline.

    Prefer the typed subclasses below so the dispatcher can tell the two
    pipelines apart.
    """

    def __init__(self, runnable: Runnable, name: Optional[str] = None):
        """
        Args:
            runnable: Any LangChain Runnable (chain, agent executor, RunnableLambda).
            name: Pipeline name reported in responses and errors.
                Defaults to the class name.
        """
        self._runnable = runnable
        self._name = name

    @property
    def name(self) -> str:
        return self._name or super().name

    def _build_input(self, query: Query) -> dict[str, Any]:
        return {
            "question": query.text,
            "customer_id": query.customer_id,
            "channel": query.channel,
        }

    def execute(self, query: Query) -> PipelineResponse:
        try:
            output = self._runnable.invoke(self._build_input(query))
        except PipelineError:
            raise
        except Exception as e:
            raise PipelineError(str(e) or type(e).__name__, pipeline=self.name) from e

        return self._to_response(output)

    def _to_response(self, output: Any) -> PipelineResponse:
        if isinstance(output, PipelineResponse):
            return output

        if isinstance(output, BaseMessage):
            content = output.content
            answer = content if isinstance(content, str) else str(content)
            return PipelineResponse(answer=answer, pipeline=self.name)

        if isinstance(output, str):
            return PipelineResponse(answer=output, pipeline=self.name)

        if isinstance(output, dict) and "answer" in output:
            extra = {k: v for k, v in output.items() if k not in ("answer", "sources")}
            return PipelineResponse(
                answer=str(output["answer"]),
                pipeline=self.name,
                sources=[str(s) for s in output.get("sources", [])],
                metadata=extra,
            )

        raise PipelineError(
            f"Unsupported pipeline output type: {type(output).__name__}",
            pipeline=self.name,
        )


class RunnableStructuredPipeline(RunnablePipeline, StructuredQueryPipeline):
    """A text-to-SQL Runnable exposed as the structured pipeline."""


class RunnableRetrievalPipeline(RunnablePipeline, RetrievalPipeline):
    """A RAG Runnable exposed as the retrieval pipeline."""
