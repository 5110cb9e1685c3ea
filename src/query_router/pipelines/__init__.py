"""
Pipeline adapters and the query dispatcher.

Usage:
    from query_router.pipelines import QueryDispatcher, RunnableRetrievalPipeline
"""

from .dispatcher import QueryDispatcher
from .runnable import RunnablePipeline, RunnableRetrievalPipeline, RunnableStructuredPipeline

__all__ = [
    "QueryDispatcher",
    "RunnablePipeline",
    "RunnableStructuredPipeline",
    "RunnableRetrievalPipeline",
]
