"""
Abstract base classes for routers and pipelines.

Usage:
    from query_router.base import BaseRouter, RetrievalPipeline, StructuredQueryPipeline
"""

from .pipeline import BasePipeline, RetrievalPipeline, StructuredQueryPipeline
from .router import BaseRouter

__all__ = [
    "BaseRouter",
    "BasePipeline",
    "StructuredQueryPipeline",
    "RetrievalPipeline",
]
