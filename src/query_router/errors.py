"""
Exceptions raised by the query router.

Only two kinds originate here, InvalidInputError and ConfigurationError,
and both mean the caller has to fix something (the query or the rule set).
PipelineError belongs to the collaborators: pipelines raise it, and the
router and dispatcher let it propagate untouched.
"""

from typing import Optional


class QueryRouterError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(QueryRouterError, ValueError):
    """The query text is empty or whitespace-only."""


class ConfigurationError(QueryRouterError):
    """The rule set is empty, malformed, or could not be loaded."""


class PipelineError(QueryRouterError):
    """
    Failure reported by a downstream pipeline.

    Args:
        message: What went wrong (schema mapping, execution, retrieval...).
        pipeline: Name of the pipeline that failed, if known.
    """

    def __init__(self, message: str, pipeline: Optional[str] = None):
        super().__init__(message)
        self.pipeline = pipeline

    def __str__(self) -> str:
        message = super().__str__()
        if self.pipeline:
            return f"[{self.pipeline}] {message}"
        return message
