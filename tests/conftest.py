"""
Shared test fixtures for the query-router test suite.

Provides reusable fixtures: synthetic rule sets, queries, stub pipelines.
"""

from unittest.mock import MagicMock

import pytest
from loguru import logger

from query_router.base.pipeline import RetrievalPipeline, StructuredQueryPipeline
from query_router.models.query import Query
from query_router.models.result import PipelineResponse
from query_router.models.rule import RoutingRule, RuleKind, RuleSet


# ---------------------------------------------------------------------------
# Rule fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def aggregation_rule():
    return RoutingRule(
        name="aggregation",
        kind=RuleKind.KEYWORD,
        keywords=("average", "total", "how many", "by month"),
        target="structured",
        weight=1,
    )


@pytest.fixture
def similarity_rule():
    return RoutingRule(
        name="similar-to",
        kind=RuleKind.KEYWORD,
        keywords=("similar to",),
        target="retrieval",
        weight=1,
    )


@pytest.fixture
def two_rules(aggregation_rule, similarity_rule):
    """The two-rule set from the routing examples: one vote per pipeline."""
    return [aggregation_rule, similarity_rule]


@pytest.fixture
def rule_set(two_rules):
    return RuleSet(rules=tuple(two_rules))


# ---------------------------------------------------------------------------
# Query fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def structured_query():
    return Query(text="Average order value by month", customer_id="c-42", channel="chat")


@pytest.fixture
def retrieval_query():
    return Query(text="Find products similar to this review")


# ---------------------------------------------------------------------------
# Pipeline fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_structured_pipeline():
    """A StructuredQueryPipeline stand-in that returns a canned answer."""
    pipeline = MagicMock(spec=StructuredQueryPipeline)
    pipeline.name = "orders_db"
    pipeline.execute.return_value = PipelineResponse(
        answer="Average order value was $52.10 in March.",
        pipeline="orders_db",
        sources=["orders"],
    )
    return pipeline


@pytest.fixture
def mock_retrieval_pipeline():
    """A RetrievalPipeline stand-in that returns a canned answer."""
    pipeline = MagicMock(spec=RetrievalPipeline)
    pipeline.name = "help_center"
    pipeline.execute.return_value = PipelineResponse(
        answer="Here are three similar reviews.",
        pipeline="help_center",
        sources=["reviews.md"],
    )
    return pipeline


# ---------------------------------------------------------------------------
# Logging fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def log_messages():
    """Collects loguru output (INFO and up) for the duration of a test."""
    messages = []
    sink_id = logger.add(messages.append, level="INFO", format="{level} {message}")
    yield messages
    logger.remove(sink_id)
