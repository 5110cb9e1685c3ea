"""
Query dispatch: route, then call the chosen pipeline(s).

    dispatcher = QueryDispatcher(
        router=RuleBasedRouter(load_rule_set()),
        structured=RunnableStructuredPipeline(sql_agent),
        retrieval=RunnableRetrievalPipeline(rag_chain),
    )
    result = dispatcher.dispatch("Average order value by month")
    result.decision.target            # RouteTarget.STRUCTURED
    result.responses["structured"]    # PipelineResponse

For a BOTH decision the structured pipeline runs first, then retrieval,
and both responses are returned side by side. Combining them is up to
the caller.

Pipeline errors are never swallowed or rewrapped: the dispatcher logs
them and re-raises the same exception object.
"""

from typing import Union

from loguru import logger

from query_router.base.pipeline import BasePipeline, RetrievalPipeline, StructuredQueryPipeline
from query_router.base.router import BaseRouter
from query_router.errors import PipelineError
from query_router.models.query import Query, RouteTarget
from query_router.models.result import DispatchResult, PipelineResponse
from query_router.query.routing import as_query


class QueryDispatcher:
    """
    Sends each query to the pipeline(s) its RouteDecision names.

    Stateless between calls: holds only the router and the two
    pipelines it was built with.
    """

    def __init__(
        self,
        router: BaseRouter,
        structured: StructuredQueryPipeline,
        retrieval: RetrievalPipeline,
    ):
        """
        Args:
            router: Produces the RouteDecision for each query.
            structured: Pipeline for STRUCTURED (and BOTH) decisions.
            retrieval: Pipeline for RETRIEVAL (and BOTH) decisions.
        """
        self._router = router
        self._pipelines: dict[RouteTarget, BasePipeline] = {
            RouteTarget.STRUCTURED: structured,
            RouteTarget.RETRIEVAL: retrieval,
        }

    def dispatch(self, query: Union[Query, str]) -> DispatchResult:
        """
        Route a query and execute it.

        Args:
            query: The incoming Query, or its raw text.

        Returns:
            DispatchResult with the decision and one response per pipeline called.

        Raises:
            InvalidInputError: Empty query text.
            PipelineError: Whatever a pipeline raised, unmodified.
        """
        query = as_query(query)
        decision = self._router.route(query)

        if decision.target == RouteTarget.BOTH:
            targets = [RouteTarget.STRUCTURED, RouteTarget.RETRIEVAL]
        else:
            targets = [decision.target]

        responses = {}
        for target in targets:
            responses[target.value] = self._execute(target, query)

        return DispatchResult(query=query, decision=decision, responses=responses)

    def _execute(self, target: RouteTarget, query: Query) -> PipelineResponse:
        pipeline = self._pipelines[target]
        try:
            return pipeline.execute(query)
        except PipelineError as e:
            logger.warning(f"{target.value} pipeline {pipeline.name} failed: {e}")
            raise
