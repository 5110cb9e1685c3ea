"""
Dispatch example: routing plus execution with LangChain runnables.

Both pipelines here are RunnableLambdas standing in for a real RAG chain
and a real text-to-SQL agent. Swap in your own chains; the dispatcher
only needs them to be Runnables.

Run:
    python examples/hybrid_dispatch.py
"""

from langchain_core.runnables import RunnableLambda

from query_router import (
    Query,
    QueryDispatcher,
    RuleBasedRouter,
    RunnableRetrievalPipeline,
    RunnableStructuredPipeline,
    load_rules,
)


def fake_sql_agent(inputs: dict) -> dict:
    return {
        "answer": f"(SQL) results for: {inputs['question']}",
        "sources": ["orders"],
        "sql": "SELECT month, AVG(total) FROM orders GROUP BY month",
    }


def fake_rag_chain(inputs: dict) -> str:
    return f"(RAG) answer for: {inputs['question']}"


def main():
    dispatcher = QueryDispatcher(
        router=RuleBasedRouter(load_rules("examples/support_rules.json")),
        structured=RunnableStructuredPipeline(RunnableLambda(fake_sql_agent), name="orders_db"),
        retrieval=RunnableRetrievalPipeline(RunnableLambda(fake_rag_chain), name="help_center"),
    )

    queries = [
        Query(text="Average order value by month"),
        Query(text="How do I change my shipping address?", channel="email"),
        Query(text="How many orders look similar to this one?"),
    ]

    for query in queries:
        result = dispatcher.dispatch(query)
        print(f"\nQ: {query.text}")
        print(f"   Target: {result.decision.target.value} ({result.decision.confidence:.2f})")
        for target, response in result.responses.items():
            print(f"   [{target}] {response.answer}")


if __name__ == "__main__":
    main()
