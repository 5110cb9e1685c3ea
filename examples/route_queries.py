"""
Routing example: which pipeline gets which question.

Shows how the built-in customer-support rules split questions between
the text-to-SQL pipeline and the RAG pipeline:
    - Aggregations, lookups, rankings   → structured
    - How-to, troubleshooting, similar  → retrieval
    - Ties and unmatched questions      → both

Run:
    python examples/route_queries.py
"""

from query_router import RuleBasedRouter, load_rule_set


def main():
    router = RuleBasedRouter(load_rule_set())

    queries = [
        "Average order value by month",
        "What is the status of order #48213?",
        "Top 10 customers by lifetime spend",
        "How do I reset my password?",
        "The mobile app crashes when I upload a photo",
        "Find tickets similar to this complaint",
        "How many tickets are similar to this one?",
        "hello",
    ]

    for query in queries:
        decision = router.route(query)
        print(f"\nQ: {query}")
        print(f"   Target:     {decision.target.value}")
        print(f"   Confidence: {decision.confidence:.2f}")
        print(f"   Rationale:  {', '.join(decision.rationale)}")


if __name__ == "__main__":
    main()
