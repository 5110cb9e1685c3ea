"""Tests for weighted rule routing: synthetic rule sets, no pipelines."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from query_router.errors import ConfigurationError, InvalidInputError
from query_router.models.query import Query, RouteTarget
from query_router.models.rule import RoutingRule
from query_router.query.routing import NO_MATCH_TAG, TIE_TAG, RuleBasedRouter, route


def _rule(name, keywords, target, weight=1.0):
    return RoutingRule(name=name, keywords=keywords, target=target, weight=weight)


class TestRouteExamples:
    """The worked examples: one aggregation rule, one similarity rule."""

    def test_aggregation_routes_structured(self, two_rules):
        decision = route(Query(text="Average order value by month"), two_rules)
        assert decision.target == RouteTarget.STRUCTURED
        assert decision.confidence == 1.0
        assert decision.rationale == ("aggregation",)

    def test_similarity_routes_retrieval(self, two_rules):
        decision = route(Query(text="Find products similar to this review"), two_rules)
        assert decision.target == RouteTarget.RETRIEVAL
        assert decision.confidence == 1.0
        assert decision.rationale == ("similar-to",)

    def test_no_match_routes_both(self, two_rules):
        decision = route(Query(text="hello"), two_rules)
        assert decision.target == RouteTarget.BOTH
        assert decision.confidence == 0.0
        assert decision.rationale == (NO_MATCH_TAG,)
        assert decision.matched_rules == ()

    def test_accepts_plain_string(self, two_rules):
        decision = route("Average order value by month", two_rules)
        assert decision.target == RouteTarget.STRUCTURED


class TestInputValidation:

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_query_rejected(self, two_rules, text):
        with pytest.raises(InvalidInputError):
            route(Query(text=text), two_rules)

    def test_empty_query_checked_before_rules(self):
        """Empty text is an input error even when the rules are also bad."""
        with pytest.raises(InvalidInputError):
            route("", [])

    def test_non_query_rejected(self, two_rules):
        with pytest.raises(InvalidInputError):
            route(42, two_rules)

    def test_invalid_input_is_value_error(self, two_rules):
        with pytest.raises(ValueError):
            route(" ", two_rules)


class TestConfigurationValidation:

    def test_empty_rule_list(self):
        with pytest.raises(ConfigurationError):
            route("Average order value", [])

    def test_none_rules(self):
        with pytest.raises(ConfigurationError):
            route("Average order value", None)

    def test_duplicate_names(self, aggregation_rule):
        with pytest.raises(ConfigurationError, match="duplicate rule name"):
            RuleBasedRouter([aggregation_rule, aggregation_rule])

    def test_non_iterable_rules(self):
        with pytest.raises(ConfigurationError, match="must be a sequence"):
            route("Average order value", 5)

    def test_infinite_weight_rejected(self):
        with pytest.raises(ConfigurationError):
            route("alpha beta", [
                {"name": "a", "keywords": ["alpha"], "target": "structured", "weight": float("inf")},
                {"name": "b", "keywords": ["beta"], "target": "retrieval"},
            ])

    def test_malformed_rule_dicts(self):
        with pytest.raises(ConfigurationError):
            RuleBasedRouter([{"name": "bad", "keywords": ["x"], "target": "both"}])

    def test_rule_dicts_accepted(self):
        router = RuleBasedRouter([{"name": "how-to", "keywords": ["how do i"], "target": "retrieval"}])
        assert router.route("How do I return an item?").target == RouteTarget.RETRIEVAL

    def test_router_validates_at_construction(self):
        with pytest.raises(ConfigurationError):
            RuleBasedRouter([])


class TestScoring:

    def test_tie_routes_both(self, two_rules):
        decision = route("How many orders are similar to this one?", two_rules)
        assert decision.target == RouteTarget.BOTH
        assert decision.confidence == 0.5
        assert decision.rationale == (TIE_TAG,)
        assert sorted(decision.matched_rules) == ["aggregation", "similar-to"]

    def test_tie_with_float_weights(self):
        rules = [
            _rule("a", ["alpha"], "structured", 0.1),
            _rule("b", ["beta"], "structured", 0.2),
            _rule("c", ["gamma"], "retrieval", 0.3),
        ]
        decision = route("alpha beta gamma", rules)
        assert decision.target == RouteTarget.BOTH
        assert decision.rationale == (TIE_TAG,)

    def test_higher_score_wins_with_share_as_confidence(self):
        rules = [
            _rule("aggregation", ["average"], "structured", 3.0),
            _rule("similar-to", ["similar to"], "retrieval", 1.0),
        ]
        decision = route("Average rating of products similar to this one", rules)
        assert decision.target == RouteTarget.STRUCTURED
        assert decision.confidence == pytest.approx(0.75)
        assert decision.scores == {"structured": 3.0, "retrieval": 1.0}

    def test_weights_accumulate_per_target(self):
        rules = [
            _rule("similar-to", ["similar to"], "retrieval", 2.0),
            _rule("aggregation", ["average"], "structured", 1.5),
            _rule("by-month", ["by month"], "structured", 1.0),
        ]
        decision = route("Average spend by month for accounts similar to mine", rules)
        assert decision.target == RouteTarget.STRUCTURED
        assert decision.confidence == pytest.approx(2.5 / 4.5)

    def test_rationale_lists_all_matches_by_weight_then_name(self):
        rules = [
            _rule("zeta", ["total"], "structured", 1.0),
            _rule("alpha", ["total"], "structured", 1.0),
            _rule("heavy", ["refunds"], "structured", 2.0),
            _rule("loser", ["like"], "retrieval", 0.5),
            _rule("unmatched", ["nothing here"], "retrieval", 5.0),
        ]
        decision = route("Total refunds, like last time", rules)
        assert decision.rationale == ("heavy", "alpha", "zeta", "loser")
        assert decision.matched_rules == decision.rationale

    def test_confidence_always_in_range(self, two_rules):
        for text in ["hello", "average", "similar to", "average similar to", "by month similar to x"]:
            decision = route(text, two_rules)
            assert 0.0 <= decision.confidence <= 1.0
            assert decision.target in set(RouteTarget)


class TestRuleBasedRouter:

    def setup_method(self):
        self.router = RuleBasedRouter([
            _rule("aggregation", ["average", "total"], "structured"),
            _rule("similar-to", ["similar to"], "retrieval"),
            RoutingRule(name="email", kind="metadata", field="channel", values=["email"],
                        target="retrieval", weight=0.5),
        ])

    def test_exposes_rule_set(self):
        assert len(self.router.rules) == 3

    def test_deterministic(self):
        query = Query(text="Total spend for customers similar to me", channel="email")
        decisions = [self.router.route(query) for _ in range(5)]
        assert all(d == decisions[0] for d in decisions)

    def test_metadata_rule_votes(self):
        decision = self.router.route(Query(text="Total refunds", channel="email"))
        assert decision.target == RouteTarget.STRUCTURED
        assert decision.confidence == pytest.approx(1.0 / 1.5)
        assert decision.rationale == ("aggregation", "email")

    def test_metadata_only_match(self):
        decision = self.router.route(Query(text="hello there", channel="email"))
        assert decision.target == RouteTarget.RETRIEVAL
        assert decision.rationale == ("email",)

    def test_case_insensitive(self):
        upper = self.router.route("AVERAGE ORDER VALUE")
        lower = self.router.route("average order value")
        assert upper.target == lower.target == RouteTarget.STRUCTURED

    def test_same_result_as_functional_route(self, two_rules):
        router = RuleBasedRouter(two_rules)
        for text in ["Average order value by month", "hello", "similar to average"]:
            assert router.route(text) == route(text, two_rules)

    def test_shared_router_across_threads(self):
        queries = [
            Query(text="Total spend for customers similar to me", channel="email"),
            Query(text="Total refunds", channel="email"),
            Query(text="hello there", channel="email"),
            Query(text="Average order value"),
            Query(text="Find items similar to this one"),
            Query(text="hello"),
        ] * 50
        expected = [self.router.route(q) for q in queries]

        with ThreadPoolExecutor(max_workers=8) as pool:
            actual = list(pool.map(self.router.route, queries))

        assert actual == expected
