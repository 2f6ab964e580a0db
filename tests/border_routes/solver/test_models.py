import pytest

from border_routes.solver import Frontier, Route, RouteSearchResult, SearchSide, SearchState


@pytest.mark.unit
class TestRoute:

    def test_extend_returns_new_route(self):
        route = Route.of("A", "B")
        longer = route.extend("C")

        assert route.nodes == ("A", "B")
        assert longer.nodes == ("A", "B", "C")
        assert longer.tail == "C"
        assert longer.hops == 2

    def test_join_reverses_backward_route(self):
        forward = Route.of("A", "B", "M")
        backward = Route.of("D", "C", "M")

        assert forward.join(backward).as_list() == ["A", "B", "M", "C", "D"]

    def test_join_requires_shared_tail(self):
        with pytest.raises(ValueError, match="do not meet"):
            Route.of("A", "B").join(Route.of("D", "C"))

    def test_empty_route_rejected(self):
        with pytest.raises(ValueError):
            Route(())

    def test_routes_are_hashable_values(self):
        assert Route.of("A", "B") == Route.of("A", "B")
        assert len({Route.of("A", "B"), Route.of("A", "B")}) == 1


@pytest.mark.unit
class TestFrontier:

    def test_seed(self):
        frontier = Frontier.seed(SearchSide.BACKWARD, "D")

        assert frontier.routes == (Route.of("D"),)
        assert frontier.visited == frozenset({"D"})
        assert frontier.depth == 0

    def test_tails_are_distinct_and_ordered(self):
        frontier = Frontier(
            side=SearchSide.FORWARD,
            routes=(Route.of("A", "B", "M"), Route.of("A", "C", "M"), Route.of("A", "C", "N")),
            visited=frozenset({"A", "B", "C"}),
        )

        assert frontier.tails() == ["M", "N"]

    def test_advance_prunes_visited_and_same_round_tails(self):
        frontier = Frontier(
            side=SearchSide.FORWARD,
            routes=(Route.of("A", "B"), Route.of("A", "C")),
            visited=frozenset({"A"}),
        )
        adjacency = {"B": frozenset({"A", "C", "D"}), "C": frozenset({"A", "B", "D"})}

        advanced = frontier.advance(adjacency)

        assert advanced.routes == (Route.of("A", "B", "D"), Route.of("A", "C", "D"))
        assert advanced.visited == frozenset({"A", "B", "C"})
        assert advanced.depth == 2
        # The original frontier is untouched
        assert frontier.visited == frozenset({"A"})

    def test_advance_to_nothing(self):
        frontier = Frontier.seed(SearchSide.FORWARD, "ISL")

        advanced = frontier.advance({"ISL": frozenset()})

        assert advanced.is_exhausted()
        assert advanced.depth == -1

    def test_side_opposite(self):
        assert SearchSide.FORWARD.opposite is SearchSide.BACKWARD
        assert SearchSide.BACKWARD.opposite is SearchSide.FORWARD


@pytest.mark.unit
def test_result_without_routes_has_no_hop_count():
    result = RouteSearchResult(ok=True, query_count=3, state=SearchState.EXHAUSTED)

    assert result.hop_count is None
    assert result.route_lists() == []
