"""Unit tests for label propagation community detection."""

import random

import networkx as nx
import pytest

from citenet.analysis.communities import (
    DeterministicStrategy,
    PropagationStrategy,
    RandomizedStrategy,
    calculate_cohesion,
    detect_communities,
)
from citenet.core.graph import GraphIndex
from citenet.core.models import Author, Citation, CitationNetwork, Paper


def make_paper(paper_id: str, year: int = 2020, topics=None, authors=None) -> Paper:
    return Paper(
        id=paper_id,
        title=f"Paper {paper_id}",
        publication_year=year,
        topics=topics or [],
        authors=[Author(id=a, name=a.upper()) for a in (authors or [])],
    )


def make_network(papers, edges) -> CitationNetwork:
    return CitationNetwork.from_records(papers, [Citation(source=s, target=t) for s, t in edges])


def random_network(seed: int, n: int = 40, m: int = 80) -> CitationNetwork:
    rng = random.Random(seed)
    ids = [f"p{i:02d}" for i in range(n)]
    edges = []
    for _ in range(m):
        a, b = rng.sample(ids, 2)
        edges.append((a, b))
    return make_network([make_paper(pid) for pid in ids], edges)


class TestDetectCommunities:

    def test_two_triangles(self) -> None:
        papers = [make_paper(pid) for pid in "abcdefghi"]
        edges = [
            ("a", "b"), ("b", "c"), ("c", "a"),
            ("d", "e"), ("e", "f"), ("f", "d"),
            ("g", "h"),
        ]
        communities = detect_communities(make_network(papers, edges))
        assert [sorted(c.papers) for c in communities] == [["a", "b", "c"], ["d", "e", "f"]]
        assert [c.id for c in communities] == ["community-1", "community-2"]
        assert all(c.cohesion == pytest.approx(1.0) for c in communities)

    def test_star_has_zero_cohesion(self) -> None:
        papers = [make_paper(pid) for pid in ["hub", "x", "y", "z"]]
        communities = detect_communities(make_network(papers, [("x", "hub"), ("y", "hub"), ("z", "hub")]))
        assert len(communities) == 1
        assert communities[0].size == 4
        assert communities[0].cohesion == 0.0

    def test_metadata_aggregation(self) -> None:
        papers = [
            make_paper("a", 2018, ["graphs", "ml"], ["ann"]),
            make_paper("b", 2019, ["graphs"], ["bob", "ann"]),
            make_paper("c", 2020, ["graphs", "nlp"], ["cat"]),
        ]
        communities = detect_communities(make_network(papers, [("a", "b"), ("b", "c"), ("c", "a")]))
        community = communities[0]
        assert community.name == "graphs"
        assert community.topics == ["graphs", "ml", "nlp"]
        assert community.authors == ["ann", "bob", "cat"]
        assert community.growth == pytest.approx(1.0)

    def test_topics_limited_to_five(self) -> None:
        topics = [f"t{i}" for i in range(8)]
        papers = [make_paper(pid, topics=topics) for pid in "abc"]
        communities = detect_communities(make_network(papers, [("a", "b"), ("b", "c")]))
        assert len(communities[0].topics) == 5

    def test_min_size_invariant(self) -> None:
        for seed in range(5):
            for community in detect_communities(random_network(seed)):
                assert community.size >= 3
                assert len(community.papers) == community.size
                assert 0.0 <= community.cohesion <= 1.0

    def test_papers_belong_to_one_community(self) -> None:
        communities = detect_communities(random_network(3))
        seen = [pid for c in communities for pid in c.papers]
        assert len(seen) == len(set(seen))

    def test_sorted_by_size(self) -> None:
        sizes = [c.size for c in detect_communities(random_network(11, n=60, m=70))]
        assert sizes == sorted(sizes, reverse=True)

    def test_deterministic_by_default(self) -> None:
        network = random_network(21)
        assert detect_communities(network) == detect_communities(network)

    def test_randomized_seed_reproducible(self) -> None:
        network = random_network(4)
        first = detect_communities(network, RandomizedStrategy(seed=42))
        second = detect_communities(network, RandomizedStrategy(seed=42))
        assert first == second

    def test_custom_strategy(self) -> None:
        class ReverseOrder(PropagationStrategy):
            def __init__(self) -> None:
                self.sweeps = 0

            def order(self, node_count, iteration):
                self.sweeps += 1
                return range(node_count - 1, -1, -1)

            def pick(self, candidates, ids):
                return max(candidates, key=lambda label: ids[label])

        strategy = ReverseOrder()
        papers = [make_paper(pid) for pid in "abc"]
        communities = detect_communities(make_network(papers, [("a", "b"), ("b", "c"), ("c", "a")]), strategy)
        assert strategy.sweeps >= 1
        assert len(communities) == 1

    def test_iteration_cap(self) -> None:
        papers = [make_paper(pid) for pid in "abc"]
        network = make_network(papers, [("a", "b"), ("b", "c")])
        # No sweep at all leaves every paper alone
        assert detect_communities(network, max_iterations=0) == []

    def test_empty_network(self) -> None:
        assert detect_communities(CitationNetwork()) == []


class TestCohesion:

    def test_matches_networkx_clustering(self) -> None:
        network = random_network(8, n=30, m=70)
        G = nx.Graph()
        G.add_nodes_from(network.papers)
        G.add_edges_from((c.source, c.target) for c in network.citations if c.source != c.target)
        for community in detect_communities(network):
            eligible = [pid for pid in community.papers if G.degree(pid) >= 2]
            expected = sum(nx.clustering(G, pid) for pid in eligible) / len(eligible) if eligible else 0.0
            assert community.cohesion == pytest.approx(expected)

    def test_low_degree_nodes_excluded(self) -> None:
        # triangle a-b-c plus pendant d on a: a has 3 neighbours, one link among them
        network = make_network(
            [make_paper(pid) for pid in "abcd"],
            [("a", "b"), ("b", "c"), ("c", "a"), ("d", "a")],
        )
        graph = GraphIndex.build(network)
        cohesion = calculate_cohesion(graph, [graph.index[p] for p in "abcd"])
        assert cohesion == pytest.approx((1 / 3 + 1 + 1) / 3)

    def test_no_eligible_nodes(self) -> None:
        network = make_network([make_paper(pid) for pid in "ab"], [("a", "b")])
        graph = GraphIndex.build(network)
        assert calculate_cohesion(graph, [0, 1]) == 0.0


def test_deterministic_strategy_tie_break() -> None:
    strategy = DeterministicStrategy()
    assert strategy.pick([2, 0, 1], ["b", "c", "a"]) == 2
    assert list(strategy.order(3, 0)) == [0, 1, 2]
