"""Tests for PageRank and influence ranking."""

import pytest

from citenet.analysis.influence import (
    compute_pagerank,
    find_influential_papers,
    find_seminal_papers,
)
from citenet.core.models import Citation, CitationNetwork, Paper


def make_paper(paper_id: str, citation_count: int = 0, year: int = 2020) -> Paper:
    return Paper(
        id=paper_id,
        title=f"Paper {paper_id}",
        publication_year=year,
        citation_count=citation_count,
    )


def make_network(papers, edges) -> CitationNetwork:
    return CitationNetwork.from_records(papers, [Citation(source=s, target=t) for s, t in edges])


@pytest.mark.parametrize("iterations", [1, 2, 10, 100])
def test_pagerank_mass_is_conserved(iterations: int) -> None:
    # Every paper cites at least one loaded paper
    network = make_network(
        [make_paper(pid) for pid in "ABCD"],
        [("A", "B"), ("B", "C"), ("C", "A"), ("A", "C"), ("D", "A"), ("D", "B")],
    )
    ranks = compute_pagerank(network, iterations=iterations)
    assert sum(ranks.values()) == pytest.approx(1.0, abs=1e-6)


def test_pagerank_mass_leaks_through_uncited_sinks() -> None:
    # C cites nothing, so its rank is never passed on
    network = make_network([make_paper(pid) for pid in "ABC"], [("A", "B"), ("B", "C")])
    ranks = compute_pagerank(network)
    assert sum(ranks.values()) < 1.0


def test_pagerank_single_iteration_values() -> None:
    network = make_network([make_paper(pid) for pid in "ABC"], [("A", "B"), ("B", "C")])
    ranks = compute_pagerank(network, damping_factor=0.85, iterations=1)
    assert ranks["A"] == pytest.approx(0.05)
    assert ranks["B"] == pytest.approx(0.05 + 0.85 / 3)
    assert ranks["C"] == pytest.approx(0.05 + 0.85 / 3)


def test_pagerank_zero_iterations_is_uniform() -> None:
    network = make_network([make_paper(pid) for pid in "ABCD"], [("A", "B")])
    ranks = compute_pagerank(network, iterations=0)
    assert all(r == pytest.approx(0.25) for r in ranks.values())


def test_pagerank_is_idempotent() -> None:
    network = make_network(
        [make_paper(pid) for pid in "ABCDE"],
        [("A", "B"), ("C", "B"), ("D", "B"), ("B", "E"), ("E", "A")],
    )
    assert compute_pagerank(network) == compute_pagerank(network)


def test_pagerank_ignores_dangling_edges() -> None:
    network = make_network([make_paper("A"), make_paper("B")], [("A", "B"), ("A", "ghost"), ("ghost", "A")])
    ranks = compute_pagerank(network)
    assert set(ranks) == {"A", "B"}
    assert ranks["B"] > ranks["A"]


def test_pagerank_empty_network() -> None:
    assert compute_pagerank(CitationNetwork()) == {}


def test_pagerank_rejects_bad_parameters() -> None:
    network = make_network([make_paper("A")], [])
    with pytest.raises(ValueError):
        compute_pagerank(network, damping_factor=1.5)
    with pytest.raises(ValueError):
        compute_pagerank(network, iterations=-1)
    with pytest.raises(TypeError):
        compute_pagerank(None)


def test_influence_ranking() -> None:
    # B, C and D all cite A
    papers = [make_paper(pid) for pid in "BCDA"]
    network = make_network(papers, [("B", "A"), ("C", "A"), ("D", "A")])
    top = find_influential_papers(network, top_n=2)
    assert [p.id for p in top] == ["A", "B"]


def test_influence_ties_keep_insertion_order() -> None:
    network = make_network([make_paper(pid) for pid in "ZYX"], [])
    assert [p.id for p in find_influential_papers(network)] == ["Z", "Y", "X"]


def test_influence_uses_supplied_pagerank() -> None:
    network = make_network([make_paper(pid) for pid in "AB"], [])
    top = find_influential_papers(network, top_n=1, pagerank={"A": 0.1, "B": 0.9})
    assert top[0].id == "B"


def test_seminal_papers() -> None:
    papers = [
        make_paper("old-cited", citation_count=5, year=2010),
        make_paper("old-uncited", citation_count=0, year=2005),
        make_paper("recent", citation_count=500, year=2020),
        make_paper("older-more-cited", citation_count=50, year=2000),
        make_paper("borderline", citation_count=1, year=2014),
    ]
    network = make_network(papers, [])
    seminal = find_seminal_papers(network, min_age=10, current_year=2024)
    assert [p.id for p in seminal] == ["older-more-cited", "old-cited", "borderline"]
    assert len(find_seminal_papers(network, min_age=10, top_n=1, current_year=2024)) == 1
