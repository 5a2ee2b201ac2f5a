"""Tabular and graph views of a network for downstream tools.

``to_networkx`` produces a directed graph suitable for GraphML export and
visualization; ``rankings_frame`` flattens per-paper metrics into a pandas
DataFrame (one row per paper) for CSV export.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import networkx as nx  # type: ignore
import pandas as pd  # type: ignore

from ..core.models import CitationNetwork, AnalysisReport
from ..utils.logging import get_logger

logger = get_logger(__name__)


def to_networkx(network: CitationNetwork) -> nx.DiGraph:
    """Directed citation graph. Edges with unknown endpoints are left out.

    Repeated citations between the same pair are represented by a
    ``weight`` edge attribute.
    """
    G = nx.DiGraph()
    for paper in network.papers.values():
        G.add_node(
            paper.id,
            title=paper.title,
            year=paper.publication_year,
            citation_count=paper.citation_count,
            topics="; ".join(paper.topics),
        )
    for citation in network.citations:
        citing, cited = citation.source, citation.target
        if citing not in network.papers or cited not in network.papers:
            continue
        if G.has_edge(citing, cited):
            G[citing][cited]["weight"] += 1
        else:
            G.add_edge(citing, cited, weight=1)
    logger.debug("Built networkx graph with %d nodes and %d edges", G.number_of_nodes(), G.number_of_edges())
    return G


def write_graphml(network: CitationNetwork, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    nx.write_graphml(to_networkx(network), str(path))
    return path


def rankings_frame(
    network: CitationNetwork,
    pagerank: Dict[str, float],
    centrality: Optional[Dict[str, float]] = None,
) -> pd.DataFrame:
    """Per-paper metrics sorted by PageRank with a 1-based ``rank`` column.

    Columns: rank, paper_id, title, year, citation_count, in_degree,
    pagerank, betweenness.
    """
    in_degree: Dict[str, int] = {}
    for citation in network.citations:
        if citation.source in network.papers and citation.target in network.papers:
            in_degree[citation.target] = in_degree.get(citation.target, 0) + 1

    columns = ["paper_id", "title", "year", "citation_count", "in_degree", "pagerank", "betweenness"]
    records = [
        {
            "paper_id": p.id,
            "title": p.title,
            "year": p.publication_year,
            "citation_count": p.citation_count,
            "in_degree": in_degree.get(p.id, 0),
            "pagerank": pagerank.get(p.id, 0.0),
            "betweenness": (centrality or {}).get(p.id, 0.0),
        }
        for p in network.papers.values()
    ]
    df = pd.DataFrame(records, columns=columns)
    df = df.sort_values(by="pagerank", ascending=False, kind="stable").reset_index(drop=True)
    df.insert(0, "rank", df.index + 1)
    return df


def report_frame(network: CitationNetwork, report: AnalysisReport) -> pd.DataFrame:
    """Rankings for a finished analysis run."""
    scores = report.centrality.scores if report.centrality.is_complete else None
    return rankings_frame(network, report.pagerank, scores)
