"""Shortest paths and betweenness centrality over the citation graph.

Citations are traversed in both directions. Betweenness is approximated with a
single breadth-first shortest path per pair of papers rather than all
geodesics, so papers on one of several equally short routes may be credited
while the others are not.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from .cancellation import CancellationToken
from ..core.errors import AnalysisCancelledError, require_network
from ..core.graph import GraphIndex
from ..core.models import CentralityResult, CentralityStatus, CitationNetwork, Paper
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _bfs_parents(graph: GraphIndex, source: int, target: Optional[int] = None) -> List[int]:
    """Breadth-first parent pointers from ``source`` (-1 = unreached).

    Stops early once ``target`` is discovered.
    """
    parents = [-1] * len(graph)
    parents[source] = source
    queue = deque([source])
    while queue:
        current = queue.popleft()
        if current == target:
            break
        for neighbour in graph.neighbors[current]:
            if parents[neighbour] == -1:
                parents[neighbour] = current
                queue.append(neighbour)
    return parents


def _walk_back(parents: List[int], source: int, target: int) -> Optional[List[int]]:
    if parents[target] == -1:
        return None
    path = [target]
    while path[-1] != source:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def find_shortest_path(network: CitationNetwork, start: str, end: str) -> Optional[List[str]]:
    """Shortest chain of papers linking ``start`` to ``end``.

    Returns:
        Paper ids from ``start`` to ``end`` inclusive, or ``None`` when either
        paper is unknown or no path exists.
    """
    require_network(network)
    graph = GraphIndex.build(network)
    source = graph.index.get(start)
    target = graph.index.get(end)
    if source is None or target is None:
        return None
    path = _walk_back(_bfs_parents(graph, source, target), source, target)
    return [graph.ids[node] for node in path] if path is not None else None


def calculate_betweenness_centrality(
    network: CitationNetwork,
    token: Optional[CancellationToken] = None,
) -> CentralityResult:
    """Normalized betweenness centrality for every paper.

    For each unordered pair of papers one shortest path is taken and every
    strictly intermediate paper on it is credited once. Counts are divided by
    ``(N - 1)(N - 2) / 2``.

    This performs a breadth-first search per paper and walks a path per pair,
    which dominates the cost of a full analysis on large corpora. The token is
    polled before each source paper; if it fires, the returned result has no
    scores and reports why it stopped.
    """
    require_network(network)
    graph = GraphIndex.build(network)
    n = len(graph)
    counts = [0] * n

    for source in range(n):
        if token is not None:
            reason = token.check()
            if reason is not None:
                logger.warning(
                    "Betweenness centrality %s after %d/%d source papers",
                    reason.value, source, n,
                )
                return CentralityResult(status=reason, sources_processed=source, total_sources=n)
        # The BFS tree from ``source`` yields the same path for every later
        # target as a search stopping at that target.
        parents = _bfs_parents(graph, source)
        for target in range(source + 1, n):
            if parents[target] == -1:
                continue
            node = parents[target]
            while node != source:
                counts[node] += 1
                node = parents[node]

    norm = (n - 1) * (n - 2) / 2
    scores: Dict[str, float] = {
        graph.ids[i]: (counts[i] / norm if norm > 0 else 0.0) for i in range(n)
    }
    logger.debug("Betweenness centrality computed for %d papers", n)
    return CentralityResult(
        status=CentralityStatus.COMPLETE,
        scores=scores,
        sources_processed=n,
        total_sources=n,
    )


def find_bridge_papers(
    network: CitationNetwork,
    top_n: int = 20,
    token: Optional[CancellationToken] = None,
    centrality: Optional[CentralityResult] = None,
) -> List[Paper]:
    """Papers with the highest betweenness centrality.

    Raises:
        AnalysisCancelledError: the centrality computation was abandoned.
    """
    require_network(network)
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")
    result = centrality if centrality is not None else calculate_betweenness_centrality(network, token)
    if not result.is_complete:
        raise AnalysisCancelledError(result)
    ranked = sorted(network.papers.values(), key=lambda p: result.scores.get(p.id, 0.0), reverse=True)
    return ranked[:top_n]
