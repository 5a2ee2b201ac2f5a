"""Integer-indexed view of a citation network.

The analysis components never walk ``Paper`` objects while iterating; they
work on a ``GraphIndex`` where each paper is a position ``0..N-1`` (insertion
order of ``CitationNetwork.papers``) and adjacency is stored as plain lists of
positions.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .errors import require_network
from .models import CitationNetwork
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GraphIndex:
    """Arena of node indices with directed and undirected adjacency.

    Attributes:
        ids: position -> paper id.
        index: paper id -> position.
        out_degree: number of loaded citations made by each paper. Repeated
            edges count once per occurrence.
        incoming: for each paper, positions of the papers citing it, one
            entry per citation edge.
        neighbors: undirected adjacency. Distinct neighbours in the order the
            edges were first seen, self-citations excluded.
        edge_count: citation edges kept.
        dropped_edges: citation edges ignored because an endpoint is unknown.
    """

    ids: List[str]
    index: Dict[str, int]
    out_degree: List[int]
    incoming: List[List[int]]
    neighbors: List[List[int]]
    edge_count: int = 0
    dropped_edges: int = 0
    _neighbor_sets: List[frozenset] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def build(cls, network: CitationNetwork) -> "GraphIndex":
        require_network(network)
        ids = list(network.papers.keys())
        index = {paper_id: i for i, paper_id in enumerate(ids)}
        n = len(ids)
        out_degree = [0] * n
        incoming: List[List[int]] = [[] for _ in range(n)]
        neighbors: List[List[int]] = [[] for _ in range(n)]
        seen: List[set] = [set() for _ in range(n)]
        kept = 0
        dropped = 0

        for citation in network.citations:
            src = index.get(citation.source)
            dst = index.get(citation.target)
            if src is None or dst is None:
                dropped += 1
                continue
            kept += 1
            out_degree[src] += 1
            incoming[dst].append(src)
            if src == dst:
                continue
            if dst not in seen[src]:
                seen[src].add(dst)
                neighbors[src].append(dst)
            if src not in seen[dst]:
                seen[dst].add(src)
                neighbors[dst].append(src)

        if dropped:
            logger.debug("Ignored %d citation edges with unknown endpoints", dropped)

        return cls(
            ids=ids,
            index=index,
            out_degree=out_degree,
            incoming=incoming,
            neighbors=neighbors,
            edge_count=kept,
            dropped_edges=dropped,
            _neighbor_sets=[frozenset(s) for s in seen],
        )

    def __len__(self) -> int:
        return len(self.ids)

    def degree(self, node: int) -> int:
        return len(self.neighbors[node])

    def adjacent(self, a: int, b: int) -> bool:
        return b in self._neighbor_sets[a]
