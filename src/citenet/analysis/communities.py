"""Research community detection via label propagation.

Every paper starts in its own community (labelled with its own id) and
repeatedly adopts the label most common among its neighbours in the
undirected citation graph. Labels are updated in place during a sweep, so the
visiting order and the rule used to break ties between equally frequent
labels decide the final partition. Both are supplied by a
:class:`PropagationStrategy`:

* :class:`DeterministicStrategy` (default) visits papers in insertion order and
  resolves ties with the lowest label id, giving reproducible partitions.
* :class:`RandomizedStrategy` shuffles the order every sweep and keeps the
  first label encountered among the tied ones.
"""

from __future__ import annotations

import random
from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..core.errors import require_network
from ..core.graph import GraphIndex
from ..core.models import CitationNetwork, Community
from ..utils.logging import get_logger

logger = get_logger(__name__)

MAX_ITERATIONS = 100
MIN_COMMUNITY_SIZE = 3
TOP_TOPICS = 5


class PropagationStrategy:
    """Visiting order and tie-break rule for label propagation."""

    def order(self, node_count: int, iteration: int) -> Sequence[int]:
        raise NotImplementedError

    def pick(self, candidates: List[int], ids: Sequence[str]) -> int:
        """Choose one label among ``candidates`` (tied, in first-encountered order)."""
        raise NotImplementedError


class DeterministicStrategy(PropagationStrategy):
    """Insertion order; ties go to the lexicographically smallest paper id."""

    def order(self, node_count: int, iteration: int) -> Sequence[int]:
        return range(node_count)

    def pick(self, candidates: List[int], ids: Sequence[str]) -> int:
        return min(candidates, key=lambda label: ids[label])


class RandomizedStrategy(PropagationStrategy):
    """Shuffled order each sweep; ties go to the first label encountered."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def order(self, node_count: int, iteration: int) -> Sequence[int]:
        nodes = list(range(node_count))
        self._rng.shuffle(nodes)
        return nodes

    def pick(self, candidates: List[int], ids: Sequence[str]) -> int:
        return candidates[0]


def propagate_labels(
    graph: GraphIndex,
    strategy: PropagationStrategy,
    max_iterations: int = MAX_ITERATIONS,
) -> List[int]:
    """Run label propagation and return the final label (a node index) per node."""
    labels = list(range(len(graph)))
    for iteration in range(max_iterations):
        changed = False
        for node in strategy.order(len(graph), iteration):
            neighbours = graph.neighbors[node]
            if not neighbours:
                continue
            # Counter keeps first-encountered order for equal counts
            counts = Counter(labels[other] for other in neighbours)
            best = max(counts.values())
            tied = [label for label, count in counts.items() if count == best]
            new_label = tied[0] if len(tied) == 1 else strategy.pick(tied, graph.ids)
            if new_label != labels[node]:
                labels[node] = new_label
                changed = True
        if not changed:
            logger.debug("Label propagation converged after %d iterations", iteration + 1)
            break
    else:
        logger.debug("Label propagation stopped at the %d iteration cap", max_iterations)
    return labels


def calculate_cohesion(graph: GraphIndex, members: Sequence[int]) -> float:
    """Average local clustering coefficient over members with degree >= 2.

    Members with fewer than two neighbours are left out of the average rather
    than counted as zero. Neighbours outside ``members`` are included in each
    coefficient.
    """
    total = 0.0
    counted = 0
    for node in members:
        neighbours = graph.neighbors[node]
        degree = len(neighbours)
        if degree < 2:
            continue
        links = 0
        for i in range(degree):
            for j in range(i + 1, degree):
                if graph.adjacent(neighbours[i], neighbours[j]):
                    links += 1
        total += links / (degree * (degree - 1) / 2)
        counted += 1
    return total / counted if counted else 0.0


def detect_communities(
    network: CitationNetwork,
    strategy: Optional[PropagationStrategy] = None,
    max_iterations: int = MAX_ITERATIONS,
    min_size: int = MIN_COMMUNITY_SIZE,
) -> List[Community]:
    """Partition the citation graph into communities.

    Args:
        network: Citation network; edges are treated as undirected.
        strategy: Ordering/tie-break rule. Defaults to :class:`DeterministicStrategy`.
        max_iterations: Sweep cap; propagation stops earlier once no label changes.
        min_size: Groups with fewer papers are discarded.

    Returns:
        Communities sorted by size, largest first.
    """
    require_network(network)
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")
    graph = GraphIndex.build(network)
    if len(graph) == 0:
        return []

    labels = propagate_labels(graph, strategy or DeterministicStrategy(), max_iterations)

    groups: Dict[int, List[int]] = {}
    for node, label in enumerate(labels):
        groups.setdefault(label, []).append(node)

    papers = network.papers
    kept = [members for members in groups.values() if len(members) >= min_size]
    kept.sort(key=len, reverse=True)

    communities: List[Community] = []
    for number, members in enumerate(kept, 1):
        paper_ids = [graph.ids[node] for node in members]
        authors: Dict[str, None] = {}
        topic_counts: Counter = Counter()
        years = []
        for paper_id in paper_ids:
            paper = papers[paper_id]
            for author in paper.authors:
                authors.setdefault(author.id, None)
            topic_counts.update(paper.topics)
            years.append(paper.publication_year)

        top_topics = [topic for topic, _ in topic_counts.most_common(TOP_TOPICS)]
        span = max(years) - min(years) + 1
        communities.append(
            Community(
                id=f"community-{number}",
                name=top_topics[0] if top_topics else f"Community {number}",
                papers=paper_ids,
                authors=list(authors),
                topics=top_topics,
                size=len(paper_ids),
                cohesion=calculate_cohesion(graph, members),
                growth=len(paper_ids) / span,
            )
        )

    logger.info(
        "Detected %d communities (%d label groups, %d papers)",
        len(communities), len(groups), len(graph),
    )
    return communities
