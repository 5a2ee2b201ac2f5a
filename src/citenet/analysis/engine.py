"""Run every analysis component over one network snapshot.

The components are independent pure functions of the same read-only
:class:`CitationNetwork`, so they are dispatched to worker threads and
gathered without any locking. Betweenness centrality is the only expensive
one; it receives its own :class:`CancellationToken` and can be time-boxed
without affecting the other results.

Basic Usage:
    >>> report = analyze_network(network, AnalysisOptions(centrality_timeout=60))
    >>> report.influential[0].title
"""

from __future__ import annotations

import asyncio
from typing import Optional

from pydantic import BaseModel, Field

from .cancellation import CancellationToken
from .collaboration import build_collaboration_network
from .communities import DeterministicStrategy, RandomizedStrategy, detect_communities
from .influence import compute_pagerank, find_influential_papers, find_seminal_papers
from .paths import calculate_betweenness_centrality, find_bridge_papers
from .trends import detect_trends
from ..core.errors import require_network
from ..core.models import AnalysisReport, CentralityResult, CentralityStatus, CitationNetwork
from ..utils.logging import get_logger

logger = get_logger(__name__)


class AnalysisOptions(BaseModel):
    """Tunables for a full analysis run."""

    damping_factor: float = Field(0.85, ge=0.0, le=1.0)
    iterations: int = Field(100, ge=0)
    top_n: int = Field(50, ge=0)
    seminal_min_age: int = Field(10, ge=0)
    bridge_top_n: int = Field(20, ge=0)
    time_window_years: int = Field(5, ge=0)
    current_year: Optional[int] = None
    randomized_communities: bool = False
    random_seed: Optional[int] = None
    centrality_timeout: Optional[float] = Field(None, gt=0)
    skip_centrality: bool = False


def _rank_influence(network: CitationNetwork, options: AnalysisOptions):
    pagerank = compute_pagerank(network, options.damping_factor, options.iterations)
    influential = find_influential_papers(network, options.top_n, pagerank=pagerank)
    seminal = find_seminal_papers(
        network, options.seminal_min_age, options.top_n, current_year=options.current_year
    )
    return pagerank, influential, seminal


def _centrality(network: CitationNetwork, token: CancellationToken) -> CentralityResult:
    return calculate_betweenness_centrality(network, token=token)


async def run_analysis(
    network: CitationNetwork,
    options: Optional[AnalysisOptions] = None,
) -> AnalysisReport:
    """Run all components concurrently and assemble an :class:`AnalysisReport`."""
    require_network(network)
    options = options or AnalysisOptions()
    dangling = len(network.dangling_citations())
    logger.info(
        "Analyzing %d papers, %d citations (%d dangling)",
        len(network.papers), len(network.citations), dangling,
    )

    strategy = (
        RandomizedStrategy(options.random_seed)
        if options.randomized_communities
        else DeterministicStrategy()
    )
    influence_job = asyncio.to_thread(_rank_influence, network, options)
    community_job = asyncio.to_thread(detect_communities, network, strategy)
    trend_job = asyncio.to_thread(
        detect_trends, network, options.time_window_years, options.current_year
    )
    collaboration_job = asyncio.to_thread(build_collaboration_network, network)

    if options.skip_centrality:
        centrality = CentralityResult(status=CentralityStatus.CANCELLED, total_sources=len(network.papers))
        (pagerank, influential, seminal), communities, trends, collaboration = await asyncio.gather(
            influence_job, community_job, trend_job, collaboration_job
        )
    else:
        token = CancellationToken(deadline_seconds=options.centrality_timeout)
        centrality_job = asyncio.to_thread(_centrality, network, token)
        try:
            (
                (pagerank, influential, seminal),
                communities,
                trends,
                collaboration,
                centrality,
            ) = await asyncio.gather(
                influence_job, community_job, trend_job, collaboration_job, centrality_job
            )
        finally:
            # stops the centrality thread if another component failed
            token.cancel()

    bridges = []
    if centrality.is_complete:
        bridges = find_bridge_papers(network, options.bridge_top_n, centrality=centrality)
    else:
        logger.warning("Bridge papers unavailable: centrality %s", centrality.status.value)

    return AnalysisReport(
        paper_count=len(network.papers),
        citation_count=len(network.citations),
        dangling_citation_count=dangling,
        pagerank=pagerank,
        influential=influential,
        seminal=seminal,
        communities=communities,
        trends=trends,
        collaboration=collaboration,
        centrality=centrality,
        bridges=bridges,
    )


def analyze_network(
    network: CitationNetwork,
    options: Optional[AnalysisOptions] = None,
) -> AnalysisReport:
    """Blocking wrapper around :func:`run_analysis`."""
    return asyncio.run(run_analysis(network, options))
