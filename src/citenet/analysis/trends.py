"""Topic trend detection from publication years."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from ..core.errors import require_network
from ..core.models import CitationNetwork, Paper, Trend, TrendStatus
from ..utils.logging import get_logger

logger = get_logger(__name__)

EMERGING_THRESHOLD = 50.0
GROWING_THRESHOLD = 0.0
MATURE_THRESHOLD = -25.0


def classify_growth(growth_rate: float) -> TrendStatus:
    """Map a growth percentage onto a trend status."""
    if growth_rate > EMERGING_THRESHOLD:
        return TrendStatus.EMERGING
    if growth_rate > GROWING_THRESHOLD:
        return TrendStatus.GROWING
    if growth_rate > MATURE_THRESHOLD:
        return TrendStatus.MATURE
    return TrendStatus.DECLINING


def detect_trends(
    papers: Union[CitationNetwork, Iterable[Paper]],
    time_window_years: int = 5,
    current_year: Optional[int] = None,
) -> List[Trend]:
    """Classify topics by how their yearly paper counts changed.

    Only papers published in or after ``current_year - time_window_years``
    are considered. Growth is measured between the first and the last year in
    which the topic actually appears, so topics seen in a single year are
    skipped.

    Args:
        papers: A network or any iterable of papers; only metadata is used.
        time_window_years: Size of the look-back window.
        current_year: Reference year, defaults to today.

    Returns:
        Trends sorted by growth rate, highest first.
    """
    require_network(papers)
    if isinstance(papers, CitationNetwork):
        papers = papers.papers.values()
    if time_window_years < 0:
        raise ValueError(f"time_window_years must be non-negative, got {time_window_years}")
    start_year = (current_year if current_year is not None else date.today().year) - time_window_years

    histograms: Dict[str, Dict[int, int]] = {}
    topic_papers: Dict[str, List[str]] = {}
    for paper in papers:
        if paper.publication_year < start_year:
            continue
        for topic in paper.topics:
            counts = histograms.setdefault(topic, {})
            counts[paper.publication_year] = counts.get(paper.publication_year, 0) + 1
            topic_papers.setdefault(topic, []).append(paper.id)

    trends: List[Trend] = []
    for topic, counts in histograms.items():
        years = sorted(counts)
        if len(years) < 2:
            continue
        first = counts[years[0]]
        last = counts[years[-1]]
        growth_rate = (last - first) / first * 100
        # earliest year wins ties
        peak_year = max(years, key=lambda y: (counts[y], -y))
        trends.append(
            Trend(
                topic=topic,
                papers=topic_papers[topic],
                growth_rate=growth_rate,
                peak_year=peak_year,
                status=classify_growth(growth_rate),
                year_counts={year: counts[year] for year in years},
            )
        )

    trends.sort(key=lambda t: t.growth_rate, reverse=True)
    logger.info("Detected %d trends across %d topics since %d", len(trends), len(histograms), start_year)
    return trends
