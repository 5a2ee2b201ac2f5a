"""Console rendering of analysis results with rich tables."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.models import (
    AnalysisReport,
    CentralityResult,
    CollaborationNetwork,
    Community,
    Paper,
    Trend,
    TrendStatus,
)

_STATUS_STYLE = {
    TrendStatus.EMERGING: "bold green",
    TrendStatus.GROWING: "green",
    TrendStatus.MATURE: "yellow",
    TrendStatus.DECLINING: "red",
}


def papers_table(
    title: str,
    papers: Iterable[Paper],
    scores: Optional[Dict[str, float]] = None,
    score_label: str = "Score",
) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Paper", style="cyan")
    table.add_column("Year", justify="right")
    table.add_column("Citations", style="green", justify="right")
    if scores is not None:
        table.add_column(score_label, justify="right")
    for i, paper in enumerate(papers, 1):
        row = [str(i), paper.title or paper.id, str(paper.publication_year), str(paper.citation_count)]
        if scores is not None:
            row.append(f"{scores.get(paper.id, 0.0):.4f}")
        table.add_row(*row)
    return table


def communities_table(communities: List[Community], limit: int = 10) -> Table:
    table = Table(title="Research Communities")
    table.add_column("Community", style="cyan")
    table.add_column("Papers", justify="right")
    table.add_column("Authors", justify="right")
    table.add_column("Top topics")
    table.add_column("Cohesion", justify="right")
    table.add_column("Papers/yr", justify="right")
    for community in communities[:limit]:
        table.add_row(
            community.name,
            str(community.size),
            str(len(community.authors)),
            ", ".join(community.topics[:3]),
            f"{community.cohesion * 100:.1f}%",
            f"{community.growth:.2f}",
        )
    return table


def trends_table(trends: List[Trend], limit: int = 10) -> Table:
    table = Table(title="Trending Topics")
    table.add_column("Topic", style="cyan")
    table.add_column("Status")
    table.add_column("Growth", justify="right")
    table.add_column("Peak", justify="right")
    table.add_column("Papers", justify="right")
    for trend in trends[:limit]:
        style = _STATUS_STYLE[trend.status]
        table.add_row(
            trend.topic,
            f"[{style}]{trend.status.value}[/{style}]",
            f"{trend.growth_rate:+.1f}%",
            str(trend.peak_year),
            str(len(trend.papers)),
        )
    return table


def collaboration_tables(collaboration: CollaborationNetwork, limit: int = 10) -> List[Table]:
    researchers = sorted(
        collaboration.researchers.values(),
        key=lambda r: (r.h_index, r.citation_count),
        reverse=True,
    )
    top = Table(title="Top Researchers")
    top.add_column("Researcher", style="cyan")
    top.add_column("Papers", justify="right")
    top.add_column("Citations", justify="right")
    top.add_column("h-index", style="green", justify="right")
    top.add_column("Collaborators", justify="right")
    for researcher in researchers[:limit]:
        top.add_row(
            researcher.name,
            str(len(researcher.papers)),
            str(researcher.citation_count),
            str(researcher.h_index),
            str(researcher.network_size),
        )

    teams = Table(title="Research Teams")
    teams.add_column("Team", style="cyan")
    teams.add_column("Members", justify="right")
    teams.add_column("Leader")
    teams.add_column("Papers", justify="right")
    teams.add_column("Papers/member", justify="right")
    teams.add_column("Impact", justify="right")
    for team in collaboration.teams[:limit]:
        leader = collaboration.researchers.get(team.leader)
        teams.add_row(
            team.name,
            str(len(team.core_members)),
            leader.name if leader else team.leader,
            str(len(team.papers)),
            f"{team.productivity:.2f}",
            f"{team.impact:.1f}",
        )
    return [top, teams]


def centrality_note(centrality: CentralityResult) -> Optional[Panel]:
    if centrality.is_complete:
        return None
    return Panel(
        f"Betweenness centrality {centrality.status.value} after "
        f"{centrality.sources_processed}/{centrality.total_sources} source papers; "
        "bridge papers are not available.",
        title="Incomplete",
        style="yellow",
    )


def print_report(report: AnalysisReport, console: Optional[Console] = None, limit: int = 10) -> None:
    """Render every section of a report."""
    console = console or Console()
    console.print(
        Panel(
            f"Papers: {report.paper_count}\n"
            f"Citations: {report.citation_count} ({report.dangling_citation_count} ignored)\n"
            f"Researchers: {len(report.collaboration.researchers)}\n"
            f"Collaborations: {len(report.collaboration.collaborations)}",
            title="Network Analysis",
        )
    )
    console.print(papers_table("Most Influential Papers (PageRank)", report.influential[:limit], report.pagerank, "PageRank"))
    console.print(papers_table("Seminal Papers", report.seminal[:limit]))
    console.print(communities_table(report.communities, limit))
    console.print(trends_table(report.trends, limit))
    for table in collaboration_tables(report.collaboration, limit):
        console.print(table)
    note = centrality_note(report.centrality)
    if note is not None:
        console.print(note)
    else:
        console.print(papers_table("Bridge Papers", report.bridges[:limit], report.centrality.scores, "Betweenness"))
