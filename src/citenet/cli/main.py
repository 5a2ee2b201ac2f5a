"""CLI application using Typer for the citation network analytics engine."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from ..analysis.cancellation import CancellationToken
from ..analysis.collaboration import build_collaboration_network
from ..analysis.communities import DeterministicStrategy, RandomizedStrategy, detect_communities
from ..analysis.engine import AnalysisOptions, analyze_network
from ..analysis.influence import compute_pagerank, find_influential_papers, find_seminal_papers
from ..analysis.paths import calculate_betweenness_centrality, find_bridge_papers, find_shortest_path
from ..analysis.trends import detect_trends
from ..config.settings import settings
from ..core.errors import AnalysisCancelledError, NetworkLoadError
from ..core.models import CitationNetwork
from ..io.export import rankings_frame, report_frame, write_graphml
from ..io.loader import load_network
from ..report import (
    centrality_note,
    collaboration_tables,
    communities_table,
    papers_table,
    print_report,
    trends_table,
)
from ..utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="citenet",
    help="Citation network analytics - influence, communities, trends, collaboration and bridges",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

INPUT_ARGUMENT = typer.Argument(..., help="JSON network snapshot with 'papers' and 'citations'")


def _load(path: Path, verbose: bool) -> CitationNetwork:
    if verbose:
        configure_logging("DEBUG", settings.log_format)
    try:
        return load_network(path)
    except NetworkLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _check_timeout(timeout: Optional[float]) -> None:
    if timeout is not None and timeout <= 0:
        console.print(f"[red]Error: --timeout must be positive, got {timeout}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    input_path: Path = INPUT_ARGUMENT,
    top_n: int = typer.Option(settings.top_n, "--top-n", "-n", help="Size of ranked paper lists"),
    bridge_top_n: int = typer.Option(settings.bridge_top_n, "--bridges", help="Number of bridge papers"),
    min_age: int = typer.Option(settings.seminal_min_age, "--min-age", help="Minimum age of seminal papers"),
    window: int = typer.Option(settings.trend_window_years, "--window", help="Trend window in years"),
    current_year: Optional[int] = typer.Option(None, "--current-year", help="Reference year (default: this year)"),
    timeout: Optional[float] = typer.Option(settings.centrality_timeout, "--timeout", help="Centrality time limit in seconds"),
    skip_centrality: bool = typer.Option(False, "--skip-centrality", help="Do not compute bridge papers"),
    randomized: bool = typer.Option(settings.randomized_communities, "--randomized/--deterministic", help="Label propagation order"),
    seed: Optional[int] = typer.Option(settings.random_seed, "--seed", help="Seed for randomized communities"),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Write the full report as JSON"),
    csv_out: Optional[Path] = typer.Option(None, "--csv", help="Write per-paper rankings as CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run every analysis and print a combined report."""
    _check_timeout(timeout)
    network = _load(input_path, verbose)
    try:
        options = AnalysisOptions(
            damping_factor=settings.damping_factor,
            iterations=settings.pagerank_iterations,
            top_n=top_n,
            seminal_min_age=min_age,
            bridge_top_n=bridge_top_n,
            time_window_years=window,
            current_year=current_year,
            randomized_communities=randomized,
            random_seed=seed,
            centrality_timeout=timeout,
            skip_centrality=skip_centrality,
        )
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    report = analyze_network(network, options)
    print_report(report, console)
    if json_out:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(report.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"[green]✓ Report saved to {json_out}[/green]")
    if csv_out:
        csv_out.parent.mkdir(parents=True, exist_ok=True)
        report_frame(network, report).to_csv(csv_out, index=False)
        console.print(f"[green]✓ Rankings saved to {csv_out}[/green]")


@app.command()
def influence(
    input_path: Path = INPUT_ARGUMENT,
    top_n: int = typer.Option(settings.top_n, "--top-n", "-n"),
    damping: float = typer.Option(settings.damping_factor, "--damping", help="PageRank damping factor"),
    iterations: int = typer.Option(settings.pagerank_iterations, "--iterations"),
    min_age: int = typer.Option(settings.seminal_min_age, "--min-age"),
    current_year: Optional[int] = typer.Option(None, "--current-year"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Rank papers by PageRank and list seminal papers."""
    network = _load(input_path, verbose)
    try:
        ranks = compute_pagerank(network, damping, iterations)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    influential = find_influential_papers(network, top_n, pagerank=ranks)
    seminal = find_seminal_papers(network, min_age, top_n, current_year=current_year)
    console.print(papers_table("Most Influential Papers (PageRank)", influential, ranks, "PageRank"))
    console.print(papers_table(f"Seminal Papers ({min_age}+ years old, still cited)", seminal))


@app.command()
def communities(
    input_path: Path = INPUT_ARGUMENT,
    randomized: bool = typer.Option(settings.randomized_communities, "--randomized/--deterministic"),
    seed: Optional[int] = typer.Option(settings.random_seed, "--seed"),
    limit: int = typer.Option(10, "--limit"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Detect research communities with label propagation."""
    network = _load(input_path, verbose)
    strategy = RandomizedStrategy(seed) if randomized else DeterministicStrategy()
    found = detect_communities(network, strategy)
    console.print(communities_table(found, limit))
    console.print(f"Total communities: {len(found)}")


@app.command()
def trends(
    input_path: Path = INPUT_ARGUMENT,
    window: int = typer.Option(settings.trend_window_years, "--window"),
    current_year: Optional[int] = typer.Option(None, "--current-year"),
    limit: int = typer.Option(10, "--limit"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Identify emerging and declining topics."""
    network = _load(input_path, verbose)
    found = detect_trends(network, window, current_year)
    console.print(trends_table(found, limit))


@app.command()
def collab(
    input_path: Path = INPUT_ARGUMENT,
    limit: int = typer.Option(10, "--limit"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Analyze the co-authorship network and research teams."""
    network = _load(input_path, verbose)
    collaboration = build_collaboration_network(network)
    console.print(f"Researchers: {len(collaboration.researchers)}")
    console.print(f"Collaborations: {len(collaboration.collaborations)}")
    console.print(f"Teams: {len(collaboration.teams)}")
    for table in collaboration_tables(collaboration, limit):
        console.print(table)


@app.command()
def bridges(
    input_path: Path = INPUT_ARGUMENT,
    top_n: int = typer.Option(settings.bridge_top_n, "--top-n", "-n"),
    timeout: Optional[float] = typer.Option(settings.centrality_timeout, "--timeout"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Find papers that bridge otherwise distant parts of the network."""
    _check_timeout(timeout)
    network = _load(input_path, verbose)
    token = CancellationToken(timeout) if timeout is not None else None
    result = calculate_betweenness_centrality(network, token)
    try:
        found = find_bridge_papers(network, top_n, centrality=result)
    except AnalysisCancelledError:
        console.print(centrality_note(result))
        raise typer.Exit(2)
    console.print(papers_table("Bridge Papers", found, result.scores, "Betweenness"))


@app.command()
def path(
    input_path: Path = INPUT_ARGUMENT,
    start: str = typer.Argument(..., help="Start paper id"),
    end: str = typer.Argument(..., help="End paper id"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Shortest citation chain between two papers."""
    network = _load(input_path, verbose)
    found = find_shortest_path(network, start, end)
    if found is None:
        console.print(f"[yellow]No path between {start} and {end}[/yellow]")
        raise typer.Exit(1)
    for hop, paper_id in enumerate(found):
        console.print(f"{hop}. {paper_id}  [dim]{network.papers[paper_id].title}[/dim]")


@app.command()
def export(
    input_path: Path = INPUT_ARGUMENT,
    graphml: Optional[Path] = typer.Option(None, "--graphml", help="Write the citation graph as GraphML"),
    csv_out: Optional[Path] = typer.Option(None, "--csv", help="Write PageRank rankings as CSV"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Export the network for visualization or spreadsheets."""
    network = _load(input_path, verbose)
    if not graphml and not csv_out:
        console.print("[red]Error: Must provide --graphml or --csv[/red]")
        raise typer.Exit(1)
    if graphml:
        write_graphml(network, graphml)
        console.print(f"[green]✓ Graph saved to {graphml}[/green]")
    if csv_out:
        csv_out.parent.mkdir(parents=True, exist_ok=True)
        rankings_frame(network, compute_pagerank(network)).to_csv(csv_out, index=False)
        console.print(f"[green]✓ Rankings saved to {csv_out}[/green]")


if __name__ == "__main__":
    app()
