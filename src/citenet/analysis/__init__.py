"""
Network analytics over a citation network snapshot.

Components (all pure functions of a read-only CitationNetwork):
- influence: PageRank, influential and seminal papers
- communities: label propagation communities and cohesion
- trends: emerging / growing / mature / declining topics
- collaboration: researchers, co-authorship, h-index, teams
- paths: shortest paths, betweenness centrality, bridge papers

The engine module runs them concurrently and assembles an AnalysisReport.
"""

from .cancellation import CancellationToken
from .collaboration import build_collaboration_network, detect_teams, h_index
from .communities import (
    DeterministicStrategy,
    PropagationStrategy,
    RandomizedStrategy,
    calculate_cohesion,
    detect_communities,
)
from .engine import AnalysisOptions, analyze_network, run_analysis
from .influence import compute_pagerank, find_influential_papers, find_seminal_papers
from .paths import calculate_betweenness_centrality, find_bridge_papers, find_shortest_path
from .trends import classify_growth, detect_trends

__all__ = [
    "CancellationToken",
    "AnalysisOptions",
    "analyze_network",
    "run_analysis",
    "compute_pagerank",
    "find_influential_papers",
    "find_seminal_papers",
    "DeterministicStrategy",
    "PropagationStrategy",
    "RandomizedStrategy",
    "calculate_cohesion",
    "detect_communities",
    "classify_growth",
    "detect_trends",
    "build_collaboration_network",
    "detect_teams",
    "h_index",
    "calculate_betweenness_centrality",
    "find_bridge_papers",
    "find_shortest_path",
]
