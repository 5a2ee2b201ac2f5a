"""
citenet - Citation Network Analytics
====================================

Turns a snapshot of papers and citation links into structure:

- Influence: PageRank rankings and seminal papers
- Communities: label propagation clusters with cohesion
- Trends: emerging, growing, mature and declining topics
- Collaboration: researchers, co-authorship, h-index and teams
- Bridges: shortest paths and betweenness centrality

Usage:
    from citenet import CitationNetwork, analyze_network
    from citenet.io.loader import load_network

    network = load_network("network.json")
    report = analyze_network(network)
"""

__version__ = "0.1.0"

from citenet.core.models import (
    Author,
    Citation,
    CitationNetwork,
    Paper,
)
from citenet.analysis.engine import AnalysisOptions, analyze_network, run_analysis

__all__ = [
    "__version__",
    "Author",
    "Citation",
    "CitationNetwork",
    "Paper",
    "AnalysisOptions",
    "analyze_network",
    "run_analysis",
]
