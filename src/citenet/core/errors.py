"""Exception hierarchy for the analytics engine."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import CentralityResult


class CitenetError(Exception):
    """Base class for errors raised by citenet."""


class NetworkLoadError(CitenetError):
    """A network snapshot could not be read or did not validate."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class AnalysisCancelledError(CitenetError):
    """A result was requested from a computation that did not run to completion."""

    def __init__(self, result: "CentralityResult") -> None:
        super().__init__(
            f"Betweenness centrality {result.status.value} after "
            f"{result.sources_processed}/{result.total_sources} sources"
        )
        self.result = result


def require_network(network: object) -> None:
    """Fail fast on a missing network instead of returning an empty result."""
    if network is None:
        raise TypeError("network must be a CitationNetwork, got None")
