"""Core domain models for papers, citations and the results derived from them.

Every model is frozen: a :class:`CitationNetwork` is built once per analysis
run and shared read-only between the analysis components, and every result
object is handed back to the caller without further behaviour attached.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .normalization import parse_publication_year, unique_topics


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Author(_Frozen):
    """Author information. Shared by reference between papers via ``id``."""
    id: str
    name: str
    affiliations: List[str] = Field(default_factory=list)


class Paper(_Frozen):
    """Core paper model.

    ``citation_count`` is the externally supplied, literature-wide count. It is
    never recomputed from the citation edges loaded into a network, which may
    be only a sample of the real citation graph.
    """

    id: str = Field(..., min_length=1)
    title: str = ""
    publication_date: Optional[str] = None
    publication_year: int
    topics: List[str] = Field(default_factory=list)
    citation_count: int = Field(0, ge=0)
    authors: List[Author] = Field(default_factory=list)

    abstract: Optional[str] = None
    venue: Optional[str] = None
    doi: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_year(cls, data: Any) -> Any:
        """Fill ``publication_year`` from ``publication_date`` when absent."""
        if isinstance(data, dict) and data.get("publication_year") is None:
            year = parse_publication_year(data.get("publication_date"))
            if year is None:
                raise ValueError(
                    f"paper {data.get('id')!r} has no parseable publication date"
                )
            data = {**data, "publication_year": year}
        return data

    @field_validator("topics")
    @classmethod
    def _normalize_topics(cls, v: List[str]) -> List[str]:
        return unique_topics(v)


class Citation(_Frozen):
    """Directed edge: ``source`` cites ``target``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    context: Optional[str] = None
    intent: Optional[Literal["background", "method", "result", "comparison"]] = None
    sentiment: Optional[Literal["positive", "neutral", "negative"]] = None


class CitationNetwork(_Frozen):
    """Papers keyed by id (insertion ordered) plus the loaded citation edges."""

    papers: Dict[str, Paper] = Field(default_factory=dict)
    citations: List[Citation] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_keys(self) -> "CitationNetwork":
        for key, paper in self.papers.items():
            if key != paper.id:
                raise ValueError(f"paper stored under {key!r} has id {paper.id!r}")
        return self

    @classmethod
    def from_records(
        cls,
        papers: Iterable[Paper],
        citations: Iterable[Citation] = (),
    ) -> "CitationNetwork":
        """Build a network from a paper sequence.

        A repeated id replaces the earlier record but keeps its position.
        """
        by_id: Dict[str, Paper] = {}
        for paper in papers:
            by_id[paper.id] = paper
        return cls(papers=by_id, citations=list(citations))

    def dangling_citations(self) -> List[Citation]:
        """Citations whose source or target is not a loaded paper."""
        return [
            c for c in self.citations
            if c.source not in self.papers or c.target not in self.papers
        ]

    def __len__(self) -> int:
        return len(self.papers)


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------


class Researcher(_Frozen):
    """One distinct author of the network with aggregated publication metrics."""
    id: str
    name: str
    papers: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    citation_count: int = 0
    h_index: int = 0
    first_publication_year: int
    recent_publication_year: int
    collaborators: List[str] = Field(default_factory=list)
    collaboration_count: int = 0
    network_size: int = 0
    centrality: float = Field(0.0, ge=0.0, le=1.0)


class Collaboration(_Frozen):
    """Unordered researcher pair with at least one co-authored paper."""
    researchers: List[str] = Field(..., min_length=2, max_length=2)
    strength: int = Field(..., ge=1)
    first_collaboration_year: int
    last_collaboration_year: int
    papers: List[str] = Field(default_factory=list)


class Community(_Frozen):
    """A label propagation cluster."""
    id: str
    name: str
    papers: List[str]
    authors: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    size: int = Field(..., ge=1)
    cohesion: float = Field(0.0, ge=0.0, le=1.0)
    growth: float = Field(0.0, ge=0.0, description="Papers per publication year spanned")


class Team(_Frozen):
    """Connected group of researchers joined by strong collaborations."""
    id: str
    name: str
    core_members: List[str]
    leader: str
    topics: List[str] = Field(default_factory=list)
    papers: List[str] = Field(default_factory=list)
    productivity: float = 0.0
    impact: float = 0.0


class TrendStatus(str, Enum):
    EMERGING = "emerging"
    GROWING = "growing"
    MATURE = "mature"
    DECLINING = "declining"


class Trend(_Frozen):
    """Per-topic publication time series summary."""
    topic: str
    papers: List[str]
    growth_rate: float
    peak_year: int
    status: TrendStatus
    year_counts: Dict[int, int] = Field(default_factory=dict)


class CollaborationNetwork(_Frozen):
    researchers: Dict[str, Researcher] = Field(default_factory=dict)
    collaborations: List[Collaboration] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)


class CentralityStatus(str, Enum):
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"


class CentralityResult(_Frozen):
    """Outcome of a betweenness computation.

    ``scores`` is only populated when ``status`` is ``complete``; an abandoned
    run never exposes partial counts.
    """
    status: CentralityStatus
    scores: Dict[str, float] = Field(default_factory=dict)
    sources_processed: int = 0
    total_sources: int = 0

    @property
    def is_complete(self) -> bool:
        return self.status is CentralityStatus.COMPLETE


class AnalysisReport(_Frozen):
    """Combined output of a full analysis run."""
    paper_count: int
    citation_count: int
    dangling_citation_count: int = 0
    pagerank: Dict[str, float] = Field(default_factory=dict)
    influential: List[Paper] = Field(default_factory=list)
    seminal: List[Paper] = Field(default_factory=list)
    communities: List[Community] = Field(default_factory=list)
    trends: List[Trend] = Field(default_factory=list)
    collaboration: CollaborationNetwork = Field(default_factory=CollaborationNetwork)
    centrality: CentralityResult
    bridges: List[Paper] = Field(default_factory=list)
