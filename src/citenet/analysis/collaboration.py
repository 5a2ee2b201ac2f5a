"""Researcher-centric collaboration network.

Builds one :class:`Researcher` per distinct author, one
:class:`Collaboration` per co-authoring pair, and groups frequent
collaborators into :class:`Team` objects. Citation totals and h-indices use
each paper's literature-wide ``citation_count``.
"""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from ..core.errors import require_network
from ..core.models import (
    CitationNetwork,
    Collaboration,
    CollaborationNetwork,
    Paper,
    Researcher,
    Team,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

STRONG_COLLABORATION = 3
MIN_TEAM_SIZE = 3
TOP_TOPICS = 5


def h_index(citation_counts: Iterable[int]) -> int:
    """Largest h such that h of the counts are each at least h.

    >>> h_index([10, 8, 5, 4, 3])
    4
    >>> h_index([0, 0, 0])
    0
    """
    h = 0
    for rank, count in enumerate(sorted(citation_counts, reverse=True), 1):
        if count >= rank:
            h = rank
        else:
            break
    return h


@dataclass
class _ResearcherDraft:
    id: str
    name: str
    first_year: int
    last_year: int
    papers: List[str] = field(default_factory=list)
    topics: Dict[str, None] = field(default_factory=dict)
    collaborators: Dict[str, None] = field(default_factory=dict)
    collaboration_count: int = 0


@dataclass
class _CollaborationDraft:
    pair: Tuple[str, str]
    first_year: int
    last_year: int
    strength: int = 0
    papers: List[str] = field(default_factory=list)


def build_collaboration_network(network: CitationNetwork) -> CollaborationNetwork:
    """Derive researchers, pairwise collaborations and teams from the papers.

    An author listed twice on the same paper is counted once for it.
    """
    require_network(network)
    drafts: Dict[str, _ResearcherDraft] = {}
    pairs: Dict[Tuple[str, str], _CollaborationDraft] = {}

    for paper in network.papers.values():
        year = paper.publication_year
        authors = list({a.id: a for a in paper.authors}.values())

        for author in authors:
            draft = drafts.get(author.id)
            if draft is None:
                draft = drafts[author.id] = _ResearcherDraft(
                    id=author.id, name=author.name, first_year=year, last_year=year
                )
            draft.papers.append(paper.id)
            draft.first_year = min(draft.first_year, year)
            draft.last_year = max(draft.last_year, year)
            for topic in paper.topics:
                draft.topics.setdefault(topic, None)

        for i in range(len(authors)):
            for j in range(i + 1, len(authors)):
                key = tuple(sorted((authors[i].id, authors[j].id)))
                collab = pairs.get(key)
                if collab is None:
                    collab = pairs[key] = _CollaborationDraft(pair=key, first_year=year, last_year=year)
                collab.strength += 1
                collab.papers.append(paper.id)
                collab.first_year = min(collab.first_year, year)
                collab.last_year = max(collab.last_year, year)

    collaborations = [
        Collaboration(
            researchers=list(c.pair),
            strength=c.strength,
            first_collaboration_year=c.first_year,
            last_collaboration_year=c.last_year,
            papers=c.papers,
        )
        for c in pairs.values()
    ]

    for a, b in pairs:
        for member, other in ((a, b), (b, a)):
            drafts[member].collaboration_count += 1
            drafts[member].collaborators.setdefault(other, None)

    total = len(drafts)
    researchers: Dict[str, Researcher] = {}
    for draft in drafts.values():
        counts = [network.papers[pid].citation_count for pid in draft.papers]
        size = len(draft.collaborators)
        researchers[draft.id] = Researcher(
            id=draft.id,
            name=draft.name,
            papers=draft.papers,
            topics=list(draft.topics),
            citation_count=sum(counts),
            h_index=h_index(counts),
            first_publication_year=draft.first_year,
            recent_publication_year=draft.last_year,
            collaborators=list(draft.collaborators),
            collaboration_count=draft.collaboration_count,
            network_size=size,
            centrality=size / (total - 1) if total > 1 else 0.0,
        )

    teams = detect_teams(researchers, collaborations, network.papers)
    logger.info(
        "Collaboration network: %d researchers, %d collaborations, %d teams",
        len(researchers), len(collaborations), len(teams),
    )
    return CollaborationNetwork(researchers=researchers, collaborations=collaborations, teams=teams)


def detect_teams(
    researchers: Mapping[str, Researcher],
    collaborations: Sequence[Collaboration],
    papers: Mapping[str, Paper],
    min_strength: int = STRONG_COLLABORATION,
    min_size: int = MIN_TEAM_SIZE,
) -> List[Team]:
    """Group researchers connected through strong collaborations.

    A breadth-first search starts from every not yet visited researcher with at
    least two collaborators and only follows collaborations of strength
    ``min_strength`` or more. Researchers reached by a search stay visited even
    when their component turns out too small to be a team.
    """
    strong: Dict[str, List[str]] = {}
    for collab in collaborations:
        if collab.strength < min_strength:
            continue
        a, b = collab.researchers
        strong.setdefault(a, []).append(b)
        strong.setdefault(b, []).append(a)

    visited = set()
    components: List[List[str]] = []
    for researcher_id, researcher in researchers.items():
        if researcher_id in visited or len(researcher.collaborators) < 2:
            continue
        visited.add(researcher_id)
        members = [researcher_id]
        queue = deque([researcher_id])
        while queue:
            current = queue.popleft()
            for other in strong.get(current, ()):
                if other not in visited:
                    visited.add(other)
                    members.append(other)
                    queue.append(other)
        if len(members) >= min_size:
            components.append(members)

    components.sort(key=len, reverse=True)
    teams: List[Team] = []
    for number, members in enumerate(components, 1):
        teams.append(_make_team(number, members, researchers, papers))
    return teams


def _make_team(
    number: int,
    members: List[str],
    researchers: Mapping[str, Researcher],
    papers: Mapping[str, Paper],
) -> Team:
    member_set = set(members)
    team_papers: Dict[str, None] = {}
    topic_counts: Counter = Counter()
    for member_id in members:
        member = researchers[member_id]
        for paper_id in member.papers:
            team_papers.setdefault(paper_id, None)
        topic_counts.update(member.topics)

    top_topics = [topic for topic, _ in topic_counts.most_common(TOP_TOPICS)]

    leader = members[0]
    most = 0
    for member_id in members:
        connections = sum(1 for c in researchers[member_id].collaborators if c in member_set)
        if connections > most:
            most = connections
            leader = member_id

    citations = sum(papers[pid].citation_count for pid in team_papers if pid in papers)
    return Team(
        id=f"team-{number}",
        name=f"{top_topics[0]} Team" if top_topics else f"Research Team {number}",
        core_members=members,
        leader=leader,
        topics=top_topics,
        papers=list(team_papers),
        productivity=len(team_papers) / len(members),
        impact=citations / len(team_papers) if team_papers else 0.0,
    )
