"""Load citation network snapshots from JSON files.

Expected layout::

    {
      "papers": [
        {"id": "p1", "title": "...", "publication_date": "2019-04-01",
         "topics": ["graphs"], "citation_count": 12,
         "authors": [{"id": "a1", "name": "Ada"}]}
      ],
      "citations": [{"from": "p2", "to": "p1", "intent": "background"}]
    }

``papers`` may also be an object keyed by paper id. Camel-case keys written
by other tools (``publicationDate``, ``citationCount``) are accepted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from ..core.errors import NetworkLoadError
from ..core.models import Citation, CitationNetwork, Paper
from ..utils.logging import get_logger

logger = get_logger(__name__)

_FIELD_ALIASES = {
    "publicationDate": "publication_date",
    "publicationYear": "publication_year",
    "citationCount": "citation_count",
}


def _paper_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    record = {_FIELD_ALIASES.get(k, k): v for k, v in raw.items()}
    if "year" in record and record.get("publication_year") is None:
        record["publication_year"] = record.pop("year")
    return record


def _records(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    raw = data.get(key, [])
    if key == "papers" and isinstance(raw, dict):
        if not all(isinstance(value, dict) for value in raw.values()):
            raise NetworkLoadError("every entry of 'papers' must be a JSON object")
        raw = [{"id": k, **value} for k, value in raw.items()]
    if not isinstance(raw, list):
        raise NetworkLoadError(f"'{key}' must be a JSON array")
    for position, record in enumerate(raw):
        if not isinstance(record, dict):
            raise NetworkLoadError(f"{key}[{position}] must be a JSON object, got {type(record).__name__}")
    return raw


def parse_network(data: Dict[str, Any]) -> CitationNetwork:
    """Validate a decoded snapshot into a :class:`CitationNetwork`."""
    if not isinstance(data, dict):
        raise NetworkLoadError("snapshot must be a JSON object with 'papers' and 'citations'")
    raw_papers = _records(data, "papers")
    raw_citations = _records(data, "citations")
    try:
        papers: List[Paper] = [Paper.model_validate(_paper_record(p)) for p in raw_papers]
        citations = [Citation.model_validate(c) for c in raw_citations]
    except ValidationError as exc:
        raise NetworkLoadError(f"invalid network snapshot: {exc}") from exc
    return CitationNetwork.from_records(papers, citations)


def load_network(path: Union[str, Path]) -> CitationNetwork:
    """Read and validate a JSON snapshot from ``path``."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise NetworkLoadError(f"cannot read {path}: {exc}", path=str(path)) from exc
    try:
        network = parse_network(data)
    except NetworkLoadError as exc:
        exc.path = str(path)
        raise
    logger.info(
        "Loaded %d papers and %d citations from %s",
        len(network.papers), len(network.citations), path,
    )
    return network
