"""Shared fixtures for integration tests."""

import json
from pathlib import Path

import pytest

from citenet.io.loader import parse_network

SNAPSHOT = {
    "papers": [
        {"id": "p1", "title": "Graph Foundations", "publication_date": "2010-03-01",
         "topics": ["graphs"], "citation_count": 120,
         "authors": [{"id": "a", "name": "Ada"}, {"id": "b", "name": "Bo"}, {"id": "c", "name": "Cy"}]},
        {"id": "p2", "title": "Graph Methods", "publication_date": "2012",
         "topics": ["graphs"], "citation_count": 80,
         "authors": [{"id": "a", "name": "Ada"}, {"id": "b", "name": "Bo"}, {"id": "c", "name": "Cy"}]},
        {"id": "p3", "title": "Graph Learning", "publicationYear": 2014,
         "topics": ["graphs", "ml"], "citationCount": 40,
         "authors": [{"id": "a", "name": "Ada"}, {"id": "b", "name": "Bo"}, {"id": "c", "name": "Cy"}]},
        {"id": "p4", "title": "Language Models on Graphs", "publication_date": "2020-06-15",
         "topics": ["llm", "graphs"], "citation_count": 10,
         "authors": [{"id": "d", "name": "Di"}, {"id": "e", "name": "Ed"}]},
        {"id": "p5", "title": "Scaling Language Models", "year": 2022,
         "topics": ["llm"], "citation_count": 5,
         "authors": [{"id": "d", "name": "Di"}, {"id": "e", "name": "Ed"}]},
        {"id": "p6", "title": "Prompting Survey", "publication_date": "2023-01-10",
         "topics": ["llm"], "citation_count": 3,
         "authors": [{"id": "d", "name": "Di"}]},
    ],
    "citations": [
        {"from": "p2", "to": "p1"},
        {"from": "p3", "to": "p1"},
        {"from": "p3", "to": "p2", "intent": "method"},
        {"from": "p4", "to": "p3"},
        {"from": "p5", "to": "p4"},
        {"from": "p5", "to": "p1"},
        {"from": "p6", "to": "p5"},
        {"from": "p6", "to": "p4", "sentiment": "positive"},
        {"from": "p6", "to": "p99"},
    ],
}


@pytest.fixture
def snapshot() -> dict:
    return json.loads(json.dumps(SNAPSHOT))


@pytest.fixture
def network(snapshot):
    return parse_network(snapshot)


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot) -> Path:
    path = tmp_path / "network.json"
    path.write_text(json.dumps(snapshot), encoding="utf-8")
    return path
