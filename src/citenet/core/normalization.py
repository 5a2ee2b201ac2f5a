"""Text and metadata normalization utilities."""

import re
from datetime import datetime
from typing import Iterable, List, Optional

_LEADING_YEAR = re.compile(r"^\s*(\d{4})(?!\d)")
_DAY_FIRST_FORMATS = ("%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y")


def parse_publication_year(value: Optional[object]) -> Optional[int]:
    """Extract the publication year from a date string or number.

    A leading four-digit year wins (``"2019"``, ``"2019-04-01"``,
    ``"2019 Spring"``); otherwise day-first dates such as ``"15/06/2018"``
    are tried.
    """
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    match = _LEADING_YEAR.match(text)
    if match:
        return int(match.group(1))
    for fmt in _DAY_FIRST_FORMATS:
        try:
            return datetime.strptime(text[:10], fmt).year
        except ValueError:
            continue
    return None


def normalize_topic(topic: str) -> str:
    """Collapse internal whitespace and strip a topic label."""
    return " ".join(str(topic).split())


def unique_topics(topics: Iterable[str]) -> List[str]:
    """Normalize labels and drop empties and repeats, keeping first-seen order."""
    seen = set()
    result: List[str] = []
    for topic in topics:
        label = normalize_topic(topic)
        if label and label not in seen:
            seen.add(label)
            result.append(label)
    return result
