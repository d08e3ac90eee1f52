"""Aggregate statistics for the trending entrypoint."""

from __future__ import annotations

import math
from typing import Sequence
from urllib.parse import urlsplit

from hnintel.models import ProjectedStory

HOT_DOMAINS = 5


def hostname(url: str) -> str | None:
    """Return the URL's hostname with its first "www." removed."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    return host.replace("www.", "", 1)


def hot_domains(stories: Sequence[ProjectedStory], limit: int = HOT_DOMAINS) -> list[str]:
    """Distinct hostnames in order of first appearance, capped at limit."""
    seen: list[str] = []
    for story in stories:
        if not story.url:
            continue
        host = hostname(story.url)
        if host and host not in seen:
            seen.append(host)
    return seen[:limit]


def total_engagement(stories: Sequence[ProjectedStory]) -> int:
    return sum(s.score + s.comments for s in stories)


def average_score(stories: Sequence[ProjectedStory]) -> int | None:
    """Mean score rounded half up, or None when there is nothing to average."""
    if not stories:
        return None
    mean = sum(s.score for s in stories) / len(stories)
    return math.floor(mean + 0.5)
