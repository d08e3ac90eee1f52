"""Hacker News Firebase API client: feeds, items, and detail fan-out."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import httpx

from hnintel.config import settings
from hnintel.models import Item, ProjectedComment, ProjectedStory

logger = logging.getLogger(__name__)

# Short names accepted by get_story_ids, mapped to upstream feed names.
FEEDS: dict[str, str] = {
    "top": "topstories",
    "new": "newstories",
    "best": "beststories",
    "ask": "askstories",
    "show": "showstories",
}

# Hard ceiling on items fetched per aggregation, whatever the caller asks for.
MAX_DETAILS = 30
MAX_COMMENTS = 5


class UpstreamError(Exception):
    """The Hacker News API answered with a non-success status."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"API error: {status_code}")
        self.status_code = status_code
        self.url = url


async def fetch_json(client: httpx.AsyncClient, url: str) -> Any:
    """GET url once and decode the JSON body.

    Transport failures (DNS, timeouts, resets) propagate untouched.
    """
    resp = await client.get(url)
    if not resp.is_success:
        logger.warning("Upstream %s answered %d", url, resp.status_code)
        raise UpstreamError(resp.status_code, url)
    return resp.json()


async def get_story_ids(client: httpx.AsyncClient, feed: str) -> list[int]:
    """Fetch the ordered id list for a feed ("top", "new", ... or a raw feed name)."""
    name = FEEDS.get(feed, feed)
    ids = await fetch_json(client, f"{settings.hn_api_base}/{name}.json")
    return list(ids or [])


async def get_item(client: httpx.AsyncClient, item_id: int) -> Item | None:
    """Fetch one item; None when the upstream has no record for it."""
    data = await fetch_json(client, f"{settings.hn_api_base}/item/{item_id}.json")
    if not data:
        return None
    return Item.from_json(data)


async def _get_items(client: httpx.AsyncClient, ids: Sequence[int]) -> list[Item]:
    # gather keeps input order and fails as a whole if any fetch raises.
    items = await asyncio.gather(*(get_item(client, item_id) for item_id in ids))
    return [item for item in items if item is not None]


async def get_stories_with_details(
    client: httpx.AsyncClient, ids: Sequence[int], limit: int = 10
) -> list[ProjectedStory]:
    """Fetch the first min(limit, MAX_DETAILS) ids concurrently and project them.

    Missing items are dropped, so the result may be shorter than requested.
    """
    sliced = list(ids[: min(limit, MAX_DETAILS)])
    items = await _get_items(client, sliced)
    if len(items) < len(sliced):
        logger.debug("Dropped %d missing items", len(sliced) - len(items))
    return [ProjectedStory.from_item(item, settings.hn_web_base) for item in items]


async def get_comments(
    client: httpx.AsyncClient, ids: Sequence[int], limit: int = MAX_COMMENTS
) -> list[ProjectedComment]:
    """Fetch up to `limit` comment ids concurrently and project them."""
    items = await _get_items(client, list(ids[:limit]))
    return [ProjectedComment.from_item(item) for item in items]
