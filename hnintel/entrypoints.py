"""Entrypoint registry -- the priced operations the agent exposes."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx
from pydantic import BaseModel, ConfigDict, Field

from hnintel.config import settings
from hnintel.hackernews import (
    MAX_COMMENTS,
    get_comments,
    get_item,
    get_stories_with_details,
    get_story_ids,
)
from hnintel.insights import average_score, hot_domains, total_engagement
from hnintel.models import StoryDetail, utc_now_iso

logger = logging.getLogger(__name__)

OVERVIEW_LIMIT = 5


class StoryNotFound(Exception):
    def __init__(self, item_id: int):
        super().__init__("Story not found")
        self.item_id = item_id


class EmptyInput(BaseModel):
    pass


class FeedInput(BaseModel):
    model_config = ConfigDict(strict=True)

    limit: int = Field(default=10, ge=1, le=30)


class TrendingInput(BaseModel):
    model_config = ConfigDict(strict=True)

    limit: int = Field(default=5, ge=1, le=10)


class StoryInput(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(description="Hacker News story ID")


Handler = Callable[[httpx.AsyncClient, Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class Entrypoint:
    key: str
    description: str
    input_model: type[BaseModel]
    # Smallest currency unit (USDC has 6 decimals, so 1000 == $0.001).
    price: int
    handler: Handler

    @property
    def free(self) -> bool:
        return self.price == 0


def _stories_output(stories) -> dict[str, Any]:
    return {
        "stories": [s.to_dict() for s in stories],
        "count": len(stories),
        "fetchedAt": utc_now_iso(),
    }


async def overview(client: httpx.AsyncClient, params: EmptyInput) -> dict[str, Any]:
    top_ids = await get_story_ids(client, "top")
    stories = await get_stories_with_details(client, top_ids, OVERVIEW_LIMIT)
    return {
        "stories": [s.to_dict() for s in stories],
        "totalTopStories": len(top_ids),
        "fetchedAt": utc_now_iso(),
        "source": "Hacker News Firebase API (live)",
    }


def _feed_handler(feed: str) -> Handler:
    async def handler(client: httpx.AsyncClient, params: FeedInput) -> dict[str, Any]:
        ids = await get_story_ids(client, feed)
        stories = await get_stories_with_details(client, ids, params.limit)
        return _stories_output(stories)

    handler.__name__ = f"{feed}_stories"
    return handler


async def story(client: httpx.AsyncClient, params: StoryInput) -> dict[str, Any]:
    item = await get_item(client, params.id)
    if item is None or item.type != "story":
        raise StoryNotFound(params.id)

    comments = await get_comments(client, item.kids, MAX_COMMENTS)
    return {
        "story": StoryDetail.from_item(item, settings.hn_web_base).to_dict(),
        "topComments": [c.to_dict() for c in comments],
        "fetchedAt": utc_now_iso(),
    }


async def trending(client: httpx.AsyncClient, params: TrendingInput) -> dict[str, Any]:
    top_ids, ask_ids, show_ids = await asyncio.gather(
        get_story_ids(client, "top"),
        get_story_ids(client, "ask"),
        get_story_ids(client, "show"),
    )
    top, ask, show = await asyncio.gather(
        get_stories_with_details(client, top_ids, params.limit),
        get_stories_with_details(client, ask_ids, params.limit),
        get_stories_with_details(client, show_ids, params.limit),
    )
    return {
        "topStories": [s.to_dict() for s in top],
        "askHN": [s.to_dict() for s in ask],
        "showHN": [s.to_dict() for s in show],
        "insights": {
            "hotDomains": hot_domains(top),
            "totalEngagement": total_engagement(top),
            "avgScore": average_score(top),
        },
        "fetchedAt": utc_now_iso(),
    }


ENTRYPOINTS: list[Entrypoint] = [
    Entrypoint(
        key="overview",
        description="Free overview of top 5 Hacker News stories - try before you buy",
        input_model=EmptyInput,
        price=0,
        handler=overview,
    ),
    Entrypoint(
        key="top",
        description="Get top N Hacker News stories with full details",
        input_model=FeedInput,
        price=1000,
        handler=_feed_handler("top"),
    ),
    Entrypoint(
        key="new",
        description="Get newest N Hacker News stories",
        input_model=FeedInput,
        price=1000,
        handler=_feed_handler("new"),
    ),
    Entrypoint(
        key="best",
        description="Get best/highest-rated Hacker News stories of all time",
        input_model=FeedInput,
        price=2000,
        handler=_feed_handler("best"),
    ),
    Entrypoint(
        key="story",
        description="Get full story details including top comments",
        input_model=StoryInput,
        price=2000,
        handler=story,
    ),
    Entrypoint(
        key="trending",
        description="Aggregated trending analysis: top stories, Ask HN, and Show HN combined",
        input_model=TrendingInput,
        price=3000,
        handler=trending,
    ),
]


def get_entrypoint(key: str) -> Entrypoint | None:
    for entrypoint in ENTRYPOINTS:
        if entrypoint.key == key:
            return entrypoint
    return None


async def invoke(
    client: httpx.AsyncClient, entrypoint: Entrypoint, payload: dict[str, Any] | None
) -> dict[str, Any]:
    """Validate payload against the entrypoint's input model and run it.

    Raises pydantic.ValidationError before any upstream call when the
    payload does not fit.
    """
    params = entrypoint.input_model.model_validate(payload or {})
    output = await entrypoint.handler(client, params)
    logger.debug("Entrypoint '%s' completed", entrypoint.key)
    return output
