"""Shared fixtures: an in-memory stand-in for the Hacker News API."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest


class FakeHN:
    """Serves feeds and items through an httpx.MockTransport."""

    def __init__(self):
        self.feeds: dict[str, list[int]] = {}
        self.items: dict[int, dict] = {}
        self.delays: dict[int, float] = {}
        self.failures: dict[str, int] = {}
        self.broken: set[str] = set()
        self.requests: list[str] = []

    async def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v0")
        self.requests.append(path)

        if path in self.broken:
            raise httpx.ConnectError("connection reset", request=request)
        if path in self.failures:
            return httpx.Response(self.failures[path], text="error")

        if path.startswith("/item/"):
            item_id = int(path.removeprefix("/item/").removesuffix(".json"))
            await asyncio.sleep(self.delays.get(item_id, 0))
            data = self.items.get(item_id)
        else:
            data = self.feeds.get(path.strip("/").removesuffix(".json"))

        return httpx.Response(
            200,
            content=json.dumps(data).encode(),
            headers={"content-type": "application/json"},
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def add_story(self, item_id: int, **fields) -> dict:
        item = {
            "id": item_id,
            "type": "story",
            "title": f"Story {item_id}",
            "by": "pg",
            "time": 1700000000,
            "score": 10,
            "descendants": 2,
            "url": f"https://example.com/{item_id}",
        }
        item.update(fields)
        self.items[item_id] = item
        return item

    def add_comment(self, item_id: int, **fields) -> dict:
        item = {"id": item_id, "type": "comment", "by": "dang", "text": f"Comment {item_id}", "time": 1700000000}
        item.update(fields)
        self.items[item_id] = item
        return item


@pytest.fixture
def hn() -> FakeHN:
    return FakeHN()
