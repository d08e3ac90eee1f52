from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def iso_time(epoch: int | None) -> str | None:
    """Render epoch seconds as a UTC ISO-8601 string with millisecond precision."""
    if not epoch:
        return None
    dt = datetime.fromtimestamp(epoch, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Item:
    id: int
    type: str | None
    by: str | None = None
    time: int | None = None
    text: str | None = None
    url: str | None = None
    title: str | None = None
    score: int | None = None
    descendants: int | None = None
    kids: list[int] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Item:
        return cls(
            id=data["id"],
            type=data.get("type"),
            by=data.get("by"),
            time=data.get("time"),
            text=data.get("text"),
            url=data.get("url"),
            title=data.get("title"),
            score=data.get("score"),
            descendants=data.get("descendants"),
            kids=list(data.get("kids") or []),
        )


@dataclass
class ProjectedStory:
    id: int
    title: str | None
    url: str | None
    score: int
    by: str | None
    time: str | None
    comments: int
    hn_url: str

    @classmethod
    def from_item(cls, item: Item, web_base: str) -> ProjectedStory:
        return cls(
            id=item.id,
            title=item.title,
            url=item.url,
            score=item.score or 0,
            by=item.by,
            time=iso_time(item.time),
            comments=item.descendants or 0,
            hn_url=f"{web_base}/item?id={item.id}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "score": self.score,
            "by": self.by,
            "time": self.time,
            "comments": self.comments,
            "hnUrl": self.hn_url,
        }


@dataclass
class StoryDetail:
    id: int
    title: str | None
    url: str | None
    text: str | None
    score: int
    by: str | None
    time: str | None
    total_comments: int
    hn_url: str

    @classmethod
    def from_item(cls, item: Item, web_base: str) -> StoryDetail:
        return cls(
            id=item.id,
            title=item.title,
            url=item.url,
            text=item.text,
            score=item.score or 0,
            by=item.by,
            time=iso_time(item.time),
            total_comments=item.descendants or 0,
            hn_url=f"{web_base}/item?id={item.id}",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "text": self.text,
            "score": self.score,
            "by": self.by,
            "time": self.time,
            "totalComments": self.total_comments,
            "hnUrl": self.hn_url,
        }


@dataclass
class ProjectedComment:
    id: int
    by: str | None
    text: str | None
    time: str | None

    @classmethod
    def from_item(cls, item: Item) -> ProjectedComment:
        return cls(id=item.id, by=item.by, text=item.text, time=iso_time(item.time))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "by": self.by, "text": self.text, "time": self.time}
