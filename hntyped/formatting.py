"""One-line renderings of decoded items for the command line."""
from typing import Optional

from .types import Item, Story

EXCERPT_LENGTH = 60


def get_title(item: Item) -> Optional[str]:
    if item["type"] in ("story", "job", "poll"):
        return item["title"]
    return None


def format_story(story: Story) -> str:
    return f'"{story["title"]}" submitted by {story["by"]}'


def format_item(item: Item) -> str:
    kind = item["type"]
    if kind == "story":
        return format_story(item)
    if kind == "job":
        return f"job posting: {item['title']}"
    if kind == "poll":
        return f'poll: "{item["title"]}" - choose one of {len(item["parts"])} options'
    if kind == "pollopt":
        return f"poll option: {item['text']}"
    if kind == "comment":
        text = item["text"]
        excerpt = text[:EXCERPT_LENGTH] + "..." if len(text) > EXCERPT_LENGTH else text
        return f"{item['by']} commented: {excerpt}"
    raise ValueError(f"unknown item type {kind!r}")
