"""Checks against the real API. Opt in with HACKERNEWS_LIVE=1."""
import os
import time

import pytest
from jsonschema import validate

from hntyped import registry
from hntyped.client import HackerNewsClient
from hntyped.errors import ValidationFailure

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(os.getenv("HACKERNEWS_LIVE") != "1", reason="set HACKERNEWS_LIVE=1 to hit the real API"),
]


@pytest.fixture(scope="module")
def live_client():
    return HackerNewsClient(timeout=6.0)


@pytest.mark.positive
def test_topstories_are_unique_ints(live_client):
    ids = live_client.fetch_ids("top")
    assert 0 < len(ids) <= 500
    assert len(set(ids)) == len(ids)


@pytest.mark.positive
def test_top_items_decode(live_client):
    items = live_client.fetch_top_items(5)
    assert len(items) == 5
    now = int(time.time()) + 300
    for it in items:
        assert it["type"] in {"story", "job", "poll"}
        assert 0 < it["time"] <= now
        validate(it, registry.ITEM.json_schema())


@pytest.mark.positive
def test_first_comment_links_back(live_client):
    for story in live_client.fetch_top_items(10):
        kids = story.get("kids") or []
        if kids:
            try:
                comment = live_client.fetch_item_of_type(registry.COMMENT, kids[0])
            except ValidationFailure:
                # deleted or dead comments lack by/text
                continue
            assert comment["parent"] == story["id"]
            return
    pytest.skip("No suitable first-level comment found")
