import logging
import os
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, List, Optional, Protocol

from . import registry
from .errors import ValidationFailure
from .schemas import Schema, decode
from .transport import JsonTransport
from .types import Item

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hacker-news.firebaseio.com/v0"
LISTINGS = ("top", "new", "best", "ask", "show", "job")


class Transport(Protocol):
    def get_json(self, url: str) -> Any: ...


class HackerNewsClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 5.0, max_workers: int = 16,
                 transport: Optional[Transport] = None):
        self.base_url = (base_url or os.getenv("HACKERNEWS_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.http = transport or JsonTransport(timeout=timeout, pool_size=max_workers)
        self.max_workers = max_workers

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _get_json(self, path: str) -> Any:
        return self.http.get_json(self._url(path))

    def _decode(self, schema: Schema, data: Any, what: str) -> Any:
        try:
            return decode(schema, data)
        except ValidationFailure as e:
            logger.warning("%s failed validation with %d issue(s)", what, len(e.issues))
            raise

    # ---- items
    def fetch_item(self, id: int) -> Item:
        """Fetch one item and decode it against the union of all item types."""
        return self.fetch_item_of_type(registry.ITEM, id)

    def fetch_item_of_type(self, schema: Schema, id: int) -> Any:
        """Fetch one item whose type the caller already knows, e.g. ``registry.STORY``."""
        logger.debug("fetching item %s", id)
        data = self._get_json(f"/item/{int(id)}.json")
        return self._decode(schema, data, f"item {id}")

    def fetch_title(self, id: int) -> str:
        """Title of a story; fails unless the item decodes as a story."""
        return self.fetch_item_of_type(registry.STORY, id)["title"]

    # ---- ranked lists
    def fetch_ids(self, listing: str = "top") -> List[int]:
        if listing not in LISTINGS:
            raise ValueError(f"unknown listing {listing!r}; expected one of {', '.join(LISTINGS)}")
        data = self._get_json(f"/{listing}stories.json")
        return self._decode(registry.ID_LIST, data, f"{listing}stories")

    def fetch_stories(self, listing: str, count: int) -> List[Item]:
        """Fetch the first ``count`` items of a ranked list, in rank order.

        Items are fetched concurrently. The first failure fails the whole
        batch: queued fetches are cancelled, fetches already in flight are
        left to finish in the background and their results are dropped.
        """
        ids = self.fetch_ids(listing)[:max(count, 0)]
        if not ids:
            return []
        logger.debug("fetching %d %s items", len(ids), listing)
        pool = ThreadPoolExecutor(max_workers=min(self.max_workers, len(ids)),
                                  thread_name_prefix="hntyped")
        try:
            futures = [pool.submit(self.fetch_item, item_id) for item_id in ids]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            failed = _first_failed(futures, done)
            if failed is not None:
                for fut in pending:
                    fut.cancel()
                logger.warning("batch of %d %s items aborted: item %s failed",
                               len(ids), listing, ids[futures.index(failed)])
                raise failed.exception()
            return [fut.result() for fut in futures]
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def fetch_top_items(self, count: int) -> List[Item]:
        return self.fetch_stories("top", count)


def _first_failed(futures: List[Future], done) -> Optional[Future]:
    # lowest rank among the failures already complete
    for fut in futures:
        if fut in done and not fut.cancelled() and fut.exception() is not None:
            return fut
    return None


_default_client: Optional[HackerNewsClient] = None


def default_client() -> HackerNewsClient:
    global _default_client
    if _default_client is None:
        _default_client = HackerNewsClient()
    return _default_client


def fetch_item(id: int) -> Item:
    return default_client().fetch_item(id)


def fetch_top_items(count: int) -> List[Item]:
    return default_client().fetch_top_items(count)
