from .client import HackerNewsClient, fetch_item, fetch_top_items
from .errors import HackerNewsError, Issue, TagDispatchFailure, TransportError, ValidationFailure
from .schemas import decode

__version__ = "0.1.0"

__all__ = [
    "HackerNewsClient",
    "HackerNewsError",
    "Issue",
    "TagDispatchFailure",
    "TransportError",
    "ValidationFailure",
    "decode",
    "fetch_item",
    "fetch_top_items",
]
