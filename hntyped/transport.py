import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from .errors import TransportError

logger = logging.getLogger(__name__)


class JsonTransport:
    """GET a URL and parse the body as JSON. One attempt per call, no retries."""

    def __init__(self, timeout: float = 5.0, session: Optional[requests.Session] = None, pool_size: int = 10):
        if session is None:
            session = requests.Session()
            # one pooled connection per concurrent fetch
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session
        self.timeout = timeout

    def get(self, url: str, **kwargs) -> requests.Response:
        timeout = kwargs.pop("timeout", self.timeout)
        try:
            resp = self.session.get(url, timeout=timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(url, f"request failed: {e}") from e
        if resp.status_code >= 400:
            raise TransportError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp

    def get_json(self, url: str) -> Any:
        resp = self.get(url)
        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError(url, "response body is not JSON", status_code=resp.status_code) from e
        logger.debug("GET %s -> %s", url, type(data).__name__)
        return data

    def close(self) -> None:
        self.session.close()
