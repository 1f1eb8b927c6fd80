import copy
import logging

import pytest

from hntyped.client import HackerNewsClient

BASE_URL = "https://hn.test/v0"

SAMPLES = {
    "story": {
        "by": "dhouston",
        "descendants": 71,
        "id": 8863,
        "kids": [8952, 9224, 8917],
        "score": 111,
        "time": 1175714200,
        "title": "My YC app: Dropbox - Throw away your USB drive",
        "type": "story",
        "url": "http://www.getdropbox.com/u/2/screencast.html",
    },
    "job": {
        "by": "justin",
        "id": 192327,
        "score": 6,
        "text": "Justin.tv is the biggest live video site online.",
        "time": 1210981217,
        "title": "Justin.tv is looking for a Lead Flash Engineer!",
        "type": "job",
        "url": "",
    },
    "poll": {
        "by": "pg",
        "descendants": 54,
        "id": 126809,
        "kids": [126822, 126823],
        "parts": [126810, 126811, 126812],
        "score": 46,
        "text": "",
        "time": 1204403652,
        "title": "Poll: What would happen if News.YC had explicit support for polls?",
        "type": "poll",
    },
    "pollopt": {
        "by": "pg",
        "id": 160705,
        "poll": 160704,
        "score": 335,
        "text": "Yes, ban them; I'm tired of seeing Valleywag stories on News.YC.",
        "time": 1207886576,
        "type": "pollopt",
    },
    "comment": {
        "by": "norvig",
        "id": 2921983,
        "kids": [2922097, 2922429],
        "parent": 2921506,
        "text": "Aw shucks, guys ... you make me blush with your compliments.",
        "time": 1314211127,
        "type": "comment",
    },
}


@pytest.fixture
def samples():
    return copy.deepcopy(SAMPLES)


@pytest.fixture
def client():
    return HackerNewsClient(base_url=BASE_URL, timeout=2.0)


class FakeResp:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeApi:
    """Routes paths under BASE_URL to canned payloads; unknown paths return null like Firebase."""

    def __init__(self, base_url):
        self.base_url = base_url
        self.routes = {}
        self.calls = []

    def __call__(self, url, timeout=5.0):
        path = url[len(self.base_url):]
        self.calls.append(path)
        route = self.routes.get(path)
        if callable(route):
            route = route()
        return route if isinstance(route, FakeResp) else FakeResp(route)

    def add_item(self, payload):
        self.routes[f"/item/{payload['id']}.json"] = payload


@pytest.fixture
def fake_api(monkeypatch, client):
    api = FakeApi(client.base_url)
    # the requests.Session used by the client lives at client.http.session
    monkeypatch.setattr(client.http.session, "get", api)
    return api


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    hn = logging.getLogger("hntyped")
    hn_level = hn.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    hn.setLevel(hn_level)
