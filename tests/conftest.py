import os
import tempfile

import httpx
import pytest

# Keep test runs from writing into the project's instance/ directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="studyscout-logs-"))

from studyscout_app import create_app  # noqa: E402
from studyscout_app.search import EXTENSION_KEY, SearchManager  # noqa: E402


TEST_CONFIG = {
    "TESTING": True,
    "YOUTUBE_API_KEY": "yt-key",
    "GOOGLE_CUSTOM_SEARCH_API_KEY": "cse-key",
    "GOOGLE_CUSTOM_SEARCH_CX": "cse-cx",
    "TRUSTED_ARTICLE_DOMAIN": "reputable-site.com",
}


class FakeUpstream:
    """
    Routes outgoing httpx requests to canned responses.

    Responses are keyed by URL path; every request is recorded so tests can
    assert on call order and query parameters.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, path, response):
        self.routes[path] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get(request.url.path)
        if response is None:
            return httpx.Response(404, json={"error": "unexpected path"})
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    @property
    def paths(self):
        return [request.url.path for request in self.requests]

    def params(self, index=0):
        return dict(self.requests[index].url.params)

    def transport(self):
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def manager(upstream):
    return SearchManager.from_config(TEST_CONFIG, transport=upstream.transport())


@pytest.fixture
def app(upstream):
    app = create_app(TEST_CONFIG)
    app.extensions[EXTENSION_KEY] = SearchManager.from_config(app.config, transport=upstream.transport())
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
