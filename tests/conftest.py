import json

import pytest
import requests

import pipeline
from server import create_app
from settings import ProxyConfig


def make_response(body, status_code=200):
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body, ensure_ascii=False)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    return response


class FakeUpstream:
    """Stands in for ``requests.get`` and records every call."""

    def __init__(self):
        self.calls = []
        self.response = make_response({"code": 200, "data": {}})
        self.error = None

    def reply(self, body, status_code=200):
        self.response = make_response(body, status_code)

    def fail(self, error):
        self.error = error

    def __call__(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(pipeline.requests, "get", fake)
    return fake


@pytest.fixture
def upstream_url():
    return "http://upstream.test/api/"


@pytest.fixture
def config(upstream_url):
    return ProxyConfig(base_url=upstream_url, user_agent="TestAgent/1.0", timeout=3.0)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
