"""Shared pytest fixtures: httpx clients backed by MockTransport stubs."""

import json

import httpx
import pytest

from log_middleware.middleware import LoggingMiddleware
from log_middleware.transport import LogTransportClient

BASE_URL = "http://eval.test/evaluation-service"


class StubService:
    """Records every request and answers with a configurable handler."""

    def __init__(self, handler=None):
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(201, json={"logID": "x"}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def stub_service():
    return StubService()


@pytest.fixture
def make_stub():
    """Factory fixture: make_stub(handler) -> StubService."""
    return StubService


@pytest.fixture
def transport(stub_service):
    client = stub_service.client()
    yield LogTransportClient(BASE_URL, http_client=client)
    client.close()


@pytest.fixture
def middleware(stub_service):
    client = stub_service.client()
    yield LoggingMiddleware(LogTransportClient(BASE_URL, http_client=client))
    client.close()
