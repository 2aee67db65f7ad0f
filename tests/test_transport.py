"""Tests for the log transport client."""

import httpx

from log_middleware.models import LogRecord
from log_middleware.transport import LogTransportClient

from conftest import BASE_URL

RECORD = LogRecord("frontend", "info", "api", "User logged into dashboard")


class TestRequestShape:
    def test_posts_json_to_logs_path(self, transport, stub_service):
        transport.submit(RECORD)

        request = stub_service.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/logs"
        assert request.headers["content-type"] == "application/json"
        assert stub_service.last_json() == {
            "stack": "frontend",
            "level": "info",
            "package": "api",
            "message": "User logged into dashboard",
        }

    def test_trailing_slash_and_custom_path(self, make_stub):
        stub = make_stub()
        with stub.client() as client:
            transport = LogTransportClient(BASE_URL + "/", logs_path="/v2/logs", http_client=client)
            transport.submit(RECORD)
        assert str(stub.requests[0].url) == f"{BASE_URL}/v2/logs"

    def test_one_request_per_submit(self, transport, stub_service):
        transport.submit(RECORD)
        transport.submit(RECORD)
        assert stub_service.call_count == 2


class TestResponses:
    def test_201_is_success(self, transport):
        result = transport.submit(RECORD)
        assert result.success is True
        assert result.message is None

    def test_500_reports_status_and_body(self, make_stub):
        stub = make_stub(lambda request: httpx.Response(500, text="server error"))
        with stub.client() as client:
            result = LogTransportClient(BASE_URL, http_client=client).submit(RECORD)
        assert result.success is False
        assert result.message == "500 - server error"

    def test_4xx_is_not_retried(self, make_stub):
        stub = make_stub(lambda request: httpx.Response(400, text="bad package"))
        with stub.client() as client:
            result = LogTransportClient(BASE_URL, http_client=client).submit(RECORD)
        assert result.message == "400 - bad package"
        assert stub.call_count == 1

    def test_network_fault_is_converted(self, make_stub):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        stub = make_stub(refuse)
        with stub.client() as client:
            result = LogTransportClient(BASE_URL, http_client=client).submit(RECORD)
        assert result.success is False
        assert "Connection refused" in result.message
        assert stub.call_count == 1

    def test_timeout_without_text_uses_exception_name(self, make_stub):
        def time_out(request):
            raise httpx.ReadTimeout("", request=request)

        stub = make_stub(time_out)
        with stub.client() as client:
            result = LogTransportClient(BASE_URL, http_client=client).submit(RECORD)
        assert result.success is False
        assert result.message == "ReadTimeout"


class TestBodyEncoding:
    def test_lone_surrogate_in_message_is_sent(self, transport, stub_service):
        """A surrogate-escaped filename (as from os.fsdecode) must not break encoding."""
        record = LogRecord("backend", "error", "handler", "bad name \udcff")
        result = transport.submit(record)

        assert result.success is True
        assert stub_service.last_json()["message"] == "bad name \udcff"

    def test_non_ascii_message_round_trips(self, transport, stub_service):
        transport.submit(LogRecord("frontend", "info", "api", "café ✓"))
        assert stub_service.requests[0].headers["content-type"] == "application/json"
        assert stub_service.last_json()["message"] == "café ✓"


class TestClientOwnership:
    def test_injected_client_left_open(self, make_stub):
        stub = make_stub()
        client = stub.client()
        with LogTransportClient(BASE_URL, http_client=client):
            pass
        assert not client.is_closed
        client.close()

    def test_url_property(self):
        with LogTransportClient("http://host/", logs_path="/logs") as transport:
            assert transport.url == "http://host/logs"
