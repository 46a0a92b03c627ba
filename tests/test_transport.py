"""
Tests for the single-server executor and the process-wide transport state.
"""
import threading
from unittest.mock import patch

import pytest
import requests

from etcdapi import transport
from etcdapi.config import ClientSettings
from etcdapi.models import Delivered, TransportFailure
from etcdapi.transport import FORM_HEADERS, HTTPTransport

from conftest import DummyResponse


class TestExecute:

    @patch("etcdapi.transport.requests.request")
    def test_get_delivers_body(self, mock_request):
        mock_request.return_value = DummyResponse('{"value": "bar"}')

        outcome = HTTPTransport(timeout=3.0).execute("GET", "http://a:4001/v1/keys/foo")

        assert outcome == Delivered('{"value": "bar"}')
        mock_request.assert_called_once_with(
            "GET",
            "http://a:4001/v1/keys/foo",
            data=None,
            headers=None,
            timeout=3.0,
            allow_redirects=True,
        )

    @patch("etcdapi.transport.requests.request")
    def test_post_sends_form_body(self, mock_request):
        mock_request.return_value = DummyResponse('{"index": 3}')

        HTTPTransport().execute("POST", "http://a:4001/v1/keys/foo", "value=x")

        _, kwargs = mock_request.call_args
        assert kwargs["data"] == "value=x"
        assert kwargs["headers"] == FORM_HEADERS

    @patch("etcdapi.transport.requests.request")
    def test_error_status_is_still_delivered(self, mock_request):
        body = '{"errorCode": 100, "message": "Key Not Found"}'
        mock_request.return_value = DummyResponse(body, status_code=404)

        assert HTTPTransport().execute("GET", "http://a:4001/v1/keys/x") == Delivered(body)

    @pytest.mark.parametrize("error", [
        requests.ConnectionError("refused"),
        requests.Timeout("slow"),
        requests.TooManyRedirects("loop"),
    ])
    def test_transport_errors_become_failure(self, error):
        with patch("etcdapi.transport.requests.request", side_effect=error) as mock_request:
            outcome = HTTPTransport().execute("GET", "http://a:4001/v1/leader")

        assert outcome is TransportFailure
        mock_request.assert_called_once()

    @patch("etcdapi.transport.requests.request")
    def test_response_is_closed(self, mock_request):
        response = DummyResponse("ok")
        mock_request.return_value = response

        HTTPTransport().execute("GET", "http://a:4001/v1/leader")

        assert response.closed

    @patch("etcdapi.transport.requests.request")
    def test_redirect_setting_is_passed(self, mock_request):
        mock_request.return_value = DummyResponse("")

        HTTPTransport(follow_redirects=False).execute("DELETE", "http://a:4001/v1/keys/k")

        assert mock_request.call_args.kwargs["allow_redirects"] is False


class TestLifecycle:

    def test_initialize_is_idempotent(self):
        first = transport.initialize()
        second = transport.initialize()
        assert first is second
        assert transport.is_initialized()

    def test_initialize_uses_settings(self):
        active = transport.initialize(ClientSettings(http_timeout=2.5, follow_redirects=False))
        assert active.timeout == 2.5
        assert active.follow_redirects is False

    def test_shutdown_is_explicit_and_idempotent(self):
        transport.initialize()
        transport.shutdown()
        transport.shutdown()
        assert not transport.is_initialized()

    def test_get_transport_initialises_lazily(self):
        assert not transport.is_initialized()
        active = transport.get_transport()
        assert transport.is_initialized()
        assert transport.get_transport() is active

    def test_concurrent_initialize_builds_one_transport(self):
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(transport.initialize())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
