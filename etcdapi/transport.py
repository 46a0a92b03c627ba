"""
HTTP transport for the etcd client.

Holds the process-wide transport state (initialised once, torn down
explicitly) and the single-server executor that issues exactly one
request and reports either the delivered body or a transport failure.
"""

import logging
import threading
from typing import Optional

import requests

from etcdapi.config import ClientSettings, get_settings
from etcdapi.models import Delivered, RawOutcome, TransportFailure

logger = logging.getLogger(__name__)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class HTTPTransport:
    """
    Blocking, connectionless HTTP transport.

    Every request opens its own connection; nothing is pooled or shared
    between calls, so one instance may be used from many threads.
    """

    def __init__(self, timeout: float = 10.0, follow_redirects: bool = True):
        """
        Initialize transport.

        Args:
            timeout: Per-request timeout in seconds
            follow_redirects: Whether to follow 3xx responses
        """
        self.timeout = timeout
        self.follow_redirects = follow_redirects

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "HTTPTransport":
        return cls(
            timeout=settings.http_timeout,
            follow_redirects=settings.follow_redirects,
        )

    def execute(self, method: str, url: str, body: Optional[str] = None) -> RawOutcome:
        """
        Issue one request against one server.

        A non-2xx status is still a delivered answer: its body goes to the
        classifier. Only failing to get an answer at all is a transport
        failure. No retries happen here.

        Args:
            method: GET, POST or DELETE
            url: Full request URL
            body: Form body for POST, None otherwise

        Returns:
            Delivered(body) or TransportFailure
        """
        try:
            with requests.request(
                method,
                url,
                data=body,
                headers=FORM_HEADERS if body is not None else None,
                timeout=self.timeout,
                allow_redirects=self.follow_redirects,
            ) as response:
                return Delivered(response.text)
        except requests.RequestException:
            return TransportFailure


_lock = threading.Lock()
_transport: Optional[HTTPTransport] = None


def initialize(settings: Optional[ClientSettings] = None) -> HTTPTransport:
    """
    Set up the process-wide transport if it is not already up.

    Safe to call from several threads and more than once; only the first
    call (since the last shutdown) builds the transport.

    Args:
        settings: Overrides for the environment-derived settings

    Returns:
        The active transport
    """
    global _transport
    with _lock:
        if _transport is None:
            _transport = HTTPTransport.from_settings(settings or get_settings())
            logger.info(
                f"HTTP transport initialised "
                f"(timeout={_transport.timeout}s, "
                f"follow_redirects={_transport.follow_redirects})"
            )
        return _transport


def shutdown():
    """Tear down the process-wide transport. Idempotent."""
    global _transport
    with _lock:
        if _transport is not None:
            _transport = None
            logger.info("HTTP transport shut down")


def is_initialized() -> bool:
    return _transport is not None


def get_transport() -> HTTPTransport:
    """Return the active transport, initialising it on first use."""
    transport = _transport
    if transport is None:
        transport = initialize()
    return transport
