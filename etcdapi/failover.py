"""
Failover coordinator.

Runs one logical operation against the configured servers in order and
applies the per-operation stopping rule:

- get / leader: stop on the first value found.
- set: stop on success or on a protocol error (a rejected precondition
  will be rejected by every server, they share state).
- delete: stop on success only.

Every call starts again at the first server; nothing is remembered
between calls.
"""

import logging
from typing import Callable, Optional

from etcdapi.classifiers import (
    classify_raw_get,
    classify_raw_leader,
    classify_raw_write,
)
from etcdapi.exceptions import InvalidRequestError
from etcdapi.models import Found, GetResult, OperationResult, RawOutcome, ServerList
from etcdapi.request_builder import (
    KEYS_PREFIX,
    LEADER_KEY,
    LEADER_PREFIX,
    build_read_url,
    build_write_body,
    build_write_url,
    method_for_body,
)
from etcdapi.transport import HTTPTransport

logger = logging.getLogger(__name__)


class FailoverCoordinator:
    """Sequences attempts across an ordered server list."""

    def __init__(self, servers: ServerList, transport: Callable[[], HTTPTransport]):
        """
        Initialize coordinator.

        Args:
            servers: Candidate servers, tried first to last
            transport: Returns the transport to use for a call
        """
        self.servers = servers
        self._transport = transport

    def _read(self, key: str, prefix: str, classify: Callable[[RawOutcome], GetResult]) -> Optional[str]:
        transport = self._transport()
        for index, server in enumerate(self.servers):
            url = build_read_url(server, key, prefix)
            result = classify(transport.execute("GET", url))
            logger.debug(f"GET {url} [{index}] -> {result!r}")
            if isinstance(result, Found):
                return result.value

        logger.debug(f"No server returned {prefix}{key}; tried {len(self.servers)}")
        return None

    def get(self, key: str) -> Optional[str]:
        """
        Read ``key`` from the first server that has it.

        Returns:
            The value, or None when no server produced one
        """
        return self._read(key, KEYS_PREFIX, classify_raw_get)

    def leader(self) -> Optional[str]:
        """Ask each server in turn for the current leader."""
        return self._read(LEADER_KEY, LEADER_PREFIX, classify_raw_leader)

    def _write_one(self, transport: HTTPTransport, server, key: str, body: Optional[str]) -> OperationResult:
        url = build_write_url(server, key)
        method = method_for_body(body)
        result = classify_raw_write(transport.execute(method, url, body))
        logger.debug(f"{method} {url} -> {result.value}")
        return result

    def set(
        self,
        key: str,
        value: str,
        precondition: Optional[str] = None,
        ttl: Optional[int] = 0,
    ) -> OperationResult:
        """
        Write ``value`` to ``key``.

        Args:
            key: Key to write
            value: New value
            precondition: Previous value the key must hold, if any
            ttl: Expiry in seconds, 0 for none

        Returns:
            SUCCESS, PROTOCOL_ERROR, or TRANSPORT_OR_UNKNOWN_ERROR when
            no server could confirm either
        """
        if value is None:
            raise InvalidRequestError("value is required; use delete to remove a key", field="value")

        body = build_write_body(value, precondition, ttl)
        transport = self._transport()
        for server in self.servers:
            result = self._write_one(transport, server, key, body)
            if result in (OperationResult.SUCCESS, OperationResult.PROTOCOL_ERROR):
                return result

        logger.warning(f"Could not confirm set of {key} on any of {len(self.servers)} servers")
        return OperationResult.TRANSPORT_OR_UNKNOWN_ERROR

    def delete(self, key: str) -> OperationResult:
        """
        Delete ``key``.

        Unlike set, a protocol error does not stop the iteration. When no
        server succeeds, the outcome of the last attempt is returned.
        """
        transport = self._transport()
        result = OperationResult.TRANSPORT_OR_UNKNOWN_ERROR
        for server in self.servers:
            result = self._write_one(transport, server, key, None)
            if result == OperationResult.SUCCESS:
                return result

        logger.warning(f"Could not delete {key}: last outcome {result.value}")
        return result
