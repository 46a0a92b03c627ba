"""
Sessions and the module-level client API.

A Session is a configuration handle: it freezes the server list and
routes every operation through the failover coordinator. It holds no
connections, so closing it only prevents further use.
"""

import logging
from typing import Iterable, Optional

from etcdapi import transport
from etcdapi.config import ClientSettings
from etcdapi.exceptions import SessionClosedError
from etcdapi.failover import FailoverCoordinator
from etcdapi.models import OperationResult, ServerList, ServerSpec, make_server_list

logger = logging.getLogger(__name__)


class Session:
    """
    Handle for a list of candidate servers.

    Safe to share between threads: the server list never changes after
    construction.
    """

    def __init__(self, servers: Iterable[ServerSpec], settings: Optional[ClientSettings] = None):
        """
        Initialize session.

        Args:
            servers: Candidate servers in failover order
            settings: Transport settings for this session only; the
                process-wide transport is used when omitted
        """
        self._servers: ServerList = make_server_list(servers)
        self._closed = False

        if settings is not None:
            own = transport.HTTPTransport.from_settings(settings)
            self._coordinator = FailoverCoordinator(self._servers, lambda: own)
        else:
            self._coordinator = FailoverCoordinator(self._servers, transport.get_transport)

    @property
    def servers(self) -> ServerList:
        return self._servers

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self):
        """Release the session. Calls already running are unaffected."""
        if not self._closed:
            self._closed = True
            logger.debug(f"Session closed ({len(self._servers)} servers)")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        servers = ", ".join(str(s) for s in self._servers)
        state = "closed" if self._closed else "open"
        return f"<Session [{servers}] {state}>"

    def _check_open(self, operation: str):
        if self._closed:
            raise SessionClosedError(operation)

    def get(self, key: str) -> Optional[str]:
        """Value of ``key``, or None if no server returned one."""
        self._check_open("get")
        return self._coordinator.get(key)

    def set(
        self,
        key: str,
        value: str,
        precondition: Optional[str] = None,
        ttl: Optional[int] = 0,
    ) -> OperationResult:
        """Write ``value`` to ``key``, optionally conditional and expiring."""
        self._check_open("set")
        return self._coordinator.set(key, value, precondition, ttl)

    def delete(self, key: str) -> OperationResult:
        self._check_open("delete")
        return self._coordinator.delete(key)

    def leader(self) -> Optional[str]:
        """Identifier of the current leader, or None if no server answered."""
        self._check_open("leader")
        return self._coordinator.leader()


def open_session(servers: Iterable[ServerSpec], settings: Optional[ClientSettings] = None) -> Session:
    """
    Open a session against ``servers``.

    Initialises the process-wide transport on first use.

    Args:
        servers: ServerAddress instances, ``(host, port)`` pairs or
            ``"host:port"`` strings, highest priority first
        settings: Optional per-session transport settings

    Returns:
        Session handle
    """
    session = Session(servers, settings)
    transport.initialize()
    logger.debug(f"Opened {session!r}")
    return session


def close_session(session: Session):
    session.close()


def get_value(session: Session, key: str) -> Optional[str]:
    return session.get(key)


def set_value(
    session: Session,
    key: str,
    value: str,
    precondition: Optional[str] = None,
    ttl: Optional[int] = 0,
) -> OperationResult:
    return session.set(key, value, precondition, ttl)


def delete_value(session: Session, key: str) -> OperationResult:
    return session.delete(key)


def get_leader(session: Session) -> Optional[str]:
    return session.leader()
