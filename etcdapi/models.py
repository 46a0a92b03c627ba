"""
Data model for the etcd client.

Server addresses, the ordered server list and the typed outcomes produced
by the classifiers and the failover coordinator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from etcdapi.exceptions import EmptyServerListError, InvalidServerAddressError


@dataclass(frozen=True)
class ServerAddress:
    """One candidate server of the coordination service."""
    host: str
    port: int

    def __post_init__(self):
        if not isinstance(self.host, str) or not self.host:
            raise InvalidServerAddressError(repr(self.host), "host must be a non-empty string")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise InvalidServerAddressError(f"{self.host}:{self.port!r}", "port must be an integer")
        if not 0 < self.port < 65536:
            raise InvalidServerAddressError(f"{self.host}:{self.port}", "port out of range")

    @classmethod
    def parse(cls, text: str) -> "ServerAddress":
        """
        Build an address from ``host:port`` text.

        Args:
            text: Address such as ``"10.0.0.1:4001"``

        Returns:
            ServerAddress instance
        """
        host, sep, port = text.strip().rpartition(":")
        if not sep or not host:
            raise InvalidServerAddressError(text, "expected host:port")
        try:
            port_number = int(port)
        except ValueError:
            raise InvalidServerAddressError(text, "port must be an integer") from None
        return cls(host=host, port=port_number)

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


ServerList = Tuple[ServerAddress, ...]

ServerSpec = Union[ServerAddress, Tuple[str, int], str]


def make_server_list(servers: Iterable[ServerSpec]) -> ServerList:
    """
    Freeze caller-supplied servers into a ServerList.

    Entries may be ServerAddress instances, ``(host, port)`` pairs or
    ``"host:port"`` strings. Order is kept: it is the failover order.

    Args:
        servers: Candidate servers, highest priority first

    Returns:
        Immutable tuple of ServerAddress
    """
    result = []
    for entry in servers:
        if isinstance(entry, ServerAddress):
            result.append(entry)
        elif isinstance(entry, str):
            result.append(ServerAddress.parse(entry))
        elif isinstance(entry, tuple) and len(entry) == 2:
            result.append(ServerAddress(host=entry[0], port=entry[1]))
        else:
            raise InvalidServerAddressError(repr(entry), "unsupported server entry")

    if not result:
        raise EmptyServerListError()
    return tuple(result)


class OperationResult(Enum):
    """Outcome of a set or delete."""
    SUCCESS = "success"
    PROTOCOL_ERROR = "protocol_error"
    TRANSPORT_OR_UNKNOWN_ERROR = "transport_or_unknown_error"


@dataclass(frozen=True)
class Found:
    """A get or leader lookup produced a value."""
    value: str


class _NotFound:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotFound"

    def __bool__(self) -> bool:
        return False


# Absent key, malformed response and unreachable server all look the same.
NotFound = _NotFound()

GetResult = Union[Found, _NotFound]


@dataclass(frozen=True)
class Delivered:
    """The server answered; ``body`` is the raw response text."""
    body: str


class _TransportFailure:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "TransportFailure"


TransportFailure = _TransportFailure()

RawOutcome = Union[Delivered, _TransportFailure]
