"""
Client library for the etcd v1 HTTP API.

Operations run against an ordered list of candidate servers and fail over
to the next server when one cannot be reached.
"""

from etcdapi.exceptions import (
    EtcdApiError,
    InvalidServerAddressError,
    EmptyServerListError,
    SessionClosedError,
    InvalidRequestError,
)
from etcdapi.models import (
    ServerAddress,
    ServerList,
    OperationResult,
    make_server_list,
)
from etcdapi.session import (
    Session,
    open_session,
    close_session,
    get_value,
    set_value,
    delete_value,
    get_leader,
)
from etcdapi.transport import initialize, shutdown

__all__ = [
    # Session API
    "Session",
    "open_session",
    "close_session",
    "get_value",
    "set_value",
    "delete_value",
    "get_leader",
    # Transport lifecycle
    "initialize",
    "shutdown",
    # Models
    "ServerAddress",
    "ServerList",
    "OperationResult",
    "make_server_list",
    # Errors
    "EtcdApiError",
    "InvalidServerAddressError",
    "EmptyServerListError",
    "SessionClosedError",
    "InvalidRequestError",
]
