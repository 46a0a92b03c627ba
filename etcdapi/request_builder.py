"""
Wire representation of etcd v1 requests.

Pure functions: URLs for reads and writes, and the form body for writes.
Keys are percent-encoded with ``/`` kept as the hierarchy separator; value
and precondition are form-encoded so reserved characters cannot break the
``;``-separated body.
"""

from typing import Optional
from urllib.parse import quote, quote_plus

from etcdapi.exceptions import InvalidRequestError
from etcdapi.models import ServerAddress

API_VERSION = "v1"
KEYS_PREFIX = "keys/"
LEADER_PREFIX = ""
LEADER_KEY = "leader"


def _base_url(server: ServerAddress) -> str:
    # IPv6 literals need brackets to be told apart from the port
    host = f"[{server.host}]" if ":" in server.host else server.host
    return f"http://{host}:{server.port}/{API_VERSION}/"


def build_read_url(server: ServerAddress, key_path: str, prefix: str) -> str:
    """
    Build the URL for a GET.

    Args:
        server: Target server
        key_path: Key to read (``"leader"`` for the leader endpoint)
        prefix: ``KEYS_PREFIX`` for the keyspace, ``LEADER_PREFIX`` otherwise

    Returns:
        URL such as ``http://a:4001/v1/keys/foo``
    """
    return f"{_base_url(server)}{prefix}{quote(key_path, safe='/')}"


def build_write_url(server: ServerAddress, key: str) -> str:
    """Build the URL for a POST or DELETE on ``key``."""
    return build_read_url(server, key, KEYS_PREFIX)


def build_write_body(
    value: Optional[str],
    precondition: Optional[str] = None,
    ttl: Optional[int] = 0,
) -> Optional[str]:
    """
    Build the form body of a write.

    Args:
        value: New value; None means the request is a DELETE
        precondition: Required previous value, if any
        ttl: Expiry in seconds; 0 or None means no expiry

    Returns:
        ``value=<v>[;prevValue=<p>][;ttl=<n>]``, or None for a DELETE
        (precondition and ttl are ignored in that case)
    """
    if value is None:
        return None

    if ttl is not None and (isinstance(ttl, bool) or not isinstance(ttl, int)):
        raise InvalidRequestError(f"ttl must be a whole number of seconds, got {ttl!r}", field="ttl")
    if ttl is not None and ttl < 0:
        raise InvalidRequestError(f"ttl must not be negative, got {ttl}", field="ttl")

    parts = [f"value={quote_plus(value, safe='')}"]
    if precondition is not None:
        parts.append(f"prevValue={quote_plus(precondition, safe='')}")
    if ttl:
        parts.append(f"ttl={ttl}")
    return ";".join(parts)


def method_for_body(body: Optional[str]) -> str:
    """POST when there is a body to send, DELETE otherwise."""
    return "POST" if body is not None else "DELETE"
