"""
Response classifiers.

Each classifier turns one raw response body into a typed outcome for its
operation family. None of them raise: anything they cannot positively
recognise maps to the operation's fallback outcome.
"""

import json
from numbers import Number
from typing import Any, Optional

from etcdapi.models import (
    Delivered,
    Found,
    GetResult,
    NotFound,
    OperationResult,
    RawOutcome,
)


def extract_field(text: str, name: str, expected_type: type) -> Optional[Any]:
    """
    Parse a JSON document and pull out one top-level field.

    Args:
        text: Raw JSON text
        name: Field name
        expected_type: ``str`` or ``Number``

    Returns:
        The field value when present and of the expected type, else None
    """
    # Deeply nested input exhausts the decoder's recursion limit
    try:
        document = json.loads(text)
    except (ValueError, RecursionError):
        return None

    if not isinstance(document, dict):
        return None

    value = document.get(name)
    # JSON true/false decode to bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, expected_type):
        return None
    return value


def classify_get(body: str) -> GetResult:
    """``{"value": "<string>"}`` is a hit; anything else is not found."""
    value = extract_field(body, "value", str)
    if value is None:
        return NotFound
    return Found(value)


def classify_write(body: str) -> OperationResult:
    """
    Classify a set/delete response.

    Success responses carry a numeric ``index``; rejections carry
    ``errorCode``/``cause``. Any delivered body that is not a success is
    treated as a protocol error. An empty body gives nothing to classify.
    """
    if not body:
        return OperationResult.TRANSPORT_OR_UNKNOWN_ERROR
    if extract_field(body, "index", Number) is not None:
        return OperationResult.SUCCESS
    return OperationResult.PROTOCOL_ERROR


def classify_leader(body: str) -> GetResult:
    """The leader endpoint answers in plain text: the body is the result."""
    if not body:
        return NotFound
    return Found(body)


def classify_raw_get(outcome: RawOutcome) -> GetResult:
    if isinstance(outcome, Delivered):
        return classify_get(outcome.body)
    return NotFound


def classify_raw_leader(outcome: RawOutcome) -> GetResult:
    if isinstance(outcome, Delivered):
        return classify_leader(outcome.body)
    return NotFound


def classify_raw_write(outcome: RawOutcome) -> OperationResult:
    if isinstance(outcome, Delivered):
        return classify_write(outcome.body)
    return OperationResult.TRANSPORT_OR_UNKNOWN_ERROR
