"""
Custom Exceptions
Exception classes for caller mistakes. Server and transport failures are
never raised: they come back as outcome values.
"""

from typing import Optional, Dict, Any, List


class EtcdApiError(Exception):
    """
    Base exception for all etcdapi errors.
    """

    def __init__(
        self,
        message: str,
        code: str = "ETCDAPI_ERROR",
        details: Optional[List[Dict[str, Any]]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


# Configuration Exceptions

class InvalidServerAddressError(EtcdApiError):
    """Raised when a server address cannot be used"""

    def __init__(self, address: str, reason: Optional[str] = None):
        super().__init__(
            message=f"Invalid server address: {address}" + (f" - {reason}" if reason else ""),
            code="INVALID_SERVER_ADDRESS",
            details=[{"field": "address", "value": address, "reason": reason}]
        )


class EmptyServerListError(EtcdApiError):
    """Raised when a session is opened without servers"""

    def __init__(self):
        super().__init__(
            message="At least one server is required",
            code="EMPTY_SERVER_LIST",
        )


# Session Exceptions

class SessionClosedError(EtcdApiError):
    """Raised when an operation is attempted on a closed session"""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Cannot {operation}: session is closed",
            code="SESSION_CLOSED",
            details=[{"field": "operation", "value": operation}]
        )


class InvalidRequestError(EtcdApiError):
    """Raised when operation arguments cannot form a valid request"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = []
        if field:
            details.append({"field": field, "message": message})

        super().__init__(
            message=message,
            code="INVALID_REQUEST",
            details=details
        )
