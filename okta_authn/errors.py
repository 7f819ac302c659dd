"""
Okta Authn SDK Error Classes

Errors raised by the client. API failures are wrapped in ``OktaApiError``
(or a status-specific subclass) which gives typed access to the decoded
error body.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union, overload

from .types import ErrorCause, ErrorResponse


class OktaError(Exception):
    """Base error class for Okta Authn SDK."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.request_id = request_id
        self.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
            "request_id": self.request_id,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class NetworkError(OktaError):
    """Network error (connection issues, timeouts)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("NETWORK_ERROR", message, 0, details)


class ConfigurationError(OktaError):
    """Configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, 0, details)


class ErrorCauseIndexError(IndexError):
    """Requested error cause does not exist."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"error cause index {index} out of range ({count} causes)")
        self.index = index
        self.count = count


class OktaApiError(OktaError):
    """
    Error response returned by the API.

    Wraps the decoded error body and exposes its fields through typed
    accessors.

    Args:
        response_object: Decoded error body (``ErrorResponse`` or dict)
        previous: Lower-level exception that caused this one
        status_code: HTTP status of the failed response
        request_id: Value of the ``X-Okta-Request-Id`` header
    """

    def __init__(
        self,
        response_object: Union[ErrorResponse, Dict[str, Any]],
        previous: Optional[BaseException] = None,
        status_code: int = 0,
        request_id: Optional[str] = None,
    ):
        if not isinstance(response_object, ErrorResponse):
            response_object = ErrorResponse.from_dict(response_object)
        self._response_object = response_object

        super().__init__(
            response_object.error_code or "UNKNOWN_ERROR",
            response_object.error_summary or "",
            status_code,
            {"error_id": response_object.error_id} if response_object.error_id else None,
            request_id,
        )
        if previous is not None:
            self.__cause__ = previous

    @property
    def response_object(self) -> ErrorResponse:
        return self._response_object

    @property
    def error_code(self) -> Optional[str]:
        return self._response_object.error_code

    @property
    def error_summary(self) -> Optional[str]:
        return self._response_object.error_summary

    @property
    def error_link(self) -> Optional[str]:
        return self._response_object.error_link

    @property
    def error_id(self) -> Optional[str]:
        return self._response_object.error_id

    @overload
    def error_causes(self, index: None = None) -> List[ErrorCause]: ...

    @overload
    def error_causes(self, index: int) -> Union[List[ErrorCause], Optional[str]]: ...

    def error_causes(self, index: Optional[int] = None) -> Union[List[ErrorCause], Optional[str]]:
        """
        Get the error causes.

        Args:
            index: Position of a single cause; None or a negative index
                selects every cause

        Returns:
            All causes in order, or the summary of the cause at ``index``

        Raises:
            ErrorCauseIndexError: If ``index`` is past the end of the causes list
        """
        causes = self._response_object.error_causes
        if index is None or index < 0:
            return list(causes)
        if index >= len(causes):
            raise ErrorCauseIndexError(index, len(causes))
        return causes[index].error_summary

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["response"] = self._response_object.to_dict()
        return result


class ValidationError(OktaApiError):
    """Request rejected by the API (HTTP 400)."""


class AuthenticationError(OktaApiError):
    """Authentication failed (HTTP 401)."""


class AuthorizationError(OktaApiError):
    """Insufficient permissions (HTTP 403)."""


class NotFoundError(OktaApiError):
    """Resource or transaction not found (HTTP 404)."""


class RateLimitError(OktaApiError):
    """Rate limit exceeded (HTTP 429)."""

    def __init__(
        self,
        response_object: Union[ErrorResponse, Dict[str, Any]],
        previous: Optional[BaseException] = None,
        status_code: int = 429,
        request_id: Optional[str] = None,
        rate_limit_reset: Optional[int] = None,
    ):
        super().__init__(response_object, previous, status_code, request_id)
        self.rate_limit_reset = rate_limit_reset
        if rate_limit_reset is not None:
            self.details["rate_limit_reset"] = rate_limit_reset


STATUS_ERRORS = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    429: RateLimitError,
}


def is_okta_error(error: Any) -> bool:
    """Check if error is an OktaError."""
    return isinstance(error, OktaError)
