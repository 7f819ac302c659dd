"""
Okta Authn SDK Transport

Request builder and sender shared by the resource facades. Each call to
``Transport.request`` returns a new ``Request`` with its own payload, so a
single transport can serve concurrent callers.
"""

import logging
from typing import Any, Dict, Literal, Mapping, Optional

import httpx

from .types import OktaConfig, ErrorResponse
from .errors import NetworkError, OktaApiError, RateLimitError, STATUS_ERRORS


logger = logging.getLogger("okta_authn")

HttpMethod = Literal["GET", "POST"]

USER_AGENT = "okta-authn-python/1.0.0"


def compact(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop entries whose value is None (absent optional fields)."""
    return {key: value for key, value in fields.items() if value is not None}


class Request:
    """A single pending API call with its accumulated payload."""

    def __init__(self, transport: "Transport", method: HttpMethod, path: str) -> None:
        self._transport = transport
        self.method = method
        self.path = path
        self._payload: Dict[str, Any] = {}

    def data(self, fields: Mapping[str, Any]) -> "Request":
        """Merge fields into the payload. Later keys win."""
        self._payload.update(fields)
        return self

    @property
    def payload(self) -> Dict[str, Any]:
        return dict(self._payload)

    def send(self) -> Dict[str, Any]:
        """Perform the call and return the decoded response body."""
        body = None if self.method == "GET" else self._payload
        return self._transport.execute(self.method, self.path, body)

    def __repr__(self) -> str:
        return f"Request(method={self.method!r}, path={self.path!r})"


class Transport:
    """HTTP transport bound to one organization."""

    def __init__(self, config: OktaConfig, http_client: Optional[httpx.Client] = None) -> None:
        self._base_url = config.api_base_url
        self._api_token = config.api_token
        self._timeout = config.timeout
        self._debug = config.debug
        self._custom_headers = config.headers or {}

        # HTTP client
        self._http_client = http_client or httpx.Client(timeout=self._timeout)

    def log(self, message: str, *args: Any) -> None:
        """Log debug message when debug is enabled."""
        if self._debug:
            logger.debug(f"[Okta] {message}", *args)

    # =========================================================================
    # Request Builders
    # =========================================================================

    def request(self, method: HttpMethod, path: str) -> Request:
        """Start a new request for a path relative to the API base URL."""
        return Request(self, method, path)

    def get(self, path: str) -> Request:
        return self.request("GET", path)

    def post(self, path: str) -> Request:
        return self.request("POST", path)

    # =========================================================================
    # Execution
    # =========================================================================

    def url_for(self, path: str) -> str:
        return f"{self._base_url}{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
            **self._custom_headers,
        }

        if self._api_token:
            headers["Authorization"] = f"SSWS {self._api_token}"

        return headers

    def execute(
        self,
        method: HttpMethod,
        path: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Execute a single HTTP request."""
        self.log(f"{method} {path}")

        try:
            response = self._http_client.request(
                method=method,
                url=self.url_for(path),
                headers=self._headers(),
                json=body,
            )
        except httpx.TimeoutException as e:
            raise NetworkError("Request timeout", {"timeout": self._timeout}) from e
        except httpx.RequestError as e:
            raise NetworkError(str(e)) from e

        return self._handle_response(response)

    def _invalid_body(self, response: httpx.Response) -> OktaApiError:
        """Error for a success response whose body is not a JSON object."""
        return OktaApiError(
            {"errorCode": "UNKNOWN_ERROR", "errorSummary": "Invalid JSON response"},
            status_code=response.status_code,
            request_id=response.headers.get("x-okta-request-id"),
        )

    def _handle_response(self, response: httpx.Response) -> Dict[str, Any]:
        """Handle HTTP response and convert to decoded body or error."""
        content_type = response.headers.get("content-type", "")
        is_json = "json" in content_type

        if response.is_success:
            if not is_json or not response.content:
                return {}
            try:
                data = response.json()
            except ValueError as e:
                raise self._invalid_body(response) from e
            if not isinstance(data, dict):
                raise self._invalid_body(response)
            return data

        # Handle error responses
        error_data: Optional[Dict[str, Any]] = None
        if is_json:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None

        if not isinstance(error_data, dict):
            error_data = {
                "errorCode": "UNKNOWN_ERROR",
                "errorSummary": f"HTTP {response.status_code}",
            }

        error_response = ErrorResponse.from_dict(error_data)
        request_id = response.headers.get("x-okta-request-id")
        self.log(
            "Error response %s (%s)", response.status_code, error_response.error_code
        )

        error_class = STATUS_ERRORS.get(response.status_code, OktaApiError)
        if error_class is RateLimitError:
            reset = response.headers.get("x-rate-limit-reset")
            raise RateLimitError(
                error_response,
                status_code=response.status_code,
                request_id=request_id,
                rate_limit_reset=int(reset) if reset and reset.isdigit() else None,
            )
        raise error_class(
            error_response,
            status_code=response.status_code,
            request_id=request_id,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._http_client.close()
