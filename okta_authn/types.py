"""
Okta Authn SDK Type Definitions

Configuration and response records for the Authentication and Schema APIs.
Responses are decoded into known-shape records; unrecognized keys are kept
in ``extra`` and the untouched body in ``raw``.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional
from urllib.parse import urlparse


TransactionStatus = Literal[
    "UNAUTHENTICATED",
    "PASSWORD_WARN",
    "PASSWORD_EXPIRED",
    "RECOVERY",
    "RECOVERY_CHALLENGE",
    "PASSWORD_RESET",
    "LOCKED_OUT",
    "MFA_ENROLL",
    "MFA_ENROLL_ACTIVATE",
    "MFA_REQUIRED",
    "MFA_CHALLENGE",
    "SUCCESS",
]

FactorType = Literal[
    "sms",
    "call",
    "question",
    "push",
    "token",
    "token:software:totp",
    "token:hardware",
    "web",
]

RecoveryFactorType = Literal["EMAIL", "SMS", "CALL"]


def is_valid_org_url(url: str) -> bool:
    """Validate org URL format."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _split(data: Dict[str, Any], known: Dict[str, str]) -> Dict[str, Any]:
    """Return the entries of ``data`` whose keys are not in ``known``."""
    return {key: value for key, value in data.items() if key not in known}


@dataclass
class OktaConfig:
    """SDK configuration options."""

    # Organization URL (https://dev-123456.okta.com)
    org_url: str
    # API token, sent as "SSWS <token>" (required for the Schema API)
    api_token: Optional[str] = None
    # API version path segment (default: v1)
    api_version: str = "v1"
    # Request timeout in seconds (default: 30)
    timeout: float = 30.0
    # Enable debug logging (default: False)
    debug: bool = False
    # Custom headers to include in requests
    headers: Optional[Dict[str, str]] = None

    @property
    def api_base_url(self) -> str:
        """Base URL every relative request path is appended to."""
        return f"{self.org_url.rstrip('/')}/api/{self.api_version}/"

    @classmethod
    def from_env(cls, prefix: str = "OKTA_") -> "OktaConfig":
        """
        Build configuration from environment variables.

        Reads ``<prefix>ORG_URL``, ``<prefix>API_TOKEN``, ``<prefix>TIMEOUT``
        and ``<prefix>DEBUG``.
        """
        timeout = os.environ.get(f"{prefix}TIMEOUT")
        debug = os.environ.get(f"{prefix}DEBUG", "")
        return cls(
            org_url=os.environ.get(f"{prefix}ORG_URL", ""),
            api_token=os.environ.get(f"{prefix}API_TOKEN") or None,
            timeout=float(timeout) if timeout else 30.0,
            debug=debug.lower() in ("1", "true", "yes", "on"),
        )


@dataclass
class Transaction:
    """Authentication or recovery transaction returned by the authn API."""

    status: Optional[str] = None
    state_token: Optional[str] = None
    session_token: Optional[str] = None
    expires_at: Optional[str] = None
    relay_state: Optional[str] = None
    factor_result: Optional[str] = None
    factor_type: Optional[str] = None
    recovery_token: Optional[str] = None
    recovery_type: Optional[str] = None
    embedded: Dict[str, Any] = field(default_factory=dict)
    links: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    FIELDS = {
        "status": "status",
        "stateToken": "state_token",
        "sessionToken": "session_token",
        "expiresAt": "expires_at",
        "relayState": "relay_state",
        "factorResult": "factor_result",
        "factorType": "factor_type",
        "recoveryToken": "recovery_token",
        "recoveryType": "recovery_type",
        "_embedded": "embedded",
        "_links": "links",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Create from decoded response body."""
        return cls(
            status=data.get("status"),
            state_token=data.get("stateToken"),
            session_token=data.get("sessionToken"),
            expires_at=data.get("expiresAt"),
            relay_state=data.get("relayState"),
            factor_result=data.get("factorResult"),
            factor_type=data.get("factorType"),
            recovery_token=data.get("recoveryToken"),
            recovery_type=data.get("recoveryType"),
            embedded=data.get("_embedded") or {},
            links=data.get("_links") or {},
            extra=_split(data, cls.FIELDS),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the response body exactly as decoded."""
        return dict(self.raw)

    @property
    def is_success(self) -> bool:
        return self.status == "SUCCESS"

    def link(self, name: str) -> Optional[str]:
        """Get the href of a named link, if the transaction publishes it."""
        link = self.links.get(name)
        if isinstance(link, dict):
            return link.get("href")
        return None


@dataclass
class ErrorCause:
    """Single entry of an error response's ``errorCauses``."""

    error_summary: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorCause":
        return cls(
            error_summary=data.get("errorSummary"),
            extra={k: v for k, v in data.items() if k != "errorSummary"},
        )


@dataclass
class ErrorResponse:
    """Error body returned by the API on failure."""

    error_code: Optional[str] = None
    error_summary: Optional[str] = None
    error_link: Optional[str] = None
    error_id: Optional[str] = None
    error_causes: List[ErrorCause] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    FIELDS = {
        "errorCode": "error_code",
        "errorSummary": "error_summary",
        "errorLink": "error_link",
        "errorId": "error_id",
        "errorCauses": "error_causes",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorResponse":
        """Create from decoded error body."""
        causes = data.get("errorCauses") or []
        if not isinstance(causes, list):
            causes = [causes]
        return cls(
            error_code=data.get("errorCode"),
            error_summary=data.get("errorSummary"),
            error_link=data.get("errorLink"),
            error_id=data.get("errorId"),
            error_causes=[
                ErrorCause.from_dict(c) if isinstance(c, dict) else ErrorCause(error_summary=str(c))
                for c in causes
            ],
            extra=_split(data, cls.FIELDS),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


@dataclass
class UserSchema:
    """User schema returned by the Schema API."""

    id: Optional[str] = None
    schema: Optional[str] = None
    name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    definitions: Dict[str, Any] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)
    created: Optional[str] = None
    last_updated: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    FIELDS = {
        "id": "id",
        "$schema": "schema",
        "name": "name",
        "title": "title",
        "description": "description",
        "type": "type",
        "definitions": "definitions",
        "properties": "properties",
        "created": "created",
        "lastUpdated": "last_updated",
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserSchema":
        """Create from decoded response body."""
        return cls(
            id=data.get("id"),
            schema=data.get("$schema"),
            name=data.get("name"),
            title=data.get("title"),
            description=data.get("description"),
            type=data.get("type"),
            definitions=data.get("definitions") or {},
            properties=data.get("properties") or {},
            created=data.get("created"),
            last_updated=data.get("lastUpdated"),
            extra=_split(data, cls.FIELDS),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)
