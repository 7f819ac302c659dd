"""
Okta Authn SDK Client

Main client class for the Okta Authentication and Schema APIs.
The client holds no session state: every call is a single request/response
round trip, and transaction state is carried by the caller's state token.
"""

from typing import Any, Optional

import httpx

from .authentication import Authentication
from .errors import ConfigurationError
from .schema import Schema
from .transport import Transport
from .types import OktaConfig, is_valid_org_url


class OktaClient:
    """
    Okta Authn Client - synchronous SDK entry point.

    Example:
        >>> client = OktaClient(OktaConfig(org_url="https://dev-123456.okta.com"))
        >>> transaction = client.auth.authn("alice", "secret")
        >>> transaction.status
        'MFA_REQUIRED'
    """

    def __init__(self, config: OktaConfig, http_client: Optional[httpx.Client] = None) -> None:
        """Initialize the Okta Authn client."""
        self._validate_config(config)

        self._config = config
        self._transport = Transport(config, http_client)

        # Resources
        self.authentication = Authentication(self._transport)
        self.auth = self.authentication
        self.schema = Schema(self._transport)

        self._transport.log(f"OktaClient initialized (base_url={config.api_base_url})")

    def _validate_config(self, config: OktaConfig) -> None:
        """Validate configuration."""
        if not config.org_url:
            raise ConfigurationError("org_url is required")
        if not is_valid_org_url(config.org_url):
            raise ConfigurationError(
                "Invalid org_url. Expected http(s)://<your-org>.okta.com"
            )
        if config.timeout <= 0:
            raise ConfigurationError("timeout must be positive", {"timeout": config.timeout})

    def get_config(self) -> OktaConfig:
        return self._config

    def close(self) -> None:
        """Close the HTTP client."""
        self._transport.close()

    def __enter__(self) -> "OktaClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def create_okta_client(config: OktaConfig) -> OktaClient:
    """Create a new Okta Authn client."""
    return OktaClient(config)
