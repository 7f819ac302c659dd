"""
Okta Authn SDK Schema Resource

Read and update the default user schema.
"""

from typing import Any, Dict, Mapping, Optional

from .transport import Transport
from .types import UserSchema


USER_SCHEMA_PATH = "meta/schemas/user/default"


class Schema:
    """Schema API, accessed via ``client.schema``. Requires an API token."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def get_user(self) -> UserSchema:
        """Fetch the default user schema."""
        request = self._transport.get(USER_SCHEMA_PATH)
        return UserSchema.from_dict(request.send())

    def user_property(self, definitions: Mapping[str, Optional[Dict[str, Any]]]) -> UserSchema:
        """
        Add, update or remove user profile properties.

        Definitions are sent as given. A property mapped to None is sent as
        null and removed by the server; properties left out are untouched.

        Args:
            definitions: Property name to property definition (or None)

        Returns:
            The updated user schema
        """
        request = self._transport.post(USER_SCHEMA_PATH)
        request.data({"definitions": dict(definitions)})
        return UserSchema.from_dict(request.send())
