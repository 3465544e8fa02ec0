"""DTOs for identity resolution."""

from dataclasses import dataclass

from pindown.domain.enums import AuthMethod

TOKEN_PERMISSIONS: tuple[str, ...] = (
    "pins:read",
    "pins:write",
    "pins:delete",
    "workflow_data:read",
    "workflow_data:write",
)


@dataclass(frozen=True)
class Principal:
    """Resolved caller.

    permissions lists the grants of the token or API key. They are informational:
    the access guard decides by ownership and visibility only.
    """

    user_id: str
    auth_method: AuthMethod
    permissions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Credentials:
    """Raw credentials from a request: Authorization header and body api_key."""

    authorization: str | None = None
    api_key: str | None = None
