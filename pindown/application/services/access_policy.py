"""Development auth bypass policy.

One object decides whether the development bypass applies, consulted by
both the identity resolver and the access guard. Settings refuse to load
with the bypass enabled in production, so a policy built from settings is
never permissive there.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pindown.application.dtos.auth import Principal
from pindown.core.config import Settings
from pindown.domain.enums import AuthMethod, ResourceKind


@dataclass(frozen=True)
class AccessPolicy:
    dev_auth_bypass: bool = False
    dev_user_id: str = "dev_user_123"
    # Pinboard routes never had the bypass; only pins and their children do.
    bypass_resources: frozenset[ResourceKind] = field(
        default_factory=lambda: frozenset({ResourceKind.PIN})
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessPolicy":
        return cls(
            dev_auth_bypass=settings.dev_auth_bypass and not settings.is_production,
            dev_user_id=settings.dev_user_id,
        )

    def development_principal(self) -> Principal | None:
        """Principal used for every request while the bypass is on, else None."""
        if not self.dev_auth_bypass:
            return None
        return Principal(
            user_id=self.dev_user_id,
            auth_method=AuthMethod.DEVELOPMENT,
            permissions=("*",),
        )

    def bypasses(self, principal: Principal | None, kind: ResourceKind) -> bool:
        """True if the guard should allow any action on this kind of resource."""
        return (
            self.dev_auth_bypass
            and principal is not None
            and principal.auth_method is AuthMethod.DEVELOPMENT
            and kind in self.bypass_resources
        )
