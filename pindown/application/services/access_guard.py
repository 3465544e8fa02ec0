"""Access guard: ownership and visibility decisions for pins and pinboards.

Rules, in order:
  1. Development bypass (AccessPolicy) allows.
  2. The owner may do anything.
  3. Anyone, including anonymous callers, may read a public resource.
  4. Otherwise a public resource is PERMISSION_DENIED; a private one is
     RESOURCE_NOT_FOUND so callers cannot tell it apart from a missing one.
"""

from __future__ import annotations

import logging

from pindown.application.dtos.auth import Principal
from pindown.application.dtos.pin import Pin
from pindown.application.dtos.pinboard import Pinboard
from pindown.application.interfaces.repositories import (
    IPinboardRepository,
    IPinRepository,
)
from pindown.application.services.access_policy import AccessPolicy
from pindown.domain.enums import Action, ResourceKind
from pindown.domain.exceptions import AuthorizationException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class AccessGuard:
    def __init__(
        self,
        pins: IPinRepository,
        pinboards: IPinboardRepository,
        policy: AccessPolicy,
    ) -> None:
        self._pins = pins
        self._pinboards = pinboards
        self._policy = policy

    def can(
        self,
        principal: Principal | None,
        kind: ResourceKind,
        owner_id: str,
        is_public: bool,
        action: Action,
    ) -> bool:
        if self._policy.bypasses(principal, kind):
            return True
        if principal is not None and principal.user_id == owner_id:
            return True
        return action is Action.READ and is_public

    def authorize(
        self,
        principal: Principal | None,
        kind: ResourceKind,
        resource_id: str,
        owner_id: str,
        is_public: bool,
        action: Action,
    ) -> None:
        """Raise unless principal may perform action on the resource."""
        if self.can(principal, kind, owner_id, is_public, action):
            return
        logger.info(
            "Denied %s on %s %s for %s",
            action.value,
            kind.value,
            resource_id,
            principal.user_id if principal else "anonymous",
        )
        if is_public:
            raise AuthorizationException(kind.value, action.value)
        raise ResourceNotFoundException(kind.value, resource_id)

    def authorize_pin(self, principal: Principal | None, pin: Pin, action: Action) -> None:
        self.authorize(principal, ResourceKind.PIN, pin.id, pin.user_id, pin.is_public, action)

    def authorize_pinboard(
        self, principal: Principal | None, pinboard: Pinboard, action: Action
    ) -> None:
        self.authorize(
            principal,
            ResourceKind.PINBOARD,
            pinboard.id,
            pinboard.user_id,
            pinboard.is_public,
            action,
        )

    def can_read_pin(self, principal: Principal | None, pin: Pin) -> bool:
        return self.can(principal, ResourceKind.PIN, pin.user_id, pin.is_public, Action.READ)

    async def load_pin(
        self, principal: Principal | None, pin_id: str, action: Action
    ) -> Pin:
        """Load a pin and authorize action on it; missing pins are RESOURCE_NOT_FOUND."""
        pin = await self._pins.get_pin(pin_id)
        if pin is None:
            raise ResourceNotFoundException("pin", pin_id)
        self.authorize_pin(principal, pin, action)
        return pin

    async def authorize_pin_child(
        self, principal: Principal | None, pin_id: str, action: Action
    ) -> Pin:
        """Authorize an operation on a pin's blocks, datasets or workflow data.

        Children inherit the parent pin's owner and visibility.
        """
        return await self.load_pin(principal, pin_id, action)

    async def load_pinboard(
        self, principal: Principal | None, pinboard_id: str, action: Action
    ) -> Pinboard:
        pinboard = await self._pinboards.get_pinboard(pinboard_id)
        if pinboard is None:
            raise ResourceNotFoundException("pinboard", pinboard_id)
        self.authorize_pinboard(principal, pinboard, action)
        return pinboard
