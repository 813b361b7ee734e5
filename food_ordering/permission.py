"""Location permission service and the gate in front of the menu."""

from __future__ import annotations

import os
from typing import Protocol

from food_ordering.config import LOCATION_SERVICES_ENV, LOCATION_STATUS_ENV
from food_ordering.debuglog import log_debug
from food_ordering.models import PermissionStatus

_FALSY = {"0", "false", "no", "off"}


class PermissionService(Protocol):
    def query(self) -> PermissionStatus: ...

    def request(self) -> PermissionStatus: ...


class StaticPermissionService:
    """Permission service with a fixed answer, used on desktop and in tests."""

    def __init__(
        self,
        status: PermissionStatus = PermissionStatus.NOT_DETERMINED,
        services_enabled: bool = True,
        request_outcome: PermissionStatus = PermissionStatus.GRANTED,
    ) -> None:
        self.status = status
        self.services_enabled = services_enabled
        self.request_outcome = request_outcome
        self.request_count = 0

    @classmethod
    def from_env(cls) -> StaticPermissionService:
        raw_status = os.environ.get(LOCATION_STATUS_ENV, "").strip().lower()
        try:
            status = PermissionStatus(raw_status) if raw_status else PermissionStatus.NOT_DETERMINED
        except ValueError:
            log_debug(f"permission_env_invalid value={raw_status!r}")
            status = PermissionStatus.NOT_DETERMINED
        raw_enabled = os.environ.get(LOCATION_SERVICES_ENV, "").strip().lower()
        return cls(status=status, services_enabled=raw_enabled not in _FALSY)

    def query(self) -> PermissionStatus:
        # With location services off the status is never read.
        if not self.services_enabled:
            return PermissionStatus.NOT_DETERMINED
        return self.status

    def request(self) -> PermissionStatus:
        self.request_count += 1
        if self.services_enabled and self.status is PermissionStatus.NOT_DETERMINED:
            self.status = self.request_outcome
        return self.query()


class PermissionGate:
    """
    Decides whether the location prompt or the menu is shown.

    Only NOT_DETERMINED shows the prompt. DENIED and RESTRICTED go straight
    to the menu like GRANTED does.
    """

    def __init__(self) -> None:
        self.status = PermissionStatus.NOT_DETERMINED
        self.proceeded = False

    @property
    def prompt_visible(self) -> bool:
        return self.status is PermissionStatus.NOT_DETERMINED and not self.proceeded

    @property
    def can_enter_menu(self) -> bool:
        return not self.prompt_visible

    def evaluate(self, service: PermissionService) -> PermissionStatus:
        self.status = service.query()
        self.proceeded = False
        log_debug(f"permission_evaluated status={self.status.value} prompt={self.prompt_visible}")
        return self.status

    def proceed(self) -> None:
        self.proceeded = True
        log_debug(f"permission_proceed status={self.status.value}")

    def request_access(self, service: PermissionService) -> PermissionStatus:
        self.status = service.request()
        log_debug(f"permission_requested status={self.status.value}")
        self.proceed()
        return self.status
