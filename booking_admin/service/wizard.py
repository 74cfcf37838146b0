"""
Step machine for the service creation wizard.

Four tabs in a fixed order. Moving forward requires every step being
left behind to pass validation; moving back is always allowed and
never re-validates.

Usage:
    wizard = ServiceWizard(service)
    wizard.advance()                    # raises StepBlockedError if step 0 is incomplete
    wizard.go_to(WizardStep.PRODUCT_SLOT)
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from booking_admin.errors import StepBlockedError
from booking_admin.logging_context import get_request_logger, set_request_id
from booking_admin.schemas.service_schema import Service
from booking_admin.service.validator import validate_step

logger = get_request_logger(__name__)


class WizardStep(IntEnum):
    PRODUCT_SLOT = 0
    LOCATION_STAFF = 1
    OTHERS = 2
    REVIEW = 3


STEP_TITLES = {
    WizardStep.PRODUCT_SLOT: "Product/Slot configuration",
    WizardStep.LOCATION_STAFF: "Location & Staff Member",
    WizardStep.OTHERS: "Others",
    WizardStep.REVIEW: "Review & Publish",
}


@dataclass
class StepEntry:
    """Recorded history entry for a step visit."""
    step: WizardStep
    entered_at: datetime
    from_step: Optional[WizardStep] = None


class ServiceWizard:
    """Tracks the current tab for one draft service.

    Each wizard is one admin session; its request id tags every log record
    emitted while it moves, including saves made from the same context.
    """

    def __init__(self, service: Service, request_id: Optional[str] = None) -> None:
        self.service = service
        self.request_id = request_id or f"WIZ-{uuid.uuid4().hex[:8]}"
        set_request_id(self.request_id)
        self._current_step = WizardStep.PRODUCT_SLOT
        self._history: list[StepEntry] = [
            StepEntry(step=self._current_step, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_step(self) -> WizardStep:
        return self._current_step

    def blocking_violations(self, target) -> dict[WizardStep, list[str]]:
        """Violations on every step between the current one and ``target``."""
        target = WizardStep(target)
        blocked: dict[WizardStep, list[str]] = {}
        for step in range(self._current_step, target):
            violations = validate_step(self.service, step)
            if violations:
                blocked[WizardStep(step)] = violations
        return blocked

    def can_go_to(self, target) -> bool:
        return not self.blocking_violations(target)

    def go_to(self, target) -> WizardStep:
        """
        Move to ``target``.

        Raises:
            StepBlockedError: for a forward move past a step that fails
                validation. The wizard stays where it was.
        """
        set_request_id(self.request_id)
        target = WizardStep(target)
        if target > self._current_step:
            blocked = self.blocking_violations(target)
            if blocked:
                first_step, violations = next(iter(blocked.items()))
                logger.info(
                    "Wizard blocked at %s: %d violation(s)",
                    STEP_TITLES[first_step], len(violations),
                )
                raise StepBlockedError(int(first_step), violations)

        previous = self._current_step
        self._current_step = target
        self._history.append(StepEntry(
            step=target, entered_at=datetime.now(timezone.utc), from_step=previous,
        ))
        logger.debug("Wizard step: %s -> %s", previous.name, target.name)
        return self._current_step

    def advance(self) -> WizardStep:
        if self._current_step == WizardStep.REVIEW:
            return self._current_step
        return self.go_to(self._current_step + 1)

    def back(self) -> WizardStep:
        if self._current_step == WizardStep.PRODUCT_SLOT:
            return self._current_step
        return self.go_to(self._current_step - 1)

    def update(self, service: Service) -> None:
        """Replace the draft being edited. The current step is kept."""
        self.service = service

    def get_history(self) -> list[StepEntry]:
        return list(self._history)

    def get_step_trace(self) -> list[str]:
        return [entry.step.name for entry in self._history]

    def is_review(self) -> bool:
        return self._current_step == WizardStep.REVIEW
