"""
Content Lifecycle State Machine

DRAFT -> PENDING_MAPPING -> ACTIVE <-> INACTIVE, and ACTIVE -> SUSPENDED.

ACTIVATE is legal from every non-ACTIVE state but only when the unit carries
at least one competency mapping. Every status change of a ContentUnit, whether
interactive, administrative or from a sweep, goes through apply_transition().
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.domain import errors
from src.domain.entities import ContentStatus, ContentUnit


class ContentTransition(str, Enum):
    submit = "submit"
    activate = "activate"
    deactivate = "deactivate"
    suspend = "suspend"


# Requested status -> transition, for PATCH /content-units/{id}/status
TRANSITION_FOR_STATUS = {
    ContentStatus.pending_mapping: ContentTransition.submit,
    ContentStatus.active: ContentTransition.activate,
    ContentStatus.inactive: ContentTransition.deactivate,
    ContentStatus.suspended: ContentTransition.suspend,
}


@dataclass
class TransitionOutcome:
    previous_status: ContentStatus
    new_status: ContentStatus
    changed: bool


def initial_status(mapping_count: int, draft: bool = False) -> ContentStatus:
    """Status a unit is created in."""
    if draft:
        return ContentStatus.draft
    if mapping_count > 0:
        return ContentStatus.active
    return ContentStatus.pending_mapping


def _target(unit: ContentUnit, transition: ContentTransition, mapping_count: int) -> Result[ContentStatus]:
    current = unit.status

    if transition == ContentTransition.activate:
        if current == ContentStatus.active:
            return Return.ok(current)
        if mapping_count < 1:
            return Return.err(
                Error(
                    errors.COMPETENCY_MAPPING_REQUIRED,
                    "Content unit requires at least one competency mapping before activation",
                )
            )
        return Return.ok(ContentStatus.active)

    if transition == ContentTransition.deactivate:
        if current in (ContentStatus.active, ContentStatus.inactive):
            return Return.ok(ContentStatus.inactive)

    elif transition == ContentTransition.suspend:
        if current in (ContentStatus.active, ContentStatus.suspended):
            return Return.ok(ContentStatus.suspended)

    elif transition == ContentTransition.submit:
        if current == ContentStatus.draft:
            return Return.ok(ContentStatus.pending_mapping)
        if current == ContentStatus.pending_mapping:
            return Return.ok(current)

    return Return.err(
        Error(
            errors.INVALID_STATUS_TRANSITION,
            f"Cannot {transition.value} content unit in status {current.value}",
        )
    )


def apply_transition(
    unit: ContentUnit,
    transition: ContentTransition,
    mapping_count: int,
    actor_id: Optional[UUID],
    now: datetime,
    reason: Optional[str] = None,
) -> Result[TransitionOutcome]:
    """
    Validate and apply a transition to unit in place.

    Repeating a transition whose target is the current status is a no-op
    success (changed=False) and leaves attribution fields untouched.
    """
    target = _target(unit, transition, mapping_count)
    if target.is_err():
        return target

    previous = unit.status
    new_status = target.value
    if new_status == previous:
        return Return.ok(TransitionOutcome(previous, new_status, changed=False))

    unit.status = new_status
    unit.updated_at = now
    if new_status == ContentStatus.active:
        unit.activated_at = now
        unit.activated_by = actor_id
    elif new_status in (ContentStatus.inactive, ContentStatus.suspended):
        unit.deactivated_at = now
        unit.deactivated_by = actor_id
        unit.deactivation_reason = reason

    return Return.ok(TransitionOutcome(previous, new_status, changed=True))
