"""
Bulk content transitions triggered by publisher-level events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.content_lifecycle import ContentTransition, apply_transition
from src.domain.entities import AuditAction, AuditEvent, ContentStatus, Tenant

ITEM_ACTION = {
    ContentTransition.deactivate: AuditAction.content_deactivated,
    ContentTransition.suspend: AuditAction.content_suspended,
}


async def transition_publisher_content(
    uow: UnitOfWork,
    publisher: Tenant,
    transition: ContentTransition,
    actor_id: Optional[UUID],
    reason: str,
    now: datetime,
    summary_action: AuditAction = AuditAction.content_bulk_status_changed,
) -> int:
    """
    Move every ACTIVE unit of a publisher through the state machine.

    Writes one audit event per unit plus one summary event. Runs inside the
    caller's unit of work; the caller commits.
    """
    units = await uow.content_units.get_by_publisher_and_status(
        publisher.id, ContentStatus.active
    )

    changed = 0
    for unit in units:
        # ACTIVE units have at least one mapping; count is irrelevant here
        outcome = apply_transition(unit, transition, 1, actor_id, now, reason)
        if outcome.is_err() or not outcome.value.changed:
            continue
        await uow.content_units.update(unit)
        await uow.audit_events.create(
            AuditEvent(
                tenant_id=publisher.id,
                user_id=actor_id,
                action=ITEM_ACTION[transition].value,
                entity_type="ContentUnit",
                entity_id=str(unit.id),
                description=f"Content status changed to {unit.status.value}: {unit.title}",
                event_metadata={
                    "previous_status": outcome.value.previous_status.value,
                    "new_status": unit.status.value,
                    "reason": reason,
                },
            )
        )
        changed += 1

    await uow.audit_events.create(
        AuditEvent(
            tenant_id=publisher.id,
            user_id=actor_id,
            action=summary_action.value,
            entity_type="Publisher",
            entity_id=str(publisher.id),
            description=f"{changed} content units moved by {transition.value} for publisher '{publisher.name}'",
            event_metadata={
                "transition": transition.value,
                "count": changed,
                "reason": reason,
            },
        )
    )
    return changed
