"""Moderation service: the pending/approved state machine for Events.

Every public write lands in a pending envelope (``pending_action`` +
``pending_data``) and only becomes visible once an admin approves it:

    submit_create  -> Draft                  (is_approved=False, pending=create)
    approve        -> Live                   (is_approved=True,  pending=None)
    submit_update  -> LiveWithPendingUpdate  (is_approved=True,  pending=update)
    submit_delete  -> LiveWithPendingDelete  (is_approved=True,  pending=delete)

Rejecting a create removes the draft; rejecting an update or delete clears the
envelope and leaves the published fields as they were.

approve/reject read the record, decide, then write conditionally on the
``pending_action`` and ``requested_at`` they observed. If another request
changed either in between, the write matches no row and the call fails with
ConflictError.
"""
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import ConflictError, InvalidStateError, NotFoundError, StoreFailureError
from app.models.event import Event, PendingAction
from app.schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)

MSG_APPROVED = "Action approved"
MSG_DELETED = "Event deleted"
MSG_CREATE_REJECTED = "Create rejected, event removed"
MSG_REJECTED = "Pending request rejected"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@contextmanager
def _store_guard(db: Session, failure_message: str):
    """Roll back and surface any SQLAlchemy error as a StoreFailureError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(failure_message)
        raise StoreFailureError(failure_message) from exc


def _wire_fields(payload: EventCreate | EventUpdate) -> dict[str, Any]:
    """JSON-safe snapshot of exactly the fields the submitter sent."""
    return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _published_values(pending_data: dict[str, Any]) -> dict[str, Any]:
    """Convert a stored pending snapshot back to column values."""
    return EventUpdate.model_validate(pending_data).model_dump(exclude_unset=True)


def _get_or_404(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def submit_create(db: Session, payload: EventCreate) -> Event:
    """File a new event as a draft awaiting approval."""
    now = _utcnow()
    with _store_guard(db, "Failed to submit event"):
        event = Event(
            **payload.model_dump(),
            is_approved=False,
            pending_action=PendingAction.create,
            pending_data=_wire_fields(payload),
            created_at=now,
            updated_at=now,
            requested_at=now,
        )
        db.add(event)
        db.commit()
        db.refresh(event)
    logger.info("Event %s submitted for approval ('%s')", event.id, event.name)
    return event


def submit_update(db: Session, event_id: str, payload: EventUpdate) -> Event:
    """Propose new field values; replaces any earlier pending envelope.

    A draft that has never been approved stays a pending create, with the new
    values merged into its proposal.
    """
    with _store_guard(db, "Failed to submit update"):
        event = _get_or_404(db, event_id)
        now = _utcnow()
        if not event.is_approved and event.pending_action == PendingAction.create:
            event.pending_data = {**(event.pending_data or {}), **_wire_fields(payload)}
            for field, value in payload.model_dump(exclude_unset=True).items():
                setattr(event, field, value)
        else:
            event.pending_action = PendingAction.update
            event.pending_data = _wire_fields(payload)
        event.updated_at = now
        event.requested_at = now
        db.commit()
        db.refresh(event)
    logger.info("Update requested for event %s (pending=%s)", event_id, event.pending_action.value)
    return event


def submit_delete(db: Session, event_id: str) -> Event:
    """Ask for a published event to be removed."""
    with _store_guard(db, "Failed to request delete"):
        event = _get_or_404(db, event_id)
        if not event.is_approved:
            raise InvalidStateError("Event is not published yet; its creation is still pending")
        now = _utcnow()
        event.pending_action = PendingAction.delete
        event.pending_data = None
        event.updated_at = now
        event.requested_at = now
        db.commit()
        db.refresh(event)
    logger.info("Deletion requested for event %s", event_id)
    return event


def list_approved(db: Session) -> list[Event]:
    """Published events by event date. Pending edits are not reflected until approved."""
    with _store_guard(db, "Failed to fetch events"):
        return (
            db.query(Event)
            .filter(Event.is_approved.is_(True))
            .order_by(Event.date, Event.created_at, Event.id)
            .all()
        )


def list_pending(db: Session) -> list[Event]:
    """Moderation queue, oldest request first."""
    with _store_guard(db, "Failed to fetch pending events"):
        return (
            db.query(Event)
            .filter(Event.pending_action.isnot(None))
            .order_by(Event.requested_at, Event.created_at, Event.id)
            .all()
        )


def _conditional(db: Session, observed: Event):
    """Match the row only while it still carries the envelope we read.

    Every submit restamps requested_at, so a newer request of the same kind
    also breaks the match.
    """
    return db.query(Event).filter(
        Event.id == observed.id,
        Event.pending_action == observed.pending_action,
        Event.requested_at == observed.requested_at,
    )


def approve(db: Session, event_id: str) -> str:
    """Commit the pending action of an event. Returns the outcome message."""
    with _store_guard(db, "Failed to approve"):
        event = _get_or_404(db, event_id)
        action = event.pending_action
        if action is None:
            raise InvalidStateError("No pending action found")

        if action == PendingAction.delete:
            matched = _conditional(db, event).delete(synchronize_session=False)
            message = MSG_DELETED
        else:
            values = _published_values(event.pending_data or {})
            values.update(
                is_approved=True,
                pending_action=None,
                pending_data=None,
                updated_at=_utcnow(),
            )
            matched = _conditional(db, event).update(values, synchronize_session=False)
            message = MSG_APPROVED

        if matched == 0:
            db.rollback()
            raise ConflictError()
        db.commit()
    logger.info("Approved %s for event %s", action.value, event_id)
    return message


def reject(db: Session, event_id: str) -> str:
    """Discard the pending action of an event. Returns the outcome message."""
    with _store_guard(db, "Failed to reject pending action"):
        event = _get_or_404(db, event_id)
        action = event.pending_action
        if action is None:
            raise InvalidStateError("No pending action found")

        if action == PendingAction.create:
            matched = _conditional(db, event).delete(synchronize_session=False)
            message = MSG_CREATE_REJECTED
        else:
            matched = _conditional(db, event).update(
                {"pending_action": None, "pending_data": None, "updated_at": _utcnow()},
                synchronize_session=False,
            )
            message = MSG_REJECTED

        if matched == 0:
            db.rollback()
            raise ConflictError()
        db.commit()
    logger.info("Rejected %s for event %s", action.value, event_id)
    return message
