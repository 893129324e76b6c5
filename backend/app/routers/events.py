"""Event API routes: public submissions and admin moderation.

All state changes go through moderation_service; nothing a visitor submits is
listed publicly until an admin approves it.
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth import require_admin
from app.database import get_db
from app.schemas.event import EventCreate, EventUpdate, EventOut, MessageOut
from app.services import moderation_service

logger = logging.getLogger(__name__)
router = APIRouter()


# ----------------- public -----------------

@router.post("", response_model=MessageOut)
def submit_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Submit a new event; it stays hidden until approved."""
    event = moderation_service.submit_create(db, payload)
    return MessageOut(message="Event submitted, pending admin approval", id=event.id)


@router.get("", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db)):
    """Approved events, soonest first."""
    return moderation_service.list_approved(db)


@router.put("/{event_id}", response_model=MessageOut)
def request_update(event_id: str, payload: EventUpdate, db: Session = Depends(get_db)):
    """Propose changes to an event (pending approval)."""
    event = moderation_service.submit_update(db, event_id, payload)
    return MessageOut(message="Update submitted, pending approval", id=event.id)


@router.delete("/{event_id}/request", response_model=MessageOut)
def request_delete(event_id: str, db: Session = Depends(get_db)):
    """Ask for an event to be removed (pending approval)."""
    event = moderation_service.submit_delete(db, event_id)
    return MessageOut(message="Deletion requested, pending approval", id=event.id)


# ----------------- admin -----------------

@router.get("/pending", response_model=list[EventOut], dependencies=[Depends(require_admin)])
def list_pending(db: Session = Depends(get_db)):
    """Moderation queue, oldest request first."""
    return moderation_service.list_pending(db)


@router.put("/{event_id}/approve", response_model=MessageOut, dependencies=[Depends(require_admin)])
def approve_event(event_id: str, db: Session = Depends(get_db)):
    return MessageOut(message=moderation_service.approve(db, event_id), id=event_id)


@router.delete("/{event_id}/reject", response_model=MessageOut, dependencies=[Depends(require_admin)])
def reject_event(event_id: str, db: Session = Depends(get_db)):
    return MessageOut(message=moderation_service.reject(db, event_id), id=event_id)
