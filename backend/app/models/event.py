"""Event ORM model: published fields plus the pending-change envelope."""
import uuid
import enum
from sqlalchemy import Column, String, Date, DateTime, Boolean, Index, JSON, Enum as SAEnum
from app.database import Base


class PendingAction(str, enum.Enum):
    create = "create"
    update = "update"
    delete = "delete"


class ModerationState(str, enum.Enum):
    draft = "draft"
    live = "live"
    live_pending_update = "live_pending_update"
    live_pending_delete = "live_pending_delete"


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_is_approved_date", "is_approved", "date"),
        Index("ix_events_pending_action_requested_at", "pending_action", "requested_at"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    location = Column(String(255), nullable=True)
    distance = Column(String(100), nullable=True)
    organizer = Column(String(255), nullable=True)
    registration_deadline = Column(Date, nullable=True)
    registration_link = Column(String(500), nullable=True)

    is_approved = Column(Boolean, nullable=False, default=False)
    pending_action = Column(SAEnum(PendingAction), nullable=True)
    pending_data = Column(JSON(none_as_null=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    requested_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def state(self) -> ModerationState | None:
        """Moderation state derived from the approval flag and pending action."""
        if not self.is_approved:
            return ModerationState.draft if self.pending_action == PendingAction.create else None
        if self.pending_action == PendingAction.update:
            return ModerationState.live_pending_update
        if self.pending_action == PendingAction.delete:
            return ModerationState.live_pending_delete
        return ModerationState.live
