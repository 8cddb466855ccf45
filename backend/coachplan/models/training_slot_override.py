# backend/coachplan/models/training_slot_override.py
from datetime import date, datetime, time, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachplan.db import Base


class TrainingSlotOverride(Base):
    __tablename__ = "training_slot_overrides"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # no ondelete cascade: slots are only ever soft-deleted
    slot_id: Mapped[int] = mapped_column(ForeignKey("training_slots.id"), nullable=False)
    override_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)  # "cancelled" | "modified"
    new_start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    new_end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    new_location: Mapped[str | None] = mapped_column(String(128), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("slot_id", "override_date", name="uq_slot_override_date"),
        CheckConstraint("status IN ('cancelled', 'modified')", name="ck_slot_override_status"),
    )

    slot = relationship("TrainingSlot")


# helpful index for "from today onward" listings
Index("ix_training_slot_overrides_date", TrainingSlotOverride.override_date)
