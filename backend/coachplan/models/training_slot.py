# backend/coachplan/models/training_slot.py
from __future__ import annotations

from datetime import datetime, time, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, SmallInteger, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coachplan.db import Base


class TrainingSlot(Base):
    __tablename__ = "training_slots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 1=Monday .. 7=Sunday
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    location: Mapped[str] = mapped_column(String(128), nullable=False)
    # soft delete only: overrides keep pointing at inactive slots
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    __table_args__ = (
        Index("ix_training_slots_day_start", "day_of_week", "start_time"),
    )

    assignments = relationship(
        "TrainingSlotAssignment",
        back_populates="slot",
        cascade="all, delete-orphan",
        order_by="TrainingSlotAssignment.position",
        lazy="selectin",
    )


class TrainingSlotAssignment(Base):
    __tablename__ = "training_slot_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slot_id: Mapped[int] = mapped_column(
        ForeignKey("training_slots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    group_id: Mapped[int] = mapped_column(ForeignKey("groups.id"), nullable=False)
    coach_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    lane_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    slot = relationship("TrainingSlot", back_populates="assignments")
    group = relationship("Group", lazy="joined")
    coach = relationship("User", lazy="joined")
