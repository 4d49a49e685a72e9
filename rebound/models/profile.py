"""Per-user recovery data: demographics, symptom log and strategy feedback."""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rebound.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    __tablename__ = "user_profile"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Demographics are kept as entered on the onboarding form
    age: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    injury_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    injury_cause: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    previous_concussions: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    onboarding_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    symptoms: Mapped[List["SymptomEntry"]] = relationship(
        "SymptomEntry",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="SymptomEntry.id",
    )
    recovery_feedback: Mapped[List["RecoveryFeedback"]] = relationship(
        "RecoveryFeedback",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="RecoveryFeedback.id",
    )


class SymptomEntry(Base):
    __tablename__ = "symptom_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("user_profile.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    severity: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="symptoms")


class RecoveryFeedback(Base):
    __tablename__ = "recovery_feedback"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("user_profile.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    strategy_id: Mapped[str] = mapped_column(String(64), nullable=False)
    helpful: Mapped[bool] = mapped_column(Boolean, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="recovery_feedback")
