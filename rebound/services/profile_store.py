"""
Per-user profile store.

Durable replacement for the browser-side user data blob: demographics, the
onboarding flag, the symptom log and recovery-strategy feedback. The analysis
engine never writes here; callers hand over ``(name, severity, notes)``
tuples and the store assigns ids and timestamps.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from rebound.models.analysis_event import AnalysisEvent
from rebound.models.profile import RecoveryFeedback, SymptomEntry, UserProfile

logger = logging.getLogger("rebound")

DEMOGRAPHIC_FIELDS = ("age", "gender", "injury_date", "injury_cause", "previous_concussions")
MIN_SEVERITY = 1
MAX_SEVERITY = 5


def _check_severity(severity: int) -> int:
    if isinstance(severity, bool) or not isinstance(severity, int):
        raise ValueError(f"severity must be an integer, got {severity!r}")
    if not MIN_SEVERITY <= severity <= MAX_SEVERITY:
        raise ValueError(f"severity must be between {MIN_SEVERITY} and {MAX_SEVERITY}, got {severity}")
    return severity


def get_or_create_profile(db: Session, user_id: str) -> UserProfile:
    prof = db.get(UserProfile, user_id)
    if prof is None:
        prof = UserProfile(user_id=user_id, onboarding_complete=False)
        db.add(prof)
        db.commit()
        db.refresh(prof)
    return prof


def set_demographics(db: Session, user_id: str, demographics: Dict[str, Optional[str]]) -> UserProfile:
    prof = get_or_create_profile(db, user_id)
    for field in DEMOGRAPHIC_FIELDS:
        setattr(prof, field, demographics.get(field))
    db.commit()
    db.refresh(prof)
    return prof


def complete_onboarding(db: Session, user_id: str) -> UserProfile:
    prof = get_or_create_profile(db, user_id)
    prof.onboarding_complete = True
    db.commit()
    db.refresh(prof)
    return prof


def add_symptom(db: Session, user_id: str, name: str, severity: int, notes: str = "") -> SymptomEntry:
    get_or_create_profile(db, user_id)
    entry = SymptomEntry(user_id=user_id, name=name, severity=_check_severity(severity), notes=notes or "")
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def merge_symptoms(db: Session, user_id: str, entries: Iterable[Tuple[str, int, str]]) -> List[SymptomEntry]:
    """Append several symptom entries in one commit, preserving order."""
    get_or_create_profile(db, user_id)
    rows = [
        SymptomEntry(user_id=user_id, name=name, severity=_check_severity(severity), notes=notes or "")
        for name, severity, notes in entries
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    logger.info({"function": "merge_symptoms", "user_id": user_id, "count": len(rows)})
    return rows


def _get_entry(db: Session, user_id: str, entry_id: int) -> Optional[SymptomEntry]:
    return (
        db.query(SymptomEntry)
        .filter(SymptomEntry.id == entry_id, SymptomEntry.user_id == user_id)
        .first()
    )


def update_symptom(
    db: Session,
    user_id: str,
    entry_id: int,
    name: Optional[str] = None,
    severity: Optional[int] = None,
    notes: Optional[str] = None,
) -> Optional[SymptomEntry]:
    entry = _get_entry(db, user_id, entry_id)
    if entry is None:
        return None
    if name is not None:
        entry.name = name
    if severity is not None:
        entry.severity = _check_severity(severity)
    if notes is not None:
        entry.notes = notes
    db.commit()
    db.refresh(entry)
    return entry


def remove_symptom(db: Session, user_id: str, entry_id: int) -> bool:
    entry = _get_entry(db, user_id, entry_id)
    if entry is None:
        return False
    db.delete(entry)
    db.commit()
    return True


def list_symptoms(db: Session, user_id: str) -> List[SymptomEntry]:
    return (
        db.query(SymptomEntry)
        .filter(SymptomEntry.user_id == user_id)
        .order_by(SymptomEntry.id)
        .all()
    )


def symptom_counts(db: Session, user_id: str) -> List[Tuple[str, int]]:
    """Occurrences per symptom name, in first-seen order."""
    counts: Dict[str, int] = {}
    for entry in list_symptoms(db, user_id):
        counts[entry.name] = counts.get(entry.name, 0) + 1
    return list(counts.items())


def add_recovery_feedback(
    db: Session, user_id: str, strategy_id: str, helpful: bool, notes: str = ""
) -> RecoveryFeedback:
    get_or_create_profile(db, user_id)
    fb = RecoveryFeedback(user_id=user_id, strategy_id=strategy_id, helpful=helpful, notes=notes or "")
    db.add(fb)
    db.commit()
    db.refresh(fb)
    return fb


def list_recovery_feedback(db: Session, user_id: str) -> List[RecoveryFeedback]:
    return (
        db.query(RecoveryFeedback)
        .filter(RecoveryFeedback.user_id == user_id)
        .order_by(RecoveryFeedback.id)
        .all()
    )


def record_analysis(db: Session, user_id: str, source: str, text: str, result: Dict) -> AnalysisEvent:
    ev = AnalysisEvent(user_id=user_id, source=source, raw_text=text, result_json=result)
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev


def list_analyses(db: Session, user_id: str, limit: int = 20) -> List[AnalysisEvent]:
    return (
        db.query(AnalysisEvent)
        .filter(AnalysisEvent.user_id == user_id)
        .order_by(AnalysisEvent.created_at.desc())
        .limit(limit)
        .all()
    )


def reset_data(db: Session, user_id: str) -> UserProfile:
    """Forget everything stored for the user and start from an empty profile."""
    db.query(SymptomEntry).filter(SymptomEntry.user_id == user_id).delete(synchronize_session=False)
    db.query(RecoveryFeedback).filter(RecoveryFeedback.user_id == user_id).delete(synchronize_session=False)
    db.query(AnalysisEvent).filter(AnalysisEvent.user_id == user_id).delete(synchronize_session=False)
    prof = db.get(UserProfile, user_id)
    if prof is not None:
        for field in DEMOGRAPHIC_FIELDS:
            setattr(prof, field, None)
        prof.onboarding_complete = False
    db.commit()
    db.expire_all()
    logger.info({"function": "reset_data", "user_id": user_id})
    return get_or_create_profile(db, user_id)


__all__ = [
    "add_recovery_feedback",
    "add_symptom",
    "complete_onboarding",
    "get_or_create_profile",
    "list_analyses",
    "list_recovery_feedback",
    "list_symptoms",
    "merge_symptoms",
    "record_analysis",
    "remove_symptom",
    "reset_data",
    "set_demographics",
    "symptom_counts",
    "update_symptom",
]
