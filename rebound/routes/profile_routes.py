# rebound/routes/profile_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rebound.auth.deps import get_current_user_id
from rebound.db.session import get_db
from rebound.models.profile import UserProfile
from rebound.schemas.profile import (
    Demographics,
    RecoveryFeedbackIn,
    RecoveryFeedbackOut,
    SymptomCount,
    SymptomIn,
    SymptomOut,
    SymptomUpdate,
    UserDataOut,
)
from rebound.services import profile_store
from rebound.services.recovery import get_strategy

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _user_data(db: Session, prof: UserProfile) -> UserDataOut:
    return UserDataOut(
        user_id=prof.user_id,
        demographics=Demographics.model_validate(prof, from_attributes=True),
        symptoms=[SymptomOut.model_validate(s) for s in profile_store.list_symptoms(db, prof.user_id)],
        recovery_feedback=[
            RecoveryFeedbackOut.model_validate(f)
            for f in profile_store.list_recovery_feedback(db, prof.user_id)
        ],
        onboarding_complete=prof.onboarding_complete,
    )


@router.get("", response_model=UserDataOut)
def get_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    # create an empty profile on first read
    prof = profile_store.get_or_create_profile(db, user_id)
    return _user_data(db, prof)


@router.delete("", response_model=UserDataOut)
def reset_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    prof = profile_store.reset_data(db, user_id)
    return _user_data(db, prof)


@router.put("/demographics", response_model=UserDataOut)
def put_demographics(
    payload: Demographics,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    prof = profile_store.set_demographics(db, user_id, payload.model_dump())
    return _user_data(db, prof)


@router.post("/onboarding/complete", response_model=UserDataOut)
def complete_onboarding(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    prof = profile_store.complete_onboarding(db, user_id)
    return _user_data(db, prof)


@router.get("/symptoms", response_model=List[SymptomOut])
def list_symptoms(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return profile_store.list_symptoms(db, user_id)


@router.post("/symptoms", response_model=SymptomOut, status_code=status.HTTP_201_CREATED)
def add_symptom(
    payload: SymptomIn,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return profile_store.add_symptom(db, user_id, payload.name, payload.severity, payload.notes)


@router.get("/symptoms/summary", response_model=List[SymptomCount])
def symptom_summary(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Occurrences per symptom name, for the dashboard chart."""
    return [SymptomCount(name=n, count=c) for n, c in profile_store.symptom_counts(db, user_id)]


@router.put("/symptoms/{entry_id}", response_model=SymptomOut)
def update_symptom(
    entry_id: int,
    payload: SymptomUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    entry = profile_store.update_symptom(
        db, user_id, entry_id, name=payload.name, severity=payload.severity, notes=payload.notes
    )
    if entry is None:
        raise HTTPException(status_code=404, detail="Symptom not found")
    return entry


@router.delete("/symptoms/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_symptom(
    entry_id: int,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not profile_store.remove_symptom(db, user_id, entry_id):
        raise HTTPException(status_code=404, detail="Symptom not found")
    return None


@router.post("/feedback", response_model=RecoveryFeedbackOut, status_code=status.HTTP_201_CREATED)
def add_feedback(
    payload: RecoveryFeedbackIn,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if get_strategy(payload.strategy_id) is None:
        raise HTTPException(status_code=404, detail="Recovery strategy not found")
    return profile_store.add_recovery_feedback(
        db, user_id, payload.strategy_id, payload.helpful, payload.notes
    )
