# rebound/schemas/profile.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------- Demographics ----------
class Demographics(BaseModel):
    age: Optional[str] = Field(default=None, max_length=16)
    gender: Optional[str] = Field(default=None, max_length=32)
    injury_date: Optional[str] = Field(default=None, max_length=32)
    injury_cause: Optional[str] = Field(default=None, max_length=2000)
    previous_concussions: Optional[str] = Field(default=None, max_length=32)


# ---------- Symptom log ----------
class SymptomIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    severity: int = Field(..., ge=1, le=5)
    notes: str = Field("", max_length=2000)


class SymptomUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    severity: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = Field(default=None, max_length=2000)


class SymptomOut(BaseModel):
    id: int
    name: str
    severity: int
    notes: str
    timestamp: datetime

    class Config:
        from_attributes = True


class SymptomCount(BaseModel):
    name: str
    count: int


# ---------- Recovery feedback ----------
class RecoveryFeedbackIn(BaseModel):
    strategy_id: str = Field(..., min_length=1, max_length=64)
    helpful: bool
    notes: str = Field("", max_length=2000)


class RecoveryFeedbackOut(RecoveryFeedbackIn):
    id: int
    timestamp: datetime

    class Config:
        from_attributes = True


# ---------- Whole profile ----------
class UserDataOut(BaseModel):
    user_id: str
    demographics: Demographics
    symptoms: List[SymptomOut] = Field(default_factory=list)
    recovery_feedback: List[RecoveryFeedbackOut] = Field(default_factory=list)
    onboarding_complete: bool = False
