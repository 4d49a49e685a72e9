# rebound/routes/symptoms_routes.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from rebound import settings
from rebound.auth.deps import get_current_user_id
from rebound.db.session import get_db
from rebound.schemas.symptoms import (
    AnalysisEventOut,
    AnalysisResult,
    SymptomAnalysisRequest,
    SymptomCategory,
    SymptomDefinition,
    SymptomDefinitionOut,
)
from rebound.services import profile_store, symptom_analysis
from rebound.services.taxonomy import (
    format_display_name,
    get_taxonomy,
    list_by_category,
    list_red_flags,
)
from rebound.utils.rate_limit import limiter

router = APIRouter(prefix="/api/symptoms", tags=["symptoms"])
logger = logging.getLogger("rebound")


def _definition_out(d: SymptomDefinition) -> SymptomDefinitionOut:
    return SymptomDefinitionOut(
        id=d.id,
        name=d.name,
        display_name=format_display_name(d),
        category=d.category,
        subcategory=d.subcategory,
        is_red_flag=d.is_red_flag,
    )


@router.get("/taxonomy", response_model=List[SymptomDefinitionOut])
def read_taxonomy(category: Optional[SymptomCategory] = None):
    """The symptom catalog, optionally narrowed to one category."""
    if category is None:
        items = list(get_taxonomy().symptoms)
    else:
        items = list_by_category(category)
    return [_definition_out(d) for d in items]


@router.get("/red-flags", response_model=List[SymptomDefinitionOut])
def read_red_flags():
    return [_definition_out(d) for d in list_red_flags()]


@router.post("/analyze", response_model=AnalysisResult, status_code=status.HTTP_200_OK)
@limiter.limit(settings.ANALYZE_RATE_LIMIT)
async def analyze_symptoms(
    request: Request,
    payload: SymptomAnalysisRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Analyze a free-text description; optionally save the symptoms found."""
    result = await symptom_analysis.analyze_async(payload.text)
    profile_store.record_analysis(db, user_id, "text", payload.text, result.model_dump())
    if payload.save:
        profile_store.merge_symptoms(
            db, user_id, symptom_analysis.profile_entries(result, notes=payload.notes)
        )
    return result


@router.get("/analyses", response_model=List[AnalysisEventOut])
def list_analyses(
    limit: int = 20,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    limit = max(1, min(limit, 100))
    return profile_store.list_analyses(db, user_id, limit=limit)
