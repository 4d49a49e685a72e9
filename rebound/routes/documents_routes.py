# rebound/routes/documents_routes.py
import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from rebound import settings
from rebound.auth.deps import get_current_user_id
from rebound.db.session import get_db
from rebound.schemas.symptoms import DocumentAnalysisResult, DocumentTextRequest
from rebound.services import documents, profile_store, symptom_analysis
from rebound.services.documents import (
    DocumentTooLargeError,
    UnsupportedDocumentError,
    extract_text_from_bytes,
)
from rebound.utils.rate_limit import limiter

router = APIRouter(prefix="/api/documents", tags=["documents"])
logger = logging.getLogger("rebound")


async def _analyze_and_store(db: Session, user_id: str, text: str, save: bool) -> DocumentAnalysisResult:
    result = await symptom_analysis.analyze_document_async(text)
    profile_store.record_analysis(db, user_id, "document", text, result.model_dump())
    if save:
        profile_store.merge_symptoms(
            db,
            user_id,
            symptom_analysis.profile_entries(result, prefix=symptom_analysis.DOCUMENT_NOTE_PREFIX),
        )
    return result


@router.post("/analyze-text", response_model=DocumentAnalysisResult)
@limiter.limit(settings.ANALYZE_RATE_LIMIT)
async def analyze_document_text(
    request: Request,
    payload: DocumentTextRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="No document text")
    return await _analyze_and_store(db, user_id, payload.text, payload.save)


@router.post("/analyze", response_model=DocumentAnalysisResult)
@limiter.limit(settings.ANALYZE_RATE_LIMIT)
async def analyze_document_upload(
    request: Request,
    file: UploadFile = File(...),
    save: bool = False,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Extract text from an uploaded PDF, DOCX or TXT document and analyze it."""
    limit = documents.MAX_DOCUMENT_BYTES
    if file.size is not None and file.size > limit:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File size should be less than 10MB")
    # one byte past the cap is enough for extract_text_from_bytes to reject it
    data = await file.read(limit + 1)
    try:
        text, kind = extract_text_from_bytes(data, file.filename or "upload", file.content_type or "")
    except DocumentTooLargeError as exc:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc))
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(exc))
    except ValueError as exc:
        logger.warning({"function": "analyze_document_upload", "filename": file.filename, "error": str(exc)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Upload failed: {exc}")

    logger.info({
        "function": "analyze_document_upload",
        "filename": file.filename,
        "kind": kind,
        "chars": len(text),
    })
    return await _analyze_and_store(db, user_id, text, save)
