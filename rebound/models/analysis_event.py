"""AnalysisEvent: one row per symptom or document analysis served.

Uses generic JSON everywhere except Postgres, which gets JSONB.
"""
import os
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.types import JSON as SA_JSON

from rebound.db.session import Base, engine


def json_col_type():
    if os.getenv("FORCE_GENERIC_JSON", "").lower() in ("1", "true", "yes"):
        return SA_JSON
    if engine.dialect.name == "postgresql":
        return PG_JSONB
    return SA_JSON


class AnalysisEvent(Base):
    __tablename__ = "analysis_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)
    source = Column(String(16), nullable=False, default="text")  # "text" | "document"
    raw_text = Column(Text, nullable=False)
    result_json = Column(json_col_type(), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
