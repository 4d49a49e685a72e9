# rebound/schemas/symptoms.py
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class SymptomCategory(str, Enum):
    PHYSICAL = "Physical"
    COGNITIVE = "Cognitive"
    EMOTIONAL = "Emotional"
    SLEEP = "Sleep"
    BEHAVIORAL = "Behavioral"
    OTHER = "Other"


class SymptomDefinition(BaseModel):
    """One entry of the static symptom taxonomy."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique stable identifier.")
    name: str = Field(..., min_length=1, description="Canonical display name.")
    category: SymptomCategory
    subcategory: Optional[str] = Field(None, description="Finer label, e.g. 'Vision'.")
    description: Optional[str] = None
    is_red_flag: bool = Field(False, description="Warrants urgent-care guidance.")
    aliases: Tuple[str, ...] = Field((), description="Extra matching keywords.")

    def keywords(self) -> List[str]:
        """Lower-cased name words followed by aliases."""
        words = [w.lower() for w in self.name.split()]
        words.extend(a.lower() for a in self.aliases)
        return words


class SymptomDefinitionOut(BaseModel):
    id: str
    name: str
    display_name: str
    category: SymptomCategory
    subcategory: Optional[str] = None
    is_red_flag: bool = False


class ExtractedSymptom(BaseModel):
    name: str
    severity: int = Field(..., ge=1, le=5)
    possible_category: str


class AnalysisResult(BaseModel):
    extracted_symptoms: List[ExtractedSymptom]
    recommendations: List[str]
    red_flags: List[str] = Field(default_factory=list)


class DocumentAnalysisResult(AnalysisResult):
    document_summary: str
    symptoms_by_category: Dict[str, List[ExtractedSymptom]] = Field(default_factory=dict)


class SymptomAnalysisRequest(BaseModel):
    """Free-text description submitted for analysis."""

    text: str = Field(..., max_length=5000, description="User-provided text describing symptoms.")
    notes: str = Field("", max_length=2000, description="Notes copied onto saved symptoms.")
    save: bool = Field(False, description="Merge extracted symptoms into the symptom log.")


class DocumentTextRequest(BaseModel):
    text: str = Field(..., max_length=200_000)
    save: bool = False


class AnalysisEventOut(BaseModel):
    id: str
    source: str
    raw_text: str
    result_json: dict
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
