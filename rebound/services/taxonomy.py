"""
Static concussion symptom taxonomy.

The catalog lives in a versioned YAML data file and is loaded once per
process. Everything that reads symptom definitions goes through
``get_taxonomy()``; nothing mutates it at runtime.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from rebound import settings
from rebound.schemas.symptoms import SymptomCategory, SymptomDefinition

logger = logging.getLogger("rebound")

RED_FLAG_MARKER = "⚠️"


class TaxonomyError(ValueError):
    """Raised when the taxonomy data file is missing or malformed."""


class SymptomTaxonomy(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: int = 1
    symptoms: Tuple[SymptomDefinition, ...]

    @field_validator("symptoms")
    @classmethod
    def _unique_ids(cls, value: Tuple[SymptomDefinition, ...]) -> Tuple[SymptomDefinition, ...]:
        seen: set[str] = set()
        for item in value:
            if item.id in seen:
                raise ValueError(f"duplicate symptom id: {item.id}")
            seen.add(item.id)
        return value

    def get(self, symptom_id: str) -> Optional[SymptomDefinition]:
        for item in self.symptoms:
            if item.id == symptom_id:
                return item
        return None


def load_taxonomy(path: Union[str, Path]) -> SymptomTaxonomy:
    """Parse and validate a taxonomy data file."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise TaxonomyError(f"cannot read symptom taxonomy at {path}: {exc}") from exc
    if not isinstance(raw, dict) or not isinstance(raw.get("symptoms"), list):
        raise TaxonomyError(f"{path}: expected a mapping with a 'symptoms' list")
    try:
        taxonomy = SymptomTaxonomy(version=raw.get("version", 1), symptoms=raw["symptoms"])
    except ValidationError as exc:
        raise TaxonomyError(f"{path}: invalid symptom taxonomy: {exc}") from exc
    logger.info({
        "function": "load_taxonomy",
        "path": str(path),
        "version": taxonomy.version,
        "symptoms": len(taxonomy.symptoms),
    })
    return taxonomy


@lru_cache(maxsize=1)
def get_taxonomy() -> SymptomTaxonomy:
    """Process-wide taxonomy, loaded on first use."""
    return load_taxonomy(settings.SYMPTOM_TAXONOMY_PATH)


def list_by_category(
    category: Union[SymptomCategory, str],
    taxonomy: Optional[SymptomTaxonomy] = None,
) -> List[SymptomDefinition]:
    if taxonomy is None:
        taxonomy = get_taxonomy()
    # unknown category strings compare unequal to every member
    return [s for s in taxonomy.symptoms if s.category == category]


def list_red_flags(taxonomy: Optional[SymptomTaxonomy] = None) -> List[SymptomDefinition]:
    if taxonomy is None:
        taxonomy = get_taxonomy()
    return [s for s in taxonomy.symptoms if s.is_red_flag]


def format_display_name(definition: SymptomDefinition) -> str:
    if definition.is_red_flag:
        return f"{definition.name} {RED_FLAG_MARKER}"
    return definition.name


__all__ = [
    "RED_FLAG_MARKER",
    "SymptomTaxonomy",
    "TaxonomyError",
    "format_display_name",
    "get_taxonomy",
    "list_by_category",
    "list_red_flags",
    "load_taxonomy",
]
