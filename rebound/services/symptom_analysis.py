"""
Rule-based symptom analysis.

Stand-in for a language-model extraction call: free text is scanned against
the symptom taxonomy with case-insensitive substring matching, and a fixed
rule table turns the matches into recommendations.

Behavior:
- A definition matches when any of its keywords longer than three characters
  appears anywhere in the lower-cased text. No stemming, no word boundaries.
- Severity for a match is drawn from {2, 3, 4} via the injected ``rng``.
- No match is a normal outcome and yields the "Unspecified Symptoms" sentinel.

``analyze`` is synchronous and pure apart from ``rng``; ``analyze_async`` wraps
it with the simulated latency a real inference backend would add.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Dict, List, Optional, Tuple

from rebound import settings
from rebound.schemas.symptoms import (
    AnalysisResult,
    DocumentAnalysisResult,
    ExtractedSymptom,
    SymptomCategory,
)
from rebound.services.taxonomy import SymptomTaxonomy, get_taxonomy

logger = logging.getLogger("rebound")

MIN_KEYWORD_LENGTH = 4
MATCH_SEVERITIES = (2, 4)

UNSPECIFIED_SYMPTOM = "Unspecified Symptoms"
UNSPECIFIED_SEVERITY = 1
UNSPECIFIED_CATEGORY = SymptomCategory.OTHER.value

URGENT_CARE_WARNING = (
    "Some of your symptoms may need urgent attention. "
    "Please seek immediate medical care or contact your doctor right away."
)
PHYSICAL_ADVICE = "Limit physical exertion and return to activity gradually as symptoms allow"
HEADACHE_ADVICE = "Consider rest in a dark, quiet room for headache relief"
DIZZINESS_ADVICE = "Avoid sudden movements and stay hydrated; use handrails on stairs"
SLEEP_ADVICE = "Prioritize regular sleep and take brief naps if needed"
COGNITIVE_ADVICE = "Try breaking tasks into smaller steps and take frequent breaks"
EMOTIONAL_ADVICE = "Talk to someone you trust about your feelings"
GENERIC_ADVICE = (
    "Continue to monitor your symptoms and report any changes to your doctor",
    "Make sure to get adequate rest and stay hydrated",
)

DOCUMENT_NOTE_PREFIX = "From document analysis. "

# Module randomness source for callers that don't inject one
_rng = random.Random(settings.ANALYSIS_SEED)


class AnalysisPreconditionError(ValueError):
    """The caller broke the engine contract (missing taxonomy, rng or text)."""


def _check_preconditions(text, taxonomy, rng) -> None:
    if not isinstance(text, str):
        raise AnalysisPreconditionError(f"text must be a string, got {type(text).__name__}")
    if not isinstance(taxonomy, SymptomTaxonomy):
        raise AnalysisPreconditionError("a symptom taxonomy is required")
    if rng is None or not callable(getattr(rng, "randint", None)):
        raise AnalysisPreconditionError("a randomness source with randint() is required")


def _matches(keywords: List[str], text_low: str) -> bool:
    return any(len(k) >= MIN_KEYWORD_LENGTH and k in text_low for k in keywords)


def _recommend(matched: List[ExtractedSymptom]) -> List[str]:
    categories = {s.possible_category for s in matched}
    names = [s.name.lower() for s in matched]

    rules: List[Tuple[bool, str]] = [
        (SymptomCategory.PHYSICAL.value in categories, PHYSICAL_ADVICE),
        (any("headache" in n or "pain" in n for n in names), HEADACHE_ADVICE),
        (any("dizz" in n or "balance" in n for n in names), DIZZINESS_ADVICE),
        (SymptomCategory.SLEEP.value in categories, SLEEP_ADVICE),
        (SymptomCategory.COGNITIVE.value in categories, COGNITIVE_ADVICE),
        (SymptomCategory.EMOTIONAL.value in categories, EMOTIONAL_ADVICE),
    ]
    return [advice for fired, advice in rules if fired]


def analyze(text: str, taxonomy: SymptomTaxonomy, rng: random.Random) -> AnalysisResult:
    """Extract symptoms, recommendations and red flags from free text."""
    _check_preconditions(text, taxonomy, rng)
    text_low = text.lower()

    matched: List[ExtractedSymptom] = []
    red_flags: List[str] = []
    for definition in taxonomy.symptoms:
        if not _matches(definition.keywords(), text_low):
            continue
        matched.append(
            ExtractedSymptom(
                name=definition.name,
                severity=rng.randint(*MATCH_SEVERITIES),
                possible_category=definition.category.value,
            )
        )
        if definition.is_red_flag:
            red_flags.append(definition.name)

    recommendations = _recommend(matched)
    if not recommendations:
        recommendations.extend(GENERIC_ADVICE)
    if red_flags:
        recommendations.insert(0, URGENT_CARE_WARNING)

    extracted = matched or [
        ExtractedSymptom(
            name=UNSPECIFIED_SYMPTOM,
            severity=UNSPECIFIED_SEVERITY,
            possible_category=UNSPECIFIED_CATEGORY,
        )
    ]

    logger.info({
        "function": "analyze",
        "matched": len(matched),
        "red_flags": red_flags,
        "recommendations": len(recommendations),
    })
    return AnalysisResult(
        extracted_symptoms=extracted,
        recommendations=recommendations,
        red_flags=red_flags,
    )


def group_by_category(symptoms: List[ExtractedSymptom]) -> Dict[str, List[ExtractedSymptom]]:
    grouped: Dict[str, List[ExtractedSymptom]] = {}
    for s in symptoms:
        grouped.setdefault(s.possible_category, []).append(s)
    return grouped


def _summarize(result: AnalysisResult) -> str:
    found = [s for s in result.extracted_symptoms if s.name != UNSPECIFIED_SYMPTOM]
    if not found:
        return "No specific concussion symptoms were identified in this document."
    categories = list(group_by_category(found))
    summary = (
        f"The document mentions {len(found)} potential symptom(s) "
        f"across {len(categories)} categor{'y' if len(categories) == 1 else 'ies'}: "
        f"{', '.join(categories)}."
    )
    if result.red_flags:
        summary += f" Warning signs noted: {', '.join(result.red_flags)}."
    return summary


def analyze_document(text: str, taxonomy: SymptomTaxonomy, rng: random.Random) -> DocumentAnalysisResult:
    """Analyze extracted document text and attach a summary and grouping."""
    result = analyze(text, taxonomy, rng)
    return DocumentAnalysisResult(
        **result.model_dump(),
        document_summary=_summarize(result),
        symptoms_by_category=group_by_category(result.extracted_symptoms),
    )


def _defaults(taxonomy, rng, delay) -> Tuple[SymptomTaxonomy, random.Random, float]:
    return (
        taxonomy if taxonomy is not None else get_taxonomy(),
        rng if rng is not None else _rng,
        settings.ANALYSIS_LATENCY_SECONDS if delay is None else delay,
    )


async def analyze_async(
    text: str,
    taxonomy: Optional[SymptomTaxonomy] = None,
    rng: Optional[random.Random] = None,
    delay: Optional[float] = None,
) -> AnalysisResult:
    """``analyze`` behind a fixed simulated latency. No retry, no backoff."""
    taxonomy, rng, delay = _defaults(taxonomy, rng, delay)
    if delay > 0:
        await asyncio.sleep(delay)
    return analyze(text, taxonomy, rng)


async def analyze_document_async(
    text: str,
    taxonomy: Optional[SymptomTaxonomy] = None,
    rng: Optional[random.Random] = None,
    delay: Optional[float] = None,
) -> DocumentAnalysisResult:
    taxonomy, rng, delay = _defaults(taxonomy, rng, delay)
    if delay > 0:
        await asyncio.sleep(delay)
    return analyze_document(text, taxonomy, rng)


def profile_entries(
    result: AnalysisResult,
    notes: str = "",
    prefix: str = "",
) -> List[Tuple[str, int, str]]:
    """(name, severity, notes) tuples for the profile store."""
    entries: List[Tuple[str, int, str]] = []
    base = (notes or "").strip()
    for s in result.extracted_symptoms:
        category_note = f"{prefix}Category: {s.possible_category}"
        entries.append((s.name, s.severity, f"{base}\n{category_note}" if base else category_note))
    return entries


__all__ = [
    "AnalysisPreconditionError",
    "DOCUMENT_NOTE_PREFIX",
    "GENERIC_ADVICE",
    "URGENT_CARE_WARNING",
    "UNSPECIFIED_SYMPTOM",
    "analyze",
    "analyze_async",
    "analyze_document",
    "analyze_document_async",
    "group_by_category",
    "profile_entries",
]
