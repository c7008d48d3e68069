"""
Lenient decoding of language-model responses.

Providers are asked for bare JSON but frequently wrap it in Markdown code
fences or omit fields. :func:`parse_llm_json` never raises: it returns either
a :class:`ParseSuccess` carrying the decoded mapping or a
:class:`ParseFailure` describing what went wrong, and the normalizers fill
missing fields with documented defaults.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from .models import (
    CitationFeedback,
    PlagiarismMatch,
    PlagiarismResult,
    SectionFeedback,
    StructureReport,
    ThesisFeedback,
)
from .textutils import clamp, round_half_up

_FENCE_OPEN = re.compile(r"```json\s*")
_FENCE_CLOSE = re.compile(r"```\s*$")
_FENCE_ANY = re.compile(r"```")

DEFAULT_STYLE_SUGGESTIONS = (
    "Consider varying sentence structure for better flow",
    "Use more field-specific terminology",
    "Add more transitional phrases between arguments",
    "Vary paragraph length for better rhythm",
)
STRICT_EXTRA_SUGGESTIONS = (
    "Strengthen your thesis with more specific claims",
    "Review your conclusion for a stronger synthesis of arguments",
    "Consider addressing opposing viewpoints more explicitly",
    "Improve citation quality with more recent scholarly sources",
)

# Section defaults keyed by feedback level: overall, structure, style, thesis.
LEVEL_DEFAULTS: Mapping[str, Mapping[str, float]] = {
    "strict": {"overall": 75, "structure": 75, "style": 73, "thesis": 72},
    "moderate": {"overall": 82, "structure": 80, "style": 85, "thesis": 78},
    "lenient": {"overall": 85, "structure": 88, "style": 90, "thesis": 86},
}
DEFAULT_ORIGINALITY = 95


@dataclass(slots=True)
class ParseSuccess:
    data: Dict[str, Any]
    ok: bool = field(default=True, init=False)


@dataclass(slots=True)
class ParseFailure:
    error: str
    raw: str = ""
    ok: bool = field(default=False, init=False)


ParseResult = Union[ParseSuccess, ParseFailure]


def strip_code_fences(text: str) -> str:
    cleaned = _FENCE_OPEN.sub("", text)
    cleaned = _FENCE_CLOSE.sub("", cleaned)
    cleaned = _FENCE_ANY.sub("", cleaned)
    return cleaned.strip()


def parse_llm_json(text: str) -> ParseResult:
    """Decode a JSON object from model output, tolerating Markdown fences."""
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        return ParseFailure(error="Empty response", raw=text or "")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        return ParseFailure(error=f"Invalid JSON: {exc}", raw=text)
    if not isinstance(payload, dict):
        return ParseFailure(
            error=f"Expected a JSON object, got {type(payload).__name__}", raw=text
        )
    return ParseSuccess(data=payload)


def _number(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return default
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else {}


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_analysis_payload(
    data: Mapping[str, Any], feedback_level: str = "moderate"
) -> StructureReport:
    """Convert a decoded essay-analysis payload into a StructureReport."""
    defaults = LEVEL_DEFAULTS.get(feedback_level, LEVEL_DEFAULTS["moderate"])
    strict = feedback_level == "strict"
    lenient = feedback_level == "lenient"

    overall = _number(data.get("overallScore"), defaults["overall"])
    if strict:
        overall = max(60.0, min(overall, 85.0))
    elif lenient:
        overall = max(75.0, min(overall, 95.0))

    structure = _section(data, "structure")
    style = _section(data, "style")
    thesis = _section(data, "thesis")
    citations = _section(data, "citations")

    suggestions = _string_list(style.get("suggestions")) or list(DEFAULT_STYLE_SUGGESTIONS)
    if strict and len(suggestions) < 6:
        suggestions = [*suggestions, *STRICT_EXTRA_SUGGESTIONS][:8]
    elif lenient and len(suggestions) > 3:
        suggestions = suggestions[:3]

    if strict:
        citations_valid = citations.get("isValid") is True
        citation_feedback_default = (
            "Your citations need improvement. Check formatting consistency and add "
            "more scholarly sources."
        )
    else:
        citations_valid = True
        citation_feedback_default = "Citation analysis not available."

    detected = thesis.get("detected")
    return StructureReport(
        overall_score=clamp(overall),
        structure=SectionFeedback(
            score=clamp(_number(structure.get("score"), defaults["structure"])),
            feedback=_text(
                structure.get("feedback"), "Your essay demonstrates a clear structure."
            ),
        ),
        style=SectionFeedback(
            score=clamp(_number(style.get("score"), defaults["style"])),
            feedback=_text(
                style.get("feedback"), "Your writing demonstrates an academic tone."
            ),
            suggestions=suggestions,
        ),
        thesis=ThesisFeedback(
            detected=detected if isinstance(detected, bool) else True,
            text=_text(thesis.get("text"), "Thesis statement not clearly identified."),
            score=clamp(_number(thesis.get("score"), defaults["thesis"])),
            feedback=_text(thesis.get("feedback"), "Your thesis could be more specific."),
        ),
        citations=CitationFeedback(
            count=int(max(0.0, _number(citations.get("count"), 0))),
            format=_text(citations.get("format"), "Unknown"),
            is_valid=citations_valid,
            feedback=_text(citations.get("feedback"), citation_feedback_default),
        ),
    )


def normalize_plagiarism_payload(data: Mapping[str, Any]) -> PlagiarismResult:
    """Convert a decoded plagiarism payload, defaulting originality to 95."""
    matches: List[PlagiarismMatch] = []
    raw_matches = data.get("matches")
    if isinstance(raw_matches, list):
        for item in raw_matches:
            if not isinstance(item, Mapping):
                continue
            text = _text(item.get("text"), "")
            if not text:
                continue
            matches.append(
                PlagiarismMatch(
                    text=text,
                    match_percentage=clamp(_number(item.get("matchPercentage"), 0)),
                    source=_text(item.get("source"), "") or None,
                    url=_text(item.get("url"), "") or None,
                    recommendation=_text(item.get("recommendation"), "") or None,
                )
            )
    originality = clamp(_number(data.get("originalityScore"), DEFAULT_ORIGINALITY))
    return PlagiarismResult(originality_score=round_half_up(originality), matches=matches)
