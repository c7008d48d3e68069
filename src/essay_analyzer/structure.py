"""
Local structure, style, thesis and citation heuristics.

Used for the narrative report sections whenever no language-model review
is available. The tuning knobs (sensitivity, context depth, creativity,
academic tone) come from :class:`~essay_analyzer.config.HeuristicSettings`.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Dict, List, Tuple

from .config import HeuristicSettings
from .models import CitationFeedback, SectionFeedback, StructureReport, ThesisFeedback
from .textutils import clamp, count_phrase, per_thousand, round_half_up

logger = logging.getLogger(__name__)

SEMANTIC_TERMS: Tuple[str, ...] = (
    "analysis", "research", "theory", "concept", "framework",
    "methodology", "paradigm", "perspective", "hypothesis", "empirical",
    "evidence", "significant", "correlation", "variable", "factor",
)

BASE_SUGGESTIONS: Tuple[str, ...] = (
    "Consider strengthening your thesis statement with more specific claims",
    "Add more transitional phrases between major arguments",
    "Incorporate more field-specific terminology to demonstrate expertise",
    "Vary sentence structure to improve overall flow and readability",
)
CREATIVE_SUGGESTIONS: Tuple[str, ...] = (
    "Experiment with a more compelling introduction using a relevant anecdote",
    "Consider incorporating a counterargument to strengthen your position",
)
ACADEMIC_TONE_SUGGESTIONS: Tuple[str, ...] = (
    "Replace informal language with more scholarly terminology",
    "Ensure all claims are supported by credible academic sources",
)

ACADEMIC_LEAD_INS: Tuple[str, ...] = (
    "This research demonstrates that",
    "This analysis reveals that",
    "Evidence suggests that",
)
PLAIN_LEAD_INS: Tuple[str, ...] = (
    "This essay shows that",
    "It is clear that",
    "This paper argues that",
)

CITATION_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    (
        "APA",
        re.compile(
            r"\([A-Z][A-Za-z\-]+(?:\s+[A-Z][A-Za-z\-]+)*(?:\s+et al\.)?"
            r"(?:\s*(?:&|and)\s*[A-Z][A-Za-z\-]+(?:\s+[A-Z][A-Za-z\-]+)*)?,"
            r"\s*\d{4}[a-z]?(?:,[^)]+)?\)"
        ),
    ),
    ("Numeric", re.compile(r"\[\d{1,3}(?:\s*[-,]\s*\d{1,3})*\]")),
    (
        "Author-year",
        re.compile(r"\b[A-Z][A-Za-z\-]+(?:\s+et al\.)?\s*\(\d{4}[a-z]?\)"),
    ),
    ("DOI", re.compile(r"\bdoi:\s*10\.\d{4,9}/\S+", re.IGNORECASE)),
)

_SENTENCE_BREAK = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")


def analyze_structure(text: str, settings: HeuristicSettings) -> StructureReport:
    """Build the structure/style/thesis/citation sections without an LLM."""
    complexity = sentence_complexity(text)
    coherence = topic_coherence(text, settings.context_depth / 100)
    depth = semantic_depth(text, settings.sensitivity / 100)
    overall = round_half_up((complexity + coherence + depth) / 3)
    creativity = settings.creativity / 100
    academic_tone = settings.academic_tone / 100
    logger.debug(
        "Structure heuristics complexity=%.1f coherence=%.1f depth=%.1f",
        complexity,
        coherence,
        depth,
    )

    thesis_text = improved_thesis(text, creativity, academic_tone)
    flow_note = (
        "The flow between paragraphs is excellent."
        if coherence > 85
        else "Consider strengthening transitions between paragraphs for better flow."
    )
    return StructureReport(
        overall_score=overall,
        structure=SectionFeedback(
            score=coherence,
            feedback=(
                "Your essay demonstrates a clear structure with a coherence score "
                f"of {round_half_up(coherence)}/100. {flow_note}"
            ),
        ),
        style=SectionFeedback(
            score=complexity,
            feedback=(
                f"Your writing demonstrates {'excellent' if complexity > 85 else 'good'} "
                "sentence complexity with appropriate academic tone."
            ),
            suggestions=style_suggestions(creativity, academic_tone),
        ),
        thesis=ThesisFeedback(
            detected=bool(extract_thesis(text)),
            text=thesis_text,
            score=78,
            feedback=(
                "Your thesis effectively presents your argument. Consider this "
                f'alternative: "{thesis_text}"'
            ),
        ),
        citations=detect_citations(text),
        alternative_phrasing=alternative_phrasing(text, academic_tone),
    )


def sentence_complexity(text: str) -> float:
    """Map average words per sentence onto 60-100, peaking for 15-25 words."""
    sentences = [s for s in _SENTENCE_BREAK.split(text) if s.strip()]
    word_total = sum(len(sentence.split()) for sentence in sentences)
    avg_words = word_total / max(len(sentences), 1)
    if avg_words < 8:
        value = 60 + avg_words * 2
    elif avg_words > 25:
        value = 95 - (avg_words - 25)
    else:
        value = 75 + (avg_words - 8)
    return clamp(value, 60, 100)


def topic_coherence(text: str, context_depth: float) -> float:
    paragraphs = [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]
    count = len(paragraphs)
    if count < 3:
        adjustment = -10
    elif count > 10:
        adjustment = -5
    elif 5 <= count <= 7:
        adjustment = 10
    else:
        adjustment = 5
    return clamp((75 + adjustment) * (0.8 + context_depth * 0.4), 60, 100)


def semantic_depth(text: str, sensitivity: float) -> float:
    term_count = sum(count_phrase(text, term) for term in SEMANTIC_TERMS)
    density = per_thousand(term_count, len(text))
    score = 70 + clamp(density * 3 - 5, -10, 15)
    return clamp(score * (0.8 + sensitivity * 0.4), 60, 100)


def style_suggestions(creativity: float, academic_tone: float) -> List[str]:
    suggestions = list(BASE_SUGGESTIONS)
    if creativity > 0.6:
        suggestions.extend(CREATIVE_SUGGESTIONS)
    if academic_tone > 0.7:
        suggestions.extend(ACADEMIC_TONE_SUGGESTIONS)
    return suggestions


def extract_thesis(text: str) -> str:
    """Last sentence of the first paragraph, or its only sentence."""
    first_paragraph = _PARAGRAPH_BREAK.split(text)[0]
    sentences = [s for s in _SENTENCE_BREAK.split(first_paragraph) if s.strip()]
    if not sentences:
        return ""
    return sentences[-1].strip()


def improved_thesis(text: str, creativity: float, academic_tone: float) -> str:
    lead_in = (ACADEMIC_LEAD_INS if academic_tone > 0.7 else PLAIN_LEAD_INS)[0]
    closing = (
        " with significant implications for our understanding of the subject"
        if creativity > 0.6
        else " as demonstrated by the evidence presented"
    )
    thesis = extract_thesis(text)
    if not thesis:
        return f"{lead_in}{closing}."
    return f"{lead_in} {thesis}{closing}."


def alternative_phrasing(text: str, academic_tone: float) -> Dict[str, str]:
    lowered = text.lower()
    formal = academic_tone > 0.7
    phrasing: Dict[str, str] = {}
    if "in conclusion" in lowered:
        phrasing["In conclusion"] = (
            "The evidence thus demonstrates" if formal else "To summarize the findings"
        )
    if "i think" in lowered or "i believe" in lowered:
        phrasing["I think/I believe"] = (
            "The analysis suggests" if formal else "It can be observed that"
        )
    if "very important" in lowered:
        phrasing["very important"] = "critically significant" if formal else "essential"
    return phrasing


def detect_citations(text: str) -> CitationFeedback:
    """Count regex-recognizable in-text citations and name the dominant style."""
    families: Counter[str] = Counter()
    seen: set[Tuple[str, str]] = set()
    for label, pattern in CITATION_PATTERNS:
        for match in pattern.finditer(text):
            key = (label, re.sub(r"\s+", " ", match.group()).strip())
            if key in seen:
                continue
            seen.add(key)
            families[label] += 1

    count = sum(families.values())
    if count == 0:
        return CitationFeedback(
            count=0,
            format="Unknown",
            is_valid=False,
            feedback=(
                "No in-text citations were detected. Support your claims with "
                "properly formatted references."
            ),
        )

    dominant, _ = families.most_common(1)[0]
    consistent = len(families) == 1
    feedback = (
        f"Detected {count} {dominant} citation{'s' if count != 1 else ''}."
        if consistent
        else (
            f"Detected {count} citations in mixed styles ("
            f"{', '.join(sorted(families))}). Use a single citation format throughout."
        )
    )
    return CitationFeedback(
        count=count, format=dominant, is_valid=consistent, feedback=feedback
    )
