"""
Heuristic AI-generation detector.

Three independent sub-analyses (writing style, linguistic patterns and
vocabulary distribution) each produce a 0-100 score where higher means
"reads as human". The scores are blended with fixed weights and the verdict
confidence comes from how many sub-analyses agree. Only surface statistics
are used; there is no model inference.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import AIDetectionResult, SubAnalysisResult
from .textutils import (
    build_ngrams,
    clamp,
    count_matches,
    count_phrase,
    estimate_syllables,
    per_thousand,
    population_std,
)
from .tokenization import extract_words, split_paragraphs, split_sentences

logger = logging.getLogger(__name__)

STYLE_WEIGHT = 0.3
PATTERN_WEIGHT = 0.4
VOCABULARY_WEIGHT = 0.3
AI_VERDICT_THRESHOLD = 65.0
SUB_VERDICT_THRESHOLD = 60.0
MAX_MARKERS = 5

SubAnalysis = Callable[[str, Lexicon], SubAnalysisResult]


def detect_ai_generation(
    text: str, lexicon: Lexicon = DEFAULT_LEXICON
) -> AIDetectionResult:
    """Estimate whether ``text`` was machine generated. Never raises."""
    if not extract_words(text):
        return AIDetectionResult(
            is_ai_generated=False,
            confidence=50,
            markers=[],
            feedback="Not enough text to assess AI generation.",
            score=50.0,
        )
    results = [analysis(text, lexicon) for analysis in SUB_ANALYSES]
    return combine_sub_analyses(results)


def combine_sub_analyses(results: Sequence[SubAnalysisResult]) -> AIDetectionResult:
    """Blend style, pattern and vocabulary results (in that order) into a verdict."""
    style, pattern, vocabulary = results
    combined = clamp(
        style.score * STYLE_WEIGHT
        + pattern.score * PATTERN_WEIGHT
        + vocabulary.score * VOCABULARY_WEIGHT
    )
    markers: List[str] = []
    for result in results:
        markers.extend(result.markers)
    is_ai_generated = combined < AI_VERDICT_THRESHOLD
    confidence = method_agreement(*(result.is_likely_ai for result in results))
    logger.debug(
        "AI detection style=%.1f pattern=%.1f vocabulary=%.1f combined=%.1f",
        style.score,
        pattern.score,
        vocabulary.score,
        combined,
    )
    return AIDetectionResult(
        is_ai_generated=is_ai_generated,
        confidence=confidence,
        markers=markers[:MAX_MARKERS],
        feedback=detection_feedback(is_ai_generated, combined, markers),
        score=combined,
    )


def analyze_style(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> SubAnalysisResult:
    """Score sentence/paragraph variation, transition density and personal voice."""
    sentences = split_sentences(text)
    paragraphs = split_paragraphs(text)
    sentence_std = population_std([len(s.strip()) for s in sentences])
    paragraph_std = population_std([len(p) for p in paragraphs])

    transition_count = sum(
        count_phrase(text, phrase) for phrase in lexicon.style_transitions
    )
    transition_density = per_thousand(transition_count, len(text))
    personal_count = count_matches(text, lexicon.personal_voice_patterns)

    score = clamp(
        min(sentence_std * 5, 40)
        + min(paragraph_std / 10, 20)
        + max(0.0, 20 - transition_density * 10)
        + min(personal_count * 5, 20)
    )

    markers: List[str] = []
    if sentence_std < 15:
        markers.append("Low sentence length variation")
    if paragraph_std < 50:
        markers.append("Uniform paragraph structure")
    if transition_density > 2:
        markers.append("Overuse of transition phrases")
    if personal_count == 0:
        markers.append("Absence of personal voice")

    return SubAnalysisResult(
        name="style",
        score=score,
        is_likely_ai=score < SUB_VERDICT_THRESHOLD,
        markers=markers,
        metrics={
            "sentence_std": sentence_std,
            "paragraph_std": paragraph_std,
            "transition_density": transition_density,
            "personal_voice_count": float(personal_count),
        },
    )


def analyze_patterns(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> SubAnalysisResult:
    """Score lexical density, punctuation regularity, creativity and idiom use."""
    words = extract_words(text)
    lexical_density = len(set(words)) / len(words) if words else 0.0
    grammar_perfection = punctuation_consistency(text)
    creativity = count_matches(text, lexicon.creative_patterns) * 5
    colloquialisms = count_matches(text, lexicon.colloquial_patterns) * 10

    score = clamp(
        max(0.0, 50 - lexical_density * 100)
        + max(0.0, 20 - grammar_perfection * 20)
        + min(creativity, 20)
        + min(colloquialisms, 10)
    )

    markers: List[str] = []
    if lexical_density > 0.6:
        markers.append("Unusually high vocabulary diversity")
    if grammar_perfection > 0.9:
        markers.append("Nearly perfect grammar and punctuation")
    if creativity < 5:
        markers.append("Limited use of creative language")
    if colloquialisms == 0:
        markers.append("No colloquialisms or idioms")

    return SubAnalysisResult(
        name="pattern",
        score=score,
        is_likely_ai=score < SUB_VERDICT_THRESHOLD,
        markers=markers,
        metrics={
            "lexical_density": lexical_density,
            "grammar_perfection": grammar_perfection,
            "creativity": float(creativity),
            "colloquialisms": float(colloquialisms),
        },
    )


def analyze_vocabulary_distribution(
    text: str, lexicon: Lexicon = DEFAULT_LEXICON
) -> SubAnalysisResult:
    """Score phrase repetition, spelling slips and cross-paragraph consistency."""
    words = extract_words(text)
    if not words:
        return SubAnalysisResult(
            name="vocabulary", score=50.0, is_likely_ai=False, markers=[]
        )

    ratio = repetition_ratio(words)
    typo_count = estimate_typo_count(words, lexicon)
    consistency = vocabulary_consistency(text, lexicon)

    score = clamp(
        max(0.0, 40 - ratio * 10)
        + min(typo_count * 5, 30)
        + max(0.0, 30 - consistency * 30)
    )

    markers: List[str] = []
    if ratio > 2:
        markers.append("Unusual phrase repetition")
    if typo_count == 0:
        markers.append("No spelling variations or typos")
    if consistency > 0.8:
        markers.append("Unusually consistent vocabulary sophistication")

    return SubAnalysisResult(
        name="vocabulary",
        score=score,
        is_likely_ai=score < SUB_VERDICT_THRESHOLD,
        markers=markers,
        metrics={
            "repetition_ratio": ratio,
            "typo_count": float(typo_count),
            "consistency": consistency,
        },
    )


SUB_ANALYSES: tuple[SubAnalysis, ...] = (
    analyze_style,
    analyze_patterns,
    analyze_vocabulary_distribution,
)


def repetition_ratio(words: Sequence[str]) -> float:
    """Repeated 3-grams plus doubly weighted repeated 4-grams, per 20 words."""
    if not words:
        return 0.0
    repeated_three = sum(1 for count in build_ngrams(words, 3).values() if count > 1)
    repeated_four = sum(1 for count in build_ngrams(words, 4).values() if count > 1)
    return (repeated_three + repeated_four * 2) / (len(words) / 20)


def estimate_typo_count(words: Sequence[str], lexicon: Lexicon = DEFAULT_LEXICON) -> int:
    count = sum(1 for word in words if word in lexicon.detector_misspellings)
    count += sum(
        1
        for word in words
        if len(word) > 4 and any(pair in word for pair in lexicon.unusual_letter_pairs)
    )
    return count


def punctuation_consistency(text: str) -> float:
    """
    Return 0-1 where 1 means every sentence ends the same way and comma use
    is all-or-nothing. Fewer than three sentences yields 0.5.
    """
    sentences = split_sentences(text)
    if len(sentences) < 3:
        return 0.5
    endings = [sentence.strip()[-1] for sentence in sentences]
    dominant = max(endings.count("."), endings.count("!"), endings.count("?"))
    terminal_consistency = dominant / len(sentences)
    with_commas = sum(1 for sentence in sentences if "," in sentence)
    comma_consistency = abs(0.5 - with_commas / len(sentences)) * 2
    return terminal_consistency * 0.6 + comma_consistency * 0.4


def vocabulary_consistency(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> float:
    """
    Return 0-1 where 1 means every paragraph has the same vocabulary
    sophistication. Fewer than two paragraphs yields 0.5.
    """
    paragraphs = split_paragraphs(text)
    if len(paragraphs) < 2:
        return 0.5
    scores: List[float] = []
    for paragraph in paragraphs:
        content = [
            word
            for word in extract_words(paragraph)
            if word not in lexicon.sophistication_function_words and len(word) > 3
        ]
        denominator = len(content) or 1
        avg_length = sum(len(word) for word in content) / denominator
        complex_ratio = (
            sum(1 for word in content if estimate_syllables(word) >= 3) / denominator
        )
        scores.append(avg_length / 10 + complex_ratio * 2)
    return max(0.0, 1 - population_std(scores) * 2)


def method_agreement(*verdicts: bool) -> int:
    """Map agreement between sub-verdicts onto a 50/70/85/95 confidence."""
    total = len(verdicts)
    if total == 0:
        return 50
    true_count = sum(1 for verdict in verdicts if verdict)
    false_count = total - true_count
    if true_count == total or false_count == total:
        return 95
    if true_count >= total * 0.75 or false_count >= total * 0.75:
        return 85
    if true_count != false_count:
        return 70
    return 50


def detection_feedback(is_ai_generated: bool, score: float, markers: Sequence[str]) -> str:
    if is_ai_generated:
        if score < 40:
            return (
                "This text shows strong indicators of AI generation "
                f"({', '.join(markers[:3])}). Consider adding more personal voice "
                "and stylistic variation to make it feel more authentic."
            )
        return (
            "This text contains some patterns commonly found in AI-generated content "
            f"({', '.join(markers[:2])}). Try incorporating more personal examples "
            "and variable sentence structures to improve authenticity."
        )
    if score > 80:
        return (
            "This text appears to be human-written with high confidence. It contains "
            "natural language patterns, appropriate variation in structure, and "
            "authentic voice."
        )
    return (
        "This text most likely contains human-written content, though some sections "
        "show patterns occasionally present in AI writing. Overall, it demonstrates "
        "sufficient natural language characteristics."
    )


run_ai_detection = detect_ai_generation
