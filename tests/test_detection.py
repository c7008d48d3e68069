from __future__ import annotations

import pytest

from essay_analyzer.detection import (
    MAX_MARKERS,
    analyze_patterns,
    analyze_style,
    analyze_vocabulary_distribution,
    combine_sub_analyses,
    detect_ai_generation,
    estimate_typo_count,
    method_agreement,
    punctuation_consistency,
    repetition_ratio,
    vocabulary_consistency,
)
from essay_analyzer.models import SubAnalysisResult
from tests.essays import SAMPLE_ESSAY, UNIFORM_ESSAY


@pytest.mark.parametrize("text", ["", "   \n\n  ", "12345 !!! ..."])
def test_detect_returns_neutral_result_without_words(text: str):
    """Inputs without words produce the neutral verdict instead of failing."""
    result = detect_ai_generation(text)
    assert result.is_ai_generated is False
    assert result.confidence == 50
    assert result.score == 50.0
    assert result.markers == []


@pytest.mark.parametrize("text", [SAMPLE_ESSAY, UNIFORM_ESSAY, "One word", "Hi!"])
def test_detect_output_ranges(text: str):
    """Confidence is one of four levels, score is clamped and markers are capped."""
    result = detect_ai_generation(text)
    assert result.confidence in {50, 70, 85, 95}
    assert 0.0 <= result.score <= 100.0
    assert len(result.markers) <= MAX_MARKERS
    assert result.is_ai_generated == (result.score < 65)
    assert result.feedback


def test_transition_density_lowers_style_score():
    """Repeated formal transitions reduce the style score versus a control."""
    with_transitions = " ".join(["However, it rained."] * 5)
    control = " ".join(["Suddenly, it rained."] * 5)
    flagged = analyze_style(with_transitions)
    baseline = analyze_style(control)
    assert flagged.metrics["transition_density"] > 2
    assert "Overuse of transition phrases" in flagged.markers
    assert flagged.score == pytest.approx(0.0)
    assert baseline.score == pytest.approx(20.0)
    assert flagged.score < baseline.score


def test_personal_voice_raises_style_score():
    """First-person opinion markers count toward a human-like style."""
    voiced = analyze_style("I think this is true. In my opinion it works.")
    flat = analyze_style("This is true. It works.")
    assert voiced.metrics["personal_voice_count"] == 2
    assert "Absence of personal voice" not in voiced.markers
    assert "Absence of personal voice" in flat.markers
    assert voiced.score > flat.score


def test_repeated_four_gram_lowers_vocabulary_distribution_score():
    """A repeated 4-word phrase raises the repetition ratio and lowers the sub-score."""
    repeated = (
        "We read in order to understand. They listen in order to understand. "
        "People travel in order to understand."
    )
    control = (
        "We read to learn facts. They listen because music helps. "
        "People travel when summer arrives."
    )
    flagged = analyze_vocabulary_distribution(repeated)
    baseline = analyze_vocabulary_distribution(control)
    assert flagged.metrics["repetition_ratio"] == pytest.approx(4 / 0.9)
    assert baseline.metrics["repetition_ratio"] == 0.0
    assert "Unusual phrase repetition" in flagged.markers
    assert flagged.score == pytest.approx(15.0)
    assert baseline.score == pytest.approx(55.0)


def test_pattern_analysis_rewards_creative_and_colloquial_language():
    """Similes and idioms push the pattern score toward human."""
    plain = analyze_patterns(UNIFORM_ESSAY)
    lively = analyze_patterns(
        UNIFORM_ESSAY + " Imagine a class that runs like a machine. "
        "Long story short, needless to say, it works."
    )
    assert lively.metrics["creativity"] >= 10
    assert lively.metrics["colloquialisms"] >= 20
    assert "No colloquialisms or idioms" in plain.markers
    assert "No colloquialisms or idioms" not in lively.markers
    assert lively.score > plain.score


def test_repetition_ratio_empty_and_unique():
    """No words or no repeats yields a zero ratio."""
    assert repetition_ratio([]) == 0.0
    assert repetition_ratio(["alpha", "beta", "gamma", "delta"]) == 0.0


def test_estimate_typo_count_uses_misspellings_and_letter_pairs():
    """Known misspellings and odd letter pairs in longer words both count."""
    assert estimate_typo_count(["teh", "alot", "fine"]) == 2
    assert estimate_typo_count(["abxzcd", "xz"]) == 1


def test_punctuation_consistency_defaults_and_uniform_text():
    """Fewer than three sentences defaults to 0.5; identical endings score 1."""
    assert punctuation_consistency("Short one. Short two.") == 0.5
    assert punctuation_consistency("A b. C d. E f.") == pytest.approx(1.0)
    mixed = punctuation_consistency("A, b. C d? E f! G, h.")
    assert 0.0 <= mixed < 1.0


def test_vocabulary_consistency_needs_two_paragraphs():
    """A single paragraph defaults to 0.5; identical paragraphs score 1."""
    assert vocabulary_consistency("Only one paragraph here.") == 0.5
    paragraph = "Comprehensive methodology supports interpretation."
    assert vocabulary_consistency(f"{paragraph}\n\n{paragraph}") == pytest.approx(1.0)


@pytest.mark.parametrize(
    ("verdicts", "expected"),
    [
        ((True, True, True), 95),
        ((False, False, False), 95),
        ((True, True, False), 70),
        ((True, False), 50),
        ((True, True, True, False), 85),
        ((), 50),
    ],
)
def test_method_agreement(verdicts: tuple, expected: int):
    """Confidence reflects how many sub-verdicts agree."""
    assert method_agreement(*verdicts) == expected


def _sub(name: str, score: float, markers: list[str]) -> SubAnalysisResult:
    return SubAnalysisResult(
        name=name, score=score, is_likely_ai=score < 60, markers=markers
    )


def test_combine_sub_analyses_truncates_markers_and_templates_feedback():
    """Low blended scores are flagged with at most five markers."""
    results = [
        _sub("style", 10, ["s1", "s2", "s3"]),
        _sub("pattern", 10, ["p1", "p2", "p3"]),
        _sub("vocabulary", 10, ["v1", "v2", "v3"]),
    ]
    combined = combine_sub_analyses(results)
    assert combined.is_ai_generated is True
    assert combined.score == pytest.approx(10.0)
    assert combined.confidence == 95
    assert combined.markers == ["s1", "s2", "s3", "p1", "p2"]
    assert "strong indicators" in combined.feedback
    assert "s1, s2, s3" in combined.feedback


def test_combine_sub_analyses_human_verdict():
    """High blended scores read as human with high confidence."""
    combined = combine_sub_analyses(
        [_sub("style", 90, []), _sub("pattern", 90, []), _sub("vocabulary", 90, [])]
    )
    assert combined.is_ai_generated is False
    assert "high confidence" in combined.feedback


def test_combine_sub_analyses_uses_fixed_weights():
    """Pattern analysis carries the heaviest weight."""
    combined = combine_sub_analyses(
        [_sub("style", 100, []), _sub("pattern", 0, []), _sub("vocabulary", 100, [])]
    )
    assert combined.score == pytest.approx(60.0)
    assert combined.confidence == 70
