from __future__ import annotations

from dataclasses import replace

import pytest

from essay_analyzer.lexicon import DEFAULT_LEXICON
from essay_analyzer.vocabulary import (
    EMPTY_FEEDBACK,
    academic_level_for,
    analyze_transitions,
    analyze_vocabulary,
    detect_typos,
    find_alternatives,
    find_overused_words,
    vocabulary_score,
)
from tests.essays import SAMPLE_ESSAY, TYPO_TEXT, UNIFORM_ESSAY


def test_empty_text_returns_zero_result():
    """Empty input yields a zero score with basic level and no lists."""
    result = analyze_vocabulary("")
    assert result.score == 0
    assert result.academic_level == "basic"
    assert result.feedback == EMPTY_FEEDBACK
    assert result.advanced == []
    assert result.suggestions == []
    assert result.typos == []
    assert result.strengths == []
    assert result.improvement_areas == []


@pytest.mark.parametrize("text", [SAMPLE_ESSAY, UNIFORM_ESSAY, TYPO_TEXT, "word"])
def test_scores_stay_in_range(text: str):
    """Score and uniqueness are bounded percentages."""
    result = analyze_vocabulary(text)
    assert 0 <= result.score <= 100
    assert 0.0 <= result.uniqueness <= 100.0
    assert result.academic_level in {"basic", "intermediate", "advanced", "expert"}


def test_detect_typos_reports_each_occurrence_with_context():
    """Every known misspelling is reported with its suggestions and surrounding text."""
    typos = detect_typos(TYPO_TEXT)
    assert [typo.word for typo in typos] == ["Teh", "teh"]
    assert all(typo.suggestions == ["the"] for typo in typos)
    assert all(typo.word in typo.context for typo in typos)


def test_detect_typos_scans_unterminated_tail():
    """A trailing fragment without punctuation is still spell-checked."""
    typos = detect_typos("All good here. I recieve mail")
    assert [typo.word for typo in typos] == ["recieve"]
    assert typos[0].suggestions == ["receive"]


def test_detect_typos_finds_quoted_words():
    """A misspelling wrapped in single quotes is still recognised."""
    typos = detect_typos("He wrote 'teh' twice.")
    assert [typo.word for typo in typos] == ["teh"]
    assert typos[0].suggestions == ["the"]


def test_typos_appear_in_feedback_and_improvement_areas():
    """Spelling slips surface in feedback and areas to improve."""
    result = analyze_vocabulary(TYPO_TEXT)
    assert "There are 2 potential spelling errors to correct." in result.feedback
    assert "Correct 2 potential spelling errors" in result.improvement_areas


def test_overused_word_drives_suggestions():
    """A repeated basic verb earns both replacement and academic suggestions."""
    result = analyze_vocabulary(
        "We show the results. We show the data. We show the graph."
    )
    assert result.academic_level == "basic"
    assert any('Consider replacing "show"' in s for s in result.suggestions)
    assert any('Replace "show" with more academic' in s for s in result.suggestions)
    assert any(s.startswith("Add addition transitions") for s in result.suggestions)
    assert 'Reduce repetition of words like "show"' in result.improvement_areas
    assert "Increase variety in transition phrases" in result.improvement_areas


def test_academic_suggestions_match_whole_words_only():
    """Substrings such as 'showcase' do not trigger the 'show' suggestion."""
    result = analyze_vocabulary("We showcase several ideas today.")
    assert not any('Replace "show"' in s for s in result.suggestions)


@pytest.mark.parametrize(
    ("score", "level"),
    [(0, "basic"), (44.9, "basic"), (45, "intermediate"), (60, "advanced"), (75, "expert")],
)
def test_academic_level_thresholds(score: float, level: str):
    """Sophistication bands map to academic levels."""
    assert academic_level_for(score) == level


def test_find_overused_words_skips_function_words():
    """Only content words above the frequency threshold are reported."""
    words = ["data"] * 3 + ["with"] * 5 + ["model"] * 2
    assert find_overused_words(words) == ["data"]


def test_find_alternatives_prefers_academic_tables():
    """Academic verb and noun tables take precedence over the generic map."""
    assert find_alternatives("show")[0] == "demonstrate"
    assert find_alternatives("good")[0] == "beneficial"
    assert find_alternatives("zebra") == ()


def test_vocabulary_score_formula():
    """The maximum attainable score is 91 with the fixed weights."""
    assert vocabulary_score(1.0, 100.0, 10, 1.0) == 91
    assert vocabulary_score(0.0, 0.0, 0, 0.0) == 0


def test_analyze_transitions_flags_overuse():
    """Three uses of one transition mark it overused and name missing categories."""
    stats = analyze_transitions(
        "However, this works. However, that fails. However, we go on."
    )
    assert stats.total_count == 3
    assert stats.counts_by_type == {"contrast": 3}
    assert stats.dominant_type == "contrast"
    assert stats.overused_transitions == ["however"]
    assert "contrast" not in stats.missing_types
    assert len(stats.missing_types) == 4
    assert stats.variety == pytest.approx(1 / 9)


def test_custom_lexicon_is_injectable():
    """Swapping the typo table changes what the spell-check reports."""
    lexicon = replace(DEFAULT_LEXICON, common_typos={"cat": ("feline",)})
    typos = detect_typos(TYPO_TEXT, lexicon)
    assert [typo.word for typo in typos] == ["cat"]
    assert typos[0].suggestions == ["feline"]
