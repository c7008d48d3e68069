from __future__ import annotations

import pytest

from essay_analyzer.textutils import (
    build_ngrams,
    clamp,
    count_phrase,
    estimate_syllables,
    per_thousand,
    population_std,
    round_half_up,
)
from essay_analyzer.tokenization import (
    extract_words,
    split_paragraphs,
    split_sentences,
    tokenize_words,
)


def test_tokenize_words_offsets_align_with_text():
    """Tokenizer emits alphabetic tokens and their character spans."""
    text = "Hello, world! It's fine."
    tokens = tokenize_words(text)
    assert [t.text for t in tokens] == ["Hello", "world", "It's", "fine"]
    for token in tokens:
        assert text[token.start_char : token.end_char] == token.text


def test_tokenize_words_strips_quoting_apostrophes():
    """Single quotes around a word are not part of the token."""
    tokens = tokenize_words("He wrote 'teh' and the students' essays.")
    assert [t.text for t in tokens] == ["He", "wrote", "teh", "and", "the", "students", "essays"]


def test_extract_words_lowercases_and_keeps_apostrophes():
    """Word extraction is case-insensitive and ignores digits/punctuation."""
    assert extract_words("Don't STOP 42 now.") == ["don't", "stop", "now"]


def test_split_sentences_drops_unterminated_tail():
    """Only terminated sentences are returned."""
    assert split_sentences("One. Two! three") == ["One.", " Two!"]


def test_split_paragraphs_on_blank_lines():
    """Blank lines separate paragraphs; empty text is a single empty paragraph."""
    assert split_paragraphs("a\n\nb\n  \nc") == ["a", "b", "c"]
    assert split_paragraphs("") == [""]


@pytest.mark.parametrize(
    ("word", "expected"),
    [("make", 1), ("the", 1), ("analysis", 4), ("beautiful", 3), ("rhythm", 1)],
)
def test_estimate_syllables(word: str, expected: int):
    """Vowel-cluster syllable estimate with silent-e correction, minimum one."""
    assert estimate_syllables(word) == expected


def test_population_std_and_small_inputs():
    """Population standard deviation, zero for fewer than two values."""
    assert population_std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert population_std([3]) == 0.0
    assert population_std([]) == 0.0


def test_build_ngrams_counts_repeats():
    """N-gram counter keys are word tuples."""
    grams = build_ngrams(["a", "b", "a", "b"], 2)
    assert grams[("a", "b")] == 2
    assert grams[("b", "a")] == 1
    assert build_ngrams(["a"], 3) == {}


def test_count_phrase_respects_word_boundaries():
    """Phrase counting is case-insensitive and whole-word."""
    assert count_phrase("However, however HOWEVER.", "however") == 3
    assert count_phrase("Additionally we add.", "addition") == 0
    assert count_phrase("In addition, more.", "in addition") == 1


def test_numeric_helpers():
    """Rounding is half-up; rates guard against empty bases; clamp bounds scores."""
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1
    assert per_thousand(3, 0) == 0.0
    assert per_thousand(2, 500) == pytest.approx(4.0)
    assert clamp(-5) == 0.0
    assert clamp(150) == 100.0
    assert clamp(7, 10, 20) == 10
