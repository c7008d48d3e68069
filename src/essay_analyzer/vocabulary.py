"""
Vocabulary sophistication, variety and spelling analysis.

Produces a 0-100 vocabulary score together with deterministic, templated
feedback: suggested substitutions for overused words, academic alternatives
for basic terms, transition-variety advice and a simplified spell-check
against a fixed misspelling dictionary.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import (
    AcademicLevel,
    SophisticationStats,
    Typo,
    TransitionStats,
    VocabularyResult,
)
from .textutils import (
    clamp,
    count_phrase,
    estimate_syllables,
    per_thousand,
    phrase_pattern,
    round_half_up,
)
from .tokenization import SENTENCE_PATTERN, extract_words, tokenize_words

logger = logging.getLogger(__name__)

EMPTY_FEEDBACK = "No text provided for vocabulary analysis."
TYPO_CONTEXT_CHARS = 20
MAX_ADVANCED_WORDS = 10
MAX_OVERUSED_SUGGESTIONS = 3
MAX_ACADEMIC_SUGGESTIONS = 3
TRANSITION_VARIETY_BASIS = 0.3
_TRAILING_FRAGMENT = re.compile(r"[^.!?]+$")


def analyze_vocabulary(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> VocabularyResult:
    """Analyze vocabulary usage in ``text``; empty input yields a zero result."""
    words = extract_words(text)
    if not words:
        return VocabularyResult(score=0, feedback=EMPTY_FEEDBACK)

    lexical_density = len(set(words)) / len(words)
    sophistication = analyze_sophistication(words, lexicon)
    typos = detect_typos(text, lexicon)
    transitions = analyze_transitions(text, lexicon)
    overused = find_overused_words(words, lexicon)

    score = vocabulary_score(
        lexical_density,
        sophistication.sophistication_score,
        0 if typos else 10,
        transitions.variety,
    )
    logger.debug(
        "Vocabulary density=%.3f sophistication=%.1f typos=%s variety=%.2f score=%s",
        lexical_density,
        sophistication.sophistication_score,
        len(typos),
        transitions.variety,
        score,
    )

    return VocabularyResult(
        score=score,
        feedback=vocabulary_feedback(
            score, sophistication.academic_level, lexical_density, overused, typos
        ),
        advanced=sophistication.advanced_words[:MAX_ADVANCED_WORDS],
        suggestions=improvement_suggestions(
            text, overused, sophistication.academic_level, transitions, lexicon
        ),
        uniqueness=lexical_density * 100,
        academic_level=sophistication.academic_level,
        improvement_areas=improvement_areas(overused, sophistication, typos, transitions),
        strengths=vocabulary_strengths(lexical_density, sophistication, transitions),
        typos=typos,
    )


def analyze_sophistication(
    words: Sequence[str], lexicon: Lexicon = DEFAULT_LEXICON
) -> SophisticationStats:
    content = [
        word
        for word in words
        if word not in lexicon.sophistication_function_words and len(word) > 3
    ]
    denominator = len(content) or 1
    avg_length = sum(len(word) for word in content) / denominator
    syllables = {word: estimate_syllables(word) for word in set(content)}
    complex_ratio = sum(1 for word in content if syllables[word] >= 3) / denominator
    advanced = [
        word
        for word in content
        if len(word) >= 8 or syllables[word] >= 4 or lexicon.is_academic_term(word)
    ]
    advanced_ratio = len(advanced) / denominator

    raw_score = avg_length * 6 + complex_ratio * 40 + advanced_ratio * 40
    return SophisticationStats(
        sophistication_score=min(raw_score, 100.0),
        academic_level=academic_level_for(raw_score),
        complex_word_ratio=complex_ratio,
        advanced_words=list(dict.fromkeys(advanced)),
        advanced_words_ratio=advanced_ratio,
    )


def academic_level_for(sophistication_score: float) -> AcademicLevel:
    if sophistication_score < 45:
        return "basic"
    if sophistication_score < 60:
        return "intermediate"
    if sophistication_score < 75:
        return "advanced"
    return "expert"


def detect_typos(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> List[Typo]:
    """Flag known misspellings with a ±20 character context window."""
    typos: List[Typo] = []
    for sentence in _sentences_for_spellcheck(text):
        for token in tokenize_words(sentence):
            corrections = lexicon.common_typos.get(token.text.lower())
            if not corrections:
                continue
            start = max(0, token.start_char - TYPO_CONTEXT_CHARS)
            end = min(len(sentence), token.end_char + TYPO_CONTEXT_CHARS)
            typos.append(
                Typo(
                    word=token.text,
                    suggestions=list(corrections),
                    context=sentence[start:end],
                )
            )
    return typos


def _sentences_for_spellcheck(text: str) -> List[str]:
    sentences = SENTENCE_PATTERN.findall(text)
    tail = _TRAILING_FRAGMENT.search(text)
    if tail and tail.group().strip():
        sentences.append(tail.group())
    return sentences


def analyze_transitions(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> TransitionStats:
    counts_by_phrase: Dict[str, int] = {}
    counts_by_type: Dict[str, int] = {}
    total = 0
    for category in lexicon.transition_catalogue:
        category_count = 0
        for phrase in category.phrases:
            matches = count_phrase(text, phrase)
            if matches:
                counts_by_phrase[phrase] = matches
                category_count += matches
        if category_count:
            counts_by_type[category.name] = category_count
            total += category_count

    catalogue_size = lexicon.transition_phrase_count()
    variety = (
        len(counts_by_phrase) / (catalogue_size * TRANSITION_VARIETY_BASIS)
        if catalogue_size
        else 0.0
    )
    dominant_type = ""
    max_count = 0
    for name, count in counts_by_type.items():
        if count > max_count:
            dominant_type, max_count = name, count

    return TransitionStats(
        total_count=total,
        variety=min(variety, 1.0),
        density=per_thousand(total, len(extract_words(text))),
        dominant_type=dominant_type,
        overused_transitions=[p for p, c in counts_by_phrase.items() if c >= 3],
        missing_types=[
            category.name
            for category in lexicon.transition_catalogue
            if category.name not in counts_by_type
        ],
        counts_by_type=counts_by_type,
        counts_by_phrase=counts_by_phrase,
    )


def find_overused_words(
    words: Sequence[str], lexicon: Lexicon = DEFAULT_LEXICON
) -> List[str]:
    """Content words used at least max(3, 0.5% of the word count) times, most frequent first."""
    frequency = Counter(
        word
        for word in words
        if len(word) > 3 and word not in lexicon.overuse_function_words
    )
    threshold = max(3, len(words) * 0.005)
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word for word, count in ranked if count >= threshold]


def vocabulary_score(
    lexical_density: float,
    sophistication_score: float,
    typo_score: float,
    transition_variety: float,
) -> int:
    raw = (
        lexical_density * 100 * 0.2
        + sophistication_score * 0.5
        + typo_score * 0.1
        + transition_variety * 100 * 0.2
    )
    return int(clamp(round_half_up(raw)))


def find_alternatives(word: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Tuple[str, ...]:
    for entry in (*lexicon.academic_verbs, *lexicon.academic_nouns):
        if entry.basic == word:
            return entry.advanced
    return lexicon.generic_alternatives.get(word, ())


def improvement_suggestions(
    text: str,
    overused_words: Sequence[str],
    academic_level: AcademicLevel,
    transitions: TransitionStats,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> List[str]:
    suggestions: List[str] = []

    for word in overused_words[:MAX_OVERUSED_SUGGESTIONS]:
        alternatives = find_alternatives(word, lexicon)
        if alternatives:
            suggestions.append(
                f'Consider replacing "{word}" with alternatives like '
                f"{', '.join(alternatives[:3])}"
            )

    if academic_level in ("basic", "intermediate"):
        academic: List[str] = []
        for entry in lexicon.academic_verbs[:3]:
            if phrase_pattern(entry.basic).search(text):
                academic.append(
                    f'Replace "{entry.basic}" with more academic alternatives like '
                    f"{', '.join(entry.advanced[:3])}"
                )
        for entry in lexicon.academic_nouns[:3]:
            if phrase_pattern(entry.basic).search(text):
                academic.append(
                    f'Replace the general term "{entry.basic}" with more precise '
                    f"alternatives like {', '.join(entry.advanced[:3])}"
                )
        suggestions.extend(academic[:MAX_ACADEMIC_SUGGESTIONS])

    if transitions.overused_transitions:
        overused = transitions.overused_transitions[0]
        for category in lexicon.transition_catalogue:
            if overused in category.phrases:
                alternatives = [p for p in category.phrases if p != overused]
                if alternatives:
                    suggestions.append(
                        f'For variety, replace some instances of "{overused}" with '
                        f"{', '.join(alternatives[:3])}"
                    )
                break

    if transitions.missing_types:
        missing = transitions.missing_types[0]
        for category in lexicon.transition_catalogue:
            if category.name == missing and category.phrases:
                suggestions.append(
                    f"Add {missing} transitions like "
                    f"{', '.join(category.phrases[:3])} to improve flow"
                )
                break

    return suggestions


def vocabulary_feedback(
    score: int,
    academic_level: AcademicLevel,
    lexical_density: float,
    overused_words: Sequence[str],
    typos: Sequence[Typo],
) -> str:
    if score >= 85:
        parts = [
            "Your vocabulary usage demonstrates exceptional academic sophistication "
            "with appropriate variety and precision."
        ]
    elif score >= 75:
        parts = [
            "Your vocabulary reflects strong academic writing with good term "
            "selection and variety."
        ]
    elif score >= 65:
        parts = [
            "Your vocabulary is appropriate for academic writing with some room for "
            "enhancement in specificity and variety."
        ]
    elif score >= 50:
        parts = [
            "Your vocabulary is adequate but would benefit from more academic "
            "terminology and greater variety."
        ]
    else:
        parts = [
            "Your vocabulary needs significant development to meet academic "
            "standards. Consider incorporating more field-specific and precise "
            "terminology."
        ]

    parts.append(f"Your writing demonstrates {academic_level}-level academic language.")

    if lexical_density > 0.65:
        parts.append(
            "You use an impressive variety of unique words, indicating strong "
            "lexical range."
        )
    elif lexical_density < 0.45:
        parts.append(
            "Your writing could benefit from a broader range of vocabulary to "
            "reduce repetition."
        )

    if overused_words:
        quoted = '", "'.join(overused_words[:3])
        parts.append(
            f'Consider finding alternatives for frequently used words like "{quoted}".'
        )

    if typos:
        single = len(typos) == 1
        parts.append(
            f"There {'is' if single else 'are'} {len(typos)} potential spelling "
            f"{'error' if single else 'errors'} to correct."
        )

    return " ".join(parts)


def vocabulary_strengths(
    lexical_density: float,
    sophistication: SophisticationStats,
    transitions: TransitionStats,
) -> List[str]:
    strengths: List[str] = []
    if lexical_density > 0.6:
        strengths.append("Excellent lexical variety and word choice diversity")
    elif lexical_density > 0.5:
        strengths.append("Good lexical variety")

    if sophistication.academic_level == "expert":
        strengths.append("Exceptional academic vocabulary usage")
    elif sophistication.academic_level == "advanced":
        strengths.append("Strong academic terminology throughout")

    if sophistication.advanced_words_ratio > 0.2:
        strengths.append("Effective use of sophisticated terminology")

    if transitions.variety > 0.7:
        strengths.append("Excellent variety in transition phrases")
    elif transitions.variety > 0.5:
        strengths.append("Good transition variety")

    if transitions.total_count > 0 and not transitions.missing_types:
        strengths.append("Comprehensive use of different transition types")
    return strengths


def improvement_areas(
    overused_words: Sequence[str],
    sophistication: SophisticationStats,
    typos: Sequence[Typo],
    transitions: TransitionStats,
) -> List[str]:
    areas: List[str] = []
    if overused_words:
        quoted = '", "'.join(overused_words[:3])
        areas.append(f'Reduce repetition of words like "{quoted}"')

    if sophistication.academic_level == "basic":
        areas.append("Incorporate more academic terminology appropriate to your field")
    elif sophistication.academic_level == "intermediate":
        areas.append("Enhance precision with more discipline-specific vocabulary")

    if typos:
        noun = "error" if len(typos) == 1 else "errors"
        areas.append(f"Correct {len(typos)} potential spelling {noun}")

    if transitions.variety < 0.3:
        areas.append("Increase variety in transition phrases")

    if transitions.missing_types:
        areas.append(
            f"Add {'/'.join(transitions.missing_types)} transitions to improve flow"
        )

    if transitions.overused_transitions:
        areas.append(
            "Find alternatives for overused transition "
            f'"{transitions.overused_transitions[0]}"'
        )
    return areas


run_vocabulary_analysis = analyze_vocabulary
