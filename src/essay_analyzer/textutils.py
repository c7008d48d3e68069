from __future__ import annotations

import math
import re
import statistics
from collections import Counter
from typing import Iterable, Sequence, Tuple

VOWELS = "aeiouy"


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for fewer than two values."""
    return statistics.pstdev(values) if len(values) > 1 else 0.0


def estimate_syllables(word: str) -> int:
    """Count vowel clusters, dropping a trailing silent 'e'."""
    count = 0
    prev_is_vowel = False
    for char in word:
        is_vowel = char in VOWELS
        if is_vowel and not prev_is_vowel:
            count += 1
        prev_is_vowel = is_vowel
    if len(word) > 2 and word.endswith("e") and word[-2] not in VOWELS:
        count -= 1
    return max(count, 1)


def build_ngrams(words: Sequence[str], n: int) -> Counter[Tuple[str, ...]]:
    """Count every contiguous n-word tuple in ``words``."""
    return Counter(tuple(words[i : i + n]) for i in range(len(words) - n + 1))


def phrase_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)


def count_phrase(text: str, phrase: str) -> int:
    """Case-insensitive whole-word occurrences of ``phrase`` in ``text``."""
    return len(phrase_pattern(phrase).findall(text))


def count_matches(text: str, patterns: Iterable[re.Pattern[str]]) -> int:
    return sum(len(pattern.findall(text)) for pattern in patterns)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(max(value, low), high)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (``round`` uses banker's rounding)."""
    return int(math.floor(value + 0.5))


def per_thousand(count: float, basis: float) -> float:
    """Occurrences per 1000 units of ``basis``; 0.0 when the basis is empty."""
    if basis <= 0:
        return 0.0
    return count / (basis / 1000)
