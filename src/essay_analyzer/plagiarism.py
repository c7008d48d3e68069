"""
Local plagiarism fallback.

This is NOT a plagiarism detector. It only checks the essay for a handful of
topic keywords and, when one is present, reports a canned "common phrase"
match with a fixed similarity percentage. It stands in for a real
corpus-based similarity search when no language-model provider is available.
"""

from __future__ import annotations

import logging
from typing import List

from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import PlagiarismMatch, PlagiarismResult
from .textutils import round_half_up

logger = logging.getLogger(__name__)

BASE_ORIGINALITY = 95
PASSAGE_LENGTH_UNIT = 50


def check_plagiarism_fallback(
    text: str, lexicon: Lexicon = DEFAULT_LEXICON
) -> PlagiarismResult:
    """Match ``text`` against the fixed phrase-source table."""
    lowered = text.lower()
    matches: List[PlagiarismMatch] = [
        PlagiarismMatch(
            text=entry.passage,
            match_percentage=entry.match_percentage,
            source=entry.source,
            url=entry.url,
            recommendation=entry.recommendation,
        )
        for entry in lexicon.phrase_sources
        if entry.keyword.lower() in lowered
    ]
    return PlagiarismResult(
        originality_score=originality_score(matches), matches=matches
    )


def originality_score(matches: List[PlagiarismMatch]) -> int:
    """Start at 95 and subtract each match's percentage weighted by passage length."""
    penalty = sum(
        match.match_percentage * len(match.text) / PASSAGE_LENGTH_UNIT
        for match in matches
    )
    score = max(0, round_half_up(BASE_ORIGINALITY - penalty))
    if matches:
        logger.debug("Phrase matcher found %s matches, originality=%s", len(matches), score)
    return score


run_plagiarism_fallback = check_plagiarism_fallback
