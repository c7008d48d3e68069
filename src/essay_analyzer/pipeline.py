from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Tuple

from .config import EssayAnalyzerConfig
from .detection import detect_ai_generation
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import (
    AIDetectionResult,
    Document,
    EssayReport,
    PlagiarismResult,
    VocabularyResult,
)
from .plagiarism import check_plagiarism_fallback
from .review import NoOpReviewer, Reviewer, ReviewFailure
from .structure import analyze_structure
from .vocabulary import analyze_vocabulary

logger = logging.getLogger(__name__)


def run_scoring_engine(
    text: str,
    lexicon: Lexicon = DEFAULT_LEXICON,
    parallel_analyzers: int = 1,
) -> Tuple[AIDetectionResult, VocabularyResult, PlagiarismResult]:
    """Run the three local analyzers, concurrently when more than one worker is allowed."""
    if parallel_analyzers <= 1:
        return (
            detect_ai_generation(text, lexicon),
            analyze_vocabulary(text, lexicon),
            check_plagiarism_fallback(text, lexicon),
        )
    with ThreadPoolExecutor(max_workers=min(parallel_analyzers, 3)) as pool:
        detection = pool.submit(detect_ai_generation, text, lexicon)
        vocabulary = pool.submit(analyze_vocabulary, text, lexicon)
        plagiarism = pool.submit(check_plagiarism_fallback, text, lexicon)
        return detection.result(), vocabulary.result(), plagiarism.result()


def analyze_essay(
    text: str,
    config: EssayAnalyzerConfig,
    reviewer: Reviewer | None = None,
    *,
    doc_id: str = "essay",
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> EssayReport:
    """Produce the merged report for one essay.

    Language-model feedback is used when the reviewer succeeds; otherwise the
    structure heuristics and the local phrase matcher fill in. Reviewer
    failures are logged and never raised.
    """
    reviewer = reviewer or NoOpReviewer()
    ai_detection, vocabulary, local_plagiarism = run_scoring_engine(
        text, lexicon, config.parallel_analyzers
    )

    essay_outcome = reviewer.review_essay(text)
    if isinstance(essay_outcome, ReviewFailure):
        _log_fallback(doc_id, "essay review", essay_outcome, reviewer)
        sections = analyze_structure(text, config.heuristics)
        source = "heuristic"
    else:
        sections = essay_outcome.result
        source = "llm"

    plagiarism_outcome = reviewer.review_plagiarism(text)
    if isinstance(plagiarism_outcome, ReviewFailure):
        _log_fallback(doc_id, "plagiarism review", plagiarism_outcome, reviewer)
        plagiarism = local_plagiarism
        plagiarism_source = "heuristic"
    else:
        plagiarism = plagiarism_outcome.result
        plagiarism_source = "llm"

    logger.debug(
        "doc=%s score=%.1f ai=%s vocabulary=%s originality=%s",
        doc_id,
        sections.overall_score,
        ai_detection.is_ai_generated,
        vocabulary.score,
        plagiarism.originality_score,
    )
    return EssayReport(
        doc_id=doc_id,
        score=sections.overall_score,
        structure=sections.structure,
        style=sections.style,
        thesis=sections.thesis,
        citations=sections.citations,
        plagiarism=plagiarism,
        ai_detection=ai_detection,
        vocabulary=vocabulary,
        source=source,
        plagiarism_source=plagiarism_source,
        alternative_phrasing=sections.alternative_phrasing,
    )


def analyze_documents(
    documents: Iterable[Document],
    config: EssayAnalyzerConfig,
    reviewer: Reviewer | None = None,
    lexicon: Lexicon = DEFAULT_LEXICON,
) -> Dict[str, EssayReport]:
    """Analyze every document and return reports keyed by ``doc_id``."""
    results: Dict[str, EssayReport] = {}
    for doc in documents:
        results[doc.doc_id] = analyze_essay(
            doc.text, config, reviewer, doc_id=doc.doc_id, lexicon=lexicon
        )
    return results


def _log_fallback(
    doc_id: str, stage: str, outcome: ReviewFailure, reviewer: Reviewer
) -> None:
    if isinstance(reviewer, NoOpReviewer):
        logger.debug("doc=%s %s skipped: %s", doc_id, stage, outcome.error)
        return
    logger.warning(
        "doc=%s %s failed, using local heuristics: %s", doc_id, stage, outcome.error
    )
