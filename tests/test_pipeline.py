from __future__ import annotations

import logging

from essay_analyzer import run_ai_detection, run_plagiarism_fallback, run_vocabulary_analysis
from essay_analyzer.config import EssayAnalyzerConfig
from essay_analyzer.models import (
    CitationFeedback,
    Document,
    PlagiarismResult,
    SectionFeedback,
    StructureReport,
    ThesisFeedback,
)
from essay_analyzer.pipeline import analyze_documents, analyze_essay, run_scoring_engine
from essay_analyzer.review import Reviewer, ReviewFailure, ReviewOutcome, ReviewSuccess
from tests.essays import SAMPLE_ESSAY, UNIFORM_ESSAY


class StubReviewer(Reviewer):
    def __init__(self, essay: ReviewOutcome, plagiarism: ReviewOutcome) -> None:
        self._essay = essay
        self._plagiarism = plagiarism

    def review_essay(self, text: str) -> ReviewOutcome:
        return self._essay

    def review_plagiarism(self, text: str) -> ReviewOutcome:
        return self._plagiarism


def _llm_sections() -> StructureReport:
    return StructureReport(
        overall_score=91,
        structure=SectionFeedback(score=90, feedback="LLM structure"),
        style=SectionFeedback(score=89, feedback="LLM style", suggestions=["x"]),
        thesis=ThesisFeedback(detected=True, text="LLM thesis", score=88, feedback="ok"),
        citations=CitationFeedback(count=0, format="Unknown", is_valid=True, feedback="-"),
    )


def test_analyze_essay_without_provider_uses_heuristics():
    """With no reviewer every section comes from local heuristics."""
    report = analyze_essay(SAMPLE_ESSAY, EssayAnalyzerConfig(), doc_id="sample")
    assert report.doc_id == "sample"
    assert report.source == "heuristic"
    assert report.plagiarism_source == "heuristic"
    assert report.plagiarism.originality_score == 77
    assert report.citations.format == "APA"
    assert 60 <= report.score <= 100
    assert report.ai_detection.confidence in {50, 70, 85, 95}
    assert 0 <= report.vocabulary.score <= 100


def test_analyze_essay_prefers_llm_sections():
    """Successful reviews replace the heuristic narrative and plagiarism sections."""
    reviewer = StubReviewer(
        ReviewSuccess(result=_llm_sections()),
        ReviewSuccess(result=PlagiarismResult(originality_score=60)),
    )
    report = analyze_essay(UNIFORM_ESSAY, EssayAnalyzerConfig(), reviewer)
    assert report.source == "llm"
    assert report.plagiarism_source == "llm"
    assert report.score == 91
    assert report.thesis.text == "LLM thesis"
    assert report.plagiarism.originality_score == 60


def test_analyze_essay_falls_back_and_logs_warning(caplog):
    """Reviewer failures are logged and replaced by local results."""
    reviewer = StubReviewer(
        ReviewFailure(error="Invalid JSON"), ReviewFailure(error="Provider request failed")
    )
    with caplog.at_level(logging.WARNING, logger="essay_analyzer.pipeline"):
        report = analyze_essay(SAMPLE_ESSAY, EssayAnalyzerConfig(), reviewer)
    assert report.source == "heuristic"
    assert report.plagiarism_source == "heuristic"
    assert report.plagiarism.originality_score == 77
    assert "Invalid JSON" in caplog.text
    assert "Provider request failed" in caplog.text


def test_analyzers_are_idempotent():
    """Running each analyzer twice on the same text gives identical results."""
    for analyzer in (run_ai_detection, run_vocabulary_analysis, run_plagiarism_fallback):
        for text in (SAMPLE_ESSAY, UNIFORM_ESSAY, ""):
            first = analyzer(text)
            assert analyzer(text) == first
            assert analyzer(text).to_dict() == first.to_dict()


def test_parallel_and_sequential_scoring_match():
    """Thread-pooled analyzers return the same results as sequential runs."""
    sequential = run_scoring_engine(SAMPLE_ESSAY, parallel_analyzers=1)
    parallel = run_scoring_engine(SAMPLE_ESSAY, parallel_analyzers=3)
    assert sequential == parallel


def test_analyze_empty_essay_does_not_raise():
    """Empty essays produce neutral and zero results."""
    report = analyze_essay("", EssayAnalyzerConfig())
    assert report.vocabulary.score == 0
    assert report.ai_detection.confidence == 50
    assert report.plagiarism.originality_score == 95


def test_analyze_documents_keys_by_doc_id():
    """Reports are keyed by document id."""
    docs = [Document("a.txt", SAMPLE_ESSAY), Document("b.txt", UNIFORM_ESSAY)]
    results = analyze_documents(docs, EssayAnalyzerConfig())
    assert sorted(results) == ["a.txt", "b.txt"]
    assert results["b.txt"].doc_id == "b.txt"
    assert isinstance(results["a.txt"].to_dict()["vocabulary"]["typos"], list)
