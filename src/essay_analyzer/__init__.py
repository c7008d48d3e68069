"""Heuristic essay scoring: AI-generation detection, vocabulary and plagiarism checks."""

from .config import EssayAnalyzerConfig, config_from_dict, load_config
from .detection import detect_ai_generation, run_ai_detection
from .models import (
    AIDetectionResult,
    Document,
    EssayReport,
    PlagiarismResult,
    VocabularyResult,
)
from .pipeline import analyze_documents, analyze_essay
from .plagiarism import check_plagiarism_fallback, run_plagiarism_fallback
from .review import LLMReviewer, NoOpReviewer, Reviewer, build_reviewer
from .vocabulary import analyze_vocabulary, run_vocabulary_analysis

__all__ = [
    "AIDetectionResult",
    "Document",
    "EssayAnalyzerConfig",
    "EssayReport",
    "LLMReviewer",
    "NoOpReviewer",
    "PlagiarismResult",
    "Reviewer",
    "VocabularyResult",
    "analyze_documents",
    "analyze_essay",
    "analyze_vocabulary",
    "build_reviewer",
    "check_plagiarism_fallback",
    "config_from_dict",
    "detect_ai_generation",
    "load_config",
    "run_ai_detection",
    "run_plagiarism_fallback",
    "run_vocabulary_analysis",
]

__version__ = "0.1.0"
