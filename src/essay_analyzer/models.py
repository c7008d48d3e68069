from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal

AcademicLevel = Literal["basic", "intermediate", "advanced", "expert"]


@dataclass(slots=True)
class Document:
    """Represents a single essay in the input set."""

    doc_id: str
    text: str


@dataclass(slots=True)
class Token:
    """Represents a token and its inclusive-exclusive character offsets."""

    text: str
    start_char: int
    end_char: int


@dataclass(slots=True)
class SubAnalysisResult:
    """Outcome of one AI-detection sub-analysis. Higher scores read as more human."""

    name: str
    score: float
    is_likely_ai: bool
    markers: List[str] = field(default_factory=list)
    metrics: Dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class AIDetectionResult:
    is_ai_generated: bool
    confidence: int
    markers: List[str]
    feedback: str
    score: float = 50.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Typo:
    word: str
    suggestions: List[str]
    context: str


@dataclass(slots=True)
class SophisticationStats:
    sophistication_score: float
    academic_level: AcademicLevel
    complex_word_ratio: float
    advanced_words: List[str]
    advanced_words_ratio: float


@dataclass(slots=True)
class TransitionStats:
    total_count: int
    variety: float
    density: float
    dominant_type: str
    overused_transitions: List[str]
    missing_types: List[str]
    counts_by_type: Dict[str, int]
    counts_by_phrase: Dict[str, int]


@dataclass(slots=True)
class VocabularyResult:
    score: int
    feedback: str
    advanced: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    uniqueness: float = 0.0
    academic_level: AcademicLevel = "basic"
    improvement_areas: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    typos: List[Typo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class PlagiarismMatch:
    text: str
    match_percentage: float
    source: str | None = None
    url: str | None = None
    recommendation: str | None = None


@dataclass(slots=True)
class PlagiarismResult:
    originality_score: int
    matches: List[PlagiarismMatch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class SectionFeedback:
    """Score plus narrative feedback for one report section."""

    score: float
    feedback: str
    suggestions: List[str] = field(default_factory=list)


@dataclass(slots=True)
class ThesisFeedback:
    detected: bool
    text: str
    score: float
    feedback: str


@dataclass(slots=True)
class CitationFeedback:
    count: int
    format: str
    is_valid: bool
    feedback: str


@dataclass(slots=True)
class StructureReport:
    """Structure, style, thesis and citation feedback for an essay."""

    overall_score: float
    structure: SectionFeedback
    style: SectionFeedback
    thesis: ThesisFeedback
    citations: CitationFeedback
    alternative_phrasing: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class EssayReport:
    """Merged report combining every analyzer for a single essay."""

    doc_id: str
    score: float
    structure: SectionFeedback
    style: SectionFeedback
    thesis: ThesisFeedback
    citations: CitationFeedback
    plagiarism: PlagiarismResult
    ai_detection: AIDetectionResult
    vocabulary: VocabularyResult
    source: Literal["llm", "heuristic"] = "heuristic"
    plagiarism_source: Literal["llm", "heuristic"] = "heuristic"
    alternative_phrasing: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
