from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Protocol, TypeVar, Union

from .config import EssayAnalyzerConfig, resolve_api_key
from .models import PlagiarismResult, StructureReport
from .parsing import (
    ParseFailure,
    normalize_analysis_payload,
    normalize_plagiarism_payload,
    parse_llm_json,
)

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", StructureReport, PlagiarismResult)

SYSTEM_PROMPT = (
    "You are an experienced academic writing instructor. You read student "
    "essays carefully and answer with a single JSON object and nothing else: "
    "no Markdown, no code fences, no commentary."
)

INTENSITY_PROMPTS: Mapping[str, str] = {
    "strict": (
        "Provide very detailed and critical feedback. Focus on identifying all "
        "potential improvements, even minor issues. Be thorough and exacting in "
        "your analysis."
    ),
    "moderate": (
        "Provide balanced feedback with both positive points and areas for "
        "improvement. Offer a mix of major and minor suggestions."
    ),
    "lenient": (
        "Provide encouraging and supportive feedback. Focus on major improvements "
        "while highlighting strengths. Be gentle and constructive in your criticism."
    ),
}

ANALYSIS_TEMPERATURES: Mapping[str, float] = {
    "strict": 0.2,
    "moderate": 0.3,
    "lenient": 0.5,
}
PLAGIARISM_TEMPERATURE = 0.2

ANALYSIS_PROMPT_TEMPLATE = """{intensity}

Analyze the following academic essay and provide detailed feedback on structure, \
style, thesis clarity, and overall effectiveness. Be specific about strengths and \
areas for improvement.
Format your analysis as a JSON object with these fields:
{{
  "overallScore": number from 0-100,
  "structure": {{"score": number from 0-100, "feedback": "feedback on essay structure"}},
  "style": {{
    "score": number from 0-100,
    "feedback": "feedback on writing style",
    "suggestions": ["suggestion1", "suggestion2", "suggestion3", "suggestion4"]
  }},
  "thesis": {{
    "detected": boolean,
    "text": "extracted thesis statement if detected",
    "score": number from 0-100,
    "feedback": "feedback on thesis clarity and effectiveness"
  }},
  "citations": {{
    "count": number of citations detected,
    "format": "detected citation format (e.g., APA, MLA)",
    "isValid": boolean,
    "feedback": "feedback on citation usage and formatting"
  }}
}}

Here's the essay to analyze:
-----
{text}
-----"""

PLAGIARISM_PROMPT_TEMPLATE = """Analyze the following text for potential plagiarism. \
Identify any common academic phrases, widely used expressions, or potential verbatim \
copies that might need citation. Do not falsely flag original content.

Format your response as a plain JSON object with these fields:
{{
  "originalityScore": number from 0-100,
  "matches": [
    {{
      "text": "matched text excerpt",
      "matchPercentage": percentage of similarity,
      "source": "general description of where this might be common"
    }}
  ]
}}

Here's the text to analyze:
-----
{text}
-----"""


class TextGenerator(Protocol):
    def generate(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float | None = None,
    ) -> str: ...


@dataclass(slots=True)
class ReviewSuccess(Generic[ResultT]):
    """A provider response decoded and normalized into a report section."""

    result: ResultT
    ok: bool = field(default=True, init=False)


@dataclass(slots=True)
class ReviewFailure:
    """Why a review could not be produced; the caller falls back locally."""

    error: str
    raw: str = ""
    ok: bool = field(default=False, init=False)


EssayOutcome = Union[ReviewSuccess[StructureReport], ReviewFailure]
PlagiarismOutcome = Union[ReviewSuccess[PlagiarismResult], ReviewFailure]
ReviewOutcome = Union[ReviewSuccess[Any], ReviewFailure]


class Reviewer(ABC):
    """Abstract interface for language-model essay feedback."""

    @abstractmethod
    def review_essay(self, text: str) -> EssayOutcome:
        """Return structure/style/thesis/citation feedback for ``text``."""
        raise NotImplementedError

    @abstractmethod
    def review_plagiarism(self, text: str) -> PlagiarismOutcome:
        """Return a plagiarism assessment for ``text``."""
        raise NotImplementedError


class NoOpReviewer(Reviewer):
    """Always reports that no provider is configured."""

    def review_essay(self, text: str) -> EssayOutcome:
        return ReviewFailure(error="no provider configured")

    def review_plagiarism(self, text: str) -> PlagiarismOutcome:
        return ReviewFailure(error="no provider configured")


class LLMReviewer(Reviewer):
    """Reviewer backed by any client exposing ``generate``."""

    def __init__(self, client: TextGenerator, *, feedback_level: str = "moderate") -> None:
        if feedback_level not in INTENSITY_PROMPTS:
            raise ValueError(f"Unknown feedback level '{feedback_level}'.")
        self._client = client
        self._feedback_level = feedback_level

    @property
    def feedback_level(self) -> str:
        return self._feedback_level

    def review_essay(self, text: str) -> EssayOutcome:
        prompt = ANALYSIS_PROMPT_TEMPLATE.format(
            intensity=INTENSITY_PROMPTS[self._feedback_level], text=text.strip()
        )
        logger.info("Requesting %s essay review", self._feedback_level)
        raw = self._call(prompt, ANALYSIS_TEMPERATURES[self._feedback_level])
        if isinstance(raw, ReviewFailure):
            return raw
        parsed = parse_llm_json(raw)
        if isinstance(parsed, ParseFailure):
            return ReviewFailure(error=parsed.error, raw=parsed.raw)
        try:
            report = normalize_analysis_payload(parsed.data, self._feedback_level)
        except (TypeError, ValueError, OverflowError) as exc:
            return ReviewFailure(error=f"Malformed analysis payload: {exc}", raw=raw)
        return ReviewSuccess(result=report)

    def review_plagiarism(self, text: str) -> PlagiarismOutcome:
        prompt = PLAGIARISM_PROMPT_TEMPLATE.format(text=text.strip())
        logger.info("Requesting plagiarism review")
        raw = self._call(prompt, PLAGIARISM_TEMPERATURE)
        if isinstance(raw, ReviewFailure):
            return raw
        parsed = parse_llm_json(raw)
        if isinstance(parsed, ParseFailure):
            return ReviewFailure(error=parsed.error, raw=parsed.raw)
        try:
            result = normalize_plagiarism_payload(parsed.data)
        except (TypeError, ValueError, OverflowError) as exc:
            return ReviewFailure(error=f"Malformed plagiarism payload: {exc}", raw=raw)
        return ReviewSuccess(result=result)

    def _call(self, prompt: str, temperature: float) -> str | ReviewFailure:
        try:
            return self._client.generate(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=prompt,
                temperature=temperature,
            )
        except (RuntimeError, ValueError, OSError) as exc:
            # requests exceptions derive from OSError.
            return ReviewFailure(error=f"Provider request failed: {exc}")


def build_reviewer(
    config: EssayAnalyzerConfig, environ: Mapping[str, str] | None = None
) -> Reviewer:
    """Construct the reviewer selected by ``config.provider``."""
    if config.provider == "openai":
        from .llm.openai_client import OpenAIEssayClient

        api_key = resolve_api_key(config.openai, environ)
        client: TextGenerator = OpenAIEssayClient(config.openai, api_key=api_key)
    elif config.provider == "gemini":
        from .llm.gemini_client import GeminiEssayClient

        api_key = resolve_api_key(config.gemini, environ)
        client = GeminiEssayClient(config.gemini, api_key=api_key)
    else:
        return NoOpReviewer()
    return LLMReviewer(client, feedback_level=config.feedback_level)
