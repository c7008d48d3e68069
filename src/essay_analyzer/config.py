from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Type, TypeVar

import yaml

PROVIDERS = ("none", "openai", "gemini")
FEEDBACK_LEVELS = ("strict", "moderate", "lenient")

_SettingsT = TypeVar("_SettingsT")


@dataclass(slots=True)
class OpenAISettings:
    """Configuration block for OpenAI-powered essay review."""

    model: str = "gpt-4.1-mini"
    api_key: str | None = None
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str | None = None
    organization: str | None = None
    temperature: float = 0.3
    max_output_tokens: int = 2048
    top_p: float = 0.95
    request_timeout: float = 60.0
    parallel_requests: int = 1


@dataclass(slots=True)
class GeminiSettings:
    """Configuration block for the Google Gemini generateContent endpoint."""

    model: str = "gemini-1.5-pro"
    api_key: str | None = None
    api_key_env: str = "GEMINI_API_KEY"
    api_root: str = "https://generativelanguage.googleapis.com/v1beta/models"
    temperature: float = 0.7
    max_output_tokens: int = 2048
    top_p: float = 0.95
    top_k: int = 40
    request_timeout: float = 40.0
    max_attempts: int = 3


@dataclass(slots=True)
class HeuristicSettings:
    """Knobs for the local structure heuristics, expressed as percentages."""

    sensitivity: float = 75.0
    context_depth: float = 80.0
    creativity: float = 60.0
    academic_tone: float = 85.0


@dataclass(slots=True)
class EssayAnalyzerConfig:
    """Configuration options for the essay analysis pipeline."""

    provider: str = "none"
    feedback_level: str = "moderate"
    parallel_analyzers: int = 1
    openai: OpenAISettings = field(default_factory=OpenAISettings)
    gemini: GeminiSettings = field(default_factory=GeminiSettings)
    heuristics: HeuristicSettings = field(default_factory=HeuristicSettings)

    def __post_init__(self) -> None:
        self.provider = self.provider.lower().strip()
        self.feedback_level = self.feedback_level.lower().strip()
        if self.provider not in PROVIDERS:
            raise ValueError(
                f"Unknown provider '{self.provider}'; expected one of {PROVIDERS}."
            )
        if self.feedback_level not in FEEDBACK_LEVELS:
            raise ValueError(
                f"Unknown feedback level '{self.feedback_level}'; "
                f"expected one of {FEEDBACK_LEVELS}."
            )

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


_NESTED_BLOCKS: Dict[str, Type[Any]] = {
    "openai": OpenAISettings,
    "gemini": GeminiSettings,
    "heuristics": HeuristicSettings,
}


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(EssayAnalyzerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    for name, settings_cls in _NESTED_BLOCKS.items():
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, settings_cls):
            kwargs[name] = value
        elif isinstance(value, Mapping):
            kwargs[name] = _build_settings(settings_cls, value)
        else:
            kwargs.pop(name, None)
    return kwargs


def _build_settings(settings_cls: Type[_SettingsT], data: Mapping[str, Any]) -> _SettingsT:
    allowed = {field.name for field in fields(settings_cls)}  # type: ignore[arg-type]
    filtered = {key: data[key] for key in data if key in allowed}
    return settings_cls(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> EssayAnalyzerConfig:
    """Build an EssayAnalyzerConfig from a dictionary-like input."""
    if data is None:
        return EssayAnalyzerConfig()
    return EssayAnalyzerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> EssayAnalyzerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> EssayAnalyzerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return EssayAnalyzerConfig()
    return config_from_yaml(path)


def resolve_api_key(
    settings: OpenAISettings | GeminiSettings,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the explicit key, else the value of the configured environment variable."""
    if settings.api_key:
        return settings.api_key
    env = os.environ if environ is None else environ
    api_key = env.get(settings.api_key_env, "")
    if not api_key:
        raise ValueError(
            f"No API key configured; set {settings.api_key_env} or pass one explicitly."
        )
    return api_key
