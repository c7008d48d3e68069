from __future__ import annotations

from pathlib import Path

import pytest

from essay_analyzer.config import (
    EssayAnalyzerConfig,
    GeminiSettings,
    OpenAISettings,
    config_from_dict,
    config_from_yaml,
    load_config,
    resolve_api_key,
)


def test_defaults():
    """Defaults select no provider, moderate feedback and sequential analyzers."""
    cfg = load_config()
    assert cfg.provider == "none"
    assert cfg.feedback_level == "moderate"
    assert cfg.parallel_analyzers == 1
    assert cfg.gemini.top_k == 40
    assert cfg.heuristics.academic_tone == 85.0


def test_config_from_dict_builds_nested_blocks_and_ignores_unknown_keys():
    """Nested mappings become settings objects; unknown keys are dropped."""
    cfg = config_from_dict(
        {
            "provider": "Gemini",
            "feedback_level": "STRICT",
            "unknown": 1,
            "gemini": {"model": "gemini-test", "bogus": True},
            "heuristics": {"creativity": 90},
        }
    )
    assert cfg.provider == "gemini"
    assert cfg.feedback_level == "strict"
    assert cfg.gemini.model == "gemini-test"
    assert cfg.heuristics.creativity == 90
    assert cfg.openai == OpenAISettings()


@pytest.mark.parametrize(
    "data", [{"provider": "anthropic"}, {"feedback_level": "harsh"}]
)
def test_invalid_values_raise(data: dict):
    """Unknown providers and feedback levels are rejected."""
    with pytest.raises(ValueError):
        config_from_dict(data)


def test_config_from_yaml_round_trip(tmp_path: Path):
    """YAML files load into the dataclass configuration."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "provider: openai\nparallel_analyzers: 3\nopenai:\n  model: gpt-test\n",
        encoding="utf-8",
    )
    cfg = config_from_yaml(path)
    assert cfg.provider == "openai"
    assert cfg.parallel_analyzers == 3
    assert cfg.openai.model == "gpt-test"


def test_config_from_yaml_rejects_non_mapping(tmp_path: Path):
    """A YAML list is not a valid configuration."""
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_to_dict_contains_nested_blocks():
    """to_dict exposes nested settings as plain dictionaries."""
    data = EssayAnalyzerConfig().to_dict()
    assert data["gemini"]["api_key_env"] == "GEMINI_API_KEY"
    assert data["openai"]["api_key_env"] == "OPENAI_API_KEY"


def test_resolve_api_key_prefers_explicit_value():
    """An explicit key wins over the environment."""
    settings = GeminiSettings(api_key="explicit")
    assert resolve_api_key(settings, {"GEMINI_API_KEY": "env"}) == "explicit"


def test_resolve_api_key_reads_environment():
    """The configured environment variable supplies the key."""
    settings = OpenAISettings(api_key_env="CUSTOM_KEY")
    assert resolve_api_key(settings, {"CUSTOM_KEY": "from-env"}) == "from-env"


def test_resolve_api_key_missing_raises():
    """Missing credentials raise ValueError naming the variable."""
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        resolve_api_key(GeminiSettings(), {})
