from __future__ import annotations

import json
import logging
from dataclasses import replace as dc_replace
from pathlib import Path
from typing import Any, Dict, List

import typer
import yaml

from .config import EssayAnalyzerConfig, load_config
from .detection import detect_ai_generation
from .models import Document
from .pipeline import analyze_documents
from .plagiarism import check_plagiarism_fallback
from .review import build_reviewer
from .vocabulary import analyze_vocabulary

app = typer.Typer(help="Essay Analyzer CLI.", no_args_is_help=True)

# File types the CLI knows how to expand into Document instances.
SUPPORTED_INPUT_EXTENSIONS = {".txt"}


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Feedback provider: none, openai or gemini."
    ),
    feedback_level: str | None = typer.Option(
        None, "--feedback-level", help="strict, moderate or lenient."
    ),
    parallel_analyzers: int | None = typer.Option(
        None, "--parallel-analyzers", help="Worker threads for the local analyzers."
    ),
    openai_model: str | None = typer.Option(
        None, "--openai-model", help="OpenAI model identifier (e.g., gpt-4.1-mini)."
    ),
    openai_api_key_env: str | None = typer.Option(
        None,
        "--openai-api-key-env",
        help="Environment variable to read the OpenAI API key from.",
    ),
    openai_base_url: str | None = typer.Option(
        None, "--openai-base-url", help="Custom OpenAI base URL (Azure, proxy, etc.)."
    ),
    gemini_model: str | None = typer.Option(
        None, "--gemini-model", help="Gemini model identifier (e.g., gemini-1.5-pro)."
    ),
    gemini_api_key_env: str | None = typer.Option(
        None,
        "--gemini-api-key-env",
        help="Environment variable to read the Gemini API key from.",
    ),
) -> None:
    """Analyze one essay or a directory of essays and emit a JSON report."""
    try:
        cfg = _apply_overrides(
            load_config(config), provider, feedback_level, parallel_analyzers
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _apply_provider_overrides(
        cfg,
        openai_model,
        openai_api_key_env,
        openai_base_url,
        gemini_model,
        gemini_api_key_env,
    )
    try:
        reviewer = build_reviewer(cfg)
    except (ValueError, RuntimeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--provider") from exc

    documents = _load_documents(input_path)
    reports = analyze_documents(documents, cfg, reviewer)
    summary = [reports[doc_id].to_dict() for doc_id in sorted(reports)]
    typer.echo(json.dumps({"documents": summary}, indent=2))


@app.command()
def detect(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
) -> None:
    """Run only the AI-generation detector."""
    _echo(detect_ai_generation(_read_text(input_path)).to_dict())


@app.command()
def vocabulary(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
) -> None:
    """Run only the vocabulary analyzer."""
    _echo(analyze_vocabulary(_read_text(input_path)).to_dict())


@app.command()
def plagiarism(
    input_path: Path = typer.Option(..., exists=True, readable=True, dir_okay=False),
) -> None:
    """Run only the local phrase matcher (not a real plagiarism check)."""
    _echo(check_plagiarism_fallback(_read_text(input_path)).to_dict())


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = EssayAnalyzerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _apply_overrides(
    config: EssayAnalyzerConfig,
    provider: str | None,
    feedback_level: str | None,
    parallel_analyzers: int | None,
) -> EssayAnalyzerConfig:
    """Return a copy of ``config`` with CLI overrides applied and re-validated."""
    overrides: Dict[str, Any] = {}
    if provider is not None:
        overrides["provider"] = provider
    if feedback_level is not None:
        overrides["feedback_level"] = feedback_level
    if parallel_analyzers is not None:
        overrides["parallel_analyzers"] = parallel_analyzers
    return dc_replace(config, **overrides)


def _apply_provider_overrides(
    config: EssayAnalyzerConfig,
    openai_model: str | None,
    openai_api_key_env: str | None,
    openai_base_url: str | None,
    gemini_model: str | None,
    gemini_api_key_env: str | None,
) -> None:
    if openai_model:
        config.openai.model = openai_model
    if openai_api_key_env:
        config.openai.api_key_env = openai_api_key_env
    if openai_base_url:
        config.openai.base_url = openai_base_url
    if gemini_model:
        config.gemini.model = gemini_model
    if gemini_api_key_env:
        config.gemini.api_key_env = gemini_api_key_env


def _load_documents(input_path: Path) -> List[Document]:
    """Expand the input path into documents keyed by their relative path."""
    if input_path.is_file():
        return [Document(doc_id=input_path.name, text=_read_text(input_path))]
    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    return [
        Document(doc_id=file.relative_to(input_path).as_posix(), text=_read_text(file))
        for file in files
    ]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _echo(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
