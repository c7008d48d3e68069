"""Minimal example analyzing one essay with LLM feedback and local fallbacks."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from essay_analyzer.config import load_config
from essay_analyzer.pipeline import analyze_essay
from essay_analyzer.review import build_reviewer


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    config = load_config(Path(__file__).with_name("example_config.yaml"))
    # Raises ValueError when GEMINI_API_KEY (or the configured variable) is unset.
    reviewer = build_reviewer(config)

    essay = (
        "Cities should plant more street trees.\n\n"
        "Shade lowers surface temperatures on summer afternoons (Nowak, 2018). "
        "Trees also absorb stormwater that would otherwise overwhelm drains.\n\n"
        "In conclusion, urban forests are a cheap way to make neighborhoods "
        "healthier and more pleasant."
    )
    report = analyze_essay(essay, config, reviewer, doc_id="street-trees")
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
