#!/usr/bin/env python3
"""
Command-line script to turn URLs into Markdown notes.

Each argument that looks like an http(s) URL is analyzed; anything else is
skipped with a warning. Results are printed as JSON, one entry per input.

Usage:
    python run_url_analyzer.py https://example.com/
    python run_url_analyzer.py https://example.com/ https://github.com/owner/repo
    python run_url_analyzer.py https://example.com/ --no-ai -o notes.json
    python run_url_analyzer.py https://example.com/ --provider anthropic -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Load .env file automatically
from dotenv import load_dotenv
load_dotenv()

from url_analyzer.config import AnalyzerConfig
from url_analyzer.llm_client import LLMProvider
from url_analyzer.pipeline import URLAnalyzer
from url_analyzer.validator import is_analyzable
from url_analyzer.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(
        description="Analyze URLs into {title, content} Markdown notes"
    )
    parser.add_argument(
        "urls",
        nargs="+",
        help="URLs to analyze"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file for results (default: print to stdout)"
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in LLMProvider],
        help="LLM provider for summaries (default: LLM_PROVIDER or openai)"
    )
    parser.add_argument(
        "--model",
        help="LLM model name (default: LLM_MODEL or provider default)"
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Never call an LLM, even if a key is configured"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(level=log_level)

    config = AnalyzerConfig.from_env()
    overrides = {}
    if args.provider:
        overrides["llm_provider"] = LLMProvider(args.provider)
    if args.model:
        overrides["llm_model"] = args.model
    if args.no_ai:
        overrides["openai_api_key"] = None
        overrides["anthropic_api_key"] = None
    if overrides:
        config = config.model_copy(update=overrides)

    analyzer = URLAnalyzer(config=config)

    results = []
    for url in args.urls:
        if not is_analyzable(url):
            print(f"Skipping (not an http(s) URL): {url}", file=sys.stderr)
            continue

        print(f"Analyzing: {url}", file=sys.stderr)
        outcome = analyzer.analyze(url)
        results.append({"url": url, **outcome.to_response()})

        if outcome.ok:
            print(f"  ✓ {outcome.title}", file=sys.stderr)
        else:
            print(f"  ✗ Error: {outcome.error}", file=sys.stderr)

    # ensure_ascii=False keeps non-ASCII titles readable
    output_json = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output_json, encoding="utf-8")
        print(f"\nResults saved to: {args.output}", file=sys.stderr)
    else:
        print(output_json)

    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
