"""Command line entry point: create Jira issues from scanner JSON results.

Usage:
  jira-reporting --config secrets.toml results.jsonl
  jira-reporting --dry-run results.jsonl

Input is JSON lines (one result per line), a single JSON object, or a JSON
array of results. Without ``--config`` the Jira options are read from the
environment (``JIRA_SERVER``, ``JIRA_EMAIL``, ``JIRA_API_TOKEN``...).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from jira_reporting.core.config import load_options, options_from_env
from jira_reporting.core.description import format_description
from jira_reporting.core.errors import ReportingError
from jira_reporting.core.format import summary
from jira_reporting.core.jira_client import JiraIntegration
from jira_reporting.core.models import ResultEvent

logger = logging.getLogger(__name__)


def read_events(text: str) -> Iterator[ResultEvent]:
    stripped = text.strip()
    if not stripped:
        return
    if stripped.startswith("["):
        for raw in json.loads(stripped):
            yield ResultEvent.from_dict(raw)
        return
    try:
        raw = json.loads(stripped)
    except json.JSONDecodeError:
        raw = None
    if isinstance(raw, dict):
        yield ResultEvent.from_dict(raw)
        return
    for line in stripped.splitlines():
        if line.strip():
            yield ResultEvent.from_dict(json.loads(line))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create Jira issues from scanner JSON results")
    p.add_argument("results", help="results file (JSON lines, object or array); '-' reads stdin")
    p.add_argument(
        "--config",
        "-c",
        help="YAML reporting config or TOML secrets file (default: read JIRA_* environment variables)",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print summary and description of each issue instead of creating it",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.results == "-":
            text = sys.stdin.read()
        else:
            text = Path(args.results).read_text(encoding="utf-8")
        events = list(read_events(text))
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Cannot parse results from %s: %s", args.results, exc)
        return 2

    if args.dry_run:
        for event in events:
            print(f"DRY-RUN: {summary(event)}")
            print(format_description(event))
        return 0

    try:
        options = load_options(args.config) if args.config else options_from_env()
        integration = JiraIntegration(options)
        for event in events:
            integration.create_issue(event)
    except ReportingError as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Created %s issue(s)", len(events))
    return 0


if __name__ == "__main__":
    sys.exit(main())
