"""Jira wiki markup description for a scan result.

Text is inserted as-is: Jira markup characters inside requests, responses or
metadata (``*``, ``{code}``, ``|``...) are not escaped and will be
interpreted by Jira when rendered.
"""

from __future__ import annotations

from .format import format_timestamp, get_matched_template, to_string
from .models import ResultEvent


def format_description(event: ResultEvent) -> str:
    template = get_matched_template(event)

    parts: list[str] = [
        f"*Details*: *{template}*  matched at {event.host}",
        f"\n\n*Protocol*: {event.type.upper()}",
        f"\n\n*Full URL*: {event.matched}",
        f"\n\n*Timestamp*: {format_timestamp(event.timestamp)}",
        "\n\n*Template Information*\n\n| Key | Value |\n",
    ]
    for key, value in event.info.items():
        parts.append(f"| {key} | {to_string(value)} |\n")
    parts.append(f"\n*Request*\n\n{{code}}\n{event.request}\n{{code}}\n")
    parts.append(f"\n*Response*\n\n{{code}}\n{event.response}\n{{code}}\n\n")

    if event.extracted_results or event.metadata:
        parts.append("*Extra Information*\n\n")
        if event.extracted_results:
            parts.append("*Extracted results*:\n\n")
            parts.extend(f"- {item}\n" for item in event.extracted_results)
            parts.append("\n")
        if event.metadata:
            parts.append("*Metadata*:\n\n")
            parts.extend(f"- {key}: {to_string(value)}\n" for key, value in event.metadata.items())
            parts.append("\n")
    return "".join(parts)
