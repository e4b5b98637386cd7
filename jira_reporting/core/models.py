"""Domain data models for scan results and the Jira issues created from them."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeAlias

import pytz

# Values found in template info and result metadata. Anything else is
# rendered through ``str()`` by ``format.to_string``.
MetadataValue: TypeAlias = (
    str | bytes | bool | int | float | None | Sequence["MetadataValue"] | Mapping[str, "MetadataValue"]
)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now(pytz.utc)
    text = str(value).strip()
    # Scanner output uses RFC 3339 with nanoseconds; trim to microseconds.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    head, sep, tail = text.partition(".")
    if sep:
        digits = len(tail) - len(tail.lstrip("0123456789"))
        text = f"{head}.{tail[:digits][:6]}{tail[digits:]}"
    return datetime.fromisoformat(text)


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


@dataclass(frozen=True, slots=True)
class ResultEvent:
    """One scanner finding as produced by the upstream scan pipeline."""

    template_id: str
    host: str
    matched: str
    type: str
    timestamp: datetime
    matcher_name: str = ""
    extractor_name: str = ""
    info: Mapping[str, MetadataValue] = field(default_factory=dict)
    request: str = ""
    response: str = ""
    extracted_results: Sequence[str] = ()
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ResultEvent:
        """Map a JSON result line (``template-id``, ``matched``...) into an event."""
        if not isinstance(raw, Mapping):
            raise TypeError(f"Expected a JSON object for a result, got {type(raw).__name__}")
        return cls(
            template_id=_first(raw, "template-id", "templateID") or "",
            matcher_name=_first(raw, "matcher-name", "matcher_name") or "",
            extractor_name=_first(raw, "extractor-name", "extractor_name") or "",
            info=dict(raw.get("info") or {}),
            type=raw.get("type") or "",
            host=raw.get("host") or "",
            matched=_first(raw, "matched-at", "matched") or "",
            timestamp=_parse_timestamp(raw.get("timestamp")),
            request=raw.get("request") or "",
            response=raw.get("response") or "",
            extracted_results=tuple(_first(raw, "extracted-results", "extracted_results") or ()),
            metadata=dict(_first(raw, "metadata", "meta") or {}),
        )


@dataclass(frozen=True, slots=True)
class IssueFields:
    summary: str
    description: str
    assignee: str
    reporter: str
    project_key: str
    issue_type: str

    def to_payload(self) -> dict[str, Any]:
        """Return the ``fields`` object of a Jira create-issue request."""
        return {
            "assignee": {"accountId": self.assignee},
            "reporter": {"accountId": self.reporter},
            "issuetype": {"name": self.issue_type},
            "project": {"key": self.project_key},
            "summary": self.summary,
            "description": self.description,
        }
