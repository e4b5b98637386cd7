"""Text helpers shared by issue tracker formatters.

These produce the short issue title, the matched template label and the
textual form of template info / metadata values.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

import pytz

from .config import DESCRIPTION_TIMESTAMP_FORMAT
from .models import ResultEvent


def get_matched_template(event: ResultEvent) -> str:
    """Return ``template-id[:matcher][:extractor]`` for an event."""
    parts = [event.template_id]
    if event.matcher_name:
        parts.append(event.matcher_name)
    if event.extractor_name:
        parts.append(event.extractor_name)
    return ":".join(parts)


def summary(event: ResultEvent) -> str:
    """One line issue title, e.g. ``[cve-2021-1234] [high] Some CVE found on example.com``."""
    template = get_matched_template(event)
    severity = to_string(event.info.get("severity"))
    name = to_string(event.info.get("name"))
    return f"[{template}] [{severity}] {name} found on {event.host}"


def to_string(value) -> str:
    """Render an info or metadata value as text.

    Booleans render lowercase and integral floats drop the trailing ``.0``
    so values read the same as in the scanner's own output.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Mapping):
        return ", ".join(f"{k}: {to_string(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(to_string(v) for v in value)
    return str(value)


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` like ``Mon Jan 2 15:04:05 -0700 MST 2006``.

    Naive datetimes are taken to be UTC. Fixed offsets without a zone name
    (``UTC+05:30`` from ``datetime.timezone``, or none at all) render the
    numeric offset in the zone position, e.g. ``+0530``.
    """
    if ts.tzinfo is None:
        ts = pytz.utc.localize(ts)
    zone = ts.tzname()
    if not zone or (zone.startswith("UTC") and zone != "UTC"):
        zone = ts.strftime("%z")
    return ts.strftime(DESCRIPTION_TIMESTAMP_FORMAT.format(day=ts.day, zone=zone))
