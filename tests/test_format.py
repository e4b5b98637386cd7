from datetime import UTC, datetime, timedelta, timezone

import pytz

from jira_reporting.core.format import format_timestamp, get_matched_template, summary, to_string
from jira_reporting.core.models import ResultEvent


def _event(**overrides):
    values = {
        "template_id": "cve-2021-1234",
        "host": "10.0.0.1:8080",
        "matched": "http://10.0.0.1:8080/login",
        "type": "http",
        "timestamp": datetime(2021, 5, 10, tzinfo=UTC),
        "info": {"name": "Example CVE", "severity": "high"},
    }
    values.update(overrides)
    return ResultEvent(**values)


def test_reference_timestamp_layout():
    ts = pytz.timezone("America/Denver").localize(datetime(2006, 1, 2, 15, 4, 5))
    assert format_timestamp(ts) == "Mon Jan 2 15:04:05 -0700 MST 2006"


def test_timestamp_deterministic_for_fixed_instant():
    ts = datetime(2021, 5, 10, 8, 3, 9, tzinfo=UTC)
    assert format_timestamp(ts) == format_timestamp(ts) == "Mon May 10 08:03:09 +0000 UTC 2021"


def test_naive_timestamp_treated_as_utc():
    assert format_timestamp(datetime(2021, 12, 25, 23, 59, 1)) == "Sat Dec 25 23:59:01 +0000 UTC 2021"


def test_matched_template_joins_matcher_and_extractor():
    assert get_matched_template(_event()) == "cve-2021-1234"
    assert get_matched_template(_event(matcher_name="status")) == "cve-2021-1234:status"
    assert get_matched_template(_event(matcher_name="status", extractor_name="version")) == (
        "cve-2021-1234:status:version"
    )
    assert get_matched_template(_event(extractor_name="version")) == "cve-2021-1234:version"


def test_summary():
    assert summary(_event()) == "[cve-2021-1234] [high] Example CVE found on 10.0.0.1:8080"


def test_summary_without_info():
    assert summary(_event(info={})) == "[cve-2021-1234] []  found on 10.0.0.1:8080"


def test_to_string():
    assert to_string(None) == ""
    assert to_string("text") == "text"
    assert to_string(b"raw\xff") == "raw\ufffd"
    assert to_string(True) == "true"
    assert to_string(False) == "false"
    assert to_string(42) == "42"
    assert to_string(3.0) == "3"
    assert to_string(0.25) == "0.25"
    assert to_string(["a", 1, None]) == "a, 1, "
    assert to_string({"k": "v", "n": 2}) == "k: v, n: 2"


def test_to_string_falls_back_to_str():
    class Version:
        def __str__(self):
            return "v1.2"

    assert to_string(Version()) == "v1.2"


def test_unnamed_fixed_offset_renders_numeric_zone():
    ts = datetime(2021, 5, 10, 8, 3, 9, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert format_timestamp(ts) == "Mon May 10 08:03:09 +0530 +0530 2021"
    west = datetime(2021, 5, 10, 8, 3, 9, tzinfo=pytz.FixedOffset(-180))
    assert format_timestamp(west) == "Mon May 10 08:03:09 -0300 -0300 2021"


def test_parsed_offset_timestamp_renders_numeric_zone():
    event = ResultEvent.from_dict({"template-id": "x", "timestamp": "2021-05-10T08:03:09+05:30"})
    assert format_timestamp(event.timestamp) == "Mon May 10 08:03:09 +0530 +0530 2021"
