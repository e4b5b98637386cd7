"""Jira reporting configuration: constants and option loading.

Options can come from a plain mapping using the scanner's reporting config
keys (``url``, ``account-id``, ...) or a YAML file holding them, from a TOML
secrets file, or from the process environment. Secrets files follow the
same layout as the dashboard secrets: a ``[jira]`` table is consulted
first, then top-level keys.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ClientInitError

# =============================================================================
# Issue Defaults
# =============================================================================
DEFAULT_ISSUE_TYPE = "Bug"

# Go-style reference layout "Mon Jan 2 15:04:05 -0700 MST 2006"; the day is
# rendered without padding and zones without a name fall back to the offset.
DESCRIPTION_TIMESTAMP_FORMAT = "%a %b {day} %H:%M:%S %z {zone} %Y"

# =============================================================================
# Option Keys
# =============================================================================
# Reporting config keys (YAML-style, as written in scanner config files)
OPTION_KEYS: dict[str, str] = {
    "url": "url",
    "account_id": "account-id",
    "email": "email",
    "token": "token",
    "project_name": "project-name",
    "issue_type": "issue-type",
}

# Secrets / environment keys. Tuples list aliases in lookup order.
SECRET_KEYS: dict[str, tuple[str, ...]] = {
    "url": ("JIRA_SERVER",),
    "account_id": ("JIRA_ACCOUNT_ID",),
    "email": ("JIRA_EMAIL",),
    "token": ("JIRA_API_TOKEN", "JIRA_TOKEN"),
    "project_name": ("JIRA_PROJECT_KEY",),
    "issue_type": ("JIRA_ISSUE_TYPE",),
}

SECRETS_SECTION = "jira"
YAML_SUFFIXES = (".yaml", ".yml")


@dataclass(frozen=True, slots=True)
class JiraOptions:
    url: str
    account_id: str
    email: str
    token: str
    project_name: str
    issue_type: str = DEFAULT_ISSUE_TYPE

    def __repr__(self) -> str:
        return (
            f"JiraOptions(url={self.url!r}, account_id={self.account_id!r}, email={self.email!r}, "
            f"token='***', project_name={self.project_name!r}, issue_type={self.issue_type!r})"
        )


def _build(values: dict[str, Any], source: str) -> JiraOptions:
    if not values.get("issue_type"):
        values["issue_type"] = DEFAULT_ISSUE_TYPE
    missing = [name for name in OPTION_KEYS if not values.get(name)]
    if missing:
        raise ClientInitError(f"Missing Jira options in {source}: {', '.join(missing)}")
    return JiraOptions(**{name: str(values[name]) for name in OPTION_KEYS})


def options_from_mapping(data: Mapping[str, Any]) -> JiraOptions:
    """Build options from reporting config keys (``account-id``, ``project-name``...).

    Accepts either the ``jira`` block itself or a whole reporting config
    containing a ``jira`` block.
    """
    section = data.get(SECRETS_SECTION)
    if isinstance(section, Mapping):
        data = section
    values = {name: data.get(key) for name, key in OPTION_KEYS.items()}
    return _build(values, "reporting config")


def _lookup_secret(section: Mapping[str, Any], top: Mapping[str, Any], aliases: tuple[str, ...]):
    for key in aliases:
        value = section.get(key) or top.get(key)
        if value:
            return value
    return None


def options_from_secrets(secrets: Mapping[str, Any]) -> JiraOptions:
    """Build options from a secrets mapping, ``[jira]`` table first then top-level."""
    section = secrets.get(SECRETS_SECTION) or {}
    if not isinstance(section, Mapping):
        section = {}
    values = {name: _lookup_secret(section, secrets, aliases) for name, aliases in SECRET_KEYS.items()}
    return _build(values, "secrets")


def options_from_env(environ: Mapping[str, str] | None = None) -> JiraOptions:
    env = os.environ if environ is None else environ
    values = {name: _lookup_secret({}, env, aliases) for name, aliases in SECRET_KEYS.items()}
    return _build(values, "environment")


def load_options(path: str | Path) -> JiraOptions:
    """Read Jira options from a file.

    ``.yaml``/``.yml`` files hold a reporting config (``jira:`` block with
    ``account-id``, ``project-name``...); anything else is read as a TOML
    secrets file.
    """
    path = Path(path)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(data, Mapping):
                raise ClientInitError(f"Jira config {path} is not a mapping")
            return options_from_mapping(data)
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ClientInitError(f"Cannot read Jira config {path}: {exc}") from exc
    return options_from_secrets(data)
