"""Jira issue creation for scan results (REST v2 via the ``jira`` client)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests
from jira import JIRA, JIRAError

from .config import JiraOptions, load_options
from .description import format_description
from .errors import ClientInitError, IssueCreateError
from .format import summary
from .models import IssueFields, ResultEvent

logger = logging.getLogger(__name__)


def _response_body(exc: BaseException) -> str | None:
    response = getattr(exc, "response", None)
    if response is None:
        return None
    return response.text or None


class JiraIntegration:
    """Creates one Jira issue per scan result.

    Options are fixed at construction; the underlying client (and its HTTP
    session) is reused by every ``create_issue`` call.
    """

    def __init__(self, options: JiraOptions, client: Any | None = None):
        self.options = options
        if client is None:
            client = self._connect(options)
        self.client = client

    @classmethod
    def from_config(cls, path: str | Path) -> JiraIntegration:
        return cls(load_options(path))

    @staticmethod
    def _connect(options: JiraOptions) -> JIRA:
        parsed = urlparse(options.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ClientInitError(f"Invalid Jira server URL: {options.url!r}")
        server = options.url.rstrip("/")
        try:
            return JIRA(
                server=server,
                basic_auth=(options.email, options.token),
                get_server_info=False,
                max_retries=0,
            )
        except (JIRAError, requests.RequestException, ValueError) as exc:
            raise ClientInitError(f"Failed to initialize Jira client for {server}: {exc}") from exc

    def build_fields(self, event: ResultEvent) -> IssueFields:
        return IssueFields(
            summary=summary(event),
            description=format_description(event),
            assignee=self.options.account_id,
            reporter=self.options.account_id,
            project_key=self.options.project_name,
            issue_type=self.options.issue_type,
        )

    def create_issue(self, event: ResultEvent) -> None:
        """Create a Jira issue for ``event``.

        Every call sends a new create request; nothing is deduplicated.

        Raises
        ------
        IssueCreateError
            If Jira rejects the request or the transport fails. The raw
            response body, when present, is kept on the error.
        """
        fields = self.build_fields(event)
        logger.debug("Creating %s in %s: %s", fields.issue_type, fields.project_key, fields.summary)
        try:
            issue = self.client.create_issue(fields=fields.to_payload(), prefetch=False)
        except (JIRAError, requests.RequestException) as exc:
            body = _response_body(exc)
            logger.error("Jira issue creation failed for %s: %s", event.host, exc)
            raise IssueCreateError(exc, body) from exc
        logger.info("Created Jira issue %s", getattr(issue, "key", None))
