"""Exception types raised by the Jira reporting integration."""

from __future__ import annotations


class ReportingError(Exception):
    """Base class for issue tracker reporting failures."""


class ClientInitError(ReportingError):
    """Configuration is invalid or the Jira client could not be built."""


class IssueCreateError(ReportingError):
    """Jira rejected a create request or the transport failed.

    Keeps the underlying exception and the raw response body (when the
    server sent one) so tracker-side validation messages stay inspectable.
    """

    def __init__(self, cause: BaseException, body: str | None = None):
        self.cause = cause
        self.body = body
        super().__init__(f"{cause} => {body or ''}")
