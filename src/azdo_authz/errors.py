"""Exception hierarchy for authorization reconciliation."""

from __future__ import annotations


class AuthorizationError(Exception):
    """Base for all reconciliation failures."""


class ValidationError(AuthorizationError):
    """A record, reference or declared input is structurally invalid."""


class RemoteOperationError(AuthorizationError):
    """A call to the remote build service failed.

    The message always embeds the text of the underlying failure so the
    upstream diagnosis stays visible to whoever reads the error.
    """

    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.cause = cause


class InvariantViolation(AuthorizationError):
    """Remote state contradicts the one-relationship-per-triple assumption."""
