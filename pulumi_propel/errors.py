"""
Propel errors and diagnostics.

Every error raised by the provider carries a summary and an optional detail so
the Pulumi layer can render it as a diagnostic.
"""

from enum import Enum

from pydantic import BaseModel

NOT_FOUND_MARKER = "not found"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single error or warning reported for a CRUD call."""

    severity: Severity
    summary: str
    detail: str | None = None

    def render(self) -> str:
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


class PropelError(Exception):
    """Base exception for all Propel provider errors."""

    def __init__(self, summary: str, detail: str | None = None):
        self.summary = summary
        self.detail = detail
        super().__init__(summary if detail is None else f"{summary}: {detail}")

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR, summary=self.summary, detail=self.detail
        )


class ConfigurationError(PropelError):
    """Errors in configuration, raised before any remote call."""
    pass


class StateError(PropelError):
    """A local state field could not be written."""
    pass


class ApiError(PropelError):
    """Failure returned by a remote call."""

    def __init__(self, message: str, operation: str | None = None):
        self.message = message
        self.operation = operation
        if operation:
            super().__init__(f"error trying to {operation}", message)
        else:
            super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return NOT_FOUND_MARKER in self.message


class CreateFailedError(PropelError):
    """The create mutation answered with its failure branch."""
    pass


class ProvisioningError(PropelError):
    """The remote status left the pending and target sets while polling."""

    def __init__(self, summary: str, status: str):
        self.status = status
        super().__init__(summary, f"unexpected state '{status}'")


class WaitTimeoutError(PropelError):
    """The poll deadline elapsed before the wait completed."""

    def __init__(self, summary: str, detail: str, last_status: str | None = None):
        self.last_status = last_status
        super().__init__(summary, detail)
