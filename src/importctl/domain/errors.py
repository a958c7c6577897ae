"""Errors raised by the reconcile step.

Each error names the claim it concerns so the dispatch layer can log it and decide
whether to requeue. The underlying exception, when any, is kept on ``cause`` and is
also chained as ``__cause__``.
"""

from __future__ import annotations


class ImportControllerError(RuntimeError):
    """Base class for reconcile failures."""

    def __init__(
        self,
        message: str,
        *,
        namespace: str = "",
        name: str = "",
        operation: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.name = name
        self.operation = operation
        self.cause = cause


class ClaimLookupError(ImportControllerError):
    """Raised when a work-queue key cannot be turned into a claim."""


class MissingEndpointError(ImportControllerError):
    """Raised when the claim carries no endpoint; needs a user fix before it can import."""


class CredentialLookupError(ImportControllerError):
    """Raised when the referenced secret could not be read for a reason other than absence."""


class StatusUpdateError(ImportControllerError):
    """Raised when the status annotation could not be written."""


class StatusUpdateTimeoutError(StatusUpdateError):
    """Raised when conflicting writers kept the status update from landing in time."""


class WorkerCreationError(ImportControllerError):
    """Raised when the importer pod could not be created."""
