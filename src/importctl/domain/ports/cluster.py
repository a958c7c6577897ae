"""Ports for reading and writing cluster objects."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from importctl.domain.model import Credential, VolumeClaim, WorkerPod


class ClusterAPIError(RuntimeError):
    """Raised by cluster clients when a request fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class NotFoundError(ClusterAPIError):
    """The requested object does not exist."""


class ConflictError(ClusterAPIError):
    """The write was based on a stale resource version."""


class AlreadyExistsError(ClusterAPIError):
    """An object with the same name already exists."""


@runtime_checkable
class ClaimCache(Protocol):
    """Indexed local view of claims, as maintained by an informer."""

    def get_by_key(self, key: str) -> tuple[object | None, bool]: ...


@runtime_checkable
class ClusterClient(Protocol):
    """The subset of the cluster API used by the reconcile step.

    Implementations raise ``NotFoundError`` and ``ConflictError`` for those
    conditions and ``ClusterAPIError`` for everything else.
    """

    def get_secret(self, namespace: str, name: str) -> Credential: ...

    def get_claim(self, namespace: str, name: str) -> VolumeClaim: ...

    def update_claim(self, claim: VolumeClaim) -> VolumeClaim: ...

    def create_pod(self, pod: WorkerPod) -> WorkerPod: ...


__all__ = [
    "AlreadyExistsError",
    "ClaimCache",
    "ClusterAPIError",
    "ClusterClient",
    "ConflictError",
    "NotFoundError",
]
