"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from importctl.config.importer import ImporterConfig
from importctl.domain.constants import ANN_STATUS
from importctl.domain.model import ImportStatus
from importctl.domain.request import claim_from_key, get_endpoint, get_secret_name
from importctl.domain.status import ensure_status
from importctl.domain.worker import create_importer_pod

if TYPE_CHECKING:
    from importctl.domain.model import VolumeClaim, WorkerPod
    from importctl.domain.ports.cluster import ClaimCache, ClusterClient


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    claim: VolumeClaim
    pod: WorkerPod
    endpoint: str
    secret_name: str


def reconcile_claim(
    key: object,
    *,
    cache: ClaimCache,
    client: ClusterClient,
    config: ImporterConfig | None = None,
) -> ReconcileResult | None:
    """Run one import reconcile step for a work-queue key.

    Returns None when there is nothing to do: the claim is gone or already has an
    import status. Errors propagate so the caller can decide whether to requeue.
    """

    effective_config = config or ImporterConfig()
    claim = claim_from_key(key, cache=cache)
    if claim is None:
        log.info("pvc %s no longer exists, skipping", key)
        return None

    current = claim.annotation(ANN_STATUS)
    if current is not None:
        log.info("pvc %s already has import status %r, skipping", claim.key, current)
        return None

    endpoint = get_endpoint(claim)
    secret_name = get_secret_name(claim, client=client)
    # Pods are not cleaned up here. If the status write below fails, the pod stays
    # and every later attempt for this claim fails with AlreadyExists until it is
    # removed.
    pod = create_importer_pod(
        endpoint,
        secret_name,
        claim,
        client=client,
        image_tag=effective_config.image_tag,
    )
    updated = ensure_status(
        claim,
        ImportStatus.IN_PROCESS.value,
        client=client,
        interval=effective_config.status_poll_interval,
        timeout=effective_config.status_timeout,
    )

    log.info(
        "Started import for pvc %s: pod=%s, endpoint=%s, secret=%s",
        claim.key,
        pod.name,
        endpoint,
        secret_name or "<none>",
    )
    return ReconcileResult(claim=updated, pod=pod, endpoint=endpoint, secret_name=secret_name)


def record_terminal_status(
    claim: VolumeClaim,
    *,
    succeeded: bool,
    client: ClusterClient,
    config: ImporterConfig | None = None,
) -> VolumeClaim:
    """Mark an import as finished on the claim."""

    effective_config = config or ImporterConfig()
    status = ImportStatus.SUCCESS if succeeded else ImportStatus.FAILED
    return ensure_status(
        claim,
        status.value,
        client=client,
        interval=effective_config.status_poll_interval,
        timeout=effective_config.status_timeout,
    )
