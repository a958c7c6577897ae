"""Write the import status annotation on a claim without clobbering concurrent edits."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING

from .constants import ANN_STATUS
from .errors import StatusUpdateError, StatusUpdateTimeoutError
from .polling import PollTimeoutError, poll_immediate
from .ports.cluster import ClusterAPIError, ConflictError

if TYPE_CHECKING:
    from .model import VolumeClaim
    from .polling import Clock, Sleeper
    from .ports.cluster import ClusterClient

log = getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_TIMEOUT = 4.0


def ensure_status(
    claim: VolumeClaim,
    status: str,
    *,
    client: ClusterClient,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_TIMEOUT,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
) -> VolumeClaim:
    """Set the claim's status annotation to ``status`` and return the stored claim.

    ``claim`` usually comes from a shared cache and is never modified. Writes are
    conditional on the copy's resource version; on a conflict the latest claim is
    fetched and the write is tried again until ``timeout`` runs out.
    """

    if claim.annotation(ANN_STATUS) == status:
        return claim

    pending = claim.deep_copy()

    def attempt() -> VolumeClaim | None:
        nonlocal pending
        pending.set_annotation(ANN_STATUS, status)
        try:
            return client.update_claim(pending)
        except ConflictError:
            log.info("pvc %s changed underneath us, re-reading before retrying", claim.key)
        except ClusterAPIError as exc:
            raise _update_error("updating", claim, exc) from exc

        try:
            pending = client.get_claim(claim.namespace, claim.name)
        except ClusterAPIError as exc:
            raise _update_error("getting", claim, exc) from exc
        return None

    try:
        updated = poll_immediate(
            attempt, interval=interval, timeout=timeout, clock=clock, sleep=sleep
        )
    except PollTimeoutError as exc:
        raise StatusUpdateTimeoutError(
            f"timed out updating pvc {claim.key} status to {status!r}: {exc}",
            namespace=claim.namespace,
            name=claim.name,
            operation="updating",
            cause=exc,
        ) from exc

    log.info("pvc %s status set to %r", claim.key, status)
    return updated


def _update_error(operation: str, claim: VolumeClaim, exc: Exception) -> StatusUpdateError:
    return StatusUpdateError(
        f"error {operation} pvc {claim.key}: {exc}",
        namespace=claim.namespace,
        name=claim.name,
        operation=operation,
        cause=exc,
    )
