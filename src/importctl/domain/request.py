"""Resolve what a claim asks to import: its source endpoint and credentials."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .constants import ANN_ENDPOINT, ANN_SECRET
from .errors import ClaimLookupError, CredentialLookupError, MissingEndpointError
from .model import VolumeClaim
from .ports.cluster import ClusterAPIError, NotFoundError

if TYPE_CHECKING:
    from .ports.cluster import ClaimCache, ClusterClient

log = getLogger(__name__)


def claim_from_key(key: object, *, cache: ClaimCache) -> VolumeClaim | None:
    """Return the cached claim for a work-queue key, or None if it is gone."""

    if not isinstance(key, str):
        raise ClaimLookupError(f"claim key {key!r} is not a string")
    try:
        obj, found = cache.get_by_key(key)
    except Exception as exc:
        raise ClaimLookupError(
            f"error getting key {key!r} from cache: {exc}", operation="getting", cause=exc
        ) from exc
    if not found:
        return None
    if not isinstance(obj, VolumeClaim):
        raise ClaimLookupError(f"cached object for key {key!r} is not a volume claim")
    return obj


def get_endpoint(claim: VolumeClaim) -> str:
    """Return the full URI of the object to be copied into the claim."""

    endpoint = claim.annotation(ANN_ENDPOINT)
    if not endpoint:
        raise MissingEndpointError(
            f"annotation {ANN_ENDPOINT!r} in pvc {claim.key} is missing or is blank",
            namespace=claim.namespace,
            name=claim.name,
        )
    return endpoint


def get_secret_name(claim: VolumeClaim, *, client: ClusterClient) -> str:
    """Return the name of the secret holding endpoint credentials.

    An empty string means the importer runs without credentials. A secret that
    does not exist yet is still returned by name: the importer pod will start once
    it is created.
    """

    namespace = claim.namespace
    name = claim.annotation(ANN_SECRET)
    if name is None:
        log.info("annotation %r is missing in pvc %s", ANN_SECRET, claim.key)
        return ""
    if not name.strip():
        log.info("secret name is missing from annotation %r in pvc %s", ANN_SECRET, claim.key)
        return ""

    log.info("retrieving secret %s/%s", namespace, name)
    try:
        client.get_secret(namespace, name)
    except NotFoundError:
        log.info(
            "secret %r defined in pvc %s is missing; importer pod will run once it is created",
            name,
            claim.key,
        )
        return name
    except ClusterAPIError as exc:
        raise CredentialLookupError(
            f"error getting secret {name!r} defined in pvc {claim.key}: {exc}",
            namespace=namespace,
            name=claim.name,
            operation="getting",
            cause=exc,
        ) from exc
    return name
