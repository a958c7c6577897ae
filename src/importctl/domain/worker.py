"""Build and submit the importer pod that copies endpoint data into a claim."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .constants import (
    ANN_CREATED_BY,
    IMPORTER_ACCESS_KEY_ID,
    IMPORTER_DATA_DIR,
    IMPORTER_ENDPOINT,
    IMPORTER_IMAGE,
    IMPORTER_PODNAME,
    IMPORTER_SECRET_KEY,
    IMPORTER_VOLUME_NAME,
    KEY_ACCESS,
    KEY_SECRET,
)
from .errors import WorkerCreationError
from .model import (
    ClaimVolume,
    EnvVar,
    PullPolicy,
    RestartPolicy,
    SecretKeyRef,
    VolumeMount,
    WorkerContainer,
    WorkerPod,
)
from .ports.cluster import ClusterAPIError

if TYPE_CHECKING:
    from .model import VolumeClaim
    from .ports.cluster import ClusterClient

log = getLogger(__name__)


def importer_pod_name(claim: VolumeClaim) -> str:
    return f"{IMPORTER_PODNAME}-{claim.name}"


def importer_image(image_tag: str) -> str:
    return f"{IMPORTER_IMAGE}:{image_tag}"


def make_env(endpoint: str, secret_name: str) -> tuple[EnvVar, ...]:
    """Return the importer container environment.

    Credentials are referenced from the secret rather than copied, so the kubelet
    resolves them when the container starts.
    """

    env = [EnvVar(name=IMPORTER_ENDPOINT, value=endpoint)]
    if secret_name:
        env.append(
            EnvVar(
                name=IMPORTER_ACCESS_KEY_ID,
                secret_key_ref=SecretKeyRef(name=secret_name, key=KEY_ACCESS),
            )
        )
        env.append(
            EnvVar(
                name=IMPORTER_SECRET_KEY,
                secret_key_ref=SecretKeyRef(name=secret_name, key=KEY_SECRET),
            )
        )
    return tuple(env)


def make_importer_pod(
    endpoint: str,
    secret_name: str,
    claim: VolumeClaim,
    *,
    image_tag: str,
) -> WorkerPod:
    """Return the importer pod manifest for ``claim``. An empty secret name means no credentials."""

    container = WorkerContainer(
        name=IMPORTER_PODNAME,
        image=importer_image(image_tag),
        image_pull_policy=PullPolicy.ALWAYS,
        env=make_env(endpoint, secret_name),
        volume_mounts=(VolumeMount(name=IMPORTER_VOLUME_NAME, mount_path=IMPORTER_DATA_DIR),),
    )
    return WorkerPod(
        name=importer_pod_name(claim),
        namespace=claim.namespace,
        annotations={ANN_CREATED_BY: "yes"},
        containers=(container,),
        volumes=(ClaimVolume(name=IMPORTER_VOLUME_NAME, claim_name=claim.name, read_only=False),),
        restart_policy=RestartPolicy.NEVER,
    )


def create_importer_pod(
    endpoint: str,
    secret_name: str,
    claim: VolumeClaim,
    *,
    client: ClusterClient,
    image_tag: str,
) -> WorkerPod:
    pod = make_importer_pod(endpoint, secret_name, claim, image_tag=image_tag)
    try:
        created = client.create_pod(pod)
    except ClusterAPIError as exc:
        raise WorkerCreationError(
            f"creating importer pod {pod.key} for pvc {claim.key} failed: {exc}",
            namespace=claim.namespace,
            name=claim.name,
            operation="creating",
            cause=exc,
        ) from exc
    log.info("importer pod %s (image tag: %r) created", created.key, image_tag)
    return created
