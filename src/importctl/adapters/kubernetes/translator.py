"""Translate Kubernetes wire objects to domain types and back."""

from __future__ import annotations

import base64
import binascii
from logging import getLogger
from typing import Any

from importctl.domain.model import (
    ClaimVolume,
    Credential,
    EnvVar,
    PullPolicy,
    RestartPolicy,
    SecretKeyRef,
    VolumeClaim,
    VolumeMount,
    WorkerContainer,
    WorkerPod,
)

from . import schema

log = getLogger(__name__)


def translate_claim(payload: schema.PersistentVolumeClaim) -> VolumeClaim:
    meta = payload.metadata
    return VolumeClaim(
        namespace=meta.namespace or "",
        name=meta.name or "",
        annotations=dict(meta.annotations or {}),
        resource_version=meta.resource_version,
        uid=meta.uid,
        labels=dict(meta.labels or {}),
        spec=dict(payload.spec or {}),
        status=dict(payload.status or {}),
        extra_metadata=dict(meta.model_extra or {}),
    )


def claim_to_payload(claim: VolumeClaim) -> dict[str, Any]:
    meta = schema.ObjectMeta(
        name=claim.name,
        namespace=claim.namespace or None,
        uid=claim.uid,
        resource_version=claim.resource_version,
        labels=claim.labels or None,
        annotations=claim.annotations or None,
        **claim.extra_metadata,
    )
    return schema.PersistentVolumeClaim(
        metadata=meta,
        spec=claim.spec or None,
        status=claim.status or None,
    ).to_payload()


def translate_secret(payload: schema.Secret) -> Credential:
    meta = payload.metadata
    return Credential(
        namespace=meta.namespace or "",
        name=meta.name or "",
        data={key: _decode_secret_value(key, value) for key, value in (payload.data or {}).items()},
    )


def _decode_secret_value(key: str, value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        log.warning("secret key %r is not base64-encoded UTF-8; keeping raw value", key)
        return value


def pod_to_payload(pod: WorkerPod) -> dict[str, Any]:
    return schema.Pod(
        metadata=schema.ObjectMeta(
            name=pod.name,
            namespace=pod.namespace or None,
            annotations=dict(pod.annotations) or None,
        ),
        spec=schema.PodSpec(
            containers=[_container_to_wire(container) for container in pod.containers],
            volumes=[
                schema.Volume(
                    name=volume.name,
                    persistent_volume_claim=schema.PersistentVolumeClaimVolumeSource(
                        claim_name=volume.claim_name,
                        read_only=volume.read_only,
                    ),
                )
                for volume in pod.volumes
            ],
            restart_policy=pod.restart_policy.value,
        ),
    ).to_payload()


def _container_to_wire(container: WorkerContainer) -> schema.Container:
    return schema.Container(
        name=container.name,
        image=container.image,
        image_pull_policy=container.image_pull_policy.value,
        env=[_env_to_wire(env) for env in container.env],
        volume_mounts=[
            schema.VolumeMount(name=mount.name, mount_path=mount.mount_path)
            for mount in container.volume_mounts
        ],
    )


def _env_to_wire(env: EnvVar) -> schema.EnvVar:
    if env.secret_key_ref is None:
        return schema.EnvVar(name=env.name, value=env.value)
    return schema.EnvVar(
        name=env.name,
        value_from=schema.EnvVarSource(
            secret_key_ref=schema.SecretKeySelector(
                name=env.secret_key_ref.name,
                key=env.secret_key_ref.key,
            )
        ),
    )


def translate_pod(payload: schema.Pod) -> WorkerPod:
    meta = payload.metadata
    return WorkerPod(
        name=meta.name or "",
        namespace=meta.namespace or "",
        uid=meta.uid,
        annotations=dict(meta.annotations or {}),
        containers=tuple(_container_from_wire(container) for container in payload.spec.containers),
        volumes=tuple(
            ClaimVolume(
                name=volume.name,
                claim_name=volume.persistent_volume_claim.claim_name,
                read_only=volume.persistent_volume_claim.read_only,
            )
            for volume in payload.spec.volumes
            if volume.persistent_volume_claim is not None
        ),
        restart_policy=RestartPolicy(payload.spec.restart_policy or RestartPolicy.ALWAYS),
    )


def _container_from_wire(container: schema.Container) -> WorkerContainer:
    return WorkerContainer(
        name=container.name,
        image=container.image or "",
        image_pull_policy=PullPolicy(container.image_pull_policy or PullPolicy.IF_NOT_PRESENT),
        env=tuple(_env_from_wire(env) for env in container.env),
        volume_mounts=tuple(
            VolumeMount(name=mount.name, mount_path=mount.mount_path)
            for mount in container.volume_mounts
        ),
    )


def _env_from_wire(env: schema.EnvVar) -> EnvVar:
    ref = env.value_from.secret_key_ref if env.value_from else None
    if ref is None:
        return EnvVar(name=env.name, value=env.value)
    return EnvVar(name=env.name, secret_key_ref=SecretKeyRef(name=ref.name, key=ref.key))
