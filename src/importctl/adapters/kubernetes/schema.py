"""Kubernetes core/v1 wire schemas for the objects the importer touches.

Models allow extra keys: objects read from the API server are written back
whole, so anything not modelled here must survive the round trip.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KubernetesBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ObjectMeta(KubernetesBaseModel):
    name: str | None = None
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None


class PersistentVolumeClaim(KubernetesBaseModel):
    api_version: str = Field(default="v1", alias="apiVersion")
    kind: str = "PersistentVolumeClaim"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict[str, Any] | None = None
    status: dict[str, Any] | None = None


class Secret(KubernetesBaseModel):
    api_version: str = Field(default="v1", alias="apiVersion")
    kind: str = "Secret"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    type: str | None = None
    data: dict[str, str] | None = None


class SecretKeySelector(KubernetesBaseModel):
    name: str
    key: str


class EnvVarSource(KubernetesBaseModel):
    secret_key_ref: SecretKeySelector | None = Field(default=None, alias="secretKeyRef")


class EnvVar(KubernetesBaseModel):
    name: str
    value: str | None = None
    value_from: EnvVarSource | None = Field(default=None, alias="valueFrom")


class VolumeMount(KubernetesBaseModel):
    name: str
    mount_path: str = Field(alias="mountPath")


class Container(KubernetesBaseModel):
    name: str
    image: str | None = None
    image_pull_policy: str | None = Field(default=None, alias="imagePullPolicy")
    env: list[EnvVar] = Field(default_factory=list["EnvVar"])
    volume_mounts: list[VolumeMount] = Field(
        default_factory=list["VolumeMount"], alias="volumeMounts"
    )


class PersistentVolumeClaimVolumeSource(KubernetesBaseModel):
    claim_name: str = Field(alias="claimName")
    read_only: bool = Field(default=False, alias="readOnly")


class Volume(KubernetesBaseModel):
    name: str
    persistent_volume_claim: PersistentVolumeClaimVolumeSource | None = Field(
        default=None, alias="persistentVolumeClaim"
    )


class PodSpec(KubernetesBaseModel):
    containers: list[Container] = Field(default_factory=list["Container"])
    volumes: list[Volume] = Field(default_factory=list["Volume"])
    restart_policy: str | None = Field(default=None, alias="restartPolicy")


class Pod(KubernetesBaseModel):
    api_version: str = Field(default="v1", alias="apiVersion")
    kind: str = "Pod"
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)
    status: dict[str, Any] | None = None


class Status(KubernetesBaseModel):
    """The ``Status`` body the API server returns with failed requests."""

    kind: str | None = None
    status: str | None = None
    message: str | None = None
    reason: str | None = None
    code: int | None = None
