"""Domain types for volume claims, credentials and importer pods."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ImportStatus(StrEnum):
    IN_PROCESS = "In process"
    SUCCESS = "Success"
    FAILED = "Failed"


class RestartPolicy(StrEnum):
    ALWAYS = "Always"
    ON_FAILURE = "OnFailure"
    NEVER = "Never"


class PullPolicy(StrEnum):
    ALWAYS = "Always"
    IF_NOT_PRESENT = "IfNotPresent"
    NEVER = "Never"


def meta_namespace_key(namespace: str, name: str) -> str:
    """Return the ``namespace/name`` key used by caches and work queues."""

    if not namespace:
        return name
    return f"{namespace}/{name}"


@dataclass(slots=True)
class VolumeClaim:
    """A persistent volume claim as seen by the import controller.

    Only the fields the controller reasons about are modelled. Everything else the
    cluster returns is carried in ``spec``, ``status`` and ``extra_metadata`` so that
    a full-object update writes it back untouched.
    """

    namespace: str
    name: str
    annotations: dict[str, str] = field(default_factory=dict)
    resource_version: str | None = None
    uid: str | None = None
    labels: dict[str, str] = field(default_factory=dict)
    spec: dict[str, Any] = field(default_factory=dict)
    status: dict[str, Any] = field(default_factory=dict)
    extra_metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return meta_namespace_key(self.namespace, self.name)

    def annotation(self, key: str) -> str | None:
        return self.annotations.get(key)

    def set_annotation(self, key: str, value: str) -> None:
        self.annotations[key] = value

    def deep_copy(self) -> VolumeClaim:
        return copy.deepcopy(self)


@dataclass(frozen=True, slots=True)
class Credential:
    """Endpoint credentials stored in a secret. Values are opaque to the controller."""

    namespace: str
    name: str
    data: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class SecretKeyRef:
    name: str
    key: str


@dataclass(frozen=True, slots=True)
class EnvVar:
    """A container environment entry, either literal or read from a secret at start."""

    name: str
    value: str | None = None
    secret_key_ref: SecretKeyRef | None = None


@dataclass(frozen=True, slots=True)
class VolumeMount:
    name: str
    mount_path: str


@dataclass(frozen=True, slots=True)
class ClaimVolume:
    name: str
    claim_name: str
    read_only: bool = False


@dataclass(frozen=True, slots=True)
class WorkerContainer:
    name: str
    image: str
    image_pull_policy: PullPolicy = PullPolicy.ALWAYS
    env: tuple[EnvVar, ...] = ()
    volume_mounts: tuple[VolumeMount, ...] = ()


@dataclass(frozen=True, slots=True)
class WorkerPod:
    """Importer pod manifest. Built once per provisioning call and never mutated."""

    name: str
    namespace: str
    containers: tuple[WorkerContainer, ...]
    volumes: tuple[ClaimVolume, ...] = ()
    annotations: dict[str, str] = field(default_factory=dict)
    restart_policy: RestartPolicy = RestartPolicy.NEVER
    uid: str | None = None

    @property
    def key(self) -> str:
        return meta_namespace_key(self.namespace, self.name)
