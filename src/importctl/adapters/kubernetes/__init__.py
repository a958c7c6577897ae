"""Public interface for the Kubernetes adapter."""

from __future__ import annotations

from .client import KubernetesClient
from .translator import claim_to_payload, pod_to_payload, translate_claim, translate_pod

__all__ = [
    "KubernetesClient",
    "claim_to_payload",
    "pod_to_payload",
    "translate_claim",
    "translate_pod",
]
