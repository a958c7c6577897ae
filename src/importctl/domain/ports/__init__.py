"""Domain port definitions for adapters."""

from __future__ import annotations

from .cluster import (
    AlreadyExistsError,
    ClaimCache,
    ClusterAPIError,
    ClusterClient,
    ConflictError,
    NotFoundError,
)

__all__ = [
    "AlreadyExistsError",
    "ClaimCache",
    "ClusterAPIError",
    "ClusterClient",
    "ConflictError",
    "NotFoundError",
]
