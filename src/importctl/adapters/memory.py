"""In-memory claim index keyed the same way an informer's indexer is."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from importctl.domain.model import VolumeClaim, meta_namespace_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from importctl.domain.ports.cluster import ClaimCache

log = getLogger(__name__)


def split_meta_namespace_key(key: str) -> tuple[str, str]:
    """Split a ``namespace/name`` key. A bare ``name`` has an empty namespace."""

    parts = key.split("/")
    if len(parts) == 1 and parts[0]:
        return "", parts[0]
    if len(parts) == 2 and all(parts):  # noqa: PLR2004
        return parts[0], parts[1]
    raise ValueError(f"unexpected key format: {key!r}")


class ClaimIndex:
    """Holds the latest known copy of each claim.

    Stored objects are shared with every reader, the same as an informer cache:
    callers must copy before modifying.
    """

    def __init__(self, claims: Iterable[VolumeClaim] = ()) -> None:
        self._items: dict[str, VolumeClaim] = {}
        for claim in claims:
            self.add(claim)

    def add(self, claim: VolumeClaim) -> None:
        self._items[claim.key] = claim

    def update(self, claim: VolumeClaim) -> None:
        self.add(claim)

    def delete(self, claim: VolumeClaim) -> None:
        if self._items.pop(claim.key, None) is None:
            log.debug("claim %s not in index, nothing to delete", claim.key)

    def get_by_key(self, key: str) -> tuple[object | None, bool]:
        claim = self._items.get(key)
        return claim, claim is not None

    def get(self, namespace: str, name: str) -> VolumeClaim | None:
        return self._items.get(meta_namespace_key(namespace, name))

    def list_keys(self) -> list[str]:
        return sorted(self._items)


if TYPE_CHECKING:
    _cache_check: ClaimCache = ClaimIndex()
