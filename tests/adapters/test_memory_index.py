from __future__ import annotations

import pytest

from importctl.adapters.memory import ClaimIndex, split_meta_namespace_key
from tests.helpers.cluster import make_claim


def test_index_add_update_delete() -> None:
    index = ClaimIndex()
    claim = make_claim()

    index.add(claim)
    assert index.get_by_key("ns/vol1") == (claim, True)

    newer = make_claim(resource_version="2")
    index.update(newer)
    assert index.get("ns", "vol1") is newer

    index.delete(newer)
    assert index.get_by_key("ns/vol1") == (None, False)
    index.delete(newer)


def test_index_lists_sorted_keys() -> None:
    index = ClaimIndex([make_claim("b"), make_claim("a", namespace="other")])

    assert index.list_keys() == ["ns/b", "other/a"]


@pytest.mark.parametrize(
    ("key", "expected"),
    [("ns/vol1", ("ns", "vol1")), ("vol1", ("", "vol1"))],
)
def test_split_meta_namespace_key(key: str, expected: tuple[str, str]) -> None:
    assert split_meta_namespace_key(key) == expected


@pytest.mark.parametrize("key", ["", "a/b/c", "/vol1", "ns/"])
def test_split_meta_namespace_key_rejects_malformed(key: str) -> None:
    with pytest.raises(ValueError, match="unexpected key format"):
        split_meta_namespace_key(key)
