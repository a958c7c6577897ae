"""Shared fixtures for Kubernetes adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from importctl.adapters.http_resilience import ResilientClient
from importctl.adapters.kubernetes import KubernetesClient
from importctl.config.cluster import ClusterConfig
from importctl.config.http_resilience import ResilienceConfig, RetryPolicy
from tests.helpers.kubernetes import RecordingTransport

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    import httpx


@pytest.fixture
def cluster_config() -> ClusterConfig:
    return ClusterConfig(
        resilience=ResilienceConfig(
            name="kubernetes",
            base_url="https://k8s.test",
            retry=RetryPolicy(total=0),
            default_headers={"Authorization": "Bearer token-123"},
        ),
    )


@pytest.fixture
def make_client(
    cluster_config: ClusterConfig,
) -> Iterator[Callable[..., tuple[KubernetesClient, RecordingTransport]]]:
    created: list[KubernetesClient] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        config: ClusterConfig | None = None,
    ) -> tuple[KubernetesClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = KubernetesClient(
            config=config or cluster_config,
            client_factory=lambda resilience: ResilientClient(resilience, transport=transport),
        )
        created.append(client)
        return client, transport

    yield factory

    for client in created:
        client.close()
