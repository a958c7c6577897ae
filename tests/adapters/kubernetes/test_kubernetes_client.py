"""Request/response behaviour of the Kubernetes HTTP client."""

from __future__ import annotations

import base64
import json
import time
from dataclasses import replace
from typing import TYPE_CHECKING

import httpx
import pytest

from importctl.adapters.http_resilience import ResilientClient
from importctl.adapters.kubernetes import KubernetesClient
from importctl.config.cluster import ClusterConfig
from importctl.config.http_resilience import RateLimit
from importctl.domain.constants import ANN_STATUS
from importctl.domain.model import EnvVar, SecretKeyRef
from importctl.domain.ports.cluster import (
    AlreadyExistsError,
    ClusterAPIError,
    ConflictError,
    NotFoundError,
)
from importctl.domain.worker import make_importer_pod
from tests.helpers.cluster import make_claim
from tests.helpers.kubernetes import RecordingTransport, claim_payload, status_body

if TYPE_CHECKING:
    from collections.abc import Callable

    from importctl.config.http_resilience import ResilienceConfig

    MakeClient = Callable[..., tuple[KubernetesClient, RecordingTransport]]


def _b64(value: str) -> str:
    return base64.b64encode(value.encode()).decode()


def test_get_secret_decodes_data(make_client: MakeClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "kind": "Secret",
                "apiVersion": "v1",
                "metadata": {"name": "creds", "namespace": "ns"},
                "type": "Opaque",
                "data": {"accessKeyId": _b64("AKIA"), "secretKey": _b64("s3cr3t")},
            },
        )

    client, transport = make_client(handler)

    credential = client.get_secret("ns", "creds")

    assert credential.name == "creds"
    assert credential.data == {"accessKeyId": "AKIA", "secretKey": "s3cr3t"}
    (request,) = transport.requests
    assert request.method == "GET"
    assert request.url.path == "/api/v1/namespaces/ns/secrets/creds"
    assert request.headers["Authorization"] == "Bearer token-123"


def test_get_secret_not_found(make_client: MakeClient) -> None:
    client, _ = make_client(
        lambda _request: httpx.Response(
            404, json=status_body(404, "NotFound", 'secrets "creds" not found')
        )
    )

    with pytest.raises(NotFoundError, match="not found") as excinfo:
        client.get_secret("ns", "creds")

    assert excinfo.value.status_code == 404
    assert excinfo.value.reason == "NotFound"


def test_get_claim_translates_payload(make_client: MakeClient) -> None:
    client, transport = make_client(
        lambda _request: httpx.Response(200, json=claim_payload(annotations={"a": "b"}))
    )

    claim = client.get_claim("ns", "vol1")

    assert claim.key == "ns/vol1"
    assert claim.resource_version == "100"
    assert claim.annotations == {"a": "b"}
    assert claim.labels == {"app": "demo"}
    assert claim.extra_metadata["finalizers"] == ["kubernetes.io/pvc-protection"]
    assert transport.requests[0].url.path == "/api/v1/namespaces/ns/persistentvolumeclaims/vol1"


def test_update_claim_round_trips_unmodelled_fields(make_client: MakeClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        body["metadata"]["resourceVersion"] = "101"
        return httpx.Response(200, json=body)

    original = claim_payload()
    fetch_client, _ = make_client(lambda _request: httpx.Response(200, json=original))
    claim = fetch_client.get_claim("ns", "vol1")
    claim.set_annotation(ANN_STATUS, "In process")

    client, transport = make_client(handler)
    updated = client.update_claim(claim)

    (request,) = transport.requests
    sent = json.loads(request.content)
    assert request.method == "PUT"
    assert sent["metadata"]["resourceVersion"] == "100"
    assert sent["metadata"]["finalizers"] == original["metadata"]["finalizers"]
    assert sent["metadata"]["creationTimestamp"] == original["metadata"]["creationTimestamp"]
    assert sent["metadata"]["annotations"] == {ANN_STATUS: "In process"}
    assert sent["spec"] == original["spec"]
    assert sent["status"] == original["status"]
    assert updated.resource_version == "101"
    assert updated.annotation(ANN_STATUS) == "In process"


def test_update_claim_conflict(make_client: MakeClient) -> None:
    client, _ = make_client(
        lambda _request: httpx.Response(
            409,
            json=status_body(
                409,
                "Conflict",
                'Operation cannot be fulfilled on persistentvolumeclaims "vol1": '
                "the object has been modified",
            ),
        )
    )

    with pytest.raises(ConflictError):
        client.update_claim(make_claim())


def test_create_pod_posts_manifest(make_client: MakeClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        body["metadata"]["uid"] = "pod-uid"
        body["status"] = {"phase": "Pending"}
        return httpx.Response(201, json=body)

    client, transport = make_client(handler)
    pod = make_importer_pod("https://example.org/data.img", "creds", make_claim(), image_tag="v2")

    created = client.create_pod(pod)

    (request,) = transport.requests
    sent = json.loads(request.content)
    assert request.method == "POST"
    assert request.url.path == "/api/v1/namespaces/ns/pods"
    assert sent["metadata"]["name"] == "importer-vol1"
    assert sent["spec"]["restartPolicy"] == "Never"
    assert sent["spec"]["volumes"] == [
        {"name": "data-path", "persistentVolumeClaim": {"claimName": "vol1", "readOnly": False}}
    ]
    env = sent["spec"]["containers"][0]["env"]
    assert env[0] == {"name": "IMPORTER_ENDPOINT", "value": "https://example.org/data.img"}
    assert env[1] == {
        "name": "IMPORTER_ACCESS_KEY_ID",
        "valueFrom": {"secretKeyRef": {"name": "creds", "key": "accessKeyId"}},
    }
    assert created.uid == "pod-uid"
    assert created.containers[0].env[1] == EnvVar(
        name="IMPORTER_ACCESS_KEY_ID",
        secret_key_ref=SecretKeyRef(name="creds", key="accessKeyId"),
    )


def test_create_pod_already_exists(make_client: MakeClient) -> None:
    client, _ = make_client(
        lambda _request: httpx.Response(
            409, json=status_body(409, "AlreadyExists", 'pods "importer-vol1" already exists')
        )
    )
    pod = make_importer_pod("https://example.org/data.img", "", make_claim(), image_tag="v2")

    with pytest.raises(AlreadyExistsError):
        client.create_pod(pod)


def test_server_errors_are_not_special_cased(make_client: MakeClient) -> None:
    client, _ = make_client(lambda _request: httpx.Response(500, text="etcd unavailable"))

    with pytest.raises(ClusterAPIError) as excinfo:
        client.update_claim(make_claim())

    assert type(excinfo.value) is ClusterAPIError
    assert excinfo.value.status_code == 500


def test_transport_errors_become_cluster_errors(make_client: MakeClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = make_client(handler)

    with pytest.raises(ClusterAPIError, match="connection refused"):
        client.create_pod(
            make_importer_pod("https://example.org/data.img", "", make_claim(), image_tag="v2")
        )


def test_unexpected_payload_is_reported(make_client: MakeClient) -> None:
    client, _ = make_client(lambda _request: httpx.Response(200, text="<html>proxy</html>"))

    with pytest.raises(ClusterAPIError, match="unexpected response payload"):
        client.get_claim("ns", "vol1")


def _empty_secret(_request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "kind": "Secret",
            "apiVersion": "v1",
            "metadata": {"name": "creds", "namespace": "ns"},
            "type": "Opaque",
            "data": {},
        },
    )


def test_calls_share_one_http_client(cluster_config: ClusterConfig) -> None:
    transport = RecordingTransport(_empty_secret)
    built: list[ResilientClient] = []

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        built.append(ResilientClient(resilience, transport=transport))
        return built[-1]

    with KubernetesClient(config=cluster_config, client_factory=factory) as client:
        for _ in range(3):
            client.get_secret("ns", "creds")

    assert len(built) == 1
    assert len(transport.requests) == 3


def test_rate_limit_applies_across_calls(
    make_client: MakeClient, cluster_config: ClusterConfig
) -> None:
    limited = ClusterConfig(
        resilience=replace(
            cluster_config.resilience, ratelimit=RateLimit(max_calls=1, per_seconds=0.2)
        )
    )
    client, transport = make_client(_empty_secret, limited)

    started = time.monotonic()
    for _ in range(3):
        client.get_secret("ns", "creds")
    elapsed = time.monotonic() - started

    assert len(transport.requests) == 3
    assert elapsed >= 0.35
