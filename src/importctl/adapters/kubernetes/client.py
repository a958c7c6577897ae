"""HTTP client for the Kubernetes core/v1 API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from importctl.adapters.http_resilience import ResilientClient
from importctl.domain.ports.cluster import (
    AlreadyExistsError,
    ClusterAPIError,
    ConflictError,
    NotFoundError,
)

from . import schema
from .translator import (
    claim_to_payload,
    pod_to_payload,
    translate_claim,
    translate_pod,
    translate_secret,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from importctl.config.cluster import ClusterConfig
    from importctl.config.http_resilience import ResilienceConfig
    from importctl.domain.model import Credential, VolumeClaim, WorkerPod
    from importctl.domain.ports.cluster import ClusterClient

log = getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

CORE_V1 = "/api/v1"


def _namespaced_path(namespace: str, resource: str, name: str | None = None) -> str:
    path = f"{CORE_V1}/namespaces/{quote(namespace, safe='')}/{resource}"
    if name is not None:
        path = f"{path}/{quote(name, safe='')}"
    return path


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class KubernetesClient:
    """Low-level HTTP client for the handful of core/v1 calls the importer makes.

    All calls share one event loop and one ``ResilientClient``, so the configured
    rate limit and the connection pool span the lifetime of this object. Call
    ``close`` (or use it as a context manager) when done.
    """

    def __init__(
        self,
        *,
        config: ClusterConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or _default_client_factory
        self._runner = asyncio.Runner()
        self._http: ResilientClient | None = None

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._http is not None:
            self._runner.run(self._http.aclose())
            self._http = None
        self._runner.close()

    def get_secret(self, namespace: str, name: str) -> Credential:
        payload = self._runner.run(
            self._request("GET", _namespaced_path(namespace, "secrets", name), schema.Secret)
        )
        return translate_secret(payload)

    def get_claim(self, namespace: str, name: str) -> VolumeClaim:
        payload = self._runner.run(
            self._request(
                "GET",
                _namespaced_path(namespace, "persistentvolumeclaims", name),
                schema.PersistentVolumeClaim,
            )
        )
        return translate_claim(payload)

    def update_claim(self, claim: VolumeClaim) -> VolumeClaim:
        payload = self._runner.run(
            self._request(
                "PUT",
                _namespaced_path(claim.namespace, "persistentvolumeclaims", claim.name),
                schema.PersistentVolumeClaim,
                body=claim_to_payload(claim),
            )
        )
        return translate_claim(payload)

    def create_pod(self, pod: WorkerPod) -> WorkerPod:
        payload = self._runner.run(
            self._request(
                "POST",
                _namespaced_path(pod.namespace, "pods"),
                schema.Pod,
                body=pod_to_payload(pod),
            )
        )
        return translate_pod(payload)

    def _connection(self) -> ResilientClient:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self._http

    async def _request(
        self,
        method: str,
        path: str,
        model: type[M],
        *,
        body: dict[str, Any] | None = None,
    ) -> M:
        if self._resilience.base_url is None:
            raise ClusterAPIError("Missing Kubernetes base_url in resilience configuration")

        try:
            response = await self._connection().request(method, path, json=body)
        except httpx.HTTPError as exc:
            raise ClusterAPIError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _error_from_response(method, path, response)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ClusterAPIError(
                f"{method} {path}: unexpected response payload",
                status_code=response.status_code,
            ) from exc


def _error_from_response(method: str, path: str, response: httpx.Response) -> ClusterAPIError:
    status = _parse_status(response)
    reason = status.reason if status else None
    detail = (status.message if status else None) or response.reason_phrase
    message = f"{method} {path}: {response.status_code} {detail}"
    code = response.status_code

    if code == httpx.codes.NOT_FOUND:
        return NotFoundError(message, status_code=code, reason=reason or "NotFound")
    if code == httpx.codes.CONFLICT:
        if reason == "AlreadyExists":
            return AlreadyExistsError(message, status_code=code, reason=reason)
        return ConflictError(message, status_code=code, reason=reason or "Conflict")
    log.debug("Kubernetes API error: %s", message)
    return ClusterAPIError(message, status_code=code, reason=reason)


def _parse_status(response: httpx.Response) -> schema.Status | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict) or payload.get("kind") != "Status":
        return None
    try:
        return schema.Status.model_validate(payload)
    except ValidationError:
        return None


if TYPE_CHECKING:
    _client_check: ClusterClient = KubernetesClient(
        config=ClusterConfig(resilience=ResilienceConfig(name="kubernetes"))
    )
