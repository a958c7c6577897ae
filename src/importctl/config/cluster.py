"""Kubernetes API server connection settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import float_env_var, optional_env_var
from .errors import MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SERVICE_ACCOUNT_DIR: Final[Path] = Path("/var/run/secrets/kubernetes.io/serviceaccount")
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_QPS = 5.0


@dataclass(frozen=True, slots=True)
class ClusterConfig:
    """Holds the values needed to talk to the cluster API."""

    resilience: ResilienceConfig


def _api_url() -> str:
    explicit = optional_env_var("KUBERNETES_API_URL")
    if explicit:
        return explicit.rstrip("/")
    host = optional_env_var("KUBERNETES_SERVICE_HOST")
    port = optional_env_var("KUBERNETES_SERVICE_PORT", "443")
    if host is None:
        raise MissingConfigurationError(
            "Missing configuration for: KUBERNETES_API_URL or KUBERNETES_SERVICE_HOST"
        )
    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}"


def _read_token(service_account_dir: Path) -> str | None:
    token = optional_env_var("KUBERNETES_TOKEN")
    if token:
        return token
    token_path = service_account_dir / "token"
    if token_path.is_file():
        return token_path.read_text().strip() or None
    return None


def _ca_bundle(service_account_dir: Path) -> str | bool:
    explicit = optional_env_var("KUBERNETES_CA_FILE")
    if explicit:
        return explicit
    ca_path = service_account_dir / "ca.crt"
    if ca_path.is_file():
        return str(ca_path)
    return True


def get_cluster_config(*, service_account_dir: Path = SERVICE_ACCOUNT_DIR) -> ClusterConfig:
    base_url = _api_url()
    token = _read_token(service_account_dir)
    qps = float_env_var("KUBERNETES_QPS", DEFAULT_QPS)

    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="kubernetes",
        base_url=base_url,
        timeout_seconds=float_env_var("KUBERNETES_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        retry=RetryPolicy(),
        ratelimit=RateLimit(max_calls=max(1, int(qps)), per_seconds=1.0),
        default_headers=headers,
        verify=_ca_bundle(service_account_dir),
    )
    return ClusterConfig(resilience=resilience)
