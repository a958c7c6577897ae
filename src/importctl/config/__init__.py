"""Application configuration helpers."""

from __future__ import annotations

from .cluster import ClusterConfig, get_cluster_config
from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .importer import ImporterConfig, get_importer_config
from .logging import configure_logging

__all__ = [
    "ClusterConfig",
    "ConfigurationError",
    "ImporterConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_cluster_config",
    "get_importer_config",
    "require_env_vars",
]
