"""Importer pod and status-update settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var, optional_env_var

DEFAULT_IMAGE_TAG = "latest"
DEFAULT_STATUS_POLL_INTERVAL = 1.0
DEFAULT_STATUS_TIMEOUT = 4.0


@dataclass(frozen=True, slots=True)
class ImporterConfig:
    """Holds the values that shape importer pods and claim status updates."""

    image_tag: str = DEFAULT_IMAGE_TAG
    status_poll_interval: float = DEFAULT_STATUS_POLL_INTERVAL
    status_timeout: float = DEFAULT_STATUS_TIMEOUT


def get_importer_config(*, image_tag: str | None = None) -> ImporterConfig:
    return ImporterConfig(
        image_tag=image_tag or optional_env_var("IMPORTER_IMAGE_TAG") or DEFAULT_IMAGE_TAG,
        status_poll_interval=float_env_var(
            "IMPORTER_STATUS_POLL_INTERVAL", DEFAULT_STATUS_POLL_INTERVAL
        ),
        status_timeout=float_env_var("IMPORTER_STATUS_TIMEOUT", DEFAULT_STATUS_TIMEOUT),
    )
