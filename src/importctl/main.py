#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from importctl.adapters.kubernetes import KubernetesClient
from importctl.adapters.memory import ClaimIndex, split_meta_namespace_key
from importctl.app import reconcile_claim
from importctl.config import (
    ConfigurationError,
    configure_logging,
    get_cluster_config,
    get_importer_config,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run one import reconcile step for a persistent volume claim"
    )
    parser.add_argument(
        "key",
        help="Claim to reconcile, as namespace/name",
    )
    parser.add_argument(
        "--image-tag",
        help="Importer image tag (default: $IMPORTER_IMAGE_TAG or latest)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
        namespace, name = split_meta_namespace_key(parsed_args.key)
        if not namespace:
            raise ValueError(f"claim key {parsed_args.key!r} must be namespace/name")
        importer_config = get_importer_config(image_tag=parsed_args.image_tag)
        client = KubernetesClient(config=get_cluster_config())
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=parsed_args.log_level)

    with client:
        try:
            claim = client.get_claim(namespace, name)
            result = reconcile_claim(
                claim.key,
                cache=ClaimIndex([claim]),
                client=client,
                config=importer_config,
            )
        except Exception as e:  # noqa: BLE001
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if result is None:
        print(f"Nothing to do for {claim.key}")
    else:
        print(f"Created importer pod {result.pod.key} for {result.claim.key}")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
