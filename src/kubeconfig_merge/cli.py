"""Command-line entry point: merge one cluster entry into a kubeconfig."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence

import structlog

from kubeconfig_merge.config import path_from_env
from kubeconfig_merge.errors import KubeconfigError
from kubeconfig_merge.settings import Settings
from kubeconfig_merge.update import update
from kubeconfig_merge.validation import validate_cluster_name, validate_namespace

log = structlog.get_logger()


def configure_logging() -> None:
    """Send structlog output to stderr: coloured on a terminal, JSON otherwise."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubeconfig-merge",
        description="Merge a cluster, user and context entry into a shared kubeconfig file.",
    )
    parser.add_argument("--cluster-name", required=True, help="Name used for the cluster, user and context.")
    parser.add_argument("--server", required=True, help="API server address, e.g. https://192.168.49.2:8443.")
    parser.add_argument("--namespace", default="default", help="Namespace for the context. Default 'default'.")
    parser.add_argument("--certificate-authority", default="", help="Path to the cluster CA certificate.")
    parser.add_argument("--client-certificate", default="", help="Path to the client certificate.")
    parser.add_argument("--client-key", default="", help="Path to the client key.")
    parser.add_argument(
        "--keep-context",
        action="store_true",
        help="Leave current-context unchanged instead of switching to the new context.",
    )
    parser.add_argument(
        "--embed-certs",
        action="store_true",
        help="Inline certificate contents instead of referencing the files by path.",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Kubeconfig file to update. Defaults to the first KUBECONFIG entry or ~/.kube/config.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one update and return the process exit code."""
    configure_logging()
    args = build_parser().parse_args(argv)
    path = args.kubeconfig or path_from_env()

    start = time.monotonic()
    try:
        validate_cluster_name(args.cluster_name)
        validate_namespace(args.namespace)
        settings = Settings(
            cluster_name=args.cluster_name,
            cluster_server_address=args.server,
            namespace=args.namespace,
            client_certificate=args.client_certificate,
            certificate_authority=args.certificate_authority,
            client_key=args.client_key,
            keep_context=args.keep_context,
            embed_certs=args.embed_certs,
        )
        settings.set_path(path)
        update(settings)
    except (KubeconfigError, ValueError) as e:
        log.error("update_failed", cluster=args.cluster_name, path=path, error=str(e))
        return 1
    log.info("update_completed", cluster=args.cluster_name, path=path, latency_ms=_elapsed_ms(start))
    return 0


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


if __name__ == "__main__":
    sys.exit(main())
