"""Input validation helpers for command-line parameters."""

from __future__ import annotations

import re

# RFC 1123 label: lowercase alphanumeric and hyphens, 1-63 chars, starts/ends with alphanumeric
_NAMESPACE_RE = re.compile(r"^[a-z0-9]([a-z0-9\-]{0,61}[a-z0-9])?$")


def validate_cluster_name(cluster_name: str) -> None:
    """Validate that a cluster name is usable as a kubeconfig entry key."""
    if not cluster_name or not cluster_name.strip():
        msg = f"Invalid cluster name: {cluster_name!r}. Must be a non-empty string."
        raise ValueError(msg)


def validate_namespace(namespace: str | None) -> None:
    """Validate a Kubernetes namespace name against RFC 1123."""
    if not namespace:
        return
    if not _NAMESPACE_RE.match(namespace):
        msg = f"Invalid namespace: {namespace!r}. Must be a valid RFC 1123 label."
        raise ValueError(msg)
