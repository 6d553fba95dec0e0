"""Lock policy and kubeconfig location, with environment variable overrides."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field

import structlog

log = structlog.get_logger()

KUBECONFIG_ENV_VAR = "KUBECONFIG"
DEFAULT_KUBECONFIG_LOCATION = "~/.kube/config"


@dataclass(frozen=True)
class LockConfig:
    """Timeout and retry policy for the kubeconfig file lock."""

    timeout: float = field(default_factory=lambda: float(os.environ.get("KUBECONFIG_MERGE_LOCK_TIMEOUT", "60")))
    delay: float = field(default_factory=lambda: float(os.environ.get("KUBECONFIG_MERGE_LOCK_DELAY", "0.5")))
    lock_dir: str = field(
        default_factory=lambda: os.environ.get("KUBECONFIG_MERGE_LOCK_DIR", "") or tempfile.gettempdir()
    )


def get_lock_config() -> LockConfig:
    """Return lock configuration with environment variable overrides applied."""
    return LockConfig()


def default_kubeconfig_path() -> str:
    """Return the default kubeconfig location, user-expanded."""
    return os.path.expanduser(DEFAULT_KUBECONFIG_LOCATION)


def path_from_env() -> str:
    """Resolve the kubeconfig path to update.

    Uses the first non-empty entry of the ``KUBECONFIG`` environment variable,
    which may hold several paths separated by ``os.pathsep``.

    Returns:
        The selected path, or the default location when ``KUBECONFIG`` is unset
        or has no usable entry.
    """
    value = os.environ.get(KUBECONFIG_ENV_VAR, "")
    if not value:
        return default_kubeconfig_path()
    for entry in value.split(os.pathsep):
        if entry:
            return entry
        log.info("ignoring_empty_kubeconfig_entry", env_var=KUBECONFIG_ENV_VAR)
    return default_kubeconfig_path()
