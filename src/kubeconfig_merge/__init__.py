"""Merge cluster, user and context entries into a kubeconfig shared between processes."""

from kubeconfig_merge.errors import (
    CertificateReadError,
    DocumentLoadError,
    DocumentWriteError,
    KubeconfigError,
    LockAcquisitionError,
)
from kubeconfig_merge.projector import populate_from_settings
from kubeconfig_merge.settings import Settings
from kubeconfig_merge.update import update

__all__ = [
    "CertificateReadError",
    "DocumentLoadError",
    "DocumentWriteError",
    "KubeconfigError",
    "LockAcquisitionError",
    "Settings",
    "populate_from_settings",
    "update",
]
