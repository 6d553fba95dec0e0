"""Exception types raised by kubeconfig updates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubeconfig_merge.lock import MutexSpec


class KubeconfigError(Exception):
    """Base class for all kubeconfig update failures."""


class LockAcquisitionError(KubeconfigError):
    """The cross-process lock for a kubeconfig file could not be acquired."""

    def __init__(self, spec: MutexSpec) -> None:
        self.spec = spec
        super().__init__(f"unable to acquire lock for {spec}")


class DocumentLoadError(KubeconfigError):
    """An existing kubeconfig file could not be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"loading kubeconfig {path}: {reason}")


class CertificateReadError(KubeconfigError):
    """A certificate file could not be read while embedding it."""

    def __init__(self, kind: str, path: str) -> None:
        self.kind = kind
        self.path = path
        super().__init__(f"reading {kind} {path}")


class DocumentWriteError(KubeconfigError):
    """The updated kubeconfig could not be persisted."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"writing kubeconfig {path}")
