"""Settings describing one cluster/credential/context entry to install."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


class _PathCell:
    """Write-once holder for the target kubeconfig path, safe for concurrent reads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: str | None = None

    def store(self, value: str) -> None:
        # Updates may already be running against the first path; storing the
        # same value again is allowed, retargeting is not.
        with self._lock:
            if self._value is None:
                self._value = value
            elif self._value != value:
                msg = f"Kubeconfig path already set to {self._value!r}, refusing to change it to {value!r}."
                raise ValueError(msg)

    def load(self) -> str:
        with self._lock:
            value = self._value
        if value is None:
            msg = "Kubeconfig path has not been set; call set_path() before updating."
            raise RuntimeError(msg)
        return value


@dataclass(frozen=True)
class Settings:
    """One cluster entry to merge into a shared kubeconfig.

    ``cluster_name`` names the cluster, the user and the context written for
    this record.
    """

    cluster_name: str
    cluster_server_address: str
    namespace: str = ""
    client_certificate: str = ""
    certificate_authority: str = ""
    client_key: str = ""
    keep_context: bool = False
    embed_certs: bool = False
    _path: _PathCell = field(default_factory=_PathCell, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.cluster_name:
            msg = "Settings.cluster_name must be a non-empty string."
            raise ValueError(msg)

    def set_path(self, kubeconfig_file: str) -> None:
        """Set the kubeconfig file this record is merged into. May only be set once."""
        self._path.store(kubeconfig_file)

    def _file_path(self) -> str:
        return self._path.load()
