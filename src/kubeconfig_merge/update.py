"""Locked read, merge and write of a shared kubeconfig."""

from __future__ import annotations

import os

import structlog

from kubeconfig_merge.config import LockConfig
from kubeconfig_merge.document import read_or_new, write_to_file
from kubeconfig_merge.lock import acquire, path_mutex_spec
from kubeconfig_merge.projector import FileReader, populate_from_settings, read_file
from kubeconfig_merge.settings import Settings

log = structlog.get_logger()

# Joined to the kubeconfig path to name the lock, so only updates of the same file contend.
UPDATE_OPERATION = "settings.Update"


def update(settings: Settings, lock_config: LockConfig | None = None, read_file: FileReader = read_file) -> None:
    """Merge *settings* into the kubeconfig file set with ``Settings.set_path``.

    The whole load, merge and write cycle runs under a cross-process lock
    derived from the file path, so concurrent updates of one file are
    serialized and none of them is lost. The file is written only after the
    projection has fully succeeded.

    Args:
        settings: The entry to install; its path must already be set.
        lock_config: Lock timeout and poll policy. Defaults to the environment.
        read_file: Reader used for certificate files when embedding.

    Raises:
        LockAcquisitionError: If the lock is not acquired in time.
        DocumentLoadError: If the existing file cannot be parsed.
        CertificateReadError: If a certificate cannot be read for embedding.
        DocumentWriteError: If the updated document cannot be written.
    """
    path = settings._file_path()
    spec = path_mutex_spec(os.path.join(os.path.abspath(path), UPDATE_OPERATION), lock_config)

    with acquire(spec):
        log.info("updating_kubeconfig", path=path, cluster=settings.cluster_name)
        config = read_or_new(path)
        populate_from_settings(settings, config, read_file=read_file)
        write_to_file(config, path)
