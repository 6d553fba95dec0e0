"""Projection of a Settings record into a kubeconfig document."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from kubeconfig_merge.errors import CertificateReadError
from kubeconfig_merge.models import (
    CLUSTER_EXTENSION_NAME,
    CONTEXT_EXTENSION_NAME,
    CREATED_BY,
    AuthInfo,
    Cluster,
    Config,
    Context,
    ProvenanceExtension,
)
from kubeconfig_merge.settings import Settings
from kubeconfig_merge.utils import timestamp_now

FileReader = Callable[[str], bytes]


def read_file(path: str) -> bytes:
    """Return the full contents of the file at *path*."""
    return Path(path).read_bytes()


def _read_certificate(reader: FileReader, kind: str, path: str) -> bytes:
    try:
        return reader(path)
    except OSError as e:
        raise CertificateReadError(kind, path) from e


def populate_from_settings(settings: Settings, config: Config, read_file: FileReader = read_file) -> None:
    """Merge the cluster, user and context described by *settings* into *config*.

    All three entries are keyed by ``settings.cluster_name`` and replace any
    prior entry under that name. The cluster and context entries get a fresh
    provenance stamp. ``current_context`` is switched to the new context unless
    ``settings.keep_context`` is set.

    When ``settings.embed_certs`` is set, certificate files are read through
    *read_file* and inlined; otherwise their paths are stored. No other I/O is
    performed.

    Args:
        settings: The entry to install.
        config: The document to mutate in place.
        read_file: Returns the bytes of a certificate file.

    Raises:
        CertificateReadError: If a certificate file cannot be read. Entries
            assigned before the failing read remain in *config*, so callers
            must not persist it.
    """
    name = settings.cluster_name

    cluster = Cluster(server=settings.cluster_server_address)
    if settings.embed_certs:
        cluster.certificate_authority_data = _read_certificate(
            read_file, "CertificateAuthority", settings.certificate_authority
        )
    else:
        cluster.certificate_authority = settings.certificate_authority

    # One timestamp for both entries, but each entry owns its own model so a
    # later edit to one stamp does not show up in the other.
    ext = ProvenanceExtension(created_by=CREATED_BY, last_update=timestamp_now())
    cluster.extensions = {CLUSTER_EXTENSION_NAME: ext.model_copy()}
    config.clusters[name] = cluster

    user = AuthInfo()
    if settings.embed_certs:
        user.client_certificate_data = _read_certificate(read_file, "ClientCertificate", settings.client_certificate)
        user.client_key_data = _read_certificate(read_file, "ClientKey", settings.client_key)
    else:
        user.client_certificate = settings.client_certificate
        user.client_key = settings.client_key
    config.auth_infos[name] = user

    config.contexts[name] = Context(
        cluster=name,
        user=name,
        namespace=settings.namespace,
        extensions={CONTEXT_EXTENSION_NAME: ext.model_copy()},
    )

    if not settings.keep_context:
        config.current_context = name
