"""Kubernetes API clients bound to an updated kubeconfig entry."""

from __future__ import annotations

from kubernetes import client as k8s_client
from kubernetes.config import new_client_from_config

from kubeconfig_merge.settings import Settings


def load_k8s_api_client(settings: Settings) -> k8s_client.ApiClient:
    """Create an isolated Kubernetes API client for the context written by ``update``.

    Reads the kubeconfig file set on *settings* and selects the context named
    after ``settings.cluster_name``. The SDK's global configuration is left
    untouched, so clients for several clusters can coexist in one process.
    """
    return new_client_from_config(config_file=settings._file_path(), context=settings.cluster_name)
