"""Tests for settings.py: construction invariants and the write-once path cell."""

from __future__ import annotations

import threading
from dataclasses import FrozenInstanceError

import pytest

from kubeconfig_merge.settings import Settings


class TestSettingsConstruction:
    def test_defaults(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        assert settings.namespace == ""
        assert settings.keep_context is False
        assert settings.embed_certs is False

    def test_empty_cluster_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="cluster_name"):
            Settings(cluster_name="", cluster_server_address="https://127.0.0.1:8443")

    def test_fields_are_frozen(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        with pytest.raises(FrozenInstanceError):
            settings.cluster_name = "other"  # type: ignore[misc]

    def test_path_is_not_part_of_equality(self) -> None:
        a = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        b = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        a.set_path("/tmp/a")
        assert a == b


class TestSetPath:
    def test_read_before_set_fails_fast(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        with pytest.raises(RuntimeError, match="set_path"):
            settings._file_path()

    def test_set_then_read(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        settings.set_path("/home/user/.kube/config")
        assert settings._file_path() == "/home/user/.kube/config"

    def test_repeat_with_same_path_is_noop(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        settings.set_path("/tmp/config")
        settings.set_path("/tmp/config")
        assert settings._file_path() == "/tmp/config"

    def test_changing_path_rejected(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        settings.set_path("/tmp/config")
        with pytest.raises(ValueError, match="already set"):
            settings.set_path("/tmp/other")
        assert settings._file_path() == "/tmp/config"

    def test_concurrent_reads_see_stored_path(self) -> None:
        settings = Settings(cluster_name="minikube", cluster_server_address="https://127.0.0.1:8443")
        settings.set_path("/tmp/config")
        seen: list[str] = []
        seen_lock = threading.Lock()

        def reader() -> None:
            for _ in range(100):
                value = settings._file_path()
                with seen_lock:
                    seen.append(value)

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(seen) == 800
        assert set(seen) == {"/tmp/config"}
