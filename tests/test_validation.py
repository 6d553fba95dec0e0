"""Tests for input validation helpers."""

from __future__ import annotations

import pytest

from kubeconfig_merge.validation import validate_cluster_name, validate_namespace


class TestValidateClusterName:
    @pytest.mark.parametrize("name", ["minikube", "prod-eastus", "Dev_Cluster.1"])
    def test_valid(self, name: str) -> None:
        validate_cluster_name(name)

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_rejected(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid cluster name"):
            validate_cluster_name(name)


class TestValidateNamespace:
    def test_valid_namespace(self) -> None:
        validate_namespace("kube-system")

    def test_valid_single_char(self) -> None:
        validate_namespace("a")

    def test_none_and_empty_are_valid(self) -> None:
        validate_namespace(None)
        validate_namespace("")

    def test_max_length(self) -> None:
        validate_namespace("a" * 63)

    @pytest.mark.parametrize("namespace", ["Default", "-leading", "trailing-", "has_underscore", "a" * 64])
    def test_invalid(self, namespace: str) -> None:
        with pytest.raises(ValueError, match="Invalid namespace"):
            validate_namespace(namespace)
