"""Pydantic v2 models for the kubeconfig document and its entries."""

from __future__ import annotations

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Fixed creator tag written into every provenance stamp.
CREATED_BY = "kubeconfig-merge"

CLUSTER_EXTENSION_NAME = "cluster_info"
CONTEXT_EXTENSION_NAME = "context_info"


# --- Encoding helpers ---


def _decode_data(value: Any) -> Any:
    """Accept base64 text from YAML; raw bytes pass through untouched."""
    if isinstance(value, str):
        # Some tools wrap long data as a block scalar; line breaks are not part of the payload.
        return base64.b64decode("".join(value.split()), validate=True)
    return value


def _encode_data(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _extensions_from_list(value: Any) -> Any:
    """Convert the on-disk ``[{name, extension}]`` list into a name-keyed mapping.

    Duplicate names keep the last entry.
    """
    if value is None:
        return {}
    if isinstance(value, list):
        extensions: dict[str, Any] = {}
        for item in value:
            if not isinstance(item, dict) or "name" not in item:
                msg = f"Extension entries must be mappings with a 'name' key, got {item!r}."
                raise ValueError(msg)
            extensions[str(item["name"])] = item.get("extension", {})
        return extensions
    return value


def _extensions_to_list(value: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {"name": name, "extension": ext.model_dump() if isinstance(ext, BaseModel) else ext}
        for name, ext in value.items()
    ]


# --- Provenance ---


class ProvenanceExtension(BaseModel):
    """Stamp recording which tool last wrote an entry, and when."""

    created_by: str
    last_update: str


# --- Entries ---


class _Entry(BaseModel):
    # Unknown keys (exec plugins, tokens, proxy settings...) belong to other
    # tools and are carried through a load/write cycle unchanged.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_yaml_dict(self) -> dict[str, Any]:
        """Dump with kubeconfig keys, leaving out fields still at their default value."""
        at_default = {
            name
            for name, info in type(self).model_fields.items()
            if getattr(self, name) == info.get_default(call_default_factory=True)
        }
        return self.model_dump(by_alias=True, exclude=at_default)


class Cluster(_Entry):
    """How to reach one API server."""

    server: str = ""
    certificate_authority: str = Field(default="", alias="certificate-authority")
    certificate_authority_data: bytes = Field(default=b"", alias="certificate-authority-data")
    extensions: dict[str, Any] = Field(default_factory=dict)

    @field_validator("certificate_authority_data", mode="before")
    @classmethod
    def _decode_ca(cls, value: Any) -> Any:
        return _decode_data(value)

    @field_serializer("certificate_authority_data")
    def _encode_ca(self, value: bytes) -> str:
        return _encode_data(value)

    @field_validator("extensions", mode="before")
    @classmethod
    def _load_extensions(cls, value: Any) -> Any:
        return _extensions_from_list(value)

    @field_serializer("extensions")
    def _dump_extensions(self, value: dict[str, Any]) -> list[dict[str, Any]]:
        return _extensions_to_list(value)


class AuthInfo(_Entry):
    """Client credentials for one user."""

    client_certificate: str = Field(default="", alias="client-certificate")
    client_certificate_data: bytes = Field(default=b"", alias="client-certificate-data")
    client_key: str = Field(default="", alias="client-key")
    client_key_data: bytes = Field(default=b"", alias="client-key-data")

    @field_validator("client_certificate_data", "client_key_data", mode="before")
    @classmethod
    def _decode_material(cls, value: Any) -> Any:
        return _decode_data(value)

    @field_serializer("client_certificate_data", "client_key_data")
    def _encode_material(self, value: bytes) -> str:
        return _encode_data(value)


class Context(_Entry):
    """A cluster, a user and a namespace bound under one selectable name."""

    cluster: str = ""
    user: str = ""
    namespace: str = ""
    extensions: dict[str, Any] = Field(default_factory=dict)

    @field_validator("extensions", mode="before")
    @classmethod
    def _load_extensions(cls, value: Any) -> Any:
        return _extensions_from_list(value)

    @field_serializer("extensions")
    def _dump_extensions(self, value: dict[str, Any]) -> list[dict[str, Any]]:
        return _extensions_to_list(value)


# --- Document ---

# On-disk section key -> (document attribute, per-item payload key)
_SECTIONS = {
    "clusters": ("clusters", "cluster"),
    "users": ("auth_infos", "user"),
    "contexts": ("contexts", "context"),
}


class Config(BaseModel):
    """In-memory kubeconfig: name-keyed clusters, users and contexts plus the current context."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    api_version: str = Field(default="v1", alias="apiVersion")
    kind: str = "Config"
    preferences: dict[str, Any] = Field(default_factory=dict)
    clusters: dict[str, Cluster] = Field(default_factory=dict)
    auth_infos: dict[str, AuthInfo] = Field(default_factory=dict)
    contexts: dict[str, Context] = Field(default_factory=dict)
    current_context: str = Field(default="", alias="current-context")

    @classmethod
    def from_yaml_dict(cls, raw: Any) -> Config:
        """Build a Config from the parsed YAML of a kubeconfig file.

        Args:
            raw: The object returned by ``yaml.safe_load``. ``None`` (an empty
                file) yields an empty document.

        Raises:
            ValueError: If the structure is not a kubeconfig mapping.
            pydantic.ValidationError: If an entry has fields of the wrong type.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            msg = f"kubeconfig must be a mapping at the top level, got {type(raw).__name__}."
            raise ValueError(msg)

        data = dict(raw)
        for section, (attribute, payload_key) in _SECTIONS.items():
            items = data.pop(section, None) or []
            if not isinstance(items, list):
                msg = f"kubeconfig section '{section}' must be a list, got {type(items).__name__}."
                raise ValueError(msg)
            entries: dict[str, Any] = {}
            for item in items:
                if not isinstance(item, dict) or "name" not in item:
                    msg = f"Every item in '{section}' must be a mapping with a 'name' key."
                    raise ValueError(msg)
                entries[str(item["name"])] = item.get(payload_key) or {}
            data[attribute] = entries
        if data.get("current-context") is None:
            data.pop("current-context", None)
        if data.get("preferences") is None:
            data.pop("preferences", None)
        return cls.model_validate(data)

    def to_yaml_dict(self) -> dict[str, Any]:
        """Return the document in kubeconfig file layout, ready for ``yaml.safe_dump``."""
        out: dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "preferences": self.preferences,
        }
        for section, (attribute, payload_key) in _SECTIONS.items():
            entries: dict[str, _Entry] = getattr(self, attribute)
            out[section] = [{"name": name, payload_key: entry.to_yaml_dict()} for name, entry in entries.items()]
        out["current-context"] = self.current_context
        if self.model_extra:
            out.update(self.model_extra)
        return out
