"""Object metadata models: typed resources and untyped documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NamedTuple, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class MetaObject(Protocol):
    """Minimal object-metadata capability set a resource must expose."""

    def get_annotations(self) -> dict[str, str]: ...
    def set_annotations(self, annotations: Mapping[str, str]) -> None: ...
    def get_namespace(self) -> str: ...
    def set_namespace(self, namespace: str) -> None: ...
    def get_name(self) -> str: ...
    def set_name(self, name: str) -> None: ...
    def get_resource_version(self) -> str: ...
    def set_resource_version(self, version: str) -> None: ...
    def get_api_version(self) -> str: ...
    def get_kind(self) -> str: ...


class GroupVersionKind(NamedTuple):
    """Type identity of a resource."""

    group: str
    version: str
    kind: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        """Split ``group/version`` (or a bare core ``version``).

        Anything with more than one ``/`` is not a valid group/version and
        yields an empty pair.
        """
        parts = api_version.split("/") if api_version else []
        if len(parts) == 1:
            return cls("", parts[0], kind)
        if len(parts) == 2:
            return cls(parts[0], parts[1], kind)
        return cls("", "", kind)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


class ObjectMeta(BaseModel):
    """Standard object metadata."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    namespace: str = ""
    uid: str = ""
    resource_version: str = Field(default="", alias="resourceVersion")
    generation: int = 0
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Resource(BaseModel):
    """Base class for typed resources.

    Subclasses declare their ``spec``, ``status`` and ``secure`` sections as
    regular fields. A field typed ``X | None`` behaves as an optional
    (pointer-like) section.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    def get_annotations(self) -> dict[str, str]:
        return self.metadata.annotations

    def set_annotations(self, annotations: Mapping[str, str]) -> None:
        self.metadata.annotations = dict(annotations)

    def get_namespace(self) -> str:
        return self.metadata.namespace

    def set_namespace(self, namespace: str) -> None:
        self.metadata.namespace = namespace

    def get_name(self) -> str:
        return self.metadata.name

    def set_name(self, name: str) -> None:
        self.metadata.name = name

    def get_resource_version(self) -> str:
        return self.metadata.resource_version

    def set_resource_version(self, version: str) -> None:
        self.metadata.resource_version = version

    def get_api_version(self) -> str:
        return self.api_version

    def get_kind(self) -> str:
        return self.kind


class Unstructured:
    """A resource held as a generic nested document.

    The wrapped dict is shared, not copied: every setter writes through to
    the caller's document.
    """

    def __init__(self, obj: dict[str, Any] | None = None) -> None:
        self.object: dict[str, Any] = obj if obj is not None else {}

    def __repr__(self) -> str:
        return f"Unstructured({self.object!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Unstructured):
            return self.object == other.object
        return NotImplemented

    def _metadata(self) -> Mapping[str, Any]:
        meta = self.object.get("metadata")
        return meta if isinstance(meta, Mapping) else {}

    def _metadata_for_write(self) -> dict[str, Any]:
        meta = self.object.get("metadata")
        if not isinstance(meta, dict):
            meta = {}
            self.object["metadata"] = meta
        return meta

    def _get_string(self, key: str) -> str:
        value = self._metadata().get(key)
        return value if isinstance(value, str) else ""

    def _set_string(self, key: str, value: str) -> None:
        meta = self._metadata_for_write()
        if value:
            meta[key] = value
        else:
            meta.pop(key, None)

    def get_annotations(self) -> dict[str, str]:
        raw = self._metadata().get("annotations")
        if not isinstance(raw, Mapping):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def set_annotations(self, annotations: Mapping[str, str]) -> None:
        meta = self._metadata_for_write()
        if annotations:
            meta["annotations"] = dict(annotations)
        else:
            meta.pop("annotations", None)

    def get_namespace(self) -> str:
        return self._get_string("namespace")

    def set_namespace(self, namespace: str) -> None:
        self._set_string("namespace", namespace)

    def get_name(self) -> str:
        return self._get_string("name")

    def set_name(self, name: str) -> None:
        self._set_string("name", name)

    def get_resource_version(self) -> str:
        return self._get_string("resourceVersion")

    def set_resource_version(self, version: str) -> None:
        self._set_string("resourceVersion", version)

    def get_api_version(self) -> str:
        value = self.object.get("apiVersion")
        return value if isinstance(value, str) else ""

    def get_kind(self) -> str:
        value = self.object.get("kind")
        return value if isinstance(value, str) else ""
