"""MetaAccessor: one interface over typed and untyped resources."""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from typing import Any

from pydantic import BaseModel

from resmeta.annotations import (
    ANNO_KEY_BLOB,
    ANNO_KEY_FOLDER,
    ORIGIN_KEYS,
    BlobInfo,
    ResourceOriginInfo,
    decode_origin,
    encode_origin,
)
from resmeta.errors import InvalidInputError, NotFoundError, ResourceFormatError, TypeMismatchError
from resmeta.models.object import GroupVersionKind, MetaObject, Unstructured
from resmeta.models.secure import SecureValue
from resmeta.sections import (
    Representation,
    find_field,
    get_document_section,
    get_typed_section,
    set_document_section,
    set_typed_section,
)
from resmeta.secure import SecureValues

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _wrap(obj: object) -> tuple[Any, Representation]:
    """Classify *obj*, wrapping a bare mutable document in place."""
    if isinstance(obj, Unstructured):
        return obj, Representation.UNTYPED
    if isinstance(obj, MutableMapping):
        return Unstructured(obj), Representation.UNTYPED  # type: ignore[arg-type]
    if isinstance(obj, Mapping):
        raise InvalidInputError("Read-only mappings cannot be wrapped; pass a mutable document")
    if isinstance(obj, type):
        raise InvalidInputError(f"Expected a resource instance, got class {obj.__name__}")
    if isinstance(obj, BaseModel) and type(obj).model_config.get("frozen"):
        raise InvalidInputError(f"{type(obj).__name__} is frozen and cannot be modified")
    if not isinstance(obj, MetaObject):
        raise InvalidInputError(
            f"{type(obj).__name__} does not expose object metadata "
            "(annotations, namespace, name, resource version)"
        )
    return obj, Representation.TYPED


class MetaAccessor:
    """Read and write resource metadata without caring how it is stored.

    Every setter mutates the wrapped resource in place. A failed setter
    leaves the resource untouched.
    """

    def __init__(self, obj: object) -> None:
        self._raw = obj
        self._obj, self.representation = _wrap(obj)
        self._secure = SecureValues(self._obj)

    def __repr__(self) -> str:
        return f"MetaAccessor({self._raw!r})"

    # Identity

    def get_name(self) -> str:
        return self._obj.get_name()

    def set_name(self, name: str) -> None:
        self._obj.set_name(name)

    def get_namespace(self) -> str:
        return self._obj.get_namespace()

    def set_namespace(self, namespace: str) -> None:
        self._obj.set_namespace(namespace)

    def get_resource_version(self) -> str:
        return self._obj.get_resource_version()

    def set_resource_version(self, version: str) -> None:
        self._obj.set_resource_version(version)

    def get_resource_version_int(self) -> int:
        """Resource version as an integer; an unset version reads as 0."""
        version = self._obj.get_resource_version()
        if not version:
            return 0
        if not _INT_PATTERN.fullmatch(version):
            raise ResourceFormatError(f"Resource version {version!r} is not an integer")
        value = int(version)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ResourceFormatError(f"Resource version {version!r} is out of int64 range")
        return value

    def set_resource_version_int(self, version: int) -> None:
        self._obj.set_resource_version(str(version))

    def get_group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self._obj.get_api_version(), self._obj.get_kind())

    def get_runtime_object(self) -> tuple[object, bool]:
        return self._raw, True

    # Annotations

    def get_annotations(self) -> dict[str, str]:
        return dict(self._obj.get_annotations())

    def get_annotation(self, key: str) -> str:
        return self._obj.get_annotations().get(key, "")

    def set_annotation(self, key: str, value: str) -> None:
        """Set one annotation; an empty value removes it."""
        self._update_annotations({key: value or None})

    def _update_annotations(self, updates: Mapping[str, str | None]) -> None:
        annotations = dict(self._obj.get_annotations())
        for key, value in updates.items():
            if value is None:
                annotations.pop(key, None)
            else:
                annotations[key] = value
        self._obj.set_annotations(annotations)

    def get_folder(self) -> str:
        return self.get_annotation(ANNO_KEY_FOLDER)

    def set_folder(self, folder: str) -> None:
        self.set_annotation(ANNO_KEY_FOLDER, folder)

    def get_origin_info(self) -> ResourceOriginInfo | None:
        info, _ = decode_origin(self._obj.get_annotations())
        return info

    def set_origin_info(self, info: ResourceOriginInfo | None) -> None:
        """Write all three origin keys at once; ``None`` clears them."""
        if info is None:
            self._update_annotations(dict.fromkeys(ORIGIN_KEYS))
        else:
            self._update_annotations(encode_origin(info))

    def get_blob(self) -> BlobInfo | None:
        raw = self._obj.get_annotations().get(ANNO_KEY_BLOB)
        if not raw:
            return None
        return BlobInfo.parse(raw)

    def set_blob(self, info: BlobInfo | None) -> None:
        self._update_annotations({ANNO_KEY_BLOB: info.encode() if info else None})

    # Sections

    def get_spec(self) -> Any:
        if self.representation is Representation.UNTYPED:
            return get_document_section(self._obj, "spec")
        return get_typed_section(self._obj, "spec")

    def set_spec(self, spec: Any) -> None:
        if self.representation is Representation.UNTYPED:
            set_document_section(self._obj, "spec", spec)
        else:
            set_typed_section(self._obj, "spec", spec)

    def get_status(self) -> Any:
        """Read the status section.

        On typed resources an unset optional status reads as the zero value
        of its declared type. Untyped documents must carry the key.
        """
        if self.representation is Representation.UNTYPED:
            return get_document_section(self._obj, "status")
        return get_typed_section(self._obj, "status", zero_if_nil=True)

    def set_status(self, status: Any) -> None:
        if self.representation is Representation.UNTYPED:
            set_document_section(self._obj, "status", status)
        else:
            set_typed_section(self._obj, "status", status)

    def get_secure_values(self) -> tuple[dict[str, SecureValue] | None, bool]:
        return self._secure.get()

    def set_secure_value(self, key: str, value: SecureValue) -> None:
        self._secure.set(key, value)

    def find_title(self, default: str) -> str:
        """Return ``spec.title`` when it is a non-empty string, else *default*."""
        try:
            spec = self.get_spec()
        except (NotFoundError, TypeMismatchError):
            return default
        title: Any = None
        if isinstance(spec, Mapping):
            title = spec.get("title")
        elif isinstance(spec, BaseModel):
            found = find_field(spec, "title")
            if found is not None:
                title = getattr(spec, found[0])
        else:
            title = getattr(spec, "title", None)
        if isinstance(title, str) and title:
            return title
        return default
