"""Secure value adapter for the ``secure`` section.

A typed resource may declare its secure section as:

* nothing at all (secure values unsupported),
* a keyed collection ``dict[str, SecureValue]`` accepting any key,
* a fixed record whose fields are each ``SecureValue`` or
  ``SecureValue | None``, accepting only the declared JSON names.

Untyped documents always accept secure values under ``"secure"``.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from resmeta.errors import (
    KeyNotFoundError,
    ResourceFormatError,
    TypeMismatchError,
    UnsupportedError,
)
from resmeta.models.object import Unstructured
from resmeta.models.secure import SecureValue
from resmeta.sections import find_field, json_name, split_optional, zero_value

SECURE_SECTION = "secure"

_document_adapter = TypeAdapter(dict[str, SecureValue])


class SecureShape(enum.Enum):
    ABSENT = "absent"
    DYNAMIC = "dynamic"
    STATIC = "static"
    DOCUMENT = "document"
    EXPLICIT = "explicit"


@runtime_checkable
class HasSecureValues(Protocol):
    def get_secure_values(self) -> dict[str, SecureValue] | None: ...
    def set_secure_value(self, key: str, value: SecureValue) -> None: ...


def _is_secure_type(annotation: Any) -> bool:
    inner, _ = split_optional(annotation)
    return isinstance(inner, type) and issubclass(inner, SecureValue)


def _is_static_record(annotation: Any) -> bool:
    if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
        return False
    fields = annotation.model_fields
    return bool(fields) and all(_is_secure_type(info.annotation) for info in fields.values())


def _is_dynamic_collection(annotation: Any) -> bool:
    if get_origin(annotation) not in (dict, Mapping, MutableMapping):
        return False
    args = get_args(annotation)
    return len(args) == 2 and args[0] is str and _is_secure_type(args[1])


class SecureValues:
    """Read/write handle on the secure section of one resource.

    The shape is decided once, when the handle is built.
    """

    def __init__(self, resource: object) -> None:
        self.resource = resource
        self.field_name: str | None = None
        self.record_type: type[BaseModel] | None = None
        self.shape = self._classify()

    def _classify(self) -> SecureShape:
        resource = self.resource
        if isinstance(resource, Unstructured):
            return SecureShape.DOCUMENT
        if isinstance(resource, HasSecureValues):
            return SecureShape.EXPLICIT
        if not isinstance(resource, BaseModel):
            return SecureShape.ABSENT
        found = find_field(resource, SECURE_SECTION)
        if found is None:
            return SecureShape.ABSENT
        self.field_name, info = found
        inner, _ = split_optional(info.annotation)
        if _is_dynamic_collection(inner):
            return SecureShape.DYNAMIC
        if _is_static_record(inner):
            self.record_type = inner
            return SecureShape.STATIC
        return SecureShape.ABSENT

    def get(self) -> tuple[dict[str, SecureValue] | None, bool]:
        """Return ``(values, supported)``.

        ``values`` is ``None`` when nothing is set. A fixed record whose
        fields are all empty also reads as ``None``.
        """
        if self.shape is SecureShape.ABSENT:
            return None, False
        if self.shape is SecureShape.EXPLICIT:
            return self.resource.get_secure_values(), True  # type: ignore[attr-defined]
        if self.shape is SecureShape.DOCUMENT:
            return self._get_document(), True
        current = getattr(self.resource, self.field_name)  # type: ignore[arg-type]
        if current is None:
            return None, True
        if self.shape is SecureShape.DYNAMIC:
            return {key: value.model_copy() for key, value in current.items()}, True
        values: dict[str, SecureValue] = {}
        for name, info in type(current).model_fields.items():
            value = getattr(current, name)
            if value is not None and not value.is_zero():
                values[json_name(name, info)] = value.model_copy()
        return values or None, True

    def _get_document(self) -> dict[str, SecureValue] | None:
        raw = self.resource.object.get(SECURE_SECTION)  # type: ignore[attr-defined]
        if raw is None:
            return None
        try:
            return _document_adapter.validate_python(raw)
        except ValidationError as exc:
            raise ResourceFormatError(f"Malformed secure section: {exc}") from exc

    def set(self, key: str, value: SecureValue) -> None:
        """Insert or overwrite one secure value."""
        if not isinstance(value, SecureValue):
            raise TypeMismatchError(
                f"Secure value must be a SecureValue, not {type(value).__name__}"
            )
        if self.shape is SecureShape.ABSENT:
            raise UnsupportedError(
                f"{type(self.resource).__name__} does not support secure values"
            )
        if self.shape is SecureShape.EXPLICIT:
            self.resource.set_secure_value(key, value)  # type: ignore[attr-defined]
        elif self.shape is SecureShape.DOCUMENT:
            self._set_document(key, value)
        elif self.shape is SecureShape.DYNAMIC:
            current = getattr(self.resource, self.field_name)  # type: ignore[arg-type]
            if current is None:
                setattr(self.resource, self.field_name, {key: value.model_copy()})  # type: ignore[arg-type]
            else:
                current[key] = value.model_copy()
        elif self.record_type is not None:
            self._set_static(self.record_type, key, value)

    def _set_document(self, key: str, value: SecureValue) -> None:
        doc = self.resource.object  # type: ignore[attr-defined]
        current = doc.get(SECURE_SECTION)
        if current is None:
            doc[SECURE_SECTION] = {key: value.to_document()}
        elif isinstance(current, MutableMapping):
            current[key] = value.to_document()
        else:
            raise TypeMismatchError(
                f"Secure section holds {type(current).__name__}, not a mapping"
            )

    def _set_static(self, record_type: type[BaseModel], key: str, value: SecureValue) -> None:
        wanted = key.lower()
        for name, info in record_type.model_fields.items():
            if json_name(name, info).lower() == wanted:
                break
        else:
            allowed = [json_name(n, i) for n, i in record_type.model_fields.items()]
            raise KeyNotFoundError(key, allowed)
        record = getattr(self.resource, self.field_name)  # type: ignore[arg-type]
        if record is None:
            record = zero_value(record_type)
            setattr(record, name, value.model_copy())
            setattr(self.resource, self.field_name, record)  # type: ignore[arg-type]
        else:
            setattr(record, name, value.model_copy())


def get_secure_values(resource: object) -> tuple[dict[str, SecureValue] | None, bool]:
    return SecureValues(resource).get()


def set_secure_value(resource: object, key: str, value: SecureValue) -> None:
    SecureValues(resource).set(key, value)
