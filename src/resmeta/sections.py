"""Section resolver: read and write the spec/status sections of a resource.

A section lives either in a typed pydantic field (found by field name or
alias, case-insensitively) or under a top-level key of an untyped document.
"""

from __future__ import annotations

import enum
import types
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Protocol, Union, get_args, get_origin, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import PydanticSerializationError, to_jsonable_python

from resmeta.errors import NotFoundError, TypeMismatchError
from resmeta.models.object import Unstructured


class Representation(enum.Enum):
    """How a resource holds its sections."""

    TYPED = "typed"
    UNTYPED = "untyped"


@runtime_checkable
class HasSpec(Protocol):
    def get_spec(self) -> Any: ...
    def set_spec(self, spec: Any) -> None: ...


@runtime_checkable
class HasStatus(Protocol):
    def get_status(self) -> Any: ...
    def set_status(self, status: Any) -> None: ...


def classify(resource: object) -> Representation:
    if isinstance(resource, Unstructured):
        return Representation.UNTYPED
    return Representation.TYPED


def split_optional(annotation: Any) -> tuple[Any, bool]:
    """Return ``(inner, True)`` for ``X | None``, else ``(annotation, False)``."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        inner = [arg for arg in args if arg is not type(None)]
        if len(inner) == 1 and len(args) == 2:
            return inner[0], True
    return annotation, False


def find_field(model: BaseModel, name: str) -> tuple[str, FieldInfo] | None:
    """Find a model field by name or alias, ignoring case."""
    wanted = name.lower()
    for field_name, info in type(model).model_fields.items():
        if field_name.lower() == wanted or (info.alias and info.alias.lower() == wanted):
            return field_name, info
    return None


def json_name(field_name: str, info: FieldInfo) -> str:
    """Name a field carries in the document form."""
    return info.serialization_alias or info.alias or field_name


def zero_value(annotation: Any) -> Any:
    """Build the empty value of a declared type without validation."""
    inner, optional = split_optional(annotation)
    if optional:
        return None
    if isinstance(inner, type) and issubclass(inner, BaseModel):
        required = {
            name: zero_value(info.annotation)
            for name, info in inner.model_fields.items()
            if info.is_required()
        }
        return inner.model_construct(**required)
    origin = get_origin(inner) or inner
    if origin in (dict, Mapping):
        return {}
    if origin in (list, Sequence):
        return []
    if origin is tuple:
        return ()
    if origin is set:
        return set()
    if inner in (str, int, float, bool, bytes):
        return inner()
    return None


def to_document(value: Any) -> Any:
    """Convert a value into the JSON-compatible form stored in documents."""
    try:
        return to_jsonable_python(value, by_alias=True, exclude_none=True)
    except PydanticSerializationError as exc:
        raise TypeMismatchError(
            f"Cannot store {type(value).__name__} in a document: {exc}"
        ) from exc


def _explicit(resource: object, name: str, setter: bool) -> Callable[..., Any] | None:
    name = name.lower()
    if name == "spec" and isinstance(resource, HasSpec):
        return resource.set_spec if setter else resource.get_spec
    if name == "status" and isinstance(resource, HasStatus):
        return resource.set_status if setter else resource.get_status
    return None


def _require_field(resource: object, name: str) -> tuple[str, FieldInfo]:
    found = find_field(resource, name) if isinstance(resource, BaseModel) else None
    if found is None:
        raise TypeMismatchError(
            f"{type(resource).__name__} has no '{name}' section"
        )
    return found


def get_document_section(resource: Unstructured, name: str) -> Any:
    if name not in resource.object:
        raise NotFoundError(name)
    return resource.object[name]


def set_document_section(resource: Unstructured, name: str, value: Any) -> None:
    resource.object[name] = to_document(value)


def get_typed_section(resource: object, name: str, *, zero_if_nil: bool = False) -> Any:
    """Read a section from a typed resource.

    A nil optional field returns ``None``, or a fresh zero value of the
    declared type when ``zero_if_nil`` is set. The resource is not modified
    either way.
    """
    getter = _explicit(resource, name, setter=False)
    if getter is not None:
        return getter()
    field_name, info = _require_field(resource, name)
    value = getattr(resource, field_name)
    if value is None and zero_if_nil:
        inner, _ = split_optional(info.annotation)
        return zero_value(inner)
    return value


def set_typed_section(resource: object, name: str, value: Any) -> None:
    setter = _explicit(resource, name, setter=True)
    if setter is not None:
        setter(value)
        return
    field_name, info = _require_field(resource, name)
    try:
        checked = TypeAdapter(info.annotation).validate_python(value, strict=True)
    except ValidationError as exc:
        raise TypeMismatchError(
            f"Cannot assign {type(value).__name__} to '{name}' of {type(resource).__name__}"
        ) from exc
    setattr(resource, field_name, checked)


def get_section(resource: object, name: str, *, zero_if_nil: bool = False) -> Any:
    if classify(resource) is Representation.UNTYPED:
        return get_document_section(resource, name)  # type: ignore[arg-type]
    return get_typed_section(resource, name, zero_if_nil=zero_if_nil)


def set_section(resource: object, name: str, value: Any) -> None:
    if classify(resource) is Representation.UNTYPED:
        set_document_section(resource, name, value)  # type: ignore[arg-type]
    else:
        set_typed_section(resource, name, value)
