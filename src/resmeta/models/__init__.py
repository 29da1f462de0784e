"""Pydantic data models for resources and their metadata."""

from resmeta.models.object import GroupVersionKind, MetaObject, ObjectMeta, Resource, Unstructured
from resmeta.models.secure import SecureValue

__all__ = [
    "GroupVersionKind",
    "MetaObject",
    "ObjectMeta",
    "Resource",
    "SecureValue",
    "Unstructured",
]
