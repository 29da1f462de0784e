"""resmeta: uniform metadata access for typed and untyped resources."""

from resmeta.accessor import MetaAccessor
from resmeta.annotations import BlobInfo, ResourceOriginInfo, decode_origin, encode_origin
from resmeta.models import GroupVersionKind, ObjectMeta, Resource, SecureValue, Unstructured

__version__ = "0.1.0"

__all__ = [
    "BlobInfo",
    "GroupVersionKind",
    "MetaAccessor",
    "ObjectMeta",
    "Resource",
    "ResourceOriginInfo",
    "SecureValue",
    "Unstructured",
    "decode_origin",
    "encode_origin",
]
