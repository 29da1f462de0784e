"""Annotation codec for provenance and blob reference records.

Annotations are the only free-form metadata channel on a resource, so the
structured records below are flattened into plain string entries:

* origin info becomes three keys, one per field;
* blob info becomes one ``"; "``-delimited string under a single key.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import BaseModel, field_validator

from resmeta.errors import BlobInfoParseError

ANNO_KEY_ORIGIN_NAME = "grafana.app/originName"
ANNO_KEY_ORIGIN_PATH = "grafana.app/originPath"
ANNO_KEY_ORIGIN_HASH = "grafana.app/originHash"
ANNO_KEY_FOLDER = "grafana.app/folder"
ANNO_KEY_BLOB = "grafana.app/blob"

ORIGIN_KEYS = (ANNO_KEY_ORIGIN_NAME, ANNO_KEY_ORIGIN_PATH, ANNO_KEY_ORIGIN_HASH)

_BLOB_SEPARATOR = "; "
_BLOB_FIELDS = ("size", "hash", "mime", "charset")
_SIZE_PATTERN = re.compile(r"-?[0-9]+")


class ResourceOriginInfo(BaseModel):
    """Where a resource was loaded from."""

    name: str = ""
    path: str = ""
    hash: str = ""


class BlobInfo(BaseModel):
    """Reference to binary content stored outside the resource."""

    uid: str
    size: int = 0
    hash: str = ""
    mime_type: str = ""
    charset: str = ""

    @field_validator("uid", "hash", "mime_type", "charset")
    @classmethod
    def validate_no_separator(cls, v: str) -> str:
        if _BLOB_SEPARATOR in v:
            raise ValueError(f"must not contain {_BLOB_SEPARATOR!r}")
        return v

    def encode(self) -> str:
        """Render as ``uid; size=..; hash=..; mime=..; charset=..``."""
        return _BLOB_SEPARATOR.join([
            self.uid,
            f"size={self.size}",
            f"hash={self.hash}",
            f"mime={self.mime_type}",
            f"charset={self.charset}",
        ])

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def parse(cls, text: str) -> BlobInfo:
        """Parse the output of :meth:`encode`.

        Raises BlobInfoParseError on any structural deviation.
        """
        parts = text.split(_BLOB_SEPARATOR)
        if len(parts) != len(_BLOB_FIELDS) + 1:
            raise BlobInfoParseError(
                text, f"expected {len(_BLOB_FIELDS) + 1} fields, got {len(parts)}",
            )
        values: dict[str, str] = {}
        for expected, part in zip(_BLOB_FIELDS, parts[1:]):
            key, sep, value = part.partition("=")
            if not sep:
                raise BlobInfoParseError(text, f"missing '=' in {part!r}")
            if key != expected:
                raise BlobInfoParseError(text, f"unexpected field {key!r}, wanted {expected!r}")
            values[key] = value
        if not _SIZE_PATTERN.fullmatch(values["size"]):
            raise BlobInfoParseError(text, f"size {values['size']!r} is not an integer")
        return cls(
            uid=parts[0],
            size=int(values["size"]),
            hash=values["hash"],
            mime_type=values["mime"],
            charset=values["charset"],
        )


def encode_origin(info: ResourceOriginInfo) -> dict[str, str]:
    """Flatten origin info into its three annotation entries."""
    return {
        ANNO_KEY_ORIGIN_NAME: info.name,
        ANNO_KEY_ORIGIN_PATH: info.path,
        ANNO_KEY_ORIGIN_HASH: info.hash,
    }


def decode_origin(
    annotations: Mapping[str, str],
) -> tuple[ResourceOriginInfo | None, bool]:
    """Rebuild origin info; ``(None, False)`` when no origin key is present."""
    if not any(key in annotations for key in ORIGIN_KEYS):
        return None, False
    info = ResourceOriginInfo(
        name=annotations.get(ANNO_KEY_ORIGIN_NAME, ""),
        path=annotations.get(ANNO_KEY_ORIGIN_PATH, ""),
        hash=annotations.get(ANNO_KEY_ORIGIN_HASH, ""),
    )
    return info, True
