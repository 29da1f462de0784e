"""Secure value model."""

from __future__ import annotations

from pydantic import BaseModel


class SecureValue(BaseModel):
    """Either a plaintext value or a reference to a stored secret.

    Serialized as ``{"value": ...}`` or ``{"guid": ...}``; unset fields are
    left out of the document form.
    """

    value: str | None = None
    guid: str | None = None

    def is_zero(self) -> bool:
        return not self.value and not self.guid

    def to_document(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)
