"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class ResourceMetaError(Exception):
    """Base exception for resmeta."""

    exit_code: int = 1


class InvalidInputError(ResourceMetaError):
    """The object cannot be wrapped by a metadata accessor."""

    exit_code = 2


class NotFoundError(ResourceMetaError):
    """A section key is absent from an untyped document."""

    exit_code = 3

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f"Section '{section}' not found")


class TypeMismatchError(ResourceMetaError):
    """A value does not fit the declared shape of a section."""

    exit_code = 4


class KeyNotFoundError(ResourceMetaError):
    """A secure value key is not declared on a fixed secure record."""

    exit_code = 5

    def __init__(self, key: str, allowed: list[str] | None = None) -> None:
        self.key = key
        self.allowed = allowed or []
        msg = f"Secure key '{key}' not found"
        if self.allowed:
            msg += f" (allowed: {', '.join(self.allowed)})"
        super().__init__(msg)


class ResourceFormatError(ResourceMetaError):
    """A stored value is not in the expected textual format."""

    exit_code = 6


class BlobInfoParseError(ResourceFormatError):
    """A blob annotation could not be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid blob info {text!r}: {reason}")


class UnsupportedError(ResourceMetaError):
    """The resource has no secure-capable section."""

    exit_code = 7


class ConfigurationError(ResourceMetaError):
    """Invalid or missing CLI configuration."""

    exit_code = 8


def error_handler(func: F) -> F:
    """Decorator that catches ResourceMetaError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ResourceMetaError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
