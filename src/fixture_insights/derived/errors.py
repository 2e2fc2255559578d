from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class InvalidPayloadError(TypeError):
    """Top-level input was not the list/mapping a derived view requires.

    Missing or malformed *fields* never raise; only a structurally wrong
    container does.
    """

    message: str
    context: dict[str, object] | None = None

    def __str__(self) -> str:  # pragma: no cover
        if not self.context:
            return self.message
        return f"{self.message} | context={self.context}"


def require_sequence(value: Any, *, name: str) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise InvalidPayloadError(
        f"Expected a list for {name}",
        context={"got": type(value).__name__},
    )


def require_mapping(value: Any, *, name: str) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    raise InvalidPayloadError(
        f"Expected an object for {name}",
        context={"got": type(value).__name__},
    )
