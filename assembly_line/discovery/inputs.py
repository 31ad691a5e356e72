"""Typed record of the fields already confirmed during discovery.

Callers historically passed an open-ended dict (``{"targetAudience": ...}``).
``DiscoveryInputs`` gives those fields names and types while still accepting
such dicts, in camelCase or snake_case, and keeping unknown keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DiscoveryInputs(BaseModel):
    """Fields gathered so far in a discovery conversation.

    All fields are optional. Presence is checked with :meth:`has`, which treats
    ``None``, blank strings and empty collections as absent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    topic: str | None = None
    target_audience: str | None = Field(default=None, alias="targetAudience")
    goal: str | None = None
    uav_description: str | None = Field(default=None, alias="uavDescription")
    credentials: Any = None
    proof_points: Any = Field(default=None, alias="proofPoints")
    platforms: list[str] | None = None
    tone: str | None = None
    duration: str | None = None

    @field_validator(
        "topic", "target_audience", "goal", "uav_description", "tone", "duration", mode="before"
    )
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        # Values arrive untyped from chat extraction; keep them usable, never reject them.
        if not _is_present(value):
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple, set)):
            return ", ".join(str(item) for item in value)
        return str(value)

    @field_validator("platforms", mode="before")
    @classmethod
    def _platform_list(cls, value: Any) -> list[str] | None:
        if not _is_present(value):
            return None
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple, set)):
            return [str(item) for item in value]
        return [str(value)]

    @classmethod
    def coerce(cls, value: DiscoveryInputs | Mapping[str, Any] | None) -> DiscoveryInputs:
        """Build a DiscoveryInputs from whatever the caller holds.

        The argument is never mutated; a mapping is copied into a new model.
        """
        if value is None:
            return cls()
        if isinstance(value, DiscoveryInputs):
            return value
        return cls.model_validate(dict(value))

    def get(self, field_name: str) -> Any:
        """Return a field value by snake_case name, alias, or extra key."""
        name = _ALIAS_TO_FIELD.get(field_name, field_name)
        if name in type(self).model_fields:
            return getattr(self, name)
        return (self.model_extra or {}).get(field_name)

    def has(self, field_name: str) -> bool:
        """Whether a field holds a meaningful value.

        Stricter than plain truthiness: whitespace-only strings and empty
        lists, tuples, sets and dicts count as absent, the same as ``None``.
        """
        return _is_present(self.get(field_name))

    def with_value(self, field_name: str, value: Any) -> DiscoveryInputs:
        """Return a copy with one field set."""
        data = self.to_dict()
        data[_FIELD_TO_ALIAS.get(field_name, field_name)] = value
        return type(self).model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialise set fields using the camelCase keys callers persist.

        Values are JSON-safe: tuples and sets become lists.
        """
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return bool(value)


_FIELD_TO_ALIAS: dict[str, str] = {
    name: info.alias
    for name, info in DiscoveryInputs.model_fields.items()
    if info.alias is not None
}
_ALIAS_TO_FIELD: dict[str, str] = {alias: name for name, alias in _FIELD_TO_ALIAS.items()}
