"""Ordered query-string builder with add-if-present semantics."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterator
from uuid import UUID

from gitrest.api.models import GitModel


def format_value(value: Any) -> str:
    """Render a single query value the way the service expects it on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value)
    return str(value)


class QueryParameters:
    """Query parameters kept in insertion order.

    Absent values never produce a key: ``add_if_not_null`` skips ``None`` and
    ``add_if_not_empty`` also skips ``""``.
    """

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def add(self, key: str, value: Any) -> QueryParameters:
        self._items.append((key, format_value(value)))
        return self

    def add_if_not_null(self, key: str, value: Any) -> QueryParameters:
        if value is not None:
            self.add(key, value)
        return self

    def add_if_not_empty(self, key: str, value: str | None) -> QueryParameters:
        if value:
            self.add(key, value)
        return self

    def add_model(self, model: GitModel | None, prefix: str | None = None) -> QueryParameters:
        """Expand a model's non-null fields into parameters.

        Keys are the fields' wire names, joined to ``prefix`` with a dot when
        one is given. Nested models expand recursively.
        """
        if model is None:
            return self
        self._add_mapping(model.to_wire(), prefix)
        return self

    def _add_mapping(self, data: dict[str, Any], prefix: str | None) -> None:
        for key, value in data.items():
            name = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                self._add_mapping(value, name)
            elif isinstance(value, str):
                self.add_if_not_empty(name, value)
            else:
                self.add_if_not_null(name, value)

    def items(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._items)

    def to_dict(self) -> dict[str, str]:
        return dict(self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._items)

    def __repr__(self) -> str:
        return f"QueryParameters({self._items!r})"
