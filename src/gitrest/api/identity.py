"""Project and repository identity, by name or by id."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from uuid import UUID

from gitrest.api.exceptions import InvalidIdentityError

NIL_UUID = UUID(int=0)

ProjectRef = Union[str, UUID, None]
RepositoryRef = Union[str, UUID]


def normalize_ref(value: object, name: str, *, required: bool = False) -> str | None:
    """Turn a name-or-id reference into its route value.

    Returns ``None`` for an absent reference. Empty strings count as absent
    unless ``required`` is set, in which case they are rejected.
    """
    if value is None:
        if required:
            raise InvalidIdentityError(f"{name} is required")
        return None
    if isinstance(value, UUID):
        if value == NIL_UUID:
            raise InvalidIdentityError(f"{name} must not be the empty id")
        return str(value)
    if isinstance(value, str):
        if not value:
            if required:
                raise InvalidIdentityError(f"{name} must not be empty")
            return None
        return value
    raise InvalidIdentityError(
        f"{name} must be a name or a UUID, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class ResourceIdentity:
    """Where a resource lives: an optional project and a repository."""

    project: ProjectRef = None
    repository: RepositoryRef | None = None

    def route_values(self) -> dict[str, str]:
        values: dict[str, str] = {}
        project = normalize_ref(self.project, "project")
        if project is not None:
            values["project"] = project
        if self.repository is not None:
            values["repositoryId"] = normalize_ref(
                self.repository, "repository", required=True
            )
        return values
