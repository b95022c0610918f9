"""Tree API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import GitTreeRef
from gitrest.api.query import QueryParameters


class TreesAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef = None,
        *,
        project_id: str | None = None,
        recursive: bool | None = None,
        file_name: str | None = None,
    ) -> GitTreeRef:
        query = (
            QueryParameters()
            .add_if_not_empty("projectId", project_id)
            .add_if_not_null("recursive", recursive)
            .add_if_not_empty("fileName", file_name)
        )
        data = await self._client.execute(
            route(
                "get_tree",
                ResourceIdentity(project, repository),
                route_values={"sha1": sha1},
                query=query,
            )
        )
        return GitTreeRef(**data)

    async def get_zip(
        self,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef = None,
        *,
        project_id: str | None = None,
        recursive: bool | None = None,
        file_name: str | None = None,
    ) -> bytes:
        query = (
            QueryParameters()
            .add_if_not_empty("projectId", project_id)
            .add_if_not_null("recursive", recursive)
            .add_if_not_empty("fileName", file_name)
        )
        return await self._client.execute(
            route(
                "get_tree_zip",
                ResourceIdentity(project, repository),
                route_values={"sha1": sha1},
                query=query,
            )
        )
