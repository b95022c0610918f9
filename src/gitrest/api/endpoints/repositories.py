"""Repository API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import (
    GitRepository,
    GitRepositoryCreateOptions,
    GitRepositoryUpdateOptions,
)
from gitrest.api.query import QueryParameters


class RepositoriesAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def list(
        self, project: ProjectRef = None, *, include_links: bool | None = None
    ) -> list[GitRepository]:
        query = QueryParameters().add_if_not_null("includeLinks", include_links)
        data = await self._client.execute(
            route("get_repositories", ResourceIdentity(project), query=query)
        )
        return [GitRepository(**r) for r in unwrap_list(data)]

    async def get(
        self, repository: RepositoryRef, project: ProjectRef = None
    ) -> GitRepository:
        data = await self._client.execute(
            route("get_repository", ResourceIdentity(project, repository))
        )
        return GitRepository(**data)

    async def create(
        self, options: GitRepositoryCreateOptions, project: ProjectRef = None
    ) -> GitRepository:
        data = await self._client.execute(
            route("create_repository", ResourceIdentity(project), body=options)
        )
        return GitRepository(**data)

    async def update(
        self,
        repository: RepositoryRef,
        options: GitRepositoryUpdateOptions,
        project: ProjectRef = None,
    ) -> GitRepository:
        data = await self._client.execute(
            route("update_repository", ResourceIdentity(project, repository), body=options)
        )
        return GitRepository(**data)

    async def delete(self, repository: RepositoryRef, project: ProjectRef = None) -> None:
        await self._client.execute(
            route("delete_repository", ResourceIdentity(project, repository))
        )
