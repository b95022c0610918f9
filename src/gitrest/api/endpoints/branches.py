"""Branch statistics API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import GitBranchStats, GitVersionDescriptor
from gitrest.api.query import QueryParameters


class BranchesAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        repository: RepositoryRef,
        name: str,
        project: ProjectRef = None,
        *,
        base_version_descriptor: GitVersionDescriptor | None = None,
    ) -> GitBranchStats:
        query = (
            QueryParameters()
            .add_if_not_empty("name", name)
            .add_model(base_version_descriptor, prefix="baseVersionDescriptor")
        )
        data = await self._client.execute(
            route("get_branch", ResourceIdentity(project, repository), query=query)
        )
        return GitBranchStats(**data)

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        base_version_descriptor: GitVersionDescriptor | None = None,
    ) -> list[GitBranchStats]:
        query = QueryParameters().add_model(
            base_version_descriptor, prefix="baseVersionDescriptor"
        )
        data = await self._client.execute(
            route("get_branches", ResourceIdentity(project, repository), query=query)
        )
        return [GitBranchStats(**b) for b in unwrap_list(data)]
