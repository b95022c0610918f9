"""Push API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import GitPush, GitPushSearchCriteria
from gitrest.api.query import QueryParameters


class PushesAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        repository: RepositoryRef,
        push_id: int,
        project: ProjectRef = None,
        *,
        include_commits: int | None = None,
        include_ref_updates: bool | None = None,
    ) -> GitPush:
        query = (
            QueryParameters()
            .add_if_not_null("includeCommits", include_commits)
            .add_if_not_null("includeRefUpdates", include_ref_updates)
        )
        data = await self._client.execute(
            route(
                "get_push",
                ResourceIdentity(project, repository),
                route_values={"pushId": push_id},
                query=query,
            )
        )
        return GitPush(**data)

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        skip: int | None = None,
        top: int | None = None,
        search_criteria: GitPushSearchCriteria | None = None,
    ) -> list[GitPush]:
        query = (
            QueryParameters()
            .add_if_not_null("$skip", skip)
            .add_if_not_null("$top", top)
            .add_model(search_criteria)
        )
        data = await self._client.execute(
            route("get_pushes", ResourceIdentity(project, repository), query=query)
        )
        return [GitPush(**p) for p in unwrap_list(data)]

    async def create(
        self, push: GitPush, repository: RepositoryRef, project: ProjectRef = None
    ) -> GitPush:
        data = await self._client.execute(
            route("create_push", ResourceIdentity(project, repository), body=push)
        )
        return GitPush(**data)
