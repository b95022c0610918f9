"""Commit, change and commit-status API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import (
    GitCommitChanges,
    GitCommitRef,
    GitQueryCommitsCriteria,
    GitStatus,
)
from gitrest.api.query import QueryParameters


class CommitsAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        commit_id: str,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        change_count: int | None = None,
    ) -> GitCommitRef:
        query = QueryParameters().add_if_not_null("changeCount", change_count)
        data = await self._client.execute(
            route(
                "get_commit",
                ResourceIdentity(project, repository),
                route_values={"commitId": commit_id},
                query=query,
            )
        )
        return GitCommitRef(**data)

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        search_criteria: GitQueryCommitsCriteria | None = None,
        skip: int | None = None,
        top: int | None = None,
    ) -> list[GitCommitRef]:
        query = (
            QueryParameters()
            .add_model(search_criteria)
            .add_if_not_null("$skip", skip)
            .add_if_not_null("$top", top)
        )
        data = await self._client.execute(
            route("get_commits", ResourceIdentity(project, repository), query=query)
        )
        return [GitCommitRef(**c) for c in unwrap_list(data)]

    async def list_for_push(
        self,
        repository: RepositoryRef,
        push_id: int,
        project: ProjectRef = None,
        *,
        top: int | None = None,
        skip: int | None = None,
        include_links: bool | None = None,
    ) -> list[GitCommitRef]:
        query = (
            QueryParameters()
            .add("pushId", push_id)
            .add_if_not_null("top", top)
            .add_if_not_null("skip", skip)
            .add_if_not_null("includeLinks", include_links)
        )
        data = await self._client.execute(
            route("get_push_commits", ResourceIdentity(project, repository), query=query)
        )
        return [GitCommitRef(**c) for c in unwrap_list(data)]

    async def batch(
        self,
        repository: RepositoryRef,
        search_criteria: GitQueryCommitsCriteria,
        project: ProjectRef = None,
        *,
        skip: int | None = None,
        top: int | None = None,
    ) -> list[GitCommitRef]:
        query = (
            QueryParameters()
            .add_if_not_null("$skip", skip)
            .add_if_not_null("$top", top)
        )
        data = await self._client.execute(
            route(
                "get_commits_batch",
                ResourceIdentity(project, repository),
                query=query,
                body=search_criteria,
            )
        )
        return [GitCommitRef(**c) for c in unwrap_list(data)]

    async def changes(
        self,
        commit_id: str,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        top: int | None = None,
        skip: int | None = None,
    ) -> GitCommitChanges:
        query = (
            QueryParameters()
            .add_if_not_null("top", top)
            .add_if_not_null("skip", skip)
        )
        data = await self._client.execute(
            route(
                "get_changes",
                ResourceIdentity(project, repository),
                route_values={"commitId": commit_id},
                query=query,
            )
        )
        return GitCommitChanges(**data)

    async def statuses(
        self,
        commit_id: str,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        top: int | None = None,
        skip: int | None = None,
    ) -> list[GitStatus]:
        query = (
            QueryParameters()
            .add_if_not_null("top", top)
            .add_if_not_null("skip", skip)
        )
        data = await self._client.execute(
            route(
                "get_statuses",
                ResourceIdentity(project, repository),
                route_values={"commitId": commit_id},
                query=query,
            )
        )
        return [GitStatus(**s) for s in unwrap_list(data)]

    async def create_status(
        self,
        status: GitStatus,
        commit_id: str,
        repository: RepositoryRef,
        project: ProjectRef = None,
    ) -> GitStatus:
        data = await self._client.execute(
            route(
                "create_commit_status",
                ResourceIdentity(project, repository),
                route_values={"commitId": commit_id},
                body=status,
            )
        )
        return GitStatus(**data)
