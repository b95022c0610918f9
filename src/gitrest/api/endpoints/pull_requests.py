"""Pull request API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import (
    GitCommitRef,
    GitPullRequest,
    GitPullRequestSearchCriteria,
    ResourceRef,
)
from gitrest.api.query import QueryParameters


def _search_query(
    search_criteria: GitPullRequestSearchCriteria | None,
    max_comment_length: int | None,
    skip: int | None,
    top: int | None,
) -> QueryParameters:
    return (
        QueryParameters()
        .add_model(search_criteria)
        .add_if_not_null("maxCommentLength", max_comment_length)
        .add_if_not_null("$skip", skip)
        .add_if_not_null("$top", top)
    )


class PullRequestsAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
        *,
        max_comment_length: int | None = None,
        skip: int | None = None,
        top: int | None = None,
        include_commits: bool | None = None,
    ) -> GitPullRequest:
        query = (
            QueryParameters()
            .add_if_not_null("maxCommentLength", max_comment_length)
            .add_if_not_null("$skip", skip)
            .add_if_not_null("$top", top)
            .add_if_not_null("includeCommits", include_commits)
        )
        data = await self._client.execute(
            route(
                "get_pull_request",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
                query=query,
            )
        )
        return GitPullRequest(**data)

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        search_criteria: GitPullRequestSearchCriteria | None = None,
        max_comment_length: int | None = None,
        skip: int | None = None,
        top: int | None = None,
    ) -> list[GitPullRequest]:
        data = await self._client.execute(
            route(
                "get_pull_requests",
                ResourceIdentity(project, repository),
                query=_search_query(search_criteria, max_comment_length, skip, top),
            )
        )
        return [GitPullRequest(**pr) for pr in unwrap_list(data)]

    async def list_by_project(
        self,
        project: ProjectRef,
        *,
        search_criteria: GitPullRequestSearchCriteria | None = None,
        max_comment_length: int | None = None,
        skip: int | None = None,
        top: int | None = None,
    ) -> list[GitPullRequest]:
        data = await self._client.execute(
            route(
                "get_pull_requests_by_project",
                ResourceIdentity(project),
                query=_search_query(search_criteria, max_comment_length, skip, top),
            )
        )
        return [GitPullRequest(**pr) for pr in unwrap_list(data)]

    async def create(
        self,
        pull_request: GitPullRequest,
        repository: RepositoryRef,
        project: ProjectRef = None,
    ) -> GitPullRequest:
        data = await self._client.execute(
            route(
                "create_pull_request",
                ResourceIdentity(project, repository),
                body=pull_request,
            )
        )
        return GitPullRequest(**data)

    async def update(
        self,
        pull_request: GitPullRequest,
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
    ) -> GitPullRequest:
        data = await self._client.execute(
            route(
                "update_pull_request",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
                body=pull_request,
            )
        )
        return GitPullRequest(**data)

    async def commits(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
    ) -> list[GitCommitRef]:
        data = await self._client.execute(
            route(
                "get_pull_request_commits",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
            )
        )
        return [GitCommitRef(**c) for c in unwrap_list(data)]

    async def work_items(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
        *,
        commits_top: int | None = None,
        commits_skip: int | None = None,
    ) -> list[ResourceRef]:
        query = (
            QueryParameters()
            .add_if_not_null("commitsTop", commits_top)
            .add_if_not_null("commitsSkip", commits_skip)
        )
        data = await self._client.execute(
            route(
                "get_pull_request_work_items",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
                query=query,
            )
        )
        return [ResourceRef(**w) for w in unwrap_list(data)]
