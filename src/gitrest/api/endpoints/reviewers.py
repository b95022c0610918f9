"""Pull request reviewer API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import IdentityRefWithVote


class ReviewersAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def get(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        reviewer_id: str,
        project: ProjectRef = None,
    ) -> IdentityRefWithVote:
        data = await self._client.execute(
            route(
                "get_pull_request_reviewer",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id, "reviewerId": reviewer_id},
            )
        )
        return IdentityRefWithVote(**data)

    async def list(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
    ) -> list[IdentityRefWithVote]:
        data = await self._client.execute(
            route(
                "get_pull_request_reviewers",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
            )
        )
        return [IdentityRefWithVote(**r) for r in unwrap_list(data)]

    async def add(
        self,
        reviewer: IdentityRefWithVote,
        repository: RepositoryRef,
        pull_request_id: int,
        reviewer_id: str,
        project: ProjectRef = None,
    ) -> IdentityRefWithVote:
        data = await self._client.execute(
            route(
                "create_pull_request_reviewer",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id, "reviewerId": reviewer_id},
                body=reviewer,
            )
        )
        return IdentityRefWithVote(**data)

    async def add_many(
        self,
        reviewers: list[IdentityRefWithVote],
        repository: RepositoryRef,
        pull_request_id: int,
        project: ProjectRef = None,
    ) -> list[IdentityRefWithVote]:
        data = await self._client.execute(
            route(
                "create_pull_request_reviewers",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id},
                body=reviewers,
            )
        )
        return [IdentityRefWithVote(**r) for r in unwrap_list(data)]

    async def remove(
        self,
        repository: RepositoryRef,
        pull_request_id: int,
        reviewer_id: str,
        project: ProjectRef = None,
    ) -> None:
        await self._client.execute(
            route(
                "delete_pull_request_reviewer",
                ResourceIdentity(project, repository),
                route_values={"pullRequestId": pull_request_id, "reviewerId": reviewer_id},
            )
        )
