"""Ref API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import GitRef, GitRefUpdate, GitRefUpdateResult
from gitrest.api.query import QueryParameters


class RefsAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        filter: str | None = None,
        ref_type: str | None = None,
        include_links: bool | None = None,
    ) -> list[GitRef]:
        """List refs, optionally narrowed by a name prefix.

        ``ref_type`` ("heads", "tags") is sent as the filter as-is. Given
        together with ``filter`` it becomes its first segment, so
        ``ref_type="heads", filter="feature"`` asks for ``heads/feature``.
        """
        if ref_type:
            filter = f"{ref_type.rstrip('/')}/{filter}" if filter else ref_type
        query = (
            QueryParameters()
            .add_if_not_empty("filter", filter)
            .add_if_not_null("includeLinks", include_links)
        )
        data = await self._client.execute(
            route("get_refs", ResourceIdentity(project, repository), query=query)
        )
        return [GitRef(**r) for r in unwrap_list(data)]

    async def update(
        self,
        repository: RepositoryRef,
        ref_updates: list[GitRefUpdate],
        project: ProjectRef = None,
        *,
        project_id: str | None = None,
    ) -> list[GitRefUpdateResult]:
        query = QueryParameters().add_if_not_empty("projectId", project_id)
        data = await self._client.execute(
            route(
                "update_refs",
                ResourceIdentity(project, repository),
                query=query,
                body=ref_updates,
            )
        )
        return [GitRefUpdateResult(**r) for r in unwrap_list(data)]
