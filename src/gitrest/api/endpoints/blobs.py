"""Blob API endpoints."""

from __future__ import annotations

from gitrest.api.client import GitClient
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import GitBlobRef
from gitrest.api.query import QueryParameters
from gitrest.api.routing import RequestSpec


class BlobsAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    def _spec(
        self,
        operation: str,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef,
        download: bool | None,
        file_name: str | None,
    ) -> RequestSpec:
        query = (
            QueryParameters()
            .add_if_not_null("download", download)
            .add_if_not_empty("fileName", file_name)
        )
        return route(
            operation,
            ResourceIdentity(project, repository),
            route_values={"sha1": sha1},
            query=query,
        )

    async def get(
        self,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef = None,
        *,
        download: bool | None = None,
        file_name: str | None = None,
    ) -> GitBlobRef:
        data = await self._client.execute(
            self._spec("get_blob", repository, sha1, project, download, file_name)
        )
        return GitBlobRef(**data)

    async def get_content(
        self,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef = None,
        *,
        download: bool | None = None,
        file_name: str | None = None,
    ) -> bytes:
        return await self._client.execute(
            self._spec("get_blob_content", repository, sha1, project, download, file_name)
        )

    async def get_zip(
        self,
        repository: RepositoryRef,
        sha1: str,
        project: ProjectRef = None,
        *,
        download: bool | None = None,
        file_name: str | None = None,
    ) -> bytes:
        return await self._client.execute(
            self._spec("get_blob_zip", repository, sha1, project, download, file_name)
        )

    async def get_many_zip(
        self,
        blob_ids: list[str],
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        filename: str | None = None,
    ) -> bytes:
        query = QueryParameters().add_if_not_empty("filename", filename)
        return await self._client.execute(
            route(
                "get_blobs_zip",
                ResourceIdentity(project, repository),
                query=query,
                body=blob_ids,
            )
        )
