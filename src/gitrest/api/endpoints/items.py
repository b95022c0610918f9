"""Item (file and folder) API endpoints.

One resource serves item metadata, raw content, text and zip archives; the
operations differ only in the media type they accept.
"""

from __future__ import annotations

from gitrest.api.client import GitClient, unwrap_list
from gitrest.api.endpoints.locations import route
from gitrest.api.identity import ProjectRef, RepositoryRef, ResourceIdentity
from gitrest.api.models import (
    GitItem,
    GitItemRequestData,
    GitVersionDescriptor,
    VersionControlRecursionType,
)
from gitrest.api.query import QueryParameters
from gitrest.api.routing import RequestSpec


def _item_query(
    *,
    path: str | None = None,
    scope_path: str | None = None,
    recursion_level: VersionControlRecursionType | None = None,
    include_content_metadata: bool | None = None,
    latest_processed_change: bool | None = None,
    download: bool | None = None,
    include_links: bool | None = None,
    version_descriptor: GitVersionDescriptor | None = None,
) -> QueryParameters:
    return (
        QueryParameters()
        .add_if_not_empty("path", path)
        .add_if_not_empty("scopePath", scope_path)
        .add_if_not_null("recursionLevel", recursion_level)
        .add_if_not_null("includeContentMetadata", include_content_metadata)
        .add_if_not_null("latestProcessedChange", latest_processed_change)
        .add_if_not_null("download", download)
        .add_if_not_null("includeLinks", include_links)
        .add_model(version_descriptor)
    )


class ItemsAPI:
    def __init__(self, client: GitClient) -> None:
        self._client = client

    def _spec(
        self,
        operation: str,
        repository: RepositoryRef,
        project: ProjectRef,
        path: str | None,
        **kwargs,
    ) -> RequestSpec:
        return route(
            operation,
            ResourceIdentity(project, repository),
            query=_item_query(path=path, **kwargs),
        )

    async def get(
        self,
        repository: RepositoryRef,
        path: str,
        project: ProjectRef = None,
        *,
        scope_path: str | None = None,
        recursion_level: VersionControlRecursionType | None = None,
        include_content_metadata: bool | None = None,
        latest_processed_change: bool | None = None,
        download: bool | None = None,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> GitItem:
        data = await self._client.execute(
            self._spec(
                "get_item",
                repository,
                project,
                path,
                scope_path=scope_path,
                recursion_level=recursion_level,
                include_content_metadata=include_content_metadata,
                latest_processed_change=latest_processed_change,
                download=download,
                version_descriptor=version_descriptor,
            )
        )
        return GitItem(**data)

    async def get_content(
        self,
        repository: RepositoryRef,
        path: str,
        project: ProjectRef = None,
        *,
        scope_path: str | None = None,
        recursion_level: VersionControlRecursionType | None = None,
        include_content_metadata: bool | None = None,
        latest_processed_change: bool | None = None,
        download: bool | None = None,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> bytes:
        return await self._client.execute(
            self._spec(
                "get_item_content",
                repository,
                project,
                path,
                scope_path=scope_path,
                recursion_level=recursion_level,
                include_content_metadata=include_content_metadata,
                latest_processed_change=latest_processed_change,
                download=download,
                version_descriptor=version_descriptor,
            )
        )

    async def get_text(
        self,
        repository: RepositoryRef,
        path: str,
        project: ProjectRef = None,
        *,
        scope_path: str | None = None,
        recursion_level: VersionControlRecursionType | None = None,
        include_content_metadata: bool | None = None,
        latest_processed_change: bool | None = None,
        download: bool | None = None,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> str:
        return await self._client.execute(
            self._spec(
                "get_item_text",
                repository,
                project,
                path,
                scope_path=scope_path,
                recursion_level=recursion_level,
                include_content_metadata=include_content_metadata,
                latest_processed_change=latest_processed_change,
                download=download,
                version_descriptor=version_descriptor,
            )
        )

    async def get_zip(
        self,
        repository: RepositoryRef,
        path: str | None = None,
        project: ProjectRef = None,
        *,
        scope_path: str | None = None,
        recursion_level: VersionControlRecursionType | None = None,
        include_content_metadata: bool | None = None,
        latest_processed_change: bool | None = None,
        download: bool | None = None,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> bytes:
        return await self._client.execute(
            self._spec(
                "get_item_zip",
                repository,
                project,
                path,
                scope_path=scope_path,
                recursion_level=recursion_level,
                include_content_metadata=include_content_metadata,
                latest_processed_change=latest_processed_change,
                download=download,
                version_descriptor=version_descriptor,
            )
        )

    async def list(
        self,
        repository: RepositoryRef,
        project: ProjectRef = None,
        *,
        scope_path: str | None = None,
        recursion_level: VersionControlRecursionType | None = None,
        include_content_metadata: bool | None = None,
        latest_processed_change: bool | None = None,
        download: bool | None = None,
        include_links: bool | None = None,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> list[GitItem]:
        data = await self._client.execute(
            self._spec(
                "get_items",
                repository,
                project,
                None,
                scope_path=scope_path,
                recursion_level=recursion_level,
                include_content_metadata=include_content_metadata,
                latest_processed_change=latest_processed_change,
                download=download,
                include_links=include_links,
                version_descriptor=version_descriptor,
            )
        )
        return [GitItem(**i) for i in unwrap_list(data)]

    async def batch(
        self,
        request_data: GitItemRequestData,
        repository: RepositoryRef,
        project: ProjectRef = None,
    ) -> list[list[GitItem]]:
        data = await self._client.execute(
            route(
                "get_items_batch",
                ResourceIdentity(project, repository),
                body=request_data,
            )
        )
        return [[GitItem(**i) for i in group] for group in unwrap_list(data)]

    async def get_metadata(
        self,
        repository: RepositoryRef,
        path: str,
        project: ProjectRef = None,
        *,
        include_content_metadata: bool = False,
        latest_processed_change: bool = False,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> GitItem:
        """Metadata for a single item, without recursing or downloading."""
        return await self.get(
            repository,
            path,
            project,
            recursion_level=VersionControlRecursionType.NONE,
            include_content_metadata=include_content_metadata,
            latest_processed_change=latest_processed_change,
            download=False,
            version_descriptor=version_descriptor,
        )

    async def download_zip(
        self,
        repository: RepositoryRef,
        scope_path: str,
        project: ProjectRef = None,
        *,
        version_descriptor: GitVersionDescriptor | None = None,
    ) -> bytes:
        """Everything under ``scope_path`` as a zip archive."""
        return await self.get_zip(
            repository,
            None,
            project,
            scope_path=scope_path,
            recursion_level=VersionControlRecursionType.FULL,
            include_content_metadata=False,
            latest_processed_change=False,
            download=True,
            version_descriptor=version_descriptor,
        )
