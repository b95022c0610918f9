"""Static table of the Git REST endpoints the client knows about."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping
from uuid import UUID

from gitrest.api.identity import ResourceIdentity
from gitrest.api.query import QueryParameters
from gitrest.api.routing import (
    EndpointDescriptor,
    HttpMethod,
    MediaType,
    RequestSpec,
    build_request,
)

GET = HttpMethod.GET
POST = HttpMethod.POST
PUT = HttpMethod.PUT
PATCH = HttpMethod.PATCH
DELETE = HttpMethod.DELETE

JSON = MediaType.JSON
OCTET_STREAM = MediaType.OCTET_STREAM
ZIP = MediaType.ZIP
TEXT = MediaType.TEXT

REPOSITORIES = UUID("225f7195-f9c7-4d14-ab28-a83f7ff77e1f")
REFS = UUID("2d874a60-a811-4f62-9c9f-963a6ea0a55b")
COMMITS = UUID("c2570c3b-5b3f-41b8-98bf-5407bfde8d58")
COMMITS_BATCH = UUID("6400dfb2-0bcb-462b-b992-5a57f8f1416c")
CHANGES = UUID("5bf884f5-3e07-42e9-afb8-1b872267bf16")
PUSHES = UUID("ea98d07b-3c87-4971-8ede-a613694ffb55")
ITEMS = UUID("fb93c0db-47ed-4a31-8c20-47552878fb44")
ITEMS_BATCH = UUID("630fd2e4-fb88-4f85-ad21-13f3fd1fbca9")
BLOBS = UUID("7b28e929-2c99-405d-9c5c-6167a06e6816")
TREES = UUID("729f6437-6f92-44ec-8bee-273a7111063c")
BRANCH_STATS = UUID("d5b216de-d8d5-4d32-ae76-51df755b16d3")
PULL_REQUESTS = UUID("9946fd70-0d40-406e-b686-b4744cbbcc37")
PULL_REQUESTS_BY_PROJECT = UUID("a5d28130-9cd2-40fa-9f08-902e7daa9efb")
PULL_REQUEST_COMMITS = UUID("52823034-34a8-4576-922c-8d8b77e9e4c4")
PULL_REQUEST_WORK_ITEMS = UUID("0a637fcc-5370-4ce8-b0e8-98091f5f9482")
PULL_REQUEST_REVIEWERS = UUID("4b6702c7-aa35-4b89-9c96-b9abf6d3e540")
STATUSES = UUID("428dd4fb-fda5-4722-af02-9313b80305da")

_REPO = "{project}/_apis/git/repositories/{repositoryId}"
_PR = _REPO + "/pullRequests/{pullRequestId}"

COMMIT_ID = ("commitId",)
PUSH_ID = ("pushId",)
SHA1 = ("sha1",)
PR_ID = ("pullRequestId",)
REVIEWER_ID = ("pullRequestId", "reviewerId")

_TABLE = [
    # repositories
    EndpointDescriptor("get_repositories", REPOSITORIES, GET, _REPO),
    EndpointDescriptor("get_repository", REPOSITORIES, GET, _REPO),
    EndpointDescriptor("create_repository", REPOSITORIES, POST, _REPO, request_media_type=JSON),
    EndpointDescriptor("update_repository", REPOSITORIES, PATCH, _REPO, request_media_type=JSON),
    EndpointDescriptor("delete_repository", REPOSITORIES, DELETE, _REPO),
    # refs
    EndpointDescriptor("get_refs", REFS, GET, _REPO + "/refs"),
    EndpointDescriptor("update_refs", REFS, POST, _REPO + "/refs", request_media_type=JSON),
    # commits
    EndpointDescriptor("get_commit", COMMITS, GET, _REPO + "/commits/{commitId}", required=COMMIT_ID),
    EndpointDescriptor("get_commits", COMMITS, GET, _REPO + "/commits/{commitId}"),
    EndpointDescriptor("get_push_commits", COMMITS, GET, _REPO + "/commits/{commitId}"),
    EndpointDescriptor(
        "get_commits_batch", COMMITS_BATCH, POST, _REPO + "/commitsBatch", request_media_type=JSON
    ),
    EndpointDescriptor("get_changes", CHANGES, GET, _REPO + "/commits/{commitId}/changes"),
    # pushes
    EndpointDescriptor("get_push", PUSHES, GET, _REPO + "/pushes/{pushId}", required=PUSH_ID),
    EndpointDescriptor("get_pushes", PUSHES, GET, _REPO + "/pushes/{pushId}"),
    EndpointDescriptor("create_push", PUSHES, POST, _REPO + "/pushes/{pushId}", request_media_type=JSON),
    # items
    EndpointDescriptor("get_item", ITEMS, GET, _REPO + "/items"),
    EndpointDescriptor("get_items", ITEMS, GET, _REPO + "/items"),
    EndpointDescriptor("get_item_content", ITEMS, GET, _REPO + "/items", response_media_type=OCTET_STREAM),
    EndpointDescriptor("get_item_text", ITEMS, GET, _REPO + "/items", response_media_type=TEXT),
    EndpointDescriptor("get_item_zip", ITEMS, GET, _REPO + "/items", response_media_type=ZIP),
    EndpointDescriptor(
        "get_items_batch", ITEMS_BATCH, POST, _REPO + "/itemsBatch", request_media_type=JSON
    ),
    # blobs
    EndpointDescriptor("get_blob", BLOBS, GET, _REPO + "/blobs/{sha1}", required=SHA1),
    EndpointDescriptor(
        "get_blob_content", BLOBS, GET, _REPO + "/blobs/{sha1}",
        response_media_type=OCTET_STREAM, required=SHA1,
    ),
    EndpointDescriptor(
        "get_blob_zip", BLOBS, GET, _REPO + "/blobs/{sha1}", response_media_type=ZIP, required=SHA1
    ),
    EndpointDescriptor(
        "get_blobs_zip", BLOBS, POST, _REPO + "/blobs/{sha1}",
        request_media_type=JSON, response_media_type=ZIP,
    ),
    # trees
    EndpointDescriptor("get_tree", TREES, GET, _REPO + "/trees/{sha1}", required=SHA1),
    EndpointDescriptor(
        "get_tree_zip", TREES, GET, _REPO + "/trees/{sha1}", response_media_type=ZIP, required=SHA1
    ),
    # branch statistics
    EndpointDescriptor("get_branch", BRANCH_STATS, GET, _REPO + "/stats/branches"),
    EndpointDescriptor("get_branches", BRANCH_STATS, GET, _REPO + "/stats/branches"),
    # pull requests
    EndpointDescriptor("get_pull_request", PULL_REQUESTS, GET, _PR, required=PR_ID),
    EndpointDescriptor("get_pull_requests", PULL_REQUESTS, GET, _PR),
    EndpointDescriptor("create_pull_request", PULL_REQUESTS, POST, _PR, request_media_type=JSON),
    EndpointDescriptor(
        "update_pull_request", PULL_REQUESTS, PATCH, _PR, request_media_type=JSON, required=PR_ID
    ),
    EndpointDescriptor(
        "get_pull_requests_by_project", PULL_REQUESTS_BY_PROJECT, GET, "{project}/_apis/git/pullRequests"
    ),
    EndpointDescriptor("get_pull_request_commits", PULL_REQUEST_COMMITS, GET, _PR + "/commits"),
    EndpointDescriptor("get_pull_request_work_items", PULL_REQUEST_WORK_ITEMS, GET, _PR + "/workitems"),
    # pull request reviewers
    EndpointDescriptor(
        "get_pull_request_reviewer", PULL_REQUEST_REVIEWERS, GET, _PR + "/reviewers/{reviewerId}",
        required=REVIEWER_ID,
    ),
    EndpointDescriptor("get_pull_request_reviewers", PULL_REQUEST_REVIEWERS, GET, _PR + "/reviewers/{reviewerId}"),
    EndpointDescriptor(
        "create_pull_request_reviewer", PULL_REQUEST_REVIEWERS, PUT, _PR + "/reviewers/{reviewerId}",
        request_media_type=JSON, required=REVIEWER_ID,
    ),
    EndpointDescriptor(
        "create_pull_request_reviewers", PULL_REQUEST_REVIEWERS, POST, _PR + "/reviewers/{reviewerId}",
        request_media_type=JSON,
    ),
    EndpointDescriptor(
        "delete_pull_request_reviewer", PULL_REQUEST_REVIEWERS, DELETE, _PR + "/reviewers/{reviewerId}",
        required=REVIEWER_ID,
    ),
    # commit statuses
    EndpointDescriptor(
        "get_statuses", STATUSES, GET, _REPO + "/commits/{commitId}/statuses", api_version="2.0-preview.1"
    ),
    EndpointDescriptor(
        "create_commit_status", STATUSES, POST, _REPO + "/commits/{commitId}/statuses",
        api_version="2.0-preview.1", request_media_type=JSON,
    ),
]

ENDPOINTS: Mapping[str, EndpointDescriptor] = MappingProxyType({e.name: e for e in _TABLE})


def route(
    operation: str,
    identity: ResourceIdentity | None = None,
    *,
    route_values: Mapping[str, Any] | None = None,
    query: QueryParameters | None = None,
    body: Any = None,
) -> RequestSpec:
    """Look up ``operation`` in the table and resolve one call of it.

    Raises ``KeyError`` for an operation the table does not know.
    """
    return build_request(
        ENDPOINTS[operation],
        identity,
        route_values=route_values,
        query=query,
        body=body,
    )
