"""Pydantic models for Git REST API payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class GitModel(BaseModel):
    """Base model: camelCase on the wire, unknown fields ignored."""
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _none_to_list(v: list | None) -> list:
    """Coerce None to empty list for API fields that may return null."""
    return v if v is not None else []


class VersionControlRecursionType(str, Enum):
    NONE = "none"
    ONE_LEVEL = "oneLevel"
    ONE_LEVEL_PLUS_NESTED_EMPTY_FOLDERS = "oneLevelPlusNestedEmptyFolders"
    FULL = "full"


class GitVersionType(str, Enum):
    BRANCH = "branch"
    TAG = "tag"
    COMMIT = "commit"
    INDEX = "index"


class GitVersionOptions(str, Enum):
    NONE = "none"
    PREVIOUS_CHANGE = "previousChange"
    FIRST_PARENT = "firstParent"


class PullRequestStatus(str, Enum):
    NOT_SET = "notSet"
    ACTIVE = "active"
    ABANDONED = "abandoned"
    COMPLETED = "completed"
    ALL = "all"


class GitStatusState(str, Enum):
    NOT_SET = "notSet"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ERROR = "error"


class TeamProjectReference(GitModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    state: str | None = None
    revision: int | None = None


class IdentityRef(GitModel):
    id: str | None = None
    display_name: str | None = None
    unique_name: str | None = None
    url: str | None = None
    image_url: str | None = None


class IdentityRefWithVote(IdentityRef):
    vote: int | None = None
    is_required: bool | None = None
    voted_for: list[IdentityRefWithVote] | None = None


class ResourceRef(GitModel):
    id: str
    url: str | None = None


class GitRepository(GitModel):
    id: str
    name: str
    url: str | None = None
    project: TeamProjectReference | None = None
    default_branch: str | None = None
    remote_url: str | None = None
    links: dict[str, Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("_links", "links"),
        serialization_alias="_links",
    )


class GitRepositoryCreateOptions(GitModel):
    name: str
    project: TeamProjectReference | None = None


class GitRepositoryUpdateOptions(GitModel):
    name: str | None = None
    default_branch: str | None = None


class GitRef(GitModel):
    name: str
    object_id: str | None = None
    peeled_object_id: str | None = None
    url: str | None = None

    @property
    def short_name(self) -> str:
        for prefix in ("refs/heads/", "refs/tags/"):
            if self.name.startswith(prefix):
                return self.name[len(prefix):]
        return self.name


class GitRefUpdate(GitModel):
    name: str
    old_object_id: str
    new_object_id: str
    repository_id: str | None = None
    is_locked: bool | None = None


class GitRefUpdateResult(GitModel):
    name: str
    old_object_id: str | None = None
    new_object_id: str | None = None
    success: bool = False
    update_status: str | None = None
    custom_message: str | None = None
    rejected_by: str | None = None
    repository_id: str | None = None
    is_locked: bool | None = None


class GitVersionDescriptor(GitModel):
    version: str | None = None
    version_type: GitVersionType | None = None
    version_options: GitVersionOptions | None = None


class GitUserDate(GitModel):
    name: str | None = None
    email: str | None = None
    date: datetime | None = None


class ItemContent(GitModel):
    content: str
    content_type: str = "rawtext"


class GitItem(GitModel):
    path: str | None = None
    object_id: str | None = None
    commit_id: str | None = None
    git_object_type: str | None = None
    is_folder: bool = False
    url: str | None = None
    content_metadata: dict[str, Any] | None = None
    latest_processed_change: GitCommitRef | None = None

    @field_validator("is_folder", mode="before")
    @classmethod
    def _coerce_folder(cls, v):
        return v if v is not None else False


class GitChange(GitModel):
    change_type: str | None = None
    item: GitItem | None = None
    new_content: ItemContent | None = None
    source_server_item: str | None = None
    url: str | None = None


class GitCommitRef(GitModel):
    commit_id: str | None = None
    author: GitUserDate | None = None
    committer: GitUserDate | None = None
    comment: str | None = None
    comment_truncated: bool | None = None
    change_counts: dict[str, int] | None = None
    changes: list[GitChange] | None = None
    parents: list[str] = Field(default_factory=list)
    url: str | None = None
    remote_url: str | None = None

    @field_validator("parents", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)

    @property
    def short_id(self) -> str:
        return (self.commit_id or "")[:8]


class GitCommitChanges(GitModel):
    change_counts: dict[str, int] | None = None
    changes: list[GitChange] = Field(default_factory=list)

    @field_validator("changes", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)


class GitQueryCommitsCriteria(GitModel):
    ids: list[str] | None = None
    item_path: str | None = None
    item_version: GitVersionDescriptor | None = None
    compare_version: GitVersionDescriptor | None = None
    from_commit_id: str | None = None
    to_commit_id: str | None = None
    author: str | None = None
    user: str | None = None
    from_date: str | None = None
    to_date: str | None = None
    exclude_deletes: bool | None = None


class GitPush(GitModel):
    push_id: int | None = None
    date: datetime | None = None
    pushed_by: IdentityRef | None = None
    ref_updates: list[GitRefUpdate] | None = None
    commits: list[GitCommitRef] | None = None
    repository: GitRepository | None = None
    url: str | None = None


class GitPushSearchCriteria(GitModel):
    from_date: str | None = None
    to_date: str | None = None
    pusher_id: str | None = None
    ref_name: str | None = None
    include_ref_updates: bool | None = None
    include_links: bool | None = None


class GitItemDescriptor(GitModel):
    path: str
    version: str | None = None
    version_type: GitVersionType | None = None
    version_options: GitVersionOptions | None = None
    recursion_level: VersionControlRecursionType | None = None


class GitItemRequestData(GitModel):
    item_descriptors: list[GitItemDescriptor]
    include_content_metadata: bool | None = None
    latest_processed_change: bool | None = None
    include_links: bool | None = None


class GitBlobRef(GitModel):
    object_id: str
    size: int | None = None
    url: str | None = None


class GitTreeEntryRef(GitModel):
    object_id: str
    relative_path: str
    mode: str | None = None
    git_object_type: str | None = None
    size: int | None = None
    url: str | None = None


class GitTreeRef(GitModel):
    object_id: str
    size: int | None = None
    tree_entries: list[GitTreeEntryRef] = Field(default_factory=list)
    url: str | None = None

    @field_validator("tree_entries", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)


class GitBranchStats(GitModel):
    name: str
    ahead_count: int = 0
    behind_count: int = 0
    is_base_version: bool = False
    commit: GitCommitRef | None = None


class GitPullRequestSearchCriteria(GitModel):
    repository_id: str | None = None
    creator_id: str | None = None
    reviewer_id: str | None = None
    status: PullRequestStatus | None = None
    source_ref_name: str | None = None
    target_ref_name: str | None = None
    include_links: bool | None = None


class GitPullRequest(GitModel):
    pull_request_id: int | None = None
    code_review_id: int | None = None
    repository: GitRepository | None = None
    status: PullRequestStatus | None = None
    created_by: IdentityRef | None = None
    creation_date: datetime | None = None
    closed_date: datetime | None = None
    title: str | None = None
    description: str | None = None
    source_ref_name: str | None = None
    target_ref_name: str | None = None
    merge_status: str | None = None
    merge_id: str | None = None
    last_merge_source_commit: GitCommitRef | None = None
    last_merge_target_commit: GitCommitRef | None = None
    reviewers: list[IdentityRefWithVote] = Field(default_factory=list)
    commits: list[GitCommitRef] | None = None
    url: str | None = None

    @field_validator("reviewers", mode="before")
    @classmethod
    def _coerce_lists(cls, v):
        return _none_to_list(v)


class GitStatusContext(GitModel):
    name: str
    genre: str | None = None


class GitStatus(GitModel):
    id: int | None = None
    state: GitStatusState = GitStatusState.NOT_SET
    description: str | None = None
    context: GitStatusContext | None = None
    target_url: str | None = None
    created_by: IdentityRef | None = None
    creation_date: datetime | None = None


# Fix forward references
IdentityRefWithVote.model_rebuild()
GitItem.model_rebuild()
