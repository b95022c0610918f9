"""Tests for API endpoint modules."""

from __future__ import annotations

import pytest

from gitrest.api.endpoints.blobs import BlobsAPI
from gitrest.api.endpoints.branches import BranchesAPI
from gitrest.api.endpoints.commits import CommitsAPI
from gitrest.api.endpoints.items import ItemsAPI
from gitrest.api.endpoints.pull_requests import PullRequestsAPI
from gitrest.api.endpoints.pushes import PushesAPI
from gitrest.api.endpoints.refs import RefsAPI
from gitrest.api.endpoints.repositories import RepositoriesAPI
from gitrest.api.endpoints.reviewers import ReviewersAPI
from gitrest.api.endpoints.trees import TreesAPI
from gitrest.api.exceptions import InvalidIdentityError
from gitrest.api.models import (
    GitItemDescriptor,
    GitItemRequestData,
    GitPullRequest,
    GitPullRequestSearchCriteria,
    GitPush,
    GitQueryCommitsCriteria,
    GitRefUpdate,
    GitRepositoryCreateOptions,
    GitStatus,
    GitStatusContext,
    GitStatusState,
    GitVersionDescriptor,
    GitVersionType,
    IdentityRefWithVote,
    PullRequestStatus,
    TeamProjectReference,
    VersionControlRecursionType,
)
from gitrest.api.routing import MediaType

from conftest import REPO_ID


def _sent(mock_client):
    """The RequestSpec passed to the transport by the last call."""
    return mock_client.execute.call_args.args[0]


class TestRepositoriesAPI:
    @pytest.mark.asyncio
    async def test_list(self, mock_client, sample_repository_data):
        mock_client.execute.return_value = {"count": 1, "value": [sample_repository_data]}
        repos = await RepositoriesAPI(mock_client).list("Fabrikam-Fiber-Git")
        assert len(repos) == 1
        assert repos[0].name == "Fabrikam"
        spec = _sent(mock_client)
        assert spec.endpoint.name == "get_repositories"
        assert spec.path == "Fabrikam-Fiber-Git/_apis/git/repositories"
        assert spec.query == ()

    @pytest.mark.asyncio
    async def test_list_empty_collection_wide(self, mock_client):
        mock_client.execute.return_value = {"count": 0, "value": []}
        repos = await RepositoriesAPI(mock_client).list(include_links=True)
        assert repos == []
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories"
        assert spec.query == (("includeLinks", "true"),)

    @pytest.mark.asyncio
    async def test_get_by_id(self, mock_client, sample_repository_data):
        mock_client.execute.return_value = sample_repository_data
        repo = await RepositoriesAPI(mock_client).get(REPO_ID)
        assert repo.id == str(REPO_ID)
        assert _sent(mock_client).route_values == {"repositoryId": str(REPO_ID)}

    @pytest.mark.asyncio
    async def test_create(self, mock_client, sample_repository_data):
        mock_client.execute.return_value = sample_repository_data
        options = GitRepositoryCreateOptions(
            name="Fabrikam", project=TeamProjectReference(id="6ce954b1")
        )
        await RepositoriesAPI(mock_client).create(options, "P")
        spec = _sent(mock_client)
        assert spec.method == "POST"
        assert spec.body is options
        assert spec.path == "P/_apis/git/repositories"

    @pytest.mark.asyncio
    async def test_delete(self, mock_client):
        await RepositoriesAPI(mock_client).delete("Fabrikam", "P")
        spec = _sent(mock_client)
        assert spec.method == "DELETE"
        assert spec.path == "P/_apis/git/repositories/Fabrikam"


class TestRefsAPI:
    @pytest.mark.asyncio
    async def test_list_with_filter(self, mock_client):
        mock_client.execute.return_value = {
            "count": 1,
            "value": [{"name": "refs/heads/main", "objectId": "23d0bc5b"}],
        }
        refs = await RefsAPI(mock_client).list("repo", filter="heads/")
        assert refs[0].short_name == "main"
        assert refs[0].object_id == "23d0bc5b"
        assert _sent(mock_client).query == (("filter", "heads/"),)

    @pytest.mark.asyncio
    async def test_empty_filter_is_omitted(self, mock_client):
        await RefsAPI(mock_client).list("repo", filter="")
        assert _sent(mock_client).query == ()

    @pytest.mark.asyncio
    async def test_ref_type_is_sent_as_filter(self, mock_client):
        await RefsAPI(mock_client).list("repo", ref_type="heads", include_links=False)
        assert _sent(mock_client).query == (("filter", "heads"), ("includeLinks", "false"))

    @pytest.mark.asyncio
    async def test_ref_type_with_filter(self, mock_client):
        await RefsAPI(mock_client).list("repo", ref_type="tags", filter="v1")
        assert _sent(mock_client).query_dict == {"filter": "tags/v1"}

    @pytest.mark.asyncio
    async def test_update(self, mock_client):
        mock_client.execute.return_value = {
            "count": 1,
            "value": [{"name": "refs/heads/x", "success": True, "updateStatus": "succeeded"}],
        }
        updates = [GitRefUpdate(name="refs/heads/x", old_object_id="0" * 40, new_object_id="a" * 40)]
        results = await RefsAPI(mock_client).update("repo", updates, "P")
        assert results[0].success is True
        spec = _sent(mock_client)
        assert spec.method == "POST"
        assert spec.body == updates
        assert spec.query == ()


class TestCommitsAPI:
    @pytest.mark.asyncio
    async def test_get(self, mock_client, sample_commit_data):
        mock_client.execute.return_value = sample_commit_data
        commit = await CommitsAPI(mock_client).get("be67f887", "repo", change_count=10)
        assert commit.short_id == "be67f887"
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories/repo/commits/be67f887"
        assert spec.query == (("changeCount", "10"),)

    @pytest.mark.asyncio
    async def test_list_with_criteria(self, mock_client, sample_commit_data):
        mock_client.execute.return_value = {"count": 1, "value": [sample_commit_data]}
        criteria = GitQueryCommitsCriteria(
            item_version=GitVersionDescriptor(version="main", version_type=GitVersionType.BRANCH),
            author="Norman",
        )
        commits = await CommitsAPI(mock_client).list("repo", "P", search_criteria=criteria, top=2)
        assert commits[0].author.name == "Norman Paulk"
        spec = _sent(mock_client)
        assert spec.path == "P/_apis/git/repositories/repo/commits"
        assert spec.query == (
            ("itemVersion.version", "main"),
            ("itemVersion.versionType", "branch"),
            ("author", "Norman"),
            ("$top", "2"),
        )

    @pytest.mark.asyncio
    async def test_list_for_push(self, mock_client):
        await CommitsAPI(mock_client).list_for_push("repo", 14, top=5)
        assert _sent(mock_client).query == (("pushId", "14"), ("top", "5"))

    @pytest.mark.asyncio
    async def test_batch_posts_criteria(self, mock_client):
        criteria = GitQueryCommitsCriteria(ids=["a", "b"])
        await CommitsAPI(mock_client).batch("repo", criteria, skip=0)
        spec = _sent(mock_client)
        assert spec.endpoint.name == "get_commits_batch"
        assert spec.method == "POST"
        assert spec.body is criteria
        assert spec.query == (("$skip", "0"),)

    @pytest.mark.asyncio
    async def test_changes(self, mock_client):
        mock_client.execute.return_value = {
            "changeCounts": {"Add": 1},
            "changes": [{"changeType": "add", "item": {"path": "/README.md"}}],
        }
        changes = await CommitsAPI(mock_client).changes("abc", "repo")
        assert changes.changes[0].item.path == "/README.md"
        assert _sent(mock_client).path == "_apis/git/repositories/repo/commits/abc/changes"

    @pytest.mark.asyncio
    async def test_create_status(self, mock_client):
        mock_client.execute.return_value = {"id": 1, "state": "succeeded"}
        status = GitStatus(
            state=GitStatusState.SUCCEEDED,
            context=GitStatusContext(name="build", genre="ci"),
        )
        created = await CommitsAPI(mock_client).create_status(status, "abc", "repo")
        assert created.state is GitStatusState.SUCCEEDED
        spec = _sent(mock_client)
        assert spec.endpoint.api_version == "2.0-preview.1"
        assert spec.path == "_apis/git/repositories/repo/commits/abc/statuses"


    @pytest.mark.asyncio
    @pytest.mark.parametrize("commit_id", ["", None])
    async def test_get_without_commit_id(self, mock_client, commit_id):
        with pytest.raises(InvalidIdentityError):
            await CommitsAPI(mock_client).get(commit_id, "repo")
        mock_client.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_statuses(self, mock_client):
        mock_client.execute.return_value = {
            "count": 1,
            "value": [{"id": 1, "state": "failed", "context": {"name": "build"}}],
        }
        statuses = await CommitsAPI(mock_client).statuses("abc", "repo", "P", top=3)
        assert statuses[0].state is GitStatusState.FAILED
        assert statuses[0].context.name == "build"
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.api_version == "2.0-preview.1"
        assert spec.endpoint.response_media_type is MediaType.JSON
        assert spec.path == "P/_apis/git/repositories/repo/commits/abc/statuses"
        assert spec.query == (("top", "3"),)


class TestPushesAPI:
    @pytest.mark.asyncio
    async def test_get(self, mock_client):
        mock_client.execute.return_value = {"pushId": 14, "date": "2014-01-29T23:33:15Z"}
        push = await PushesAPI(mock_client).get("repo", 14, include_ref_updates=True)
        assert push.push_id == 14
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories/repo/pushes/14"
        assert spec.query == (("includeRefUpdates", "true"),)

    @pytest.mark.asyncio
    async def test_list(self, mock_client):
        mock_client.execute.return_value = {"count": 0, "value": []}
        await PushesAPI(mock_client).list("repo", skip=None, top=10)
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories/repo/pushes"
        assert spec.query == (("$top", "10"),)

    @pytest.mark.asyncio
    async def test_create(self, mock_client):
        mock_client.execute.return_value = {"pushId": 15}
        push = GitPush(ref_updates=[GitRefUpdate(name="refs/heads/main", old_object_id="a", new_object_id="b")])
        result = await PushesAPI(mock_client).create(push, "repo", "P")
        assert result.push_id == 15
        assert _sent(mock_client).method == "POST"


class TestItemsAPI:
    @pytest.mark.asyncio
    async def test_get(self, mock_client):
        mock_client.execute.return_value = {"path": "/README.md", "objectId": "abc", "isFolder": None}
        item = await ItemsAPI(mock_client).get(
            "repo",
            "/README.md",
            version_descriptor=GitVersionDescriptor(version="dev", version_type=GitVersionType.BRANCH),
        )
        assert item.is_folder is False
        spec = _sent(mock_client)
        assert spec.endpoint.name == "get_item"
        assert spec.query == (
            ("path", "/README.md"),
            ("version", "dev"),
            ("versionType", "branch"),
        )

    @pytest.mark.asyncio
    async def test_get_text(self, mock_client):
        mock_client.execute.return_value = "# Hello"
        text = await ItemsAPI(mock_client).get_text("repo", "/README.md", "P")
        assert text == "# Hello"
        assert _sent(mock_client).endpoint.response_media_type.value == "text/plain"

    @pytest.mark.asyncio
    async def test_get_content(self, mock_client):
        mock_client.execute.return_value = b"\x00\x01"
        data = await ItemsAPI(mock_client).get_content("repo", "/bin/tool", download=True)
        assert data == b"\x00\x01"
        assert _sent(mock_client).query_dict == {"path": "/bin/tool", "download": "true"}

    @pytest.mark.asyncio
    async def test_list(self, mock_client):
        mock_client.execute.return_value = {
            "count": 2,
            "value": [{"path": "/", "isFolder": True}, {"path": "/a.txt"}],
        }
        items = await ItemsAPI(mock_client).list(
            "repo",
            scope_path="/",
            recursion_level=VersionControlRecursionType.ONE_LEVEL,
            include_links=False,
        )
        assert [i.is_folder for i in items] == [True, False]
        assert _sent(mock_client).query == (
            ("scopePath", "/"),
            ("recursionLevel", "oneLevel"),
            ("includeLinks", "false"),
        )

    @pytest.mark.asyncio
    async def test_batch(self, mock_client):
        mock_client.execute.return_value = {
            "count": 2,
            "value": [[{"path": "/a"}], [{"path": "/b"}, {"path": "/b/c"}]],
        }
        request = GitItemRequestData(item_descriptors=[GitItemDescriptor(path="/a"), GitItemDescriptor(path="/b")])
        groups = await ItemsAPI(mock_client).batch(request, "repo")
        assert [[i.path for i in g] for g in groups] == [["/a"], ["/b", "/b/c"]]
        assert _sent(mock_client).method == "POST"

    @pytest.mark.asyncio
    async def test_get_metadata_defaults(self, mock_client):
        mock_client.execute.return_value = {"path": "/a"}
        await ItemsAPI(mock_client).get_metadata("repo", "/a", include_content_metadata=True)
        assert _sent(mock_client).query == (
            ("path", "/a"),
            ("recursionLevel", "none"),
            ("includeContentMetadata", "true"),
            ("latestProcessedChange", "false"),
            ("download", "false"),
        )

    @pytest.mark.asyncio
    async def test_download_zip_defaults(self, mock_client):
        mock_client.execute.return_value = b"PK"
        data = await ItemsAPI(mock_client).download_zip("repo", "/src")
        assert data == b"PK"
        spec = _sent(mock_client)
        assert spec.endpoint.name == "get_item_zip"
        assert spec.query == (
            ("scopePath", "/src"),
            ("recursionLevel", "full"),
            ("includeContentMetadata", "false"),
            ("latestProcessedChange", "false"),
            ("download", "true"),
        )


    @pytest.mark.asyncio
    async def test_get_zip(self, mock_client):
        mock_client.execute.return_value = b"PK"
        data = await ItemsAPI(mock_client).get_zip("repo", "/src", "P", download=True)
        assert data == b"PK"
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.response_media_type is MediaType.ZIP
        assert spec.path == "P/_apis/git/repositories/repo/items"
        assert spec.query == (("path", "/src"), ("download", "true"))


class TestBlobsAndTreesAPI:
    @pytest.mark.asyncio
    async def test_blob_variants_share_route(self, mock_client):
        mock_client.execute.return_value = {"objectId": "abc", "size": 3}
        api = BlobsAPI(mock_client)
        blob = await api.get("repo", "abc")
        assert blob.size == 3
        json_spec = _sent(mock_client)
        mock_client.execute.return_value = b"raw"
        await api.get_content("repo", "abc")
        content_spec = _sent(mock_client)
        await api.get_zip("repo", "abc", file_name="abc.zip")
        zip_spec = _sent(mock_client)

        assert json_spec.path == content_spec.path == zip_spec.path
        assert json_spec.path == "_apis/git/repositories/repo/blobs/abc"
        assert zip_spec.query == (("fileName", "abc.zip"),)

    @pytest.mark.asyncio
    async def test_blobs_zip(self, mock_client):
        mock_client.execute.return_value = b"PK"
        await BlobsAPI(mock_client).get_many_zip(["a", "b"], "repo", filename="")
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories/repo/blobs"
        assert spec.body == ["a", "b"]
        assert spec.query == ()

    @pytest.mark.asyncio
    async def test_tree(self, mock_client):
        mock_client.execute.return_value = {
            "objectId": "tree1",
            "treeEntries": [{"objectId": "b1", "relativePath": "README.md", "gitObjectType": "blob"}],
        }
        tree = await TreesAPI(mock_client).get("repo", "tree1", recursive=True)
        assert tree.tree_entries[0].relative_path == "README.md"
        assert _sent(mock_client).query == (("recursive", "true"),)


    @pytest.mark.asyncio
    async def test_tree_zip(self, mock_client):
        mock_client.execute.return_value = b"PK"
        data = await TreesAPI(mock_client).get_zip(
            "repo", "tree1", "P", project_id="6ce954b1", file_name="tree.zip"
        )
        assert data == b"PK"
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.response_media_type is MediaType.ZIP
        assert spec.path == "P/_apis/git/repositories/repo/trees/tree1"
        assert spec.query == (("projectId", "6ce954b1"), ("fileName", "tree.zip"))


class TestBranchesAPI:
    @pytest.mark.asyncio
    async def test_get_with_base_version(self, mock_client):
        mock_client.execute.return_value = {"name": "feature", "aheadCount": 2, "behindCount": 1}
        stats = await BranchesAPI(mock_client).get(
            "repo",
            "feature",
            base_version_descriptor=GitVersionDescriptor(version="main"),
        )
        assert stats.ahead_count == 2
        assert _sent(mock_client).query == (
            ("name", "feature"),
            ("baseVersionDescriptor.version", "main"),
        )


    @pytest.mark.asyncio
    async def test_list(self, mock_client):
        mock_client.execute.return_value = {
            "count": 2,
            "value": [
                {"name": "main", "isBaseVersion": True},
                {"name": "feature", "aheadCount": 3},
            ],
        }
        stats = await BranchesAPI(mock_client).list(
            "repo",
            "P",
            base_version_descriptor=GitVersionDescriptor(
                version="main", version_type=GitVersionType.BRANCH
            ),
        )
        assert [s.name for s in stats] == ["main", "feature"]
        assert stats[0].is_base_version is True
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.response_media_type is MediaType.JSON
        assert spec.path == "P/_apis/git/repositories/repo/stats/branches"
        assert spec.query == (
            ("baseVersionDescriptor.version", "main"),
            ("baseVersionDescriptor.versionType", "branch"),
        )


class TestPullRequestsAPI:
    @pytest.mark.asyncio
    async def test_list_top_without_skip(self, mock_client, sample_pull_request_data):
        mock_client.execute.return_value = {"count": 1, "value": [sample_pull_request_data]}
        prs = await PullRequestsAPI(mock_client).list("repo", skip=None, top=50)
        assert prs[0].status is PullRequestStatus.ACTIVE
        assert prs[0].reviewers == []
        assert _sent(mock_client).query == (("$top", "50"),)

    @pytest.mark.asyncio
    async def test_list_with_criteria(self, mock_client):
        criteria = GitPullRequestSearchCriteria(status=PullRequestStatus.COMPLETED, target_ref_name="refs/heads/main")
        await PullRequestsAPI(mock_client).list("repo", "P", search_criteria=criteria)
        assert _sent(mock_client).query == (
            ("status", "completed"),
            ("targetRefName", "refs/heads/main"),
        )

    @pytest.mark.asyncio
    async def test_get(self, mock_client, sample_pull_request_data):
        mock_client.execute.return_value = sample_pull_request_data
        pr = await PullRequestsAPI(mock_client).get("repo", 22, include_commits=True)
        assert pr.pull_request_id == 22
        spec = _sent(mock_client)
        assert spec.path == "_apis/git/repositories/repo/pullRequests/22"
        assert spec.query == (("includeCommits", "true"),)

    @pytest.mark.asyncio
    async def test_list_by_project(self, mock_client):
        await PullRequestsAPI(mock_client).list_by_project("P", top=1)
        spec = _sent(mock_client)
        assert spec.path == "P/_apis/git/pullRequests"
        assert spec.route_values == {"project": "P"}

    @pytest.mark.asyncio
    async def test_create_and_update(self, mock_client, sample_pull_request_data):
        mock_client.execute.return_value = sample_pull_request_data
        api = PullRequestsAPI(mock_client)
        pr = GitPullRequest(
            title="A new feature",
            source_ref_name="refs/heads/npaulk/feature",
            target_ref_name="refs/heads/main",
        )
        await api.create(pr, "repo")
        assert _sent(mock_client).method == "POST"
        assert _sent(mock_client).path == "_apis/git/repositories/repo/pullRequests"

        await api.update(GitPullRequest(status=PullRequestStatus.ABANDONED), "repo", 22)
        spec = _sent(mock_client)
        assert spec.method == "PATCH"
        assert spec.path == "_apis/git/repositories/repo/pullRequests/22"

    @pytest.mark.asyncio
    async def test_work_items(self, mock_client):
        mock_client.execute.return_value = {"count": 1, "value": [{"id": "297", "url": "x"}]}
        refs = await PullRequestsAPI(mock_client).work_items("repo", 22, commits_top=10)
        assert refs[0].id == "297"
        assert _sent(mock_client).query == (("commitsTop", "10"),)


    @pytest.mark.asyncio
    async def test_commits(self, mock_client, sample_commit_data):
        mock_client.execute.return_value = {"count": 1, "value": [sample_commit_data]}
        commits = await PullRequestsAPI(mock_client).commits("repo", 22, "P")
        assert commits[0].short_id == "be67f887"
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.response_media_type is MediaType.JSON
        assert spec.path == "P/_apis/git/repositories/repo/pullRequests/22/commits"
        assert spec.query == ()

    @pytest.mark.asyncio
    async def test_get_without_id(self, mock_client):
        with pytest.raises(InvalidIdentityError):
            await PullRequestsAPI(mock_client).get("repo", None)
        mock_client.execute.assert_not_called()


class TestReviewersAPI:
    @pytest.mark.asyncio
    async def test_add_uses_put(self, mock_client):
        mock_client.execute.return_value = {"id": "d6245f20", "vote": 10}
        reviewer = IdentityRefWithVote(vote=10)
        result = await ReviewersAPI(mock_client).add(reviewer, "repo", 22, "d6245f20")
        assert result.vote == 10
        spec = _sent(mock_client)
        assert spec.method == "PUT"
        assert spec.path == "_apis/git/repositories/repo/pullRequests/22/reviewers/d6245f20"

    @pytest.mark.asyncio
    async def test_list(self, mock_client):
        mock_client.execute.return_value = {"count": 1, "value": [{"id": "a", "vote": 0}]}
        reviewers = await ReviewersAPI(mock_client).list("repo", 22)
        assert reviewers[0].vote == 0
        assert _sent(mock_client).path == "_apis/git/repositories/repo/pullRequests/22/reviewers"

    @pytest.mark.asyncio
    async def test_remove(self, mock_client):
        await ReviewersAPI(mock_client).remove("repo", 22, "a", "P")
        spec = _sent(mock_client)
        assert spec.method == "DELETE"
        assert spec.route_values["reviewerId"] == "a"

    @pytest.mark.asyncio
    async def test_get(self, mock_client):
        mock_client.execute.return_value = {"id": "d6245f20", "displayName": "Normal Paulk", "vote": -5}
        reviewer = await ReviewersAPI(mock_client).get("repo", 22, "d6245f20", "P")
        assert reviewer.vote == -5
        assert reviewer.display_name == "Normal Paulk"
        spec = _sent(mock_client)
        assert spec.method == "GET"
        assert spec.endpoint.response_media_type is MediaType.JSON
        assert spec.path == "P/_apis/git/repositories/repo/pullRequests/22/reviewers/d6245f20"
        assert spec.query == ()

    @pytest.mark.asyncio
    async def test_add_many_posts_to_collection(self, mock_client):
        mock_client.execute.return_value = {
            "count": 2,
            "value": [{"id": "a", "vote": 0}, {"id": "b", "vote": 0}],
        }
        reviewers = [IdentityRefWithVote(id="a"), IdentityRefWithVote(id="b")]
        added = await ReviewersAPI(mock_client).add_many(reviewers, "repo", 22)
        assert [r.id for r in added] == ["a", "b"]
        spec = _sent(mock_client)
        assert spec.method == "POST"
        assert spec.body == reviewers
        assert spec.endpoint.request_media_type is MediaType.JSON
        assert spec.path == "_apis/git/repositories/repo/pullRequests/22/reviewers"
        assert spec.query == ()

    @pytest.mark.asyncio
    async def test_remove_without_reviewer_id(self, mock_client):
        with pytest.raises(InvalidIdentityError, match="reviewerId"):
            await ReviewersAPI(mock_client).remove("repo", 7, "", "P")
        mock_client.execute.assert_not_called()
