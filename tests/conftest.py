"""Shared test fixtures for gitrest."""

from __future__ import annotations

from unittest.mock import AsyncMock
from uuid import UUID

import pytest

from gitrest.api.client import GitClient

REPO_ID = UUID("5febef5a-833d-4e14-b9c0-14cb638f91e6")
PROJECT_ID = UUID("6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c")


@pytest.fixture
def mock_client():
    """A GitClient whose transport is mocked."""
    client = GitClient("https://dev.example.com/DefaultCollection", "test-token")
    client.execute = AsyncMock(return_value={})
    return client


@pytest.fixture
def sample_repository_data():
    """Raw repository API response data."""
    return {
        "id": str(REPO_ID),
        "name": "Fabrikam",
        "url": "https://dev.example.com/DefaultCollection/_apis/git/repositories/5febef5a",
        "project": {
            "id": str(PROJECT_ID),
            "name": "Fabrikam-Fiber-Git",
            "state": "wellFormed",
        },
        "defaultBranch": "refs/heads/main",
        "remoteUrl": "https://dev.example.com/DefaultCollection/_git/Fabrikam",
        "_links": {"self": {"href": "https://dev.example.com/..."}},
    }


@pytest.fixture
def sample_commit_data():
    """Raw commit API response data."""
    return {
        "commitId": "be67f8871a4d2c75f13a51c1d3c30ac0d74d4ef4",
        "author": {
            "name": "Norman Paulk",
            "email": "fabrikamfiber16@hotmail.com",
            "date": "2014-06-30T18:10:55Z",
        },
        "committer": {
            "name": "Norman Paulk",
            "email": "fabrikamfiber16@hotmail.com",
            "date": "2014-06-30T18:10:55Z",
        },
        "comment": "Better description for hello world\nsecond line",
        "changeCounts": {"Edit": 1},
        "parents": None,
        "url": "https://dev.example.com/.../commits/be67f887",
    }


@pytest.fixture
def sample_pull_request_data(sample_repository_data):
    """Raw pull request API response data."""
    return {
        "pullRequestId": 22,
        "codeReviewId": 22,
        "repository": sample_repository_data,
        "status": "active",
        "createdBy": {"id": "d6245f20", "displayName": "Normal Paulk"},
        "creationDate": "2014-06-17T16:55:46.589889Z",
        "title": "A new feature",
        "sourceRefName": "refs/heads/npaulk/feature",
        "targetRefName": "refs/heads/main",
        "mergeStatus": "succeeded",
        "reviewers": None,
    }
