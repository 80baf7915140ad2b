# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import pytest
from ogr import GithubService
from ogr.services.github import GithubProject

from pr_status_service.config import ServiceConfig


@pytest.fixture(autouse=True)
def global_service_config():
    """
    This config will be used instead of the one loaded from the local config file.

    You can still mock/overwrite the service config content in your tests
    but this one will be used by default.
    """
    service_config = ServiceConfig(
        status_access_token="token",
        root_url="https://ci.example.com/",
    )
    ServiceConfig.service_config = service_config
    yield service_config
    ServiceConfig.service_config = None


@pytest.fixture()
def github_project():
    return GithubProject(
        repo="hello-world",
        service=GithubService(token="token"),
        namespace="octocat",
    )


@pytest.fixture()
def pr_env():
    return {
        "ghprbActualCommit": "1234abcd",
        "ghprbPullId": "42",
        "BUILD_URL": "https://ci.example.com/job/pr/12/",
        "JOB_URL": "https://ci.example.com/job/pr/",
        "JOB_NAME": "pr",
    }
