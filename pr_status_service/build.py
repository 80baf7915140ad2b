# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

"""
Objects of the build orchestration system this service reports about.

The orchestrator owns its job and build model, we only describe
the parts we read from it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from ogr.abstract import CommitStatus


class BuildResult(Enum):
    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


def get_state(
    result: Optional[BuildResult],
    unstable_as: CommitStatus = CommitStatus.failure,
) -> CommitStatus:
    """Commit state of a finished build."""
    if result == BuildResult.SUCCESS:
        return CommitStatus.success
    if result == BuildResult.UNSTABLE:
        return unstable_as
    return CommitStatus.failure


class Job(Protocol):
    name: str


class BuildCause(Protocol):
    merged: bool


class Build(Protocol):
    # relative to the root URL of the orchestrator, e.g. job/my-job/12/
    url: str
    env_vars: Mapping[str, str]
    result: Optional[BuildResult]
    cause: Optional[BuildCause]


@dataclass(frozen=True)
class PullRequestCause:
    merged: bool = False


@dataclass
class BuildInfo:
    """Plain build description, used when the orchestrator talks to us via JSON."""

    url: str
    env_vars: dict[str, str] = field(default_factory=dict)
    result: Optional[BuildResult] = None
    cause: Optional[PullRequestCause] = None
    test_summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "BuildInfo":
        result = data.get("result")
        cause = data.get("cause")
        return cls(
            url=data.get("url", ""),
            env_vars=dict(data.get("env_vars") or {}),
            result=BuildResult(result.upper()) if result else None,
            cause=PullRequestCause(**cause) if cause is not None else None,
            test_summary=data.get("test_summary"),
        )


def get_test_summary(build: Build) -> Optional[str]:
    """
    One line summary of the test results of the build.

    None means there is no pull request trigger to ask for the results.
    """
    return getattr(build, "test_summary", None)
