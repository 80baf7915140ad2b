# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from pr_status_service.build import BuildResult


class LifecycleEventType(enum.Enum):
    triggered = "triggered"
    started = "started"
    completed = "completed"


class LifecycleEvent:
    """
    A point in the life of a pull request build we report a status for.

    Attributes:
        commit_sha: Commit the status is attached to.
        pr_id: ID of the pull request.
        env: Snapshot of the build environment, used for macro expansion
            and as the source of the build URLs.
        build_path: Build URL relative to the orchestrator root,
            None if there is no build yet.
    """

    event_type: LifecycleEventType

    def __init__(
        self,
        commit_sha: str,
        pr_id: Optional[int],
        env: Optional[Mapping[str, str]] = None,
        build_path: Optional[str] = None,
    ):
        self.commit_sha = commit_sha
        self.pr_id = pr_id
        self.env: Mapping[str, str] = MappingProxyType(dict(env or {}))
        self.build_path = build_path

    def get_dict(self) -> dict:
        result = self.__dict__.copy()
        result["event_type"] = self.event_type.value
        result["env"] = dict(self.env)
        return result

    def __repr__(self):
        return (
            f"{self.__class__.__name__}("
            f"commit_sha={self.commit_sha}, pr_id={self.pr_id}, "
            f"build_path={self.build_path})"
        )


class BuildTriggeredEvent(LifecycleEvent):
    event_type = LifecycleEventType.triggered

    def __init__(
        self,
        commit_sha: str,
        pr_id: Optional[int],
        mergeable: bool,
        env: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(commit_sha=commit_sha, pr_id=pr_id, env=env)
        self.mergeable = mergeable


class BuildStartedEvent(LifecycleEvent):
    event_type = LifecycleEventType.started

    def __init__(
        self,
        commit_sha: str,
        pr_id: Optional[int],
        merged: bool,
        env: Optional[Mapping[str, str]] = None,
        build_path: Optional[str] = None,
    ):
        super().__init__(
            commit_sha=commit_sha,
            pr_id=pr_id,
            env=env,
            build_path=build_path,
        )
        self.merged = merged


class BuildCompletedEvent(LifecycleEvent):
    event_type = LifecycleEventType.completed

    def __init__(
        self,
        commit_sha: str,
        pr_id: Optional[int],
        result: Optional[BuildResult],
        test_summary: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
        build_path: Optional[str] = None,
    ):
        super().__init__(
            commit_sha=commit_sha,
            pr_id=pr_id,
            env=env,
            build_path=build_path,
        )
        self.result = result
        self.test_summary = test_summary

    def get_dict(self) -> dict:
        result = super().get_dict()
        result["result"] = self.result.value if self.result else None
        return result
