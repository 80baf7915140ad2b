# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
from abc import abstractmethod
from collections.abc import Iterable
from typing import Any, Optional, Protocol, Union

from ogr.abstract import GitProject

from pr_status_service.build import Build, Job

logger = logging.getLogger(__name__)

# a project or the full name of the repository, e.g. octocat/hello-world
Repository = Union[GitProject, str]


def get_repo_full_name(repo: Repository) -> str:
    if isinstance(repo, str):
        return repo
    return f"{repo.namespace}/{repo.repo}"


class CommitStatusReporter(Protocol):
    """
    Something that reports the progress of a pull request build as commit statuses.

    The orchestrator calls the hooks in this order: triggered,
    environment setup, started, completed. Each hook may raise
    StatusPostingError.
    """

    @abstractmethod
    def on_triggered(
        self,
        job: Job,
        commit_sha: str,
        mergeable: bool,
        pr_id: int,
        repo: GitProject,
    ) -> None: ...

    @abstractmethod
    def on_environment_setup(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None: ...

    @abstractmethod
    def on_started(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None: ...

    @abstractmethod
    def on_completed(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None: ...


def report_to_all(
    reporters: Iterable[CommitStatusReporter],
    hook: str,
    *args: Any,
    **kwargs: Any,
) -> None:
    """
    Call the same lifecycle hook on all the reporters.

    The first failing reporter stops the reporting.
    """
    for reporter in reporters:
        logger.debug(f"Calling {hook} of {reporter.__class__.__name__}.")
        getattr(reporter, hook)(*args, **kwargs)
