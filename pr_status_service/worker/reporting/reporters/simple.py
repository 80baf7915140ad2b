# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
from functools import partial
from typing import Callable, Optional

from ogr.abstract import GitProject
from ogr.exceptions import OgrException

from pr_status_service.build import Build, Job, get_state, get_test_summary
from pr_status_service.config import ServiceConfig, StatusConfig
from pr_status_service.constants import (
    ENV_ACTUAL_COMMIT,
    ENV_JOB_NAME,
    ENV_PULL_ID,
    MSG_MISSING_TRIGGER,
)
from pr_status_service.events import (
    BuildCompletedEvent,
    BuildStartedEvent,
    BuildTriggeredEvent,
    LifecycleEvent,
)
from pr_status_service.exceptions import StatusDeliveryError, StatusPostingError
from pr_status_service.worker.reporting.delivery import StatusDeliveryClient
from pr_status_service.worker.reporting.formatter import StatusFormatter
from pr_status_service.worker.reporting.reporters.base import (
    Repository,
    get_repo_full_name,
)
from pr_status_service.worker.reporting.status_update import StatusUpdate

logger = logging.getLogger(__name__)


class SimpleStatusReporter:
    """
    Updates the commit status when the build is triggered, starts and completes.
    """

    def __init__(
        self,
        config: StatusConfig,
        delivery: StatusDeliveryClient,
        formatter: Optional[StatusFormatter] = None,
        test_summary_provider: Callable[[Build], Optional[str]] = get_test_summary,
    ):
        self.config = config
        self.delivery = delivery
        self.formatter = formatter or StatusFormatter()
        self.test_summary_provider = test_summary_provider

    @classmethod
    def from_service_config(
        cls,
        status_config: Optional[StatusConfig] = None,
        service_config: Optional[ServiceConfig] = None,
    ) -> "SimpleStatusReporter":
        service_config = service_config or ServiceConfig.get_service_config()
        return cls(
            config=service_config.get_status_config(status_config),
            delivery=StatusDeliveryClient(
                token_provider=service_config.get_status_access_token,
                api_url=service_config.github_api_url,
                timeout=service_config.request_timeout,
                fail_on_exhausted_retries=service_config.fail_on_exhausted_retries,
            ),
            formatter=StatusFormatter(
                result_to_state=partial(get_state, unstable_as=service_config.unstable_as),
                root_url=service_config.root_url,
            ),
        )

    def on_triggered(
        self,
        job: Job,
        commit_sha: str,
        mergeable: bool,
        pr_id: int,
        repo: GitProject,
    ) -> None:
        event = BuildTriggeredEvent(
            commit_sha=commit_sha,
            pr_id=pr_id,
            mergeable=mergeable,
            env={
                ENV_ACTUAL_COMMIT: commit_sha,
                ENV_PULL_ID: str(pr_id),
                ENV_JOB_NAME: getattr(job, "name", ""),
            },
        )
        update = self.formatter.resolve(event, self.config)
        if update is None:
            return

        logger.debug(
            f"Setting status of {commit_sha} to {update.state.name} "
            f"with url {update.target_url} and message: '{update.description}'",
        )
        try:
            repo.set_commit_status(
                commit_sha,
                update.state,
                update.target_url,
                update.description,
                # GitHub uses 'default' when the context is not sent
                update.context or "default",
            )
        except OgrException as ex:
            raise StatusPostingError(update.state, update.description, pr_id) from ex

    def on_environment_setup(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None:
        # the started hook follows and respects the configured started status
        pass

    def on_started(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None:
        listener = listener or logger
        env = build.env_vars

        if build.cause is None:
            listener.warning("Unable to get pull request builder cause.")
        event = BuildStartedEvent(
            commit_sha=env.get(ENV_ACTUAL_COMMIT, ""),
            pr_id=self.get_pr_id(env),
            merged=bool(build.cause and build.cause.merged),
            env=env,
            build_path=build.url,
        )
        self.report(event, listener, repo)

    def on_completed(
        self,
        build: Build,
        listener: Optional[logging.Logger],
        repo: Repository,
    ) -> None:
        listener = listener or logger
        env = build.env_vars

        test_summary = self.test_summary_provider(build)
        if test_summary is None:
            listener.warning(MSG_MISSING_TRIGGER)
        event = BuildCompletedEvent(
            commit_sha=env.get(ENV_ACTUAL_COMMIT, ""),
            pr_id=self.get_pr_id(env),
            result=build.result,
            test_summary=test_summary,
            env=env,
            build_path=build.url,
        )
        self.report(event, listener, repo)

    @staticmethod
    def get_pr_id(env) -> Optional[int]:
        pr_id = env.get(ENV_PULL_ID)
        if not pr_id:
            return None
        try:
            return int(pr_id)
        except ValueError:
            logger.warning(f"{ENV_PULL_ID} is not a pull request number: {pr_id!r}")
            return None

    def report(
        self,
        event: LifecycleEvent,
        listener: logging.Logger,
        repo: Repository,
    ) -> Optional[StatusUpdate]:
        update = self.formatter.resolve(event, self.config)
        if update is None:
            return None

        listener.info(
            f"Setting status of {event.commit_sha} to {update.state.name.upper()} "
            f"with url {update.target_url} and message: '{update.description}'",
        )
        if update.context:
            listener.info(f"Using context: {update.context}")

        try:
            self.delivery.deliver(get_repo_full_name(repo), event.commit_sha, update)
        except StatusDeliveryError as ex:
            raise StatusPostingError(update.state, update.description, event.pr_id) from ex
        return update

