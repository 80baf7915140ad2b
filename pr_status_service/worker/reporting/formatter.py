# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
from string import Template
from typing import Callable, Optional

from ogr.abstract import CommitStatus

from pr_status_service.build import BuildResult, get_state
from pr_status_service.config import StatusConfig
from pr_status_service.constants import (
    ENV_BUILD_URL,
    ENV_JOB_URL,
    MSG_BUILD_FINISHED,
    MSG_BUILD_STARTED,
    MSG_BUILD_TRIGGERED,
    MSG_SHA_MERGED,
    MSG_SHA_ORIGINAL,
    STATUS_NONE,
)
from pr_status_service.events import (
    BuildCompletedEvent,
    BuildStartedEvent,
    BuildTriggeredEvent,
    LifecycleEvent,
)
from pr_status_service.utils import fix_empty
from pr_status_service.worker.reporting.status_update import StatusUpdate

logger = logging.getLogger(__name__)

MacroExpander = Callable[[str, LifecycleEvent], str]


def expand_macros(template: str, event: LifecycleEvent) -> str:
    """Replace `$VAR` and `${VAR}` with the values from the event environment."""
    return Template(template).safe_substitute(event.env)


class StatusFormatter:
    """
    Turns a lifecycle event and the project configuration into a status update.

    `resolve` returns None when the configuration says the status
    should not be posted at all.
    """

    def __init__(
        self,
        expand: MacroExpander = expand_macros,
        result_to_state: Callable[[Optional[BuildResult]], CommitStatus] = get_state,
        root_url: str = "",
    ):
        self.expand = expand
        self.result_to_state = result_to_state
        self.root_url = root_url

    def resolve(self, event: LifecycleEvent, config: StatusConfig) -> Optional[StatusUpdate]:
        if isinstance(event, BuildTriggeredEvent):
            resolved = self.get_triggered_description(event, config)
        elif isinstance(event, BuildStartedEvent):
            resolved = self.get_started_description(event, config)
        elif isinstance(event, BuildCompletedEvent):
            resolved = self.get_completed_description(event, config)
        else:
            raise TypeError(f"Unsupported lifecycle event: {event!r}")

        if resolved is None:
            logger.debug(f"Status for {event!r} is turned off in the configuration.")
            return None

        state, description = resolved
        return StatusUpdate(
            state=state,
            target_url=self.get_target_url(event, config),
            description=description,
            context=self.get_context(event, config),
        )

    def get_triggered_description(
        self,
        event: BuildTriggeredEvent,
        config: StatusConfig,
    ) -> Optional[tuple[CommitStatus, str]]:
        if config.triggered_status == STATUS_NONE:
            return None

        if config.triggered_status:
            description = self.expand(config.triggered_status, event)
        else:
            description = MSG_BUILD_TRIGGERED + (
                MSG_SHA_MERGED if event.mergeable else MSG_SHA_ORIGINAL
            )
        return CommitStatus.pending, description

    def get_started_description(
        self,
        event: BuildStartedEvent,
        config: StatusConfig,
    ) -> Optional[tuple[CommitStatus, str]]:
        if config.started_status == STATUS_NONE:
            return None

        if config.started_status:
            description = self.expand(config.started_status, event)
        else:
            description = MSG_BUILD_STARTED + (
                MSG_SHA_MERGED if event.merged else MSG_SHA_ORIGINAL
            )
        return CommitStatus.pending, description

    def get_completed_description(
        self,
        event: BuildCompletedEvent,
        config: StatusConfig,
    ) -> Optional[tuple[CommitStatus, str]]:
        state = self.result_to_state(event.result)

        if not config.completed_status:
            description = MSG_BUILD_FINISHED
        else:
            description = "".join(
                self.expand(rule.message, event)
                for rule in config.completed_status
                if rule.result == state
            )
            if description == STATUS_NONE:
                return None

        description += " " + (event.test_summary or "")
        return state, description

    def get_target_url(self, event: LifecycleEvent, config: StatusConfig) -> str:
        if config.status_url == STATUS_NONE:
            return ""
        if config.status_url:
            return self.expand(config.status_url, event)

        if url := event.env.get(ENV_BUILD_URL):
            return url
        if url := event.env.get(ENV_JOB_URL):
            return url
        if event.build_path is None:
            # nothing has been built yet, there is nothing to link
            return ""
        return f"{self.root_url}{event.build_path}"

    def get_context(self, event: LifecycleEvent, config: StatusConfig) -> Optional[str]:
        context = fix_empty(config.commit_status_context)
        if context is None:
            return None
        expanded = self.expand(context, event)
        return expanded if expanded.strip() else None
