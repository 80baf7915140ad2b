# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

"""
Accept a lifecycle message from commandline and report the commit status for it
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from ogr import GithubService

from pr_status_service.build import BuildInfo
from pr_status_service.config import ServiceConfig, StatusConfig
from pr_status_service.events import LifecycleEventType
from pr_status_service.exceptions import StatusPostingError
from pr_status_service.sentry_integration import send_to_sentry
from pr_status_service.worker.reporting import SimpleStatusReporter

logger = logging.getLogger(__name__)


class CommandLineJob:
    def __init__(self, name: str):
        self.name = name


def process_message(message: dict, service_config: Optional[ServiceConfig] = None) -> None:
    """
    Call the lifecycle hook matching the message.

    The message looks like:
        {
            "event": "completed",
            "repo": "octocat/hello-world",
            "commit_status": {"commit_status_context": "ci/pr"},
            "build": {"url": "job/pr/12/", "env_vars": {...}, "result": "SUCCESS"}
        }
    For the `triggered` event, `commit_sha`, `pr_id`, `mergeable` and `job`
    are expected instead of `build`.
    """
    service_config = service_config or ServiceConfig.get_service_config()
    event_type = LifecycleEventType(message["event"])
    repo = message["repo"]

    reporter = SimpleStatusReporter.from_service_config(
        status_config=StatusConfig.get_from_dict(message.get("commit_status") or {}),
        service_config=service_config,
    )

    if event_type == LifecycleEventType.triggered:
        namespace, repo_name = repo.split("/", 1)
        service = GithubService(token=service_config.status_access_token)
        project = service.get_project(namespace=namespace, repo=repo_name)
        reporter.on_triggered(
            job=CommandLineJob(message.get("job", "")),
            commit_sha=message["commit_sha"],
            mergeable=bool(message.get("mergeable")),
            pr_id=int(message["pr_id"]),
            repo=project,
        )
        return

    build = BuildInfo.from_dict(message["build"])
    hook = {
        LifecycleEventType.started: reporter.on_started,
        LifecycleEventType.completed: reporter.on_completed,
    }[event_type]
    hook(build=build, listener=logger, repo=repo)


@click.command("report")
@click.argument("path", nargs=1, required=False)
def report(path):
    """
    Report the commit status for a build lifecycle event

    Either provide a filename with the message or pipe it:
      cat event.json | pr-status report
    """
    if path:
        logger.info(f"reading the message from file {path}")
        message = json.loads(Path(path).read_text())
    else:
        logger.info("reading the message from stdin")
        message = json.loads(sys.stdin.read())

    try:
        process_message(message)
    except StatusPostingError as ex:
        send_to_sentry(ex)
        raise click.ClickException(str(ex)) from ex
