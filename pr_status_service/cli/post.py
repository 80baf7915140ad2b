# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

"""
Set a single commit status, bypass the lifecycle hooks
"""

import logging

import click
from ogr.abstract import CommitStatus

from pr_status_service.config import ServiceConfig
from pr_status_service.exceptions import StatusDeliveryError
from pr_status_service.schema import REPORTABLE_STATES
from pr_status_service.sentry_integration import send_to_sentry
from pr_status_service.worker.reporting import StatusDeliveryClient, StatusUpdate

logger = logging.getLogger(__name__)


@click.command("post")
@click.argument("repo")
@click.argument("commit_sha")
@click.option(
    "--state",
    type=click.Choice([state.name for state in REPORTABLE_STATES]),
    required=True,
)
@click.option("--description", required=True)
@click.option("--url", "target_url", default="", help="Link shown next to the status.")
@click.option("--context", default=None, help="Label of the status check.")
def post(repo, commit_sha, state, description, target_url, context):
    """
    Set status of COMMIT_SHA in REPO (e.g. octocat/hello-world).
    """
    service_config = ServiceConfig.get_service_config()
    client = StatusDeliveryClient(
        token_provider=service_config.get_status_access_token,
        api_url=service_config.github_api_url,
        timeout=service_config.request_timeout,
        fail_on_exhausted_retries=service_config.fail_on_exhausted_retries,
    )
    update = StatusUpdate(
        state=CommitStatus[state],
        target_url=target_url,
        description=description,
        context=context,
    )
    logger.info(f"Setting status of {commit_sha} in {repo}: {update}")
    try:
        response = client.deliver(repo, commit_sha, update)
    except StatusDeliveryError as ex:
        send_to_sentry(ex)
        raise click.ClickException(str(ex)) from ex

    if not response.status_code:
        click.echo(f"Status was dropped: {response.reason}", err=True)
