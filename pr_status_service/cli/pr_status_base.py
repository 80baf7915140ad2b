# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging

import click

from pr_status_service import __version__
from pr_status_service.cli.post import post
from pr_status_service.cli.report import report
from pr_status_service.sentry_integration import configure_sentry
from pr_status_service.utils import set_logging


@click.group("pr-status")
@click.option("-d", "--debug", is_flag=True, help="Enable debug logs.")
@click.version_option(version=__version__, message="%(version)s")
def pr_status_base(debug):
    set_logging(level=logging.DEBUG if debug else logging.INFO)
    configure_sentry(runner_type="pr-status-cli")


pr_status_base.add_command(post)
pr_status_base.add_command(report)

if __name__ == "__main__":
    pr_status_base()
