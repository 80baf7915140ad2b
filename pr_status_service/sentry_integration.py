# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
from os import getenv

from sentry_sdk.integrations.logging import LoggingIntegration

from pr_status_service.utils import only_once

logger = logging.getLogger(__name__)


@only_once
def configure_sentry(runner_type: str) -> None:
    logger.debug(f"Setup sentry for {runner_type}")

    secret_key = getenv("SENTRY_SECRET")
    if not secret_key:
        return

    import sentry_sdk

    # https://docs.sentry.io/platforms/python/guides/logging/
    sentry_logging = LoggingIntegration(
        level=logging.DEBUG,  # Log everything, from DEBUG and above
        event_level=logging.ERROR,  # Send errors as events
    )

    sentry_sdk.init(
        secret_key,
        integrations=[sentry_logging],
        environment=getenv("DEPLOYMENT"),
    )
    sentry_sdk.set_tag("runner-type", runner_type)


def send_to_sentry(ex):
    import sentry_sdk

    sentry_sdk.capture_exception(ex)
