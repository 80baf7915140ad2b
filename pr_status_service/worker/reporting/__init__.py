# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

from pr_status_service.worker.reporting.delivery import StatusDeliveryClient
from pr_status_service.worker.reporting.formatter import StatusFormatter, expand_macros
from pr_status_service.worker.reporting.reporters.base import (
    CommitStatusReporter,
    get_repo_full_name,
    report_to_all,
)
from pr_status_service.worker.reporting.reporters.simple import SimpleStatusReporter
from pr_status_service.worker.reporting.status_update import StatusUpdate

__all__ = [
    CommitStatusReporter.__name__,
    SimpleStatusReporter.__name__,
    StatusDeliveryClient.__name__,
    StatusFormatter.__name__,
    StatusUpdate.__name__,
    expand_macros.__name__,
    get_repo_full_name.__name__,
    report_to_all.__name__,
]
