# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

from pr_status_service.utils import set_logging

# debug logs from pr_status_service while testing
set_logging("pr_status_service", level=10)
