# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

from typing import Optional

from ogr.abstract import CommitStatus


class PrStatusException(Exception):
    pass


class PrStatusConfigException(PrStatusException):
    pass


class StatusDeliveryError(PrStatusException):
    """The status update could not be delivered and retrying won't help."""

    def __init__(self, msg: str, status_code: Optional[int] = None):
        super().__init__(msg)
        self.status_code = status_code


class StatusPostingError(PrStatusException):
    """
    Raised from the lifecycle hooks when posting the commit status failed.

    Carries what we were trying to post so that the caller can log it
    or decide whether the build should fail because of it.
    """

    def __init__(self, state: CommitStatus, message: str, pr_id: Optional[int]):
        super().__init__(
            f"Failed to set status '{state.name}' for PR #{pr_id}: {message}",
        )
        self.state = state
        self.message = message
        self.pr_id = pr_id
