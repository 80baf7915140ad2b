# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import json
import logging

from typing import Callable

import backoff
import requests
from ogr.utils import RequestResponse
from urllib3.exceptions import MaxRetryError, ProtocolError

from pr_status_service.constants import (
    COMMIT_STATUS_ENDPOINT,
    DELIVERY_ATTEMPTS,
    DELIVERY_RETRY_DELAY,
    GITHUB_API_URL,
    HTTP_REQUEST_TIMEOUT,
)
from pr_status_service.exceptions import PrStatusException, StatusDeliveryError
from pr_status_service.worker.reporting.status_update import StatusUpdate

logger = logging.getLogger(__name__)


def is_no_response_error(error: requests.exceptions.RequestException) -> bool:
    """
    The server accepted the connection and closed it without sending anything back.

    Requests reports it as a connection error wrapping urllib3's
    ProtocolError ('Connection aborted.', RemoteDisconnected(...)).
    Failures to resolve or to connect to the host wrap a NewConnectionError
    and are not considered to be this case.
    """
    if not isinstance(error, requests.exceptions.ConnectionError):
        return False
    if not error.args:
        return False

    reason = error.args[0]
    if isinstance(reason, MaxRetryError):
        reason = reason.reason
    return isinstance(reason, ProtocolError)


class NoResponseError(PrStatusException):
    """The server did not respond, the request can be sent again."""


class StatusDeliveryClient:
    """
    Posts commit statuses to the GitHub commit status API.

    Every attempt uses a fresh connection. Only the attempts the server
    didn't respond to are repeated.
    """

    def __init__(
        self,
        token_provider: Callable[[], str],
        api_url: str = GITHUB_API_URL,
        timeout: int = HTTP_REQUEST_TIMEOUT,
        fail_on_exhausted_retries: bool = False,
    ) -> None:
        self.token_provider = token_provider
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.fail_on_exhausted_retries = fail_on_exhausted_retries

    def get_status_url(self, repo: str, commit_sha: str) -> str:
        return COMMIT_STATUS_ENDPOINT.format(
            api_url=self.api_url,
            repo=repo,
            commit_sha=commit_sha,
        )

    def get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.token_provider()}",
            "Connection": "close",
            "Content-Type": "application/json",
        }

    @staticmethod
    def serialize(update: StatusUpdate) -> str:
        try:
            return json.dumps(update.to_payload(), separators=(",", ":"))
        except (TypeError, ValueError) as ex:
            raise StatusDeliveryError(f"Cannot serialize {update}: {ex}") from ex

    @backoff.on_exception(
        backoff.constant,
        NoResponseError,
        interval=DELIVERY_RETRY_DELAY,
        max_tries=DELIVERY_ATTEMPTS,
        jitter=None,
    )
    def send_status(self, url: str, commit_sha: str, body: str) -> requests.Response:
        try:
            response = requests.post(
                url,
                data=body,
                headers=self.get_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as ex:
            if is_no_response_error(ex):
                logger.info(f"No response from {url}, retrying...")
                raise NoResponseError(str(ex)) from ex

            logger.error(f"Failed to set status for {commit_sha}: {ex}")
            raise StatusDeliveryError(f"Cannot connect to url: `{url}`: {ex}") from ex

        if not response.ok:
            msg = (
                f"Failed to set status for {commit_sha}: "
                f"{response.status_code} {response.reason}: {response.text}"
            )
            logger.error(msg)
            raise StatusDeliveryError(msg, status_code=response.status_code)

        return response

    def deliver(self, repo: str, commit_sha: str, update: StatusUpdate) -> RequestResponse:
        """
        Set the commit status.

        Args:
            repo: Full name of the repository, e.g. `octocat/hello-world`.
            commit_sha: Commit to set the status for.
            update: What to set.

        Returns:
            Response of the API. When the server did not respond even
            to the last attempt, an ok response with no status code
            and no content: the update is dropped.

        Raises:
            StatusDeliveryError: The API responded with an error, the host
                could not be reached or the update could not be serialized.
                Also when the retries are exhausted and
                `fail_on_exhausted_retries` is set.
        """
        body = self.serialize(update)
        url = self.get_status_url(repo, commit_sha)

        try:
            response = self.send_status(url, commit_sha, body)
        except NoResponseError as ex:
            msg = f"No response from {url} after {DELIVERY_ATTEMPTS} attempts, giving up."
            if self.fail_on_exhausted_retries:
                logger.error(msg)
                raise StatusDeliveryError(msg) from ex

            logger.warning(msg)
            return RequestResponse(status_code=0, ok=True, content=b"", reason=msg)

        logger.info(response.text)
        return RequestResponse(
            status_code=response.status_code,
            ok=response.ok,
            content=response.content,
            reason=response.reason,
        )
