# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, NamedTuple, Optional

from ogr.abstract import CommitStatus
from yaml import safe_load

from pr_status_service.constants import (
    CONFIG_FILE_ENV_VAR,
    CONFIG_FILE_NAME,
    GITHUB_API_URL,
    HTTP_REQUEST_TIMEOUT,
)
from pr_status_service.exceptions import PrStatusConfigException
from pr_status_service.utils import is_empty

logger = logging.getLogger(__name__)


class CompletedStatusRule(NamedTuple):
    """
    Message used for the completed status when the build ends in the given state.
    """

    result: CommitStatus
    message: str

    def __repr__(self):
        return f"CompletedStatusRule(result={self.result.name}, message={self.message})"


def resolve_default(instance_value: Any, default_value: Any) -> Any:
    """
    Value set for the project wins, unless it is not set (None, empty
    string or empty list), then the global default is used.
    """
    return default_value if is_empty(instance_value) else instance_value


@dataclass(frozen=True)
class StatusConfig:
    """
    What to report for a project.

    Any of the text fields can be set to `--none--` to not post
    the particular status at all.
    """

    commit_status_context: Optional[str] = None
    status_url: Optional[str] = None
    triggered_status: Optional[str] = None
    started_status: Optional[str] = None
    completed_status: tuple[CompletedStatusRule, ...] = ()

    def with_defaults(self, defaults: Optional["StatusConfig"]) -> "StatusConfig":
        if defaults is None:
            return self
        return StatusConfig(
            **{
                field.name: resolve_default(
                    getattr(self, field.name),
                    getattr(defaults, field.name),
                )
                for field in fields(self)
            },
        )

    @classmethod
    def get_from_dict(cls, raw_dict: dict) -> "StatusConfig":
        # required to avoid circular imports
        from pr_status_service.schema import StatusConfigSchema

        return StatusConfigSchema().load(raw_dict)


class ServiceConfig:
    def __init__(
        self,
        status_access_token: str = "",
        github_api_url: str = GITHUB_API_URL,
        root_url: str = "",
        unstable_as: CommitStatus = CommitStatus.failure,
        fail_on_exhausted_retries: bool = False,
        request_timeout: int = HTTP_REQUEST_TIMEOUT,
        commit_status: Optional[StatusConfig] = None,
        debug: bool = False,
    ):
        # token used in the Authorization header of the status API calls
        self.status_access_token = status_access_token
        self.github_api_url = github_api_url.rstrip("/")

        # externally reachable URL of the orchestrator, builds are relative to it
        self.root_url = root_url

        # commit state reported for unstable builds
        self.unstable_as = unstable_as

        # by default, giving up after the last "no response" failure is only logged
        self.fail_on_exhausted_retries = fail_on_exhausted_retries
        self.request_timeout = request_timeout

        # global defaults for the projects which don't set their own values
        self.commit_status: StatusConfig = commit_status or StatusConfig()
        self.debug = debug

    service_config = None

    def __repr__(self):
        def hide(token: str) -> str:
            return f"{token[:1]}***{token[-1:]}" if token else ""

        return (
            f"{self.__class__.__name__}("
            f"status_access_token='{hide(self.status_access_token)}', "
            f"github_api_url='{self.github_api_url}', "
            f"root_url='{self.root_url}', "
            f"unstable_as='{self.unstable_as.name}', "
            f"fail_on_exhausted_retries='{self.fail_on_exhausted_retries}', "
            f"request_timeout='{self.request_timeout}', "
            f"commit_status='{self.commit_status}', "
            f"debug='{self.debug}')"
        )

    def get_status_access_token(self) -> str:
        return self.status_access_token

    def get_status_config(self, project_config: Optional[StatusConfig] = None) -> StatusConfig:
        """Status configuration of a project with the global defaults applied."""
        return (project_config or StatusConfig()).with_defaults(self.commit_status)

    @classmethod
    def get_from_dict(cls, raw_dict: dict) -> "ServiceConfig":
        # required to avoid circular imports
        from pr_status_service.schema import ServiceConfigSchema

        config = ServiceConfigSchema().load(raw_dict)

        logger.debug(f"Loaded config: {config}")
        return config

    @classmethod
    def get_service_config(cls) -> "ServiceConfig":
        if cls.service_config is None:
            config_file = os.getenv(
                CONFIG_FILE_ENV_VAR,
                Path.home() / ".config" / CONFIG_FILE_NAME,
            )
            logger.debug(f"Loading service config from: {config_file}")

            try:
                with open(config_file) as file_stream:
                    loaded_config = safe_load(file_stream)
            except Exception as ex:
                logger.error(f"Cannot load service config '{config_file}'.")
                raise PrStatusConfigException(f"Cannot load service config: {ex}.") from ex

            cls.service_config = ServiceConfig.get_from_dict(raw_dict=loaded_config or {})
        return cls.service_config
