# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

import typing

from marshmallow import Schema, ValidationError, fields, post_load
from ogr.abstract import CommitStatus

from pr_status_service.config import CompletedStatusRule, ServiceConfig, StatusConfig

# states which can be set via the GitHub commit status API
REPORTABLE_STATES = (
    CommitStatus.pending,
    CommitStatus.success,
    CommitStatus.failure,
    CommitStatus.error,
)


class CommitStatusField(fields.Field):
    def _serialize(self, value: typing.Any, attr: str, obj: typing.Any, **kwargs):
        if value is None:
            return None
        return value.name

    def _deserialize(
        self,
        value: typing.Any,
        attr: typing.Optional[str],
        data: typing.Optional[typing.Mapping[str, typing.Any]],
        **kwargs,
    ) -> CommitStatus:
        if not isinstance(value, str):
            raise ValidationError("Invalid data provided. str required")

        state = CommitStatus.__members__.get(value.lower())
        if state not in REPORTABLE_STATES:
            raise ValidationError(
                f"Unknown commit state '{value}', "
                f"expected one of {[s.name for s in REPORTABLE_STATES]}",
            )
        return state


class CompletedStatusRuleSchema(Schema):
    """
    Schema for a message reported when a build completes.

    result: Commit state the message is used for (success, failure or error).
    message: The message itself, may contain macros.
    """

    result = CommitStatusField(required=True)
    message = fields.String(required=True)

    @post_load
    def make_instance(self, data, **_):
        return CompletedStatusRule(**data)


class StatusConfigSchema(Schema):
    commit_status_context = fields.String(load_default=None, allow_none=True)
    status_url = fields.String(load_default=None, allow_none=True)
    triggered_status = fields.String(load_default=None, allow_none=True)
    started_status = fields.String(load_default=None, allow_none=True)
    completed_status = fields.List(
        fields.Nested(CompletedStatusRuleSchema),
        load_default=None,
        allow_none=True,
    )

    @post_load
    def make_instance(self, data, **kwargs):
        data["completed_status"] = tuple(data.get("completed_status") or ())
        return StatusConfig(**data)


class ServiceConfigSchema(Schema):
    status_access_token = fields.String()
    github_api_url = fields.String()
    root_url = fields.String()
    unstable_as = CommitStatusField()
    fail_on_exhausted_retries = fields.Bool()
    request_timeout = fields.Integer(validate=lambda timeout: timeout > 0)
    commit_status = fields.Nested(StatusConfigSchema)
    debug = fields.Bool()

    @post_load
    def make_instance(self, data, **kwargs):
        return ServiceConfig(**data)
