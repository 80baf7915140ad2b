# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

from functools import partial

import pytest
from ogr.abstract import CommitStatus

from pr_status_service.build import BuildResult, get_state
from pr_status_service.config import CompletedStatusRule, StatusConfig
from pr_status_service.events import (
    BuildCompletedEvent,
    BuildStartedEvent,
    BuildTriggeredEvent,
)
from pr_status_service.worker.reporting import StatusFormatter, StatusUpdate


@pytest.fixture()
def formatter():
    return StatusFormatter(root_url="https://ci.example.com/")


def started_event(env, build_path="job/pr/12/", merged=False):
    return BuildStartedEvent(
        commit_sha="1234abcd",
        pr_id=42,
        merged=merged,
        env=env,
        build_path=build_path,
    )


def completed_event(env, result=BuildResult.SUCCESS, test_summary="All tests passed"):
    return BuildCompletedEvent(
        commit_sha="1234abcd",
        pr_id=42,
        result=result,
        test_summary=test_summary,
        env=env,
        build_path="job/pr/12/",
    )


@pytest.mark.parametrize(
    "mergeable,description",
    [
        pytest.param(True, "Build triggered. sha1 is merged.", id="merged"),
        pytest.param(False, "Build triggered. sha1 is original commit.", id="original"),
    ],
)
def test_triggered_default_message(formatter, mergeable, description):
    config = StatusConfig(
        triggered_status="",
        status_url="",
        commit_status_context="ci/pr",
    )
    event = BuildTriggeredEvent(commit_sha="1234abcd", pr_id=42, mergeable=mergeable)

    assert formatter.resolve(event, config) == StatusUpdate(
        state=CommitStatus.pending,
        target_url="",
        description=description,
        context="ci/pr",
    )


def test_triggered_custom_message(formatter):
    config = StatusConfig(triggered_status="Queued PR #$ghprbPullId")
    event = BuildTriggeredEvent(
        commit_sha="1234abcd",
        pr_id=42,
        mergeable=True,
        env={"ghprbPullId": "42"},
    )

    update = formatter.resolve(event, config)

    assert update.description == "Queued PR #42"
    assert update.state == CommitStatus.pending


def test_triggered_turned_off(formatter):
    config = StatusConfig(triggered_status="--none--", commit_status_context="ci/pr")
    event = BuildTriggeredEvent(commit_sha="1234abcd", pr_id=42, mergeable=True)

    assert formatter.resolve(event, config) is None


def test_triggered_status_url_template(formatter):
    config = StatusConfig(status_url="https://dashboard.example.com/pr/${ghprbPullId}")
    event = BuildTriggeredEvent(
        commit_sha="1234abcd",
        pr_id=42,
        mergeable=False,
        env={"ghprbPullId": "42"},
    )

    assert formatter.resolve(event, config).target_url == "https://dashboard.example.com/pr/42"


@pytest.mark.parametrize(
    "merged,description",
    [
        pytest.param(True, "Build started sha1 is merged.", id="merged"),
        pytest.param(False, "Build started sha1 is original commit.", id="original"),
    ],
)
def test_started_default_message(formatter, pr_env, merged, description):
    update = formatter.resolve(started_event(pr_env, merged=merged), StatusConfig())

    assert update.state == CommitStatus.pending
    assert update.description == description
    assert update.target_url == "https://ci.example.com/job/pr/12/"
    assert update.context is None


def test_started_custom_message(formatter, pr_env):
    config = StatusConfig(started_status="Building $JOB_NAME")

    assert formatter.resolve(started_event(pr_env), config).description == "Building pr"


def test_started_turned_off(formatter, pr_env):
    config = StatusConfig(started_status="--none--")

    assert formatter.resolve(started_event(pr_env), config) is None


def test_completed_without_rules(formatter, pr_env):
    update = formatter.resolve(completed_event(pr_env), StatusConfig())

    assert update.state == CommitStatus.success
    assert update.description == "Build finished. All tests passed"


def test_completed_matching_rule_without_context(formatter, pr_env):
    config = StatusConfig(
        completed_status=(CompletedStatusRule(CommitStatus.success, "All good"),),
        commit_status_context="",
    )

    update = formatter.resolve(completed_event(pr_env), config)

    assert update.state == CommitStatus.success
    assert update.description == "All good All tests passed"
    assert "context" not in update.to_payload()


def test_completed_rules_concatenated_in_order(formatter, pr_env):
    config = StatusConfig(
        completed_status=(
            CompletedStatusRule(CommitStatus.failure, "Broken."),
            CompletedStatusRule(CommitStatus.success, "Looks good"),
            CompletedStatusRule(CommitStatus.failure, " See $BUILD_URL"),
        ),
    )

    update = formatter.resolve(
        completed_event(pr_env, result=BuildResult.FAILURE, test_summary=None),
        config,
    )

    assert update.state == CommitStatus.failure
    assert update.description == "Broken. See https://ci.example.com/job/pr/12/ "


@pytest.mark.parametrize(
    "result",
    [BuildResult.SUCCESS, BuildResult.FAILURE, BuildResult.ABORTED],
)
def test_completed_turned_off(formatter, pr_env, result):
    config = StatusConfig(
        completed_status=(
            CompletedStatusRule(CommitStatus.success, "--none--"),
            CompletedStatusRule(CommitStatus.failure, "--none--"),
        ),
    )

    assert formatter.resolve(completed_event(pr_env, result=result), config) is None


def test_completed_partially_turned_off(formatter, pr_env):
    config = StatusConfig(
        completed_status=(
            CompletedStatusRule(CommitStatus.success, "--none--"),
            CompletedStatusRule(CommitStatus.success, "!"),
        ),
    )

    update = formatter.resolve(completed_event(pr_env, test_summary=""), config)

    assert update.description == "--none--! "


def test_completed_unstable_as_configured(pr_env):
    formatter = StatusFormatter(
        result_to_state=partial(get_state, unstable_as=CommitStatus.error),
    )
    config = StatusConfig(
        completed_status=(CompletedStatusRule(CommitStatus.error, "Flaky"),),
    )

    update = formatter.resolve(completed_event(pr_env, result=BuildResult.UNSTABLE), config)

    assert update.state == CommitStatus.error
    assert update.description == "Flaky All tests passed"


@pytest.mark.parametrize(
    "env,build_path,target_url",
    [
        pytest.param(
            {"BUILD_URL": "https://ci.example.com/job/pr/12/", "JOB_URL": "https://job"},
            "job/pr/12/",
            "https://ci.example.com/job/pr/12/",
            id="build URL",
        ),
        pytest.param(
            {"BUILD_URL": "", "JOB_URL": "https://ci.example.com/job/pr/"},
            "job/pr/12/",
            "https://ci.example.com/job/pr/",
            id="job URL",
        ),
        pytest.param(
            {},
            "job/pr/12/",
            "https://ci.example.com/job/pr/12/",
            id="root URL and build path",
        ),
    ],
)
def test_target_url_fallback(formatter, env, build_path, target_url):
    event = started_event(env, build_path=build_path)

    assert formatter.get_target_url(event, StatusConfig()) == target_url


def test_target_url_turned_off(formatter, pr_env):
    config = StatusConfig(status_url="--none--")

    update = formatter.resolve(started_event(pr_env), config)

    assert update is not None
    assert update.target_url == ""


def test_target_url_template(formatter, pr_env):
    config = StatusConfig(status_url="${BUILD_URL}console")

    update = formatter.resolve(completed_event(pr_env), config)

    assert update.target_url == "https://ci.example.com/job/pr/12/console"


@pytest.mark.parametrize(
    "context,env,expected",
    [
        pytest.param(None, {}, None, id="not set"),
        pytest.param("   ", {}, None, id="blank"),
        pytest.param("ci/pr", {}, "ci/pr", id="plain"),
        pytest.param("ci/$JOB_NAME", {"JOB_NAME": "pr"}, "ci/pr", id="expanded"),
        pytest.param("$EMPTY", {"EMPTY": " "}, None, id="expanded to blank"),
    ],
)
def test_context(formatter, context, env, expected):
    config = StatusConfig(commit_status_context=context)

    assert formatter.get_context(started_event(env), config) == expected


def test_custom_macro_expander(pr_env):
    formatter = StatusFormatter(expand=lambda template, event: template.upper())
    config = StatusConfig(started_status="building", commit_status_context="ci")

    update = formatter.resolve(started_event(pr_env), config)

    assert update.description == "BUILDING"
    assert update.context == "CI"


def test_unknown_event(formatter):
    with pytest.raises(TypeError):
        formatter.resolve(object(), StatusConfig())
