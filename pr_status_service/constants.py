# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

CONFIG_FILE_NAME = "pr-status-service.yaml"
CONFIG_FILE_ENV_VAR = "PR_STATUS_SERVICE_CONFIG"

GITHUB_API_URL = "https://api.github.com"
COMMIT_STATUS_ENDPOINT = "{api_url}/repos/{repo}/statuses/{commit_sha}"

HTTP_REQUEST_TIMEOUT = 30

# delivery attempts in total, only the "no response" failures are retried
DELIVERY_ATTEMPTS = 3
DELIVERY_RETRY_DELAY = 1

# reserved configuration value: do not post this status at all
STATUS_NONE = "--none--"

# environment variables exported by the pull request builder
ENV_ACTUAL_COMMIT = "ghprbActualCommit"
ENV_PULL_ID = "ghprbPullId"
ENV_BUILD_URL = "BUILD_URL"
ENV_JOB_URL = "JOB_URL"
ENV_JOB_NAME = "JOB_NAME"

MSG_BUILD_TRIGGERED = "Build triggered."
MSG_BUILD_STARTED = "Build started"
MSG_BUILD_FINISHED = "Build finished."
MSG_SHA_MERGED = " sha1 is merged."
MSG_SHA_ORIGINAL = " sha1 is original commit."

MSG_MISSING_TRIGGER = "Unable to get pull request builder trigger!!"
