# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT
