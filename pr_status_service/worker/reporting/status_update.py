# Copyright Contributors to the Packit project.
# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from typing import Optional

from ogr.abstract import CommitStatus


@dataclass(frozen=True)
class StatusUpdate:
    state: CommitStatus
    target_url: str
    description: str
    context: Optional[str] = None

    def to_payload(self) -> dict[str, str]:
        """Body of the commit status API request, context is left out when not set."""
        payload = {
            "state": self.state.name.lower(),
            "target_url": self.target_url,
            "description": self.description,
        }
        if self.context:
            payload["context"] = self.context
        return payload
