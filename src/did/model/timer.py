# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class TimerState(TypedDict):
    started_at: pendulum.DateTime
    description: str  # Project and tag markers stripped
    project: Optional[str]
    tags: Optional[list[str]]
