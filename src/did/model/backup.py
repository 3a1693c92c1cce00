# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import TypedDict

import pendulum


class BackupInfo(TypedDict):
    number: int  # 1 is the most recent slot
    path: Path
    modified: pendulum.DateTime
