# SPDX-License-Identifier: MIT

import re
from typing import Optional

from did.errors import EntryValidationError
from did.model.entry import MAX_DURATION_MINUTES
from did.time import duration_to_input_str

COMBINED_DURATION_PATTERN = re.compile(r"^(\d+)h(\d+)m$")
DURATION_PATTERN = re.compile(r"^(\d+)(h|m)$")

# Project and tag names: letters, digits, hyphen, underscore
PROJECT_PATTERN = re.compile(r"@([a-zA-Z0-9_-]+)")
TAG_PATTERN = re.compile(r"#([a-zA-Z0-9_-]+)")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Lookahead so overlapping matches such as " for for " are all found
DURATION_SEPARATOR_PATTERN = re.compile(r"(?= for )", re.IGNORECASE)
DURATION_SEPARATOR_LENGTH = len(" for ")


def parse_duration(duration: str) -> int:
    """
    Parse Xh, Xm or XhYm into minutes.

    Zero durations and anything over 24 hours are rejected.
    """
    combined_match = COMBINED_DURATION_PATTERN.match(duration)
    if combined_match:
        minutes = int(combined_match.group(1)) * 60 + int(combined_match.group(2))
    else:
        match = DURATION_PATTERN.match(duration)
        if not match:
            raise EntryValidationError(
                f"invalid time format: expected Xh, Xm, or XhYm, got {duration}"
            )
        value = int(match.group(1))
        minutes = value * 60 if match.group(2) == "h" else value

    if minutes == 0:
        raise EntryValidationError("invalid duration: duration cannot be zero")
    if minutes > MAX_DURATION_MINUTES:
        raise EntryValidationError(
            "invalid duration: exceeds maximum of 24 hours"
            f" ({MAX_DURATION_MINUTES} minutes)"
        )
    return minutes


def parse_project_and_tags(
    description: str,
) -> tuple[str, Optional[str], Optional[list[str]]]:
    """
    Pull @project and #tag markers out of a description.

    "fix bug @acme #bugfix #urgent" -> ("fix bug", "acme", ["bugfix", "urgent"])
    When several projects are given the last one wins.
    """
    projects = PROJECT_PATTERN.findall(description)
    project = projects[-1] if projects else None
    tags = TAG_PATTERN.findall(description) or None

    clean_description = PROJECT_PATTERN.sub("", description)
    clean_description = TAG_PATTERN.sub("", clean_description)
    clean_description = WHITESPACE_PATTERN.sub(" ", clean_description.strip())

    return clean_description, project, tags


def split_raw_input(raw_input: str) -> tuple[str, str]:
    """Split '<description> for <duration>' on the last ' for '."""
    matches = list(DURATION_SEPARATOR_PATTERN.finditer(raw_input))
    if not matches:
        raise EntryValidationError("missing 'for <duration>' in input")
    separator_index = matches[-1].start()
    description = raw_input[:separator_index].strip()
    duration = raw_input[separator_index + DURATION_SEPARATOR_LENGTH :].strip()
    if not description:
        raise EntryValidationError("description cannot be empty")
    return description, duration


def build_raw_input(
    description: str,
    duration_minutes: int,
    project: Optional[str],
    tags: Optional[list[str]],
) -> str:
    text = description
    if project:
        text += f" @{project}"
    for tag in tags or []:
        text += f" #{tag}"
    return f"{text} for {duration_to_input_str(duration_minutes)}"
