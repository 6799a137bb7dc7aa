"""Behaviour switches shared by the repositories."""

from enum import Enum


class MissingRecordPolicy(str, Enum):
    """What update/delete do when no record has the given id."""

    IGNORE = "ignore"  # silent no-op, tolerates double submission
    RAISE = "raise"
