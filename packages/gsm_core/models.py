"""Data models for the gsm stash manager.

Defines the stash record produced by the gateway and the mode variants
that drive the interactive state machine.

Execution Context:
    Library module - imported by other gsm_core modules and the client

Dependencies:
    - dataclasses: Data class decorators
    - enum: Content and confirmation kinds

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# ---- Constants ----------------------------------------------------------------------------------------------


WIP_PREFIX = "WIP on "
ON_PREFIX = "On "
UNKNOWN_BRANCH = "unknown"
SHORT_MESSAGE_SEPARATOR = ": "
LIST_FIELD_SEPARATOR = "|"


# ---- Parsing Helpers ----------------------------------------------------------------------------------------


def extract_branch(
        message: str,
) -> str:
    """Extract the branch a stash was created on from its raw message.

    Git writes stash messages as ``WIP on <branch>: <sha> <subject>`` for
    plain stashes and ``On <branch>: <message>`` for stashes with a custom
    message.

    Args:
        message: Raw stash message.

    Returns:
        Branch name, or ``"unknown"`` when the message has neither prefix.
    """
    for prefix in (WIP_PREFIX, ON_PREFIX):
        if message.startswith(prefix):
            return message[len(prefix):].split(":", 1)[0].strip()
    return UNKNOWN_BRANCH


def extract_short_message(
        message: str,
) -> str:
    """Return the human-readable part of a stash message.

    Args:
        message: Raw stash message.

    Returns:
        Text after the first ``": "``, or the whole message if absent.
    """
    _, separator, rest = message.partition(SHORT_MESSAGE_SEPARATOR)
    return rest if separator else message


# ---- Stash Records ------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class StashRecord:
    """One entry of the stash list.

    Attributes:
        index: Display ordinal, stable only within one load.
        name: Stash handle passed to every git call (e.g. ``stash@{0}``).
        message: Raw stash message.
        branch: Branch derived from the message.
        short_msg: Human-readable message derived from the raw one.
        date: Relative date reported by git.
    """

    index: int
    name: str
    message: str
    branch: str
    short_msg: str
    date: str

    @classmethod
    def from_message(
            cls,
            index: int,
            name: str,
            message: str,
            date: str,
    ) -> StashRecord:
        """Create a record, deriving branch and short message.

        Args:
            index: Position in the stash list.
            name: Stash handle.
            message: Raw stash message.
            date: Relative date.

        Returns:
            New StashRecord instance.
        """
        return cls(
            index=index,
            name=name,
            message=message,
            branch=extract_branch(message),
            short_msg=extract_short_message(message),
            date=date,
        )


def parse_stash_list(
        output: str,
) -> list[StashRecord]:
    """Parse ``git stash list --format=%gd|%gs|%cr`` output.

    Lines with fewer than three fields are skipped; ``index`` is the
    line position in the output so it always matches ``stash@{N}``.

    Args:
        output: Raw command output.

    Returns:
        Stash records in git's most-recent-first order.
    """
    records = []
    for index, line in enumerate(output.splitlines()):
        parts = line.split(LIST_FIELD_SEPARATOR, 2)
        if len(parts) < 3:
            continue
        name, message, date = parts
        records.append(StashRecord.from_message(index, name, message, date))
    return records


# ---- Mode Variants ------------------------------------------------------------------------------------------


class ContentKind(Enum):
    """Kind of text loaded into the content buffer."""

    DIFF = "diff"
    FILES = "files"


class ConfirmAction(Enum):
    """Mutation awaiting confirmation."""

    APPLY = "apply"
    POP = "pop"
    DROP = "drop"


@dataclass(frozen=True)
class Normal:
    """Stash list is active."""


@dataclass(frozen=True)
class ContentView:
    """Diff or file list of the selected stash is shown."""

    kind: ContentKind


@dataclass(frozen=True)
class Confirm:
    """A mutation of the selected stash awaits a yes/no answer."""

    action: ConfirmAction


@dataclass(frozen=True)
class NewStashForm:
    """The new-stash dialog is open."""


@dataclass(frozen=True)
class Message:
    """A result message is shown until the next key press."""

    text: str


Mode = Union[Normal, ContentView, Confirm, NewStashForm, Message]
