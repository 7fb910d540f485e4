"""Stash repository gateway.

Wraps the git executable behind a small protocol so the application
state and dispatcher never depend on how stashes are stored. Every call
is a blocking subprocess invocation.

Execution Context:
    Library module - imported by state, CLI commands and the client

Dependencies:
    - subprocess: git invocation
    - gsm_core.models: Stash records

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from gsm_core.models import StashRecord
from gsm_core.models import parse_stash_list

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_GIT_BINARY = "git"
STASH_LIST_FORMAT = "--format=%gd|%gs|%cr"


# ---- Errors -------------------------------------------------------------------------------------------------


class GatewayError(Exception):
    """Failure of a gateway call.

    Attributes:
        description: Human-readable failure description.
    """

    def __init__(
            self,
            description: str,
    ) -> None:
        super().__init__(description)
        self.description = description

    def __str__(self) -> str:
        return self.description


# ---- Gateway Protocol ---------------------------------------------------------------------------------------


class StashGateway(Protocol):
    """Operations the core needs from the underlying version-control tool."""

    def list_stashes(self) -> list[StashRecord]:
        ...

    def current_branch(self) -> str:
        ...

    def get_diff(self, name: str) -> str:
        ...

    def get_file_stat(self, name: str) -> str:
        ...

    def apply(self, name: str) -> None:
        ...

    def pop(self, name: str) -> None:
        ...

    def drop(self, name: str) -> None:
        ...

    def create(self, message: str, include_untracked: bool) -> None:
        ...


# ---- Git Gateway --------------------------------------------------------------------------------------------


class GitStashGateway:
    """Gateway that shells out to git.

    Attributes:
        git_binary: Executable used for every call.
        cwd: Working directory of the repository (None for current dir).
    """

    def __init__(
            self,
            git_binary: str = DEFAULT_GIT_BINARY,
            cwd: Path | str | None = None,
    ) -> None:
        """Initialize gateway.

        Args:
            git_binary: Name or path of the git executable.
            cwd: Repository directory; defaults to the process directory.
        """
        self.git_binary = git_binary
        self.cwd = Path(cwd) if cwd else None

    def _run(
            self,
            args: list[str],
    ) -> subprocess.CompletedProcess:
        """Run git with the given arguments.

        Args:
            args: Arguments following the git executable.

        Returns:
            Completed process with text output.

        Raises:
            GatewayError: If the repository directory is missing or git cannot be started.
        """
        if self.cwd is not None and not self.cwd.is_dir():
            msg = f"Repository directory does not exist: {self.cwd}"
            raise GatewayError(msg)
        cmd = [self.git_binary, *args]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as run_error:
            msg = "Failed to run git. Is git installed?"
            raise GatewayError(msg) from run_error
        except OSError as run_error:
            msg = f"Failed to run git: {run_error}"
            raise GatewayError(msg) from run_error

    def _run_checked(
            self,
            args: list[str],
            verb: str,
    ) -> str:
        """Run a git command and fail on a non-zero exit.

        Args:
            args: Arguments following the git executable.
            verb: Verb used in the error description (``apply``, ``pop`` ...).

        Returns:
            Standard output of the command.

        Raises:
            GatewayError: If git fails.
        """
        result = self._run(args)
        if result.returncode != 0:
            msg = f"Failed to {verb} stash: {result.stderr.strip()}"
            logger.warning(msg)
            raise GatewayError(msg)
        return result.stdout

    def ensure_repository(self) -> None:
        """Check that the working directory is inside a git work tree.

        Raises:
            GatewayError: If it is not, or git is unavailable.
        """
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        if result.returncode != 0:
            msg = "Not inside a git repository. Please run gsm from within a git repo."
            raise GatewayError(msg)

    def list_stashes(self) -> list[StashRecord]:
        """List all stashes, most recent first.

        Raises:
            GatewayError: If git fails.
        """
        result = self._run(["stash", "list", STASH_LIST_FORMAT])
        if result.returncode != 0:
            msg = f"Failed to list stashes: {result.stderr.strip()}"
            logger.warning(msg)
            raise GatewayError(msg)
        stashes = parse_stash_list(result.stdout)
        logger.debug(f"Listed {len(stashes)} stash(es)")
        return stashes

    def current_branch(self) -> str:
        """Return the checked-out branch, or an empty string on any failure."""
        try:
            result = self._run(["branch", "--show-current"])
        except GatewayError as branch_error:
            logger.debug(f"Could not determine current branch: {branch_error}")
            return ""
        if result.returncode != 0:
            return ""
        return result.stdout.strip()

    def get_diff(
            self,
            name: str,
    ) -> str:
        """Return the patch of a stash.

        Args:
            name: Stash handle.

        Raises:
            GatewayError: If git fails.
        """
        return self._run_checked(["stash", "show", "-p", "--color=never", name], "show")

    def get_file_stat(
            self,
            name: str,
    ) -> str:
        """Return the ``--stat`` file listing of a stash.

        Args:
            name: Stash handle.

        Raises:
            GatewayError: If git fails.
        """
        return self._run_checked(["stash", "show", "--stat", "--color=never", name], "show")

    def apply(
            self,
            name: str,
    ) -> None:
        """Apply a stash, keeping it in the list."""
        self._run_checked(["stash", "apply", name], "apply")
        logger.info(f"Applied {name}")

    def pop(
            self,
            name: str,
    ) -> None:
        """Apply a stash and remove it from the list."""
        self._run_checked(["stash", "pop", name], "pop")
        logger.info(f"Popped {name}")

    def drop(
            self,
            name: str,
    ) -> None:
        """Delete a stash without applying it."""
        self._run_checked(["stash", "drop", name], "drop")
        logger.info(f"Dropped {name}")

    def create(
            self,
            message: str,
            include_untracked: bool,
    ) -> None:
        """Stash the working tree with a custom message.

        Args:
            message: Stash message.
            include_untracked: Also stash untracked files.

        Raises:
            GatewayError: If git fails.
        """
        args = ["stash", "push", "-m", message]
        if include_untracked:
            args.append("--include-untracked")
        self._run_checked(args, "create")
        logger.info(f"Created stash '{message}' (untracked={include_untracked})")
