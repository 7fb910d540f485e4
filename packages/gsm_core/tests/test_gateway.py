"""Tests for the git stash gateway.

Uses subprocess mocking to verify argument construction, output parsing
and error reporting without running git.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest
    - unittest.mock
"""
from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from gsm_core.gateway import GatewayError
from gsm_core.gateway import GitStashGateway


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.stdout = stdout
    proc.stderr = stderr
    proc.returncode = returncode
    return proc


@pytest.fixture
def gateway() -> GitStashGateway:
    return GitStashGateway()


# ---- _run() -------------------------------------------------------------------------------------------------


class TestRun:
    """Tests for the subprocess helper."""

    def test_invokes_git_with_text_capture(self, tmp_path: Path) -> None:
        """git is run in the repository directory with captured text output."""
        gateway = GitStashGateway(git_binary="/usr/bin/git", cwd=tmp_path)
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            gateway._run(["status"])

        args, kwargs = mock_run.call_args
        assert args[0] == ["/usr/bin/git", "status"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        assert kwargs["check"] is False

    def test_missing_git(self, gateway: GitStashGateway) -> None:
        """A missing executable becomes a GatewayError."""
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(GatewayError, match="Is git installed"):
                gateway._run(["status"])

    def test_missing_repository_directory(self, tmp_path: Path) -> None:
        """A nonexistent working directory is reported as such, without running git."""
        gateway = GitStashGateway(cwd=tmp_path / "nonexistent")
        with patch("subprocess.run") as mock_run:
            with pytest.raises(GatewayError, match="Repository directory does not exist"):
                gateway.ensure_repository()
        mock_run.assert_not_called()

    def test_os_error(self, gateway: GitStashGateway) -> None:
        """Other start-up failures are wrapped too."""
        with patch("subprocess.run", side_effect=PermissionError("denied")):
            with pytest.raises(GatewayError, match="denied"):
                gateway._run(["status"])


# ---- Queries ------------------------------------------------------------------------------------------------


class TestListStashes:
    """Tests for list_stashes."""

    def test_parses_output(self, gateway: GitStashGateway) -> None:
        """Stash list output becomes records."""
        output = (
            "stash@{0}|WIP on feature/x: abc123 msg|3 minutes ago\n"
            "stash@{1}|On main: cleanup|2 days ago\n"
        )
        with patch("subprocess.run", return_value=_completed(stdout=output)) as mock_run:
            stashes = gateway.list_stashes()

        assert mock_run.call_args[0][0] == ["git", "stash", "list", "--format=%gd|%gs|%cr"]
        assert [s.branch for s in stashes] == ["feature/x", "main"]
        assert [s.short_msg for s in stashes] == ["abc123 msg", "cleanup"]

    def test_no_stashes(self, gateway: GitStashGateway) -> None:
        """Empty output is an empty list."""
        with patch("subprocess.run", return_value=_completed(stdout="")):
            assert gateway.list_stashes() == []

    def test_failure(self, gateway: GitStashGateway) -> None:
        """A non-zero exit raises with git's message."""
        with patch("subprocess.run", return_value=_completed(
            stderr="fatal: not a git repository\n", returncode=128
        )):
            with pytest.raises(GatewayError) as exc_info:
                gateway.list_stashes()

        assert str(exc_info.value) == "Failed to list stashes: fatal: not a git repository"
        assert exc_info.value.description == str(exc_info.value)


class TestCurrentBranch:
    """Tests for current_branch."""

    def test_returns_trimmed_branch(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(stdout="main\n")) as mock_run:
            assert gateway.current_branch() == "main"
        assert mock_run.call_args[0][0] == ["git", "branch", "--show-current"]

    def test_failure_is_empty(self, gateway: GitStashGateway) -> None:
        """Errors never propagate from current_branch."""
        with patch("subprocess.run", return_value=_completed(returncode=128)):
            assert gateway.current_branch() == ""

    def test_missing_git_is_empty(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            assert gateway.current_branch() == ""


class TestShow:
    """Tests for get_diff and get_file_stat."""

    def test_get_diff(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(stdout="+a\n-b\n")) as mock_run:
            assert gateway.get_diff("stash@{1}") == "+a\n-b\n"
        assert mock_run.call_args[0][0] == ["git", "stash", "show", "-p", "--color=never", "stash@{1}"]

    def test_get_file_stat(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(stdout=" a | 1 +\n")) as mock_run:
            assert gateway.get_file_stat("stash@{0}") == " a | 1 +\n"
        assert mock_run.call_args[0][0] == ["git", "stash", "show", "--stat", "--color=never", "stash@{0}"]

    def test_show_failure(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(stderr="bad revision", returncode=1)):
            with pytest.raises(GatewayError, match="Failed to show stash: bad revision"):
                gateway.get_diff("stash@{9}")


# ---- Mutations ----------------------------------------------------------------------------------------------


class TestMutations:
    """Tests for apply, pop, drop and create."""

    @pytest.mark.parametrize("operation", ["apply", "pop", "drop"])
    def test_success(self, gateway: GitStashGateway, operation: str) -> None:
        """Each mutation runs the matching stash subcommand."""
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            getattr(gateway, operation)("stash@{2}")
        assert mock_run.call_args[0][0] == ["git", "stash", operation, "stash@{2}"]

    @pytest.mark.parametrize("operation", ["apply", "pop", "drop"])
    def test_failure(self, gateway: GitStashGateway, operation: str) -> None:
        """Non-zero exits carry git's stderr."""
        with patch("subprocess.run", return_value=_completed(
            stderr="error: conflict\n", returncode=1
        )):
            with pytest.raises(GatewayError) as exc_info:
                getattr(gateway, operation)("stash@{0}")
        assert str(exc_info.value) == f"Failed to {operation} stash: error: conflict"

    def test_create(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            gateway.create("my work", include_untracked=False)
        assert mock_run.call_args[0][0] == ["git", "stash", "push", "-m", "my work"]

    def test_create_with_untracked(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            gateway.create("my work", include_untracked=True)
        assert mock_run.call_args[0][0] == [
            "git", "stash", "push", "-m", "my work", "--include-untracked",
        ]

    def test_create_failure(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(
            stderr="No local changes to save", returncode=1
        )):
            with pytest.raises(GatewayError, match="Failed to create stash"):
                gateway.create("x", include_untracked=False)


class TestEnsureRepository:
    """Tests for ensure_repository."""

    def test_inside_work_tree(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(stdout="true\n")) as mock_run:
            gateway.ensure_repository()
        assert mock_run.call_args[0][0] == ["git", "rev-parse", "--is-inside-work-tree"]

    def test_outside_work_tree(self, gateway: GitStashGateway) -> None:
        with patch("subprocess.run", return_value=_completed(returncode=128)):
            with pytest.raises(GatewayError, match="Not inside a git repository"):
                gateway.ensure_repository()


class TestErrorType:
    """Tests for GatewayError itself."""

    def test_description_is_message(self) -> None:
        error = GatewayError("not found")
        assert str(error) == "not found"
        assert error.description == "not found"
