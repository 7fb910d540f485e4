"""Shared test configuration and fixtures for gsm_core tests.

Provides:
- FakeGateway: an in-memory stash gateway with canned results and
  injectable failures, so state and dispatcher tests never run git.
- Common stash and state fixtures reused across test modules.
"""
from __future__ import annotations

import pytest

from gsm_core.gateway import GatewayError
from gsm_core.models import StashRecord
from gsm_core.state import AppState


# ---- Test Doubles -------------------------------------------------------------------------------------------


def make_stash(
        index: int,
        message: str,
        date: str = "2 hours ago",
) -> StashRecord:
    """Build a record named after its index."""
    return StashRecord.from_message(index, f"stash@{{{index}}}", message, date)


class FakeGateway:
    """Gateway double that records calls and mutates an in-memory list.

    Set ``fail_on[<operation>] = "<description>"`` to make that operation
    raise GatewayError with the given description.
    """

    def __init__(
            self,
            stashes: list[StashRecord] | None = None,
            branch: str = "main",
    ) -> None:
        self.stashes = list(stashes or [])
        self.branch = branch
        self.diffs: dict[str, str] = {}
        self.file_stats: dict[str, str] = {}
        self.fail_on: dict[str, str] = {}
        self.calls: list[tuple] = []

    def _check(
            self,
            operation: str,
    ) -> None:
        if operation in self.fail_on:
            raise GatewayError(self.fail_on[operation])

    def _renumber(self) -> None:
        self.stashes = [
            StashRecord.from_message(i, f"stash@{{{i}}}", s.message, s.date)
            for i, s in enumerate(self.stashes)
        ]

    def _remove(
            self,
            name: str,
    ) -> None:
        self.stashes = [s for s in self.stashes if s.name != name]
        self._renumber()

    def list_stashes(self) -> list[StashRecord]:
        self.calls.append(("list_stashes",))
        self._check("list_stashes")
        return list(self.stashes)

    def current_branch(self) -> str:
        self.calls.append(("current_branch",))
        return self.branch

    def get_diff(self, name: str) -> str:
        self.calls.append(("get_diff", name))
        self._check("get_diff")
        return self.diffs.get(name, "")

    def get_file_stat(self, name: str) -> str:
        self.calls.append(("get_file_stat", name))
        self._check("get_file_stat")
        return self.file_stats.get(name, "")

    def apply(self, name: str) -> None:
        self.calls.append(("apply", name))
        self._check("apply")

    def pop(self, name: str) -> None:
        self.calls.append(("pop", name))
        self._check("pop")
        self._remove(name)

    def drop(self, name: str) -> None:
        self.calls.append(("drop", name))
        self._check("drop")
        self._remove(name)

    def create(self, message: str, include_untracked: bool) -> None:
        self.calls.append(("create", message, include_untracked))
        self._check("create")
        self.stashes.insert(0, make_stash(0, f"On {self.branch}: {message}", "now"))
        self._renumber()

    def call_names(self) -> list[str]:
        """Names of the operations called so far."""
        return [call[0] for call in self.calls]


# ---- Fixtures -----------------------------------------------------------------------------------------------


@pytest.fixture
def sample_stashes() -> list[StashRecord]:
    """Three stashes on two branches, most recent first."""
    return [
        make_stash(0, "WIP on feature/login: a1b2c3d Add login form", "5 minutes ago"),
        make_stash(1, "On main: Fix typo in README", "1 day ago"),
        make_stash(2, "On release: bump version", "3 weeks ago"),
    ]


@pytest.fixture
def gateway(sample_stashes: list[StashRecord]) -> FakeGateway:
    """Gateway holding the sample stashes."""
    fake = FakeGateway(sample_stashes)
    fake.diffs = {
        "stash@{0}": "diff --git a/login.py b/login.py\n--- a/login.py\n+++ b/login.py\n@@ -1 +1,2 @@\n+form = 1\n",
    }
    fake.file_stats = {
        "stash@{0}": " login.py | 1 +\n 1 file changed, 1 insertion(+)\n",
    }
    return fake


@pytest.fixture
def state(gateway: FakeGateway) -> AppState:
    """Loaded application state over the sample gateway."""
    return AppState.load(gateway)


@pytest.fixture
def empty_state() -> AppState:
    """Loaded application state with no stashes."""
    return AppState.load(FakeGateway())
