"""Tests for the branch gate."""

import pytest

from promoter.pipeline import branch_gate


@pytest.mark.short
class TestBranchGate:
    def test_target_branch_passes(self):
        assert branch_gate("master", "master") is True

    @pytest.mark.parametrize(
        "branch",
        ["feature/login", "Master", "MASTER", "master2", "release/master", " master"],
    )
    def test_other_branches_are_blocked(self, branch):
        assert branch_gate(branch, "master") is False

    @pytest.mark.parametrize("branch", [None, ""])
    def test_unknown_branch_is_blocked(self, branch):
        assert branch_gate(branch, "master") is False

    def test_custom_target(self):
        assert branch_gate("main", "main") is True
        assert branch_gate("master", "main") is False
