"""Branch gate: only one branch may run stages with external side effects."""

from typing import Optional


def branch_gate(branch: Optional[str], target: str) -> bool:
    """
    Return True only when ``branch`` is exactly ``target``.

    The comparison is case-sensitive with no pattern matching, and an unknown
    branch never passes.
    """
    if not branch:
        return False
    return branch == target
