"""
Root of the promoter exception hierarchy.

Versioning errors live in promoter.versioning.exceptions, stage errors raised
or returned by external tools live in promoter.collaborators.exceptions.
"""


class PromotionError(Exception):
    """Base exception for every error that aborts a promotion run."""

    pass
