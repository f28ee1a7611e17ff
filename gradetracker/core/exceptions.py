# /gradetracker/core/exceptions.py

"""
Error taxonomy shared by the service layer and the routers.

Validation and duplicate errors also derive from `ValueError` so callers that
only care about "bad input" can keep catching `ValueError`.
"""


class GradeTrackerError(Exception):
    """Base class for every error raised by the grade tracker."""


class ValidationError(GradeTrackerError, ValueError):
    """A required field is blank or a value is outside its allowed set."""


class DuplicateError(GradeTrackerError, ValueError):
    """The record would violate a uniqueness rule (e.g. a repeated enrollment)."""


class NotFoundError(GradeTrackerError, LookupError):
    """A referenced record does not exist."""


class LoginError(NotFoundError):
    """
    Student login failed.

    `reason` tells the two user-facing cases apart: the ID was never found, or
    the ID exists but the supplied PIN does not match.
    """

    ID_NOT_FOUND = "id_not_found"
    PIN_MISMATCH = "pin_mismatch"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class SyncError(GradeTrackerError):
    """A remote mirror was unreachable or returned unusable data."""
