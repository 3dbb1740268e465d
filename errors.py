"""Errors raised by gradebook operations.

All of them are recoverable: the HTTP layer turns them into an error response
and the attempted change is simply not applied.
"""


class GradebookError(Exception):
    """Base class for gradebook errors."""


class ValidationError(GradebookError):
    """Missing or invalid required fields, or a grade structure that does not add up."""


class DuplicateIdError(GradebookError):
    """A student with the same user-facing student ID is already on the roster."""


class AuthError(GradebookError):
    """The presented credential does not match the stored one."""


class GradesLockedError(GradebookError):
    """Score entry was attempted while the grading sheet is locked."""
