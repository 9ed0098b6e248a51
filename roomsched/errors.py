# roomsched/errors.py
"""
Every failure the store raises is a recoverable, user-facing condition.
Nothing is written when one of these is raised.
"""


class SchedulingError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """Malformed time, empty required field, bad day set..."""
    status_code = 400


class DuplicateError(SchedulingError):
    status_code = 409


class AvailabilityConflictError(SchedulingError):
    status_code = 409

    def __init__(self, conflict: str):
        super().__init__(f"Room is not available during selected time slot. Conflict with: {conflict}")
        self.conflict = conflict


class ReferentialIntegrityError(SchedulingError):
    status_code = 409


class StarLimitError(SchedulingError):
    status_code = 400


class NotFoundError(SchedulingError):
    status_code = 404
