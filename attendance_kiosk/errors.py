"""
Errors Module
=============

Exception hierarchy for the attendance kiosk.

Device, capture, configuration and submission errors are recovered by the
capture workflow and turned into a status shown to the user. Workflow state
errors reach the HTTP layer and become 409 responses.
"""


class AttendanceKioskError(Exception):
    """Base class for all kiosk errors."""


class ConfigurationError(AttendanceKioskError):
    """A required endpoint URL is not configured."""


class DeviceAccessError(AttendanceKioskError):
    """Camera devices could not be enumerated or accessed."""


class CaptureError(AttendanceKioskError):
    """The active stream produced no frame."""


class SubmissionError(AttendanceKioskError):
    """The recognition service failed or returned an unusable response."""


class WorkflowStateError(AttendanceKioskError):
    """The requested operation is not permitted in the current state."""
