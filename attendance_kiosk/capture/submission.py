"""
Submission Module
=================

Single POST of a captured still to the recognition service.

``RecognitionClient.submit`` never raises: transport failures, non-2xx
responses, malformed bodies and a missing endpoint all come back as a
``SubmissionResult`` carrying the error.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import requests

from ..errors import AttendanceKioskError, ConfigurationError, SubmissionError

logger = logging.getLogger(__name__)


class StatusType(str, Enum):
    """Classification of a status message."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class StatusOutcome:
    """A status classification with its human-readable message."""
    status: StatusType
    message: str

    def to_dict(self) -> dict:
        return {"status": self.status.value, "message": self.message}


@dataclass(frozen=True)
class SubmissionResult:
    """Either the service's outcome or the error that prevented one."""
    outcome: Optional[StatusOutcome] = None
    error: Optional[AttendanceKioskError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.outcome is not None

    @classmethod
    def success(cls, outcome: StatusOutcome) -> "SubmissionResult":
        return cls(outcome=outcome)

    @classmethod
    def failure(cls, error: AttendanceKioskError) -> "SubmissionResult":
        return cls(error=error)


def parse_outcome(payload: Any) -> StatusOutcome:
    """
    Validate a recognition response body.

    Raises:
        SubmissionError: The body is not ``{"message": str, "status": <known>}``
    """
    if not isinstance(payload, dict):
        raise SubmissionError("Response body is not a JSON object")
    message = payload.get("message")
    if not isinstance(message, str):
        raise SubmissionError("Response has no message")
    try:
        status = StatusType(payload.get("status"))
    except ValueError:
        raise SubmissionError(f"Unknown status: {payload.get('status')!r}") from None
    return StatusOutcome(status=status, message=message)


class RecognitionClient:
    """HTTP client for the remote recognition endpoint."""

    def __init__(
        self,
        endpoint_url: Optional[str],
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def submit(self, image_b64: str) -> SubmissionResult:
        """
        Send one base64 JPEG payload and return the service's verdict.

        Args:
            image_b64: Base64 image data without the data-URI prefix
        """
        if not self.endpoint_url:
            logger.error("Recognition endpoint URL is not configured")
            return SubmissionResult.failure(
                ConfigurationError("PUBLIC_RECOGNITION_URL is not configured")
            )

        try:
            response = self.session.post(
                self.endpoint_url, json={"image": image_b64}, timeout=self.timeout
            )
            response.raise_for_status()
            outcome = parse_outcome(response.json())
        except requests.RequestException as exc:
            logger.error("Error processing attendance: %s", exc)
            return SubmissionResult.failure(SubmissionError(str(exc)))
        except ValueError as exc:
            logger.error("Invalid response from recognition service: %s", exc)
            return SubmissionResult.failure(SubmissionError(str(exc)))
        except SubmissionError as exc:
            logger.error("Invalid response from recognition service: %s", exc)
            return SubmissionResult.failure(exc)

        logger.info("Recognition verdict: %s", outcome.status.value)
        return SubmissionResult.success(outcome)
