"""
Capture Workflow Module
=======================

The capture-and-submit workflow behind the kiosk page.

The UI state is a single ``CaptureState`` value instead of a set of
independent flags:

    idle -> initializing -> ready -> processing -> result -> (reset) ready

Lock order is device manager first, workflow second: readiness listeners
run under the device manager lock, so the workflow never calls into the
device manager while holding its own lock.
"""

import logging
import threading
from enum import Enum
from typing import Optional

from ..errors import CaptureError, ConfigurationError, DeviceAccessError, WorkflowStateError
from ..utils import CameraStream, strip_data_uri
from .devices import CAMERA_ACCESS_MESSAGE, DeviceManager
from .submission import RecognitionClient, StatusOutcome, StatusType, SubmissionResult

logger = logging.getLogger(__name__)

CAPTURE_FAILED_MESSAGE = "Failed to capture image. Please try again."
PROCESSING_MESSAGE = "Processing..."
SUBMISSION_FAILED_MESSAGE = "Error processing attendance. Please try again."
NOT_CONFIGURED_MESSAGE = "Recognition service is not configured."

CAMERA_ACCESS_STATUS = StatusOutcome(StatusType.ERROR, CAMERA_ACCESS_MESSAGE)


class CaptureState(str, Enum):
    """UI state of the kiosk."""
    IDLE = "idle"
    INITIALIZING = "initializing"
    READY = "ready"
    PROCESSING = "processing"
    RESULT = "result"


# States in which no image is held and the state mirrors camera readiness
_CAMERA_STATES = (CaptureState.IDLE, CaptureState.INITIALIZING, CaptureState.READY)


class CaptureWorkflow:
    """
    Capture, submit and reset on top of the device manager and camera stream.

    Attributes:
        state (CaptureState): Current UI state
        captured_image (str): JPEG data URI of the last capture, if any
        status (StatusOutcome): Status shown to the user, if any
    """

    def __init__(
        self,
        devices: DeviceManager,
        camera: CameraStream,
        client: RecognitionClient,
    ):
        self.devices = devices
        self.camera = camera
        self.client = client
        self._lock = threading.Lock()
        self.state = CaptureState.IDLE
        self.captured_image: Optional[str] = None
        self.status: Optional[StatusOutcome] = None
        self._switching = False

        camera.on_ready = devices.mark_stream_acquired
        devices.add_listener(self._on_readiness)

    @property
    def is_processing(self) -> bool:
        return self.state is CaptureState.PROCESSING

    def _camera_state(self) -> CaptureState:
        if self.devices.ready:
            return CaptureState.READY
        if self.devices.selected_id and not self.devices.stream_failed:
            return CaptureState.INITIALIZING
        return CaptureState.IDLE

    def _on_readiness(self, ready: bool) -> None:
        with self._lock:
            if self.state in _CAMERA_STATES:
                self.state = self._camera_state()

    def _ensure_not_processing(self, action: str) -> None:
        if self.is_processing:
            raise WorkflowStateError(f"Cannot {action} while a submission is in flight")

    def _begin_switch(self, action: str) -> None:
        """Claim the camera for a restart or device change."""
        with self._lock:
            self._ensure_not_processing(action)
            if self._switching:
                raise WorkflowStateError(f"Cannot {action} while the camera is switching")
            self._switching = True

    def _end_switch(self) -> None:
        with self._lock:
            self._switching = False

    def _open_stream(self, device_id: str) -> None:
        """
        Open the stream of ``device_id``.

        A failure leaves the workflow idle with the camera access error; a
        later successful open clears that error.
        """
        if self.camera.open(device_id):
            with self._lock:
                if self.status == CAMERA_ACCESS_STATUS:
                    self.status = None
                if self.state in _CAMERA_STATES:
                    self.state = self._camera_state()
            return
        self.devices.mark_stream_failed(device_id)
        with self._lock:
            self.status = CAMERA_ACCESS_STATUS
            if self.state in _CAMERA_STATES:
                self.state = self._camera_state()

    def start(self, mobile: bool = False) -> dict:
        """
        Enumerate cameras, select the default one and open its stream.

        A device access failure leaves the workflow idle with an error status.

        Raises:
            WorkflowStateError: A submission or camera switch is in flight
        """
        self._begin_switch("restart the camera")
        try:
            with self._lock:
                self.captured_image = None
                self.status = None
                self.state = CaptureState.IDLE

            self.camera.stop()
            try:
                device = self.devices.initialize(mobile)
            except DeviceAccessError as exc:
                with self._lock:
                    self.status = StatusOutcome(StatusType.ERROR, str(exc))
                    self.state = CaptureState.IDLE
                return self.snapshot()

            # Desktop previews behave like a mirror; rear cameras do not
            self.camera.mirrored = not mobile
            with self._lock:
                self.state = self._camera_state()
            self._open_stream(device.device_id)
        finally:
            self._end_switch()
        return self.snapshot()

    def select_device(self, device_id: str) -> dict:
        """
        Switch to another camera.

        Capture is refused until the switch has completed.

        Raises:
            WorkflowStateError: A submission or camera switch is in flight
            ValueError: Unknown device id
        """
        self._begin_switch("change camera")
        try:
            device = self.devices.select(device_id)
            self._open_stream(device.device_id)
        finally:
            self._end_switch()
        return self.snapshot()

    def _take_still(self) -> str:
        image = self.camera.snapshot()
        if not image:
            raise CaptureError("The camera produced no frame")
        return image

    def capture(self) -> StatusOutcome:
        """
        Capture a still and submit it to the recognition service.

        Raises:
            WorkflowStateError: The camera is not ready, is switching, or an
                image is held
        """
        with self._lock:
            if self._switching:
                raise WorkflowStateError("Capture is not available while the camera is switching")
            if self.state is not CaptureState.READY:
                raise WorkflowStateError(f"Capture is not available while {self.state.value}")
            try:
                image = self._take_still()
            except CaptureError as exc:
                logger.warning("Capture failed: %s", exc)
                self.status = StatusOutcome(StatusType.ERROR, CAPTURE_FAILED_MESSAGE)
                return self.status
            self.captured_image = image
            self.status = StatusOutcome(StatusType.INFO, PROCESSING_MESSAGE)
            self.state = CaptureState.PROCESSING

        outcome = StatusOutcome(StatusType.ERROR, SUBMISSION_FAILED_MESSAGE)
        try:
            outcome = self._outcome_for(self.client.submit(strip_data_uri(image)))
        finally:
            with self._lock:
                self.status = outcome
                self.state = CaptureState.RESULT
        return outcome

    @staticmethod
    def _outcome_for(result: SubmissionResult) -> StatusOutcome:
        if result.ok:
            return result.outcome
        if isinstance(result.error, ConfigurationError):
            return StatusOutcome(StatusType.ERROR, NOT_CONFIGURED_MESSAGE)
        return StatusOutcome(StatusType.ERROR, SUBMISSION_FAILED_MESSAGE)

    def reset(self) -> dict:
        """
        Discard the captured image and status.

        Raises:
            WorkflowStateError: A submission is in flight
        """
        with self._lock:
            self._ensure_not_processing("reset")
            self.captured_image = None
            self.status = None
            self.state = self._camera_state()
        return self.snapshot()

    def snapshot(self) -> dict:
        """Serializable view of the UI state."""
        devices = self.devices.to_dict()
        with self._lock:
            return {
                "state": self.state.value,
                "processing": self.is_processing,
                "image": self.captured_image,
                "status": self.status.to_dict() if self.status else None,
                **devices,
            }
