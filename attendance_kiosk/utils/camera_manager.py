"""
Camera Stream Module
====================

Thread-safe ownership of the single active camera stream.

One background loop keeps the latest frame of the selected device. The
first frame delivered by a freshly opened device is reported through
``on_ready`` as the platform's confirmation that the stream was acquired.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

import cv2
import numpy as np

from .imaging import encode_jpeg, to_data_uri

logger = logging.getLogger(__name__)

CaptureFactory = Callable[[int], Any]
ReadyCallback = Callable[[str], None]


class CameraStream:
    """
    Owns the capture loop of the currently selected camera.

    Opening another device stops the running loop and releases its
    capture before the new one is acquired.

    Attributes:
        running (bool): Whether the capture loop is running
        device_id (str): Identifier of the device being captured
        mirrored (bool): Whether frames are flipped horizontally
    """

    def __init__(
        self,
        width: int = 1280,
        height: int = 720,
        jpeg_quality: int = 92,
        capture_factory: CaptureFactory = cv2.VideoCapture,
        on_ready: Optional[ReadyCallback] = None,
    ):
        """
        Initialize the camera stream.

        Args:
            width: Requested frame width
            height: Requested frame height
            jpeg_quality: JPEG quality for preview chunks and stills
            capture_factory: Callable opening a capture for an integer index
            on_ready: Called with the device id once its first frame arrives
        """
        self.lock = threading.Lock()
        self.width = width
        self.height = height
        self.jpeg_quality = jpeg_quality
        self.capture_factory = capture_factory
        self.on_ready = on_ready
        self.capture = None
        self.device_id: Optional[str] = None
        self.frame: Optional[np.ndarray] = None
        self.mirrored = False
        self.running = False
        self.thread: Optional[threading.Thread] = None

    def open(self, device_id: str) -> bool:
        """
        Start or switch to the given device.

        Args:
            device_id: Device identifier (an OpenCV index as a string)

        Returns:
            True if the capture opened, False otherwise
        """
        with self.lock:
            if self.device_id == device_id and self.running:
                return True

            self._stop_internal()

            try:
                capture = self.capture_factory(int(device_id))
                if not capture.isOpened():
                    capture.release()
                    logger.error("Camera %s could not be opened", device_id)
                    return False
                capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
                capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            except Exception as exc:
                logger.exception("Failed to open camera %s: %s", device_id, exc)
                return False

            self.capture = capture
            self.device_id = device_id
            self.running = True
            self.thread = threading.Thread(
                target=self._capture_loop,
                args=(capture, device_id),
                name=f"camera-{device_id}",
                daemon=True,
            )
            self.thread.start()
            logger.info("Camera %s opened", device_id)
            return True

    def _stop_internal(self) -> None:
        """Internal method to stop the current capture (not thread-safe)."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=2.0)
            self.thread = None
        if self.capture is not None:
            try:
                self.capture.release()
            except Exception as exc:
                logger.warning("Releasing camera %s failed: %s", self.device_id, exc)
            self.capture = None
        self.frame = None
        self.device_id = None

    def stop(self) -> None:
        """Stop the current capture (thread-safe)."""
        with self.lock:
            self._stop_internal()

    def _capture_loop(self, capture: Any, device_id: str) -> None:
        """Background capture loop for continuous frame acquisition."""
        acquired = False
        while self.running and self.device_id == device_id and capture.isOpened():
            try:
                ret, frame = capture.read()
            except Exception as exc:
                logger.error("Capture error on camera %s: %s", device_id, exc)
                break
            if not ret or frame is None:
                time.sleep(0.01)
                continue
            self.frame = cv2.flip(frame, 1) if self.mirrored else frame.copy()
            if not acquired:
                acquired = True
                if self.on_ready is not None:
                    self.on_ready(device_id)

    def get_frame(self) -> Optional[np.ndarray]:
        """
        Get the latest captured frame (copy).

        Returns:
            Copy of latest frame as numpy array, or None if no frame available
        """
        frame = self.frame
        return frame.copy() if frame is not None else None

    def get_jpeg(self) -> bytes:
        """Latest frame as JPEG bytes, empty if no frame is available."""
        return encode_jpeg(self.get_frame(), self.jpeg_quality)

    def snapshot(self) -> Optional[str]:
        """Take a still of the latest frame as a JPEG data URI."""
        return to_data_uri(self.get_jpeg())

    def is_running(self) -> bool:
        """Check if a capture loop is currently running."""
        return self.running
