"""
Device Manager Module
=====================

Camera enumeration, default selection and readiness tracking.

Classes:
    DeviceDescriptor: One camera input source
    DeviceManager: Holds the device list, the selection and readiness

Usage:
    manager = DeviceManager(settle_delay=1.0)
    manager.initialize(mobile=True)
    manager.select("1")   # ready again after the settle delay
"""

import logging
import os
import re
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

import cv2

from ..errors import DeviceAccessError

logger = logging.getLogger(__name__)

VIDEO_INPUT = "videoinput"
SYSFS_VIDEO_ROOT = "/sys/class/video4linux"
CAMERA_ACCESS_MESSAGE = "Unable to access camera. Please check permissions."

MOBILE_BREAKPOINT = 768
MOBILE_USER_AGENT = re.compile(
    r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE
)
REAR_FACING_HINTS = ("back", "environment")

ReadinessListener = Callable[[bool], None]


@dataclass(frozen=True)
class DeviceDescriptor:
    """A camera input source available to the kiosk."""
    device_id: str
    label: str = ""
    kind: str = VIDEO_INPUT

    def display_label(self, position: int) -> str:
        """Label shown in the camera picker; unlabelled devices get ``Camera <n>``."""
        return self.label or f"Camera {position + 1}"


def is_mobile_context(
    user_agent: Optional[str] = None,
    viewport_width: Optional[int] = None,
    breakpoint: int = MOBILE_BREAKPOINT,
) -> bool:
    """Small viewport or a mobile user agent."""
    if viewport_width is not None and viewport_width < breakpoint:
        return True
    return bool(user_agent and MOBILE_USER_AGENT.search(user_agent))


def choose_default_device(
    devices: Iterable[DeviceDescriptor], mobile: bool = False
) -> Optional[DeviceDescriptor]:
    """
    Pick the default camera.

    On mobile the first rear/environment-facing camera wins; otherwise, or
    when no label hints at one, the first video input is used.
    """
    video = [device for device in devices if device.kind == VIDEO_INPUT]
    if not video:
        return None
    if mobile:
        for device in video:
            label = device.label.lower()
            if any(hint in label for hint in REAR_FACING_HINTS):
                return device
    return video[0]


def _read_sysfs(path: str) -> str:
    with open(path, encoding="utf-8") as handle:
        return handle.read().strip()


def _enumerate_sysfs(root: str) -> List[DeviceDescriptor]:
    devices = []
    for entry in os.listdir(root):
        match = re.fullmatch(r"video(\d+)", entry)
        if not match:
            continue
        node = os.path.join(root, entry)
        index_path = os.path.join(node, "index")
        # index != 0 marks the metadata node of a camera, not a capture node
        if os.path.exists(index_path) and _read_sysfs(index_path) != "0":
            continue
        name_path = os.path.join(node, "name")
        label = _read_sysfs(name_path) if os.path.exists(name_path) else ""
        devices.append(DeviceDescriptor(device_id=match.group(1), label=label))
    return sorted(devices, key=lambda device: int(device.device_id))


def _enumerate_opencv(max_index: int) -> List[DeviceDescriptor]:
    devices = []
    for idx in range(max_index + 1):
        cap = cv2.VideoCapture(idx)
        try:
            if cap.isOpened():
                devices.append(DeviceDescriptor(device_id=str(idx)))
        finally:
            cap.release()
    return devices


def enumerate_video_devices(
    max_index: int = 2, sysfs_root: str = SYSFS_VIDEO_ROOT
) -> List[DeviceDescriptor]:
    """
    List the video input devices of this machine.

    Linux exposes labelled capture nodes under sysfs; other platforms are
    probed through OpenCV indices ``0..max_index`` and come back unlabelled.
    """
    if os.path.isdir(sysfs_root):
        return _enumerate_sysfs(sysfs_root)
    return _enumerate_opencv(max_index)


class DeviceManager:
    """
    Device list, current selection and camera readiness.

    Readiness turns true when the selected stream reports its first frame,
    or, after a user-initiated device change, once the settle delay has
    elapsed. Reports arriving during the settle window are ignored.

    Attributes:
        devices (list): Enumerated video input descriptors
        selected_id (str): Identifier of the selected device, if any
        ready (bool): Whether the selected stream is delivering frames
        error (str): User-facing message of the last enumeration failure
        stream_failed (bool): Whether the selected device could not be opened
    """

    def __init__(
        self,
        enumerate_devices: Callable[[], Iterable[DeviceDescriptor]] = enumerate_video_devices,
        settle_delay: float = 1.0,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._enumerate = enumerate_devices
        self.settle_delay = settle_delay
        self._timer_factory = timer_factory
        self._lock = threading.RLock()
        self._listeners: List[ReadinessListener] = []
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._settling = False
        self.devices: List[DeviceDescriptor] = []
        self.selected_id: Optional[str] = None
        self.ready = False
        self.error: Optional[str] = None
        self.stream_failed = False

    def add_listener(self, listener: ReadinessListener) -> None:
        self._listeners.append(listener)

    def _set_ready(self, ready: bool) -> None:
        if self.ready == ready:
            return
        self.ready = ready
        for listener in list(self._listeners):
            listener(ready)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._settling = False

    def initialize(self, mobile: bool = False) -> DeviceDescriptor:
        """
        Enumerate video inputs and select the default one.

        Raises:
            DeviceAccessError: Enumeration failed or found no video input;
                the selection is left empty
        """
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self.selected_id = None
            self.stream_failed = False
            self._set_ready(False)
            try:
                found = [d for d in self._enumerate() if d.kind == VIDEO_INPUT]
            except Exception as exc:
                logger.error("Error accessing media devices: %s", exc)
                self.devices = []
                self.error = CAMERA_ACCESS_MESSAGE
                raise DeviceAccessError(CAMERA_ACCESS_MESSAGE) from exc

            self.devices = found
            default = choose_default_device(found, mobile)
            if default is None:
                logger.error("No video input devices found")
                self.error = CAMERA_ACCESS_MESSAGE
                raise DeviceAccessError(CAMERA_ACCESS_MESSAGE)

            self.error = None
            self.selected_id = default.device_id
            logger.info("Selected camera %s (%s)", default.device_id, default.label or "unlabelled")
            return default

    def get_device(self, device_id: str) -> Optional[DeviceDescriptor]:
        return next((d for d in self.devices if d.device_id == device_id), None)

    def select(self, device_id: str) -> DeviceDescriptor:
        """
        Change the selected device.

        Readiness drops immediately and comes back after ``settle_delay``
        seconds, giving the hardware time to re-initialize.

        Raises:
            ValueError: The device id is not among the enumerated devices
        """
        with self._lock:
            device = self.get_device(device_id)
            if device is None:
                raise ValueError(f"Unknown camera device: {device_id}")
            self._cancel_timer()
            self._generation += 1
            self.selected_id = device_id
            self.stream_failed = False
            self._set_ready(False)
            self._settling = True
            self._timer = self._timer_factory(
                self.settle_delay, self._settle, args=(self._generation,)
            )
            self._timer.daemon = True
            self._timer.start()
            return device

    def _settle(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            self._settling = False
            self._set_ready(True)

    def mark_stream_acquired(self, device_id: str) -> None:
        """Platform confirmation that the selected stream delivers frames."""
        with self._lock:
            if device_id != self.selected_id or self._settling:
                return
            self._set_ready(True)

    def mark_stream_failed(self, device_id: str) -> None:
        """
        The selected device could not be opened.

        Any pending settle is dropped so readiness stays false until another
        device is selected or the devices are enumerated again.
        """
        with self._lock:
            if device_id != self.selected_id:
                return
            self._cancel_timer()
            self._generation += 1
            self.stream_failed = True
            self._set_ready(False)

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "devices": [
                    {
                        "device_id": device.device_id,
                        "label": device.display_label(position),
                        "kind": device.kind,
                    }
                    for position, device in enumerate(self.devices)
                ],
                "selected_id": self.selected_id,
                "ready": self.ready,
                "error": self.error,
                "stream_failed": self.stream_failed,
            }
