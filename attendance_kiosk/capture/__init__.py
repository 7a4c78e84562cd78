"""
Capture Module
==============

Device selection, the capture-and-submit workflow and the recognition client.
"""

from .devices import (
    DeviceDescriptor,
    DeviceManager,
    choose_default_device,
    enumerate_video_devices,
    is_mobile_context,
)
from .submission import RecognitionClient, StatusOutcome, StatusType, SubmissionResult
from .workflow import CaptureState, CaptureWorkflow

__all__ = [
    "CaptureState",
    "CaptureWorkflow",
    "DeviceDescriptor",
    "DeviceManager",
    "RecognitionClient",
    "StatusOutcome",
    "StatusType",
    "SubmissionResult",
    "choose_default_device",
    "enumerate_video_devices",
    "is_mobile_context",
]
