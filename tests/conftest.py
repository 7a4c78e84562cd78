"""
Shared fakes for the kiosk tests.

Cameras, timers and the HTTP session are replaced so that no hardware or
network is touched.
"""

import os
import sys
import time

import numpy as np
import pytest
import requests

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from attendance_kiosk.capture import DeviceDescriptor


class FakeTimer:
    """Stands in for threading.Timer; fires only when told to."""

    def __init__(self, interval, function, args=()):
        self.interval = interval
        self.function = function
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args)


class TimerRecorder:
    """Timer factory keeping every timer it created."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=()):
        timer = FakeTimer(interval, function, args)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


class FakeCapture:
    """Minimal cv2.VideoCapture replacement delivering a fixed frame."""

    def __init__(self, index=0, opened=True, frame=None):
        self.index = index
        self.opened = opened
        self.frame = frame if frame is not None else np.full((72, 128, 3), 127, dtype=np.uint8)
        self.released = False
        self.props = {}

    def isOpened(self):
        return self.opened and not self.released

    def set(self, prop, value):
        self.props[prop] = value
        return True

    def read(self):
        time.sleep(0.005)
        return True, self.frame.copy()

    def release(self):
        self.released = True


class StubCamera:
    """CameraStream stand-in reporting stream acquisition synchronously."""

    def __init__(self, opens=True, still="data:image/jpeg;base64,QUJDRA==", failing=()):
        self.opens = opens
        self.failing = set(failing)
        self.still = still
        self.on_ready = None
        self.mirrored = False
        self.device_id = None
        self.opened = []
        self.stopped = 0

    def open(self, device_id):
        if not self.opens or device_id in self.failing:
            return False
        self.device_id = device_id
        self.opened.append(device_id)
        if self.on_ready is not None:
            self.on_ready(device_id)
        return True

    def stop(self):
        self.stopped += 1
        self.device_id = None

    def snapshot(self):
        return self.still

    def is_running(self):
        return self.device_id is not None


class FakeResponse:
    """Subset of requests.Response used by the client and the proxy."""

    def __init__(self, status_code=200, payload=None, reason="OK", text=""):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Records POSTs and answers with a canned response or exception."""

    def __init__(self, response=None, error=None, on_post=None):
        self.response = response or FakeResponse(payload={"message": "ok", "status": "success"})
        self.error = error
        self.on_post = on_post
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.on_post is not None:
            self.on_post()
        if self.error is not None:
            raise self.error
        return self.response


def wait_for(predicate, timeout=2.0):
    """Poll until predicate() is true or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture
def front_and_back():
    return [
        DeviceDescriptor(device_id="0", label="Front"),
        DeviceDescriptor(device_id="1", label="Back Camera"),
    ]
