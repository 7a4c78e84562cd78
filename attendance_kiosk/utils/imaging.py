"""
Imaging Module
==============

JPEG encoding helpers for preview chunks and captured stills.
"""

import base64
from typing import Optional

import cv2
import numpy as np

JPEG_MIME = "image/jpeg"
DATA_URI_PREFIX = f"data:{JPEG_MIME};base64,"


def encode_jpeg(frame: Optional[np.ndarray], quality: int = 92) -> bytes:
    """
    Encode frame to JPEG bytes.

    Returns:
        JPEG bytes, or empty bytes if the frame is empty or encoding fails
    """
    if frame is None or frame.size == 0:
        return b""
    ret, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    return buffer.tobytes() if ret else b""


def to_data_uri(jpeg: bytes) -> Optional[str]:
    """Wrap JPEG bytes in a base64 data URI, or None for empty input."""
    if not jpeg:
        return None
    return DATA_URI_PREFIX + base64.b64encode(jpeg).decode("utf-8")


def strip_data_uri(data_uri: str) -> str:
    """
    Return the base64 payload of a data URI.

    Strings without a ``data:...,`` prefix are returned unchanged.
    """
    if data_uri.startswith("data:") and "," in data_uri:
        return data_uri.split(",", 1)[1]
    return data_uri
