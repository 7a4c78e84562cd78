"""
Utilities Module
================

Camera stream ownership and JPEG encoding helpers.
"""

from .camera_manager import CameraStream
from .imaging import encode_jpeg, strip_data_uri, to_data_uri

__all__ = ["CameraStream", "encode_jpeg", "strip_data_uri", "to_data_uri"]
