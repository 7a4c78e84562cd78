"""
Configuration Module
====================
"""

from .settings import (
    ServerConfig,
    CameraConfig,
    RecognitionConfig,
    UIConfig,
    get_server_config,
    get_camera_config,
    get_recognition_config,
    get_ui_config,
)

__all__ = [
    "ServerConfig",
    "CameraConfig",
    "RecognitionConfig",
    "UIConfig",
    "get_server_config",
    "get_camera_config",
    "get_recognition_config",
    "get_ui_config",
]
