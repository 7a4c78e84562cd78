"""
Kiosk Configuration
===================

Configuration settings for the attendance kiosk, read from the environment
(and a local ``.env`` file when present).
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class ServerConfig:
    """Server configuration settings."""
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    threaded: bool = True
    log_level: str = "INFO"
    log_dir: Optional[str] = None  # None logs to console only


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    width: int = 1280
    height: int = 720
    settle_delay: float = 1.0  # seconds before a newly selected camera is ready
    max_index: int = 2  # highest OpenCV index probed when sysfs is unavailable
    jpeg_quality: int = 92


@dataclass
class RecognitionConfig:
    """Recognition service endpoints."""
    public_endpoint_url: Optional[str] = None  # used by the capture workflow
    endpoint_url: Optional[str] = None  # server-side only, used by the proxy
    timeout: Optional[float] = None  # None keeps the transport default


@dataclass
class UIConfig:
    """Presentation settings."""
    theme: str = "aurora"


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def get_server_config() -> ServerConfig:
    """Get server configuration from environment."""
    return ServerConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("DEBUG", "false").lower() == "true",
        threaded=True,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=_optional("LOG_DIR"),
    )


def get_camera_config() -> CameraConfig:
    """Get camera configuration from environment."""
    return CameraConfig(
        width=int(os.getenv("CAMERA_WIDTH", "1280")),
        height=int(os.getenv("CAMERA_HEIGHT", "720")),
        settle_delay=float(os.getenv("CAMERA_SETTLE_DELAY", "1.0")),
        max_index=int(os.getenv("CAMERA_MAX_INDEX", "2")),
        jpeg_quality=int(os.getenv("JPEG_QUALITY", "92")),
    )


def get_recognition_config() -> RecognitionConfig:
    """Get recognition endpoint configuration from environment."""
    timeout = _optional("RECOGNITION_TIMEOUT")
    return RecognitionConfig(
        public_endpoint_url=_optional("PUBLIC_RECOGNITION_URL"),
        endpoint_url=_optional("RECOGNITION_URL"),
        timeout=float(timeout) if timeout else None,
    )


def get_ui_config() -> UIConfig:
    """Get presentation configuration from environment."""
    return UIConfig(theme=os.getenv("UI_THEME", "aurora").strip().lower())
