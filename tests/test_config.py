"""
Unit tests for configuration loading and themes.
"""

import logging
import logging.handlers

import pytest
from flask import Flask
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config import get_camera_config, get_recognition_config, get_server_config, get_ui_config
from attendance_kiosk.logging_config import setup_logging
from attendance_kiosk.themes import DEFAULT_THEME, get_theme


class TestSettings:
    """Test suite for environment-driven settings."""

    def test_recognition_urls_unset(self, monkeypatch):
        monkeypatch.delenv("PUBLIC_RECOGNITION_URL", raising=False)
        monkeypatch.setenv("RECOGNITION_URL", "  ")
        monkeypatch.delenv("RECOGNITION_TIMEOUT", raising=False)

        config = get_recognition_config()

        assert config.public_endpoint_url is None
        assert config.endpoint_url is None
        assert config.timeout is None

    def test_recognition_urls_set(self, monkeypatch):
        monkeypatch.setenv("PUBLIC_RECOGNITION_URL", "https://public.example.com/api")
        monkeypatch.setenv("RECOGNITION_URL", "https://private.example.com/api")
        monkeypatch.setenv("RECOGNITION_TIMEOUT", "7.5")

        config = get_recognition_config()

        assert config.public_endpoint_url == "https://public.example.com/api"
        assert config.endpoint_url == "https://private.example.com/api"
        assert config.timeout == 7.5

    def test_camera_config(self, monkeypatch):
        monkeypatch.setenv("CAMERA_SETTLE_DELAY", "0.25")
        monkeypatch.setenv("CAMERA_WIDTH", "640")
        monkeypatch.delenv("CAMERA_HEIGHT", raising=False)

        config = get_camera_config()

        assert config.settle_delay == 0.25
        assert config.width == 640
        assert config.height == 720

    def test_server_config(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DEBUG", "TRUE")
        monkeypatch.delenv("LOG_DIR", raising=False)

        config = get_server_config()

        assert config.port == 8080
        assert config.debug is True
        assert config.log_dir is None

    def test_ui_theme(self, monkeypatch):
        monkeypatch.setenv("UI_THEME", " Midnight ")
        assert get_ui_config().theme == "midnight"


class TestLogging:
    """Test suite for setup_logging."""

    @pytest.fixture
    def root_handlers(self):
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        yield root
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            if handler not in saved[0]:
                handler.close()
        for handler in saved[0]:
            root.addHandler(handler)
        root.setLevel(saved[1])

    def test_console_only(self, root_handlers):
        app = Flask(__name__)

        setup_logging(app, "warning")

        assert root_handlers.level == logging.WARNING
        assert app.logger.level == logging.WARNING
        assert [type(h) for h in root_handlers.handlers] == [logging.StreamHandler]

    def test_rotating_file_in_log_dir(self, root_handlers, tmp_path):
        """Test that a configured log directory gets a rotating log file."""
        app = Flask(__name__)
        log_dir = tmp_path / "logs"

        setup_logging(app, "DEBUG", str(log_dir), max_log_size=1024, backup_count=2)
        logging.getLogger("attendance_kiosk.test").info("camera 0 opened")

        file_handlers = [
            h for h in root_handlers.handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert file_handlers[0].backupCount == 2
        file_handlers[0].flush()
        content = (log_dir / "attendance_kiosk.log").read_text(encoding="utf-8")
        assert "INFO" in content
        assert "camera 0 opened" in content


class TestThemes:
    """Test suite for presentation themes."""

    def test_unknown_theme_falls_back(self):
        assert get_theme("neon").name == DEFAULT_THEME

    def test_every_theme_styles_every_status(self):
        for name in ("aurora", "midnight"):
            theme = get_theme(name)
            for status in ("success", "error", "warning", "info"):
                assert theme.status_style(status).foreground

    def test_unknown_status_uses_info_style(self):
        theme = get_theme("aurora")
        assert theme.status_style("") == theme.statuses["info"]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
