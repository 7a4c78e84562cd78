"""
Attendance Kiosk Server
=======================

Main entry point for the Flask server.

Usage:
    python run.py

Or with gunicorn (a single worker, the camera is owned by one process):
    gunicorn -w 1 --threads 4 -b 0.0.0.0:5000 "run:create_app()"
"""

import functools
import os
import sys

# Add server source to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from flask import Flask

from attendance_kiosk.api import RecognitionProxy, register_routes
from attendance_kiosk.capture import (
    CaptureWorkflow,
    DeviceManager,
    RecognitionClient,
    enumerate_video_devices,
)
from attendance_kiosk.logging_config import setup_logging
from attendance_kiosk.themes import get_theme
from attendance_kiosk.utils import CameraStream
from config import (
    get_camera_config,
    get_recognition_config,
    get_server_config,
    get_ui_config,
)
from templates.index import HTML_TEMPLATE


def create_app(
    server_config=None,
    camera_config=None,
    recognition_config=None,
    ui_config=None,
    enumerate_devices=None,
    capture_factory=None,
    session=None,
    timer_factory=None,
):
    """
    Create the Flask app and wire the kiosk components.

    Every argument defaults to the environment configuration or the real
    platform implementation; tests pass fakes for devices, captures,
    timers and the HTTP session.
    """
    server_config = server_config or get_server_config()
    camera_config = camera_config or get_camera_config()
    recognition_config = recognition_config or get_recognition_config()
    ui_config = ui_config or get_ui_config()

    app = Flask(__name__)
    app.config["JSON_SORT_KEYS"] = False
    setup_logging(app, server_config.log_level, server_config.log_dir)

    devices_kwargs = {"settle_delay": camera_config.settle_delay}
    if timer_factory is not None:
        devices_kwargs["timer_factory"] = timer_factory
    devices = DeviceManager(
        enumerate_devices or functools.partial(enumerate_video_devices, camera_config.max_index),
        **devices_kwargs,
    )

    camera_kwargs = {}
    if capture_factory is not None:
        camera_kwargs["capture_factory"] = capture_factory
    camera = CameraStream(
        width=camera_config.width,
        height=camera_config.height,
        jpeg_quality=camera_config.jpeg_quality,
        **camera_kwargs,
    )

    client = RecognitionClient(
        recognition_config.public_endpoint_url,
        timeout=recognition_config.timeout,
        session=session,
    )
    proxy = RecognitionProxy(
        recognition_config.endpoint_url,
        timeout=recognition_config.timeout,
        session=session,
    )

    workflow = CaptureWorkflow(devices, camera, client)
    app.extensions["capture_workflow"] = workflow

    register_routes(app, HTML_TEMPLATE, workflow, proxy, get_theme(ui_config.theme))
    return app


def main():
    """Main entry point."""
    config = get_server_config()
    app = create_app(server_config=config)
    print(f"""
╔══════════════════════════════════════════════════════╗
║          AI Attendance Kiosk                         ║
╠══════════════════════════════════════════════════════╣
║  Server running at: http://{config.host}:{config.port:<5}              ║
║  Debug mode: {str(config.debug):<5}                               ║
║                                                      ║
║  Endpoints:                                          ║
║    GET  /                  - Kiosk page              ║
║    GET  /video_feed        - Camera preview stream   ║
║    POST /api/start         - Enumerate cameras       ║
║    POST /api/capture       - Capture and submit      ║
║    POST /api/reset         - Take new photo          ║
║    POST /api/process-attendance - Recognition proxy  ║
║    GET  /health            - Health check            ║
╚══════════════════════════════════════════════════════╝
    """)
    # The reloader would start a second process competing for the camera
    app.run(host=config.host, port=config.port, debug=config.debug,
            threaded=config.threaded, use_reloader=False)


if __name__ == "__main__":
    main()
