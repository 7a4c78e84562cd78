"""
API Routes Module
=================

Flask API routes for the attendance kiosk.
"""

import logging
import time

from flask import Response, jsonify, render_template_string, request
from werkzeug.exceptions import BadRequest

from ..capture import CaptureWorkflow, is_mobile_context
from ..errors import WorkflowStateError
from ..themes import Theme
from ..utils import CameraStream
from .proxy import RecognitionProxy

logger = logging.getLogger(__name__)


def _stream_frames(camera: CameraStream):
    """Generator for streaming preview frames from the active camera."""
    while camera.is_running():
        chunk = camera.get_jpeg()
        if chunk:
            yield (b"--frame\r\n" b"Content-Type: image/jpeg\r\n\r\n" + chunk + b"\r\n")
        time.sleep(0.03)  # ~30 FPS


def _viewport_width(data: dict):
    """Viewport width reported by the page, or None if absent or not a number."""
    try:
        return int(data["viewport_width"])
    except (KeyError, TypeError, ValueError):
        return None


def register_routes(
    app,
    html_template: str,
    workflow: CaptureWorkflow,
    proxy: RecognitionProxy,
    theme: Theme,
):
    """
    Register all API routes with the Flask app.

    Args:
        app: Flask application instance
        html_template: HTML template string for the index page
        workflow: Capture workflow backing the page
        proxy: Proxy to the server-side recognition endpoint
        theme: Presentation theme for the page
    """

    @app.errorhandler(WorkflowStateError)
    def workflow_state_error(exc):
        return jsonify({"error": str(exc), **workflow.snapshot()}), 409

    @app.route("/")
    def index():
        """Serve the kiosk page."""
        return render_template_string(html_template, theme=theme)

    @app.route("/video_feed")
    def video_feed():
        """Stream MJPEG preview of the selected camera."""
        return Response(
            _stream_frames(workflow.camera),
            mimetype="multipart/x-mixed-replace; boundary=frame",
        )

    @app.route("/api/start", methods=["POST"])
    def start():
        """
        Enumerate cameras and select the default one.

        Request JSON:
            {
                "viewport_width": <int>   (optional)
            }
        """
        data = request.get_json(silent=True) or {}
        mobile = is_mobile_context(
            user_agent=request.headers.get("User-Agent"),
            viewport_width=_viewport_width(data),
        )
        return jsonify(workflow.start(mobile=mobile))

    @app.route("/api/devices")
    def devices():
        """List video input devices and the current selection."""
        return jsonify(workflow.devices.to_dict())

    @app.route("/api/devices/select", methods=["POST"])
    def select_device():
        """
        Switch to another camera.

        Request JSON:
            {
                "device_id": "<device-id>"
            }
        """
        data = request.get_json(silent=True)
        device_id = data.get("device_id") if isinstance(data, dict) else None
        if not device_id:
            return jsonify({"error": "No device_id"}), 400
        try:
            return jsonify(workflow.select_device(str(device_id)))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

    @app.route("/api/capture", methods=["POST"])
    def capture():
        """Capture a still and submit it; responds once the submission settles."""
        workflow.capture()
        return jsonify(workflow.snapshot())

    @app.route("/api/reset", methods=["POST"])
    def reset():
        """Discard the captured image and status."""
        return jsonify(workflow.reset())

    @app.route("/api/state")
    def state():
        """Current workflow state."""
        return jsonify(workflow.snapshot())

    @app.route("/api/process-attendance", methods=["POST"])
    def process_attendance():
        """
        Forward a recognition request to the server-side endpoint.

        Request JSON is relayed unchanged; the upstream JSON body and status
        code are returned.
        """
        try:
            data = request.get_json(force=True)
        except BadRequest:
            return jsonify({"error": "Proxy error", "details": "Request body is not valid JSON"}), 500
        payload, status = proxy.forward(data)
        return jsonify(payload), status

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "camera_running": workflow.camera.is_running(),
            "device_id": workflow.devices.selected_id,
            "state": workflow.state.value,
        })
