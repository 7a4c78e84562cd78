"""
Attendance Kiosk
================

A Flask-based kiosk that captures a still from a camera and submits it to
a remote face recognition service for attendance.

Modules:
    - capture: Device selection, capture workflow and recognition client
    - api: Flask API routes and the recognition proxy
    - utils: Camera stream and JPEG helpers
"""

__version__ = "1.0.0"
__author__ = "Attendance Kiosk Team"
