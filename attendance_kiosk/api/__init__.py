"""
API Routes Module
=================

Contains Flask API routes and the recognition proxy.
"""

from .proxy import RecognitionProxy
from .routes import register_routes

__all__ = ["RecognitionProxy", "register_routes"]
