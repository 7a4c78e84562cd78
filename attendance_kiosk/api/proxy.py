"""
Recognition Proxy Module
========================

Forwards a JSON body to the server-side recognition endpoint so that the
upstream URL never reaches the browser.
"""

import logging
from typing import Any, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

ProxyResponse = Tuple[Any, int]


class RecognitionProxy:
    """Relays requests to the configured upstream URL."""

    def __init__(
        self,
        upstream_url: Optional[str],
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.upstream_url = upstream_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def forward(self, body: Any) -> ProxyResponse:
        """
        Forward ``body`` upstream.

        Returns:
            Tuple of (JSON payload, HTTP status code) for the caller to relay
        """
        if not self.upstream_url:
            return {"error": "RECOGNITION_URL environment variable not set"}, 500

        try:
            response = self.session.post(self.upstream_url, json=body, timeout=self.timeout)
            if not response.ok:
                logger.error(
                    "Recognition service error: %s %s", response.status_code, response.reason
                )
                logger.error("Recognition service response: %s", response.text)
                return {
                    "error": "Error from recognition service",
                    "details": {"status": response.status_code, "text": response.reason},
                }, response.status_code
            return response.json(), response.status_code
        except (requests.RequestException, ValueError) as exc:
            logger.error("Proxy error: %s", exc)
            return {"error": "Proxy error", "details": str(exc)}, 500
