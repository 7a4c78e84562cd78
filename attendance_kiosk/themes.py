"""
Themes Module
=============

Presentation palettes for the kiosk page. The workflow is the same for
every theme; only colors and status icons change.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_THEME = "aurora"


@dataclass(frozen=True)
class StatusStyle:
    """Icon and colors of one status classification."""
    icon: str
    foreground: str
    background: str


@dataclass(frozen=True)
class Theme:
    """Page palette plus one style per status classification."""
    name: str
    page_background: str
    panel_background: str
    text: str
    muted: str
    accent: str
    border: str
    statuses: Dict[str, StatusStyle] = field(default_factory=dict)

    def status_style(self, status: str) -> StatusStyle:
        """Style for a classification, the ``info`` style for anything unknown."""
        return self.statuses.get(status, self.statuses["info"])


THEMES: Dict[str, Theme] = {
    "aurora": Theme(
        name="aurora",
        page_background="linear-gradient(135deg, #eef2ff 0%, #faf5ff 50%, #fdf2f8 100%)",
        panel_background="rgba(255, 255, 255, 0.9)",
        text="#111827",
        muted="#6b7280",
        accent="#4f46e5",
        border="#e5e7eb",
        statuses={
            "success": StatusStyle("✔", "#047857", "#ecfdf5"),
            "error": StatusStyle("⚠", "#be123c", "#fff1f2"),
            "warning": StatusStyle("⚠", "#b45309", "#fffbeb"),
            "info": StatusStyle("ℹ", "#0369a1", "#f0f9ff"),
        },
    ),
    "midnight": Theme(
        name="midnight",
        page_background="#0f172a",
        panel_background="#1e293b",
        text="#f8fafc",
        muted="#94a3b8",
        accent="#ec4899",
        border="#334155",
        statuses={
            "success": StatusStyle("✔", "#22c55e", "rgba(34, 197, 94, 0.12)"),
            "error": StatusStyle("✖", "#ef4444", "rgba(239, 68, 68, 0.12)"),
            "warning": StatusStyle("⚠", "#f59e0b", "rgba(245, 158, 11, 0.12)"),
            "info": StatusStyle("ℹ", "#38bdf8", "rgba(56, 189, 248, 0.12)"),
        },
    ),
}


def get_theme(name: str) -> Theme:
    """
    Look up a theme by name (case-insensitive).

    Unknown names log a warning and fall back to the default theme.
    """
    theme = THEMES.get((name or "").lower())
    if theme is None:
        logger.warning("Unknown UI theme %r, using %s", name, DEFAULT_THEME)
        theme = THEMES[DEFAULT_THEME]
    return theme
