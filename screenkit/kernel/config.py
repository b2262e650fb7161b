"""
Screenkit configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Kernel settings from environment variables."""

    # Logging
    LOG_LEVEL: str = os.environ.get("SCREENKIT_LOG_LEVEL", "WARNING")

    # Default render context (CLI and callers that don't pass one)
    DEFAULT_PLATFORM: str = os.environ.get("SCREENKIT_DEFAULT_PLATFORM", "web")
    VIEWPORT_WIDTH_PX: int = int(os.environ.get("SCREENKIT_VIEWPORT_WIDTH_PX", "1280"))

    # Link-kind CTA coloring: "fixed" uses LINK_COLOR for every priority,
    # "priority" uses the priority's own foreground color
    LINK_COLOR_POLICY: str = os.environ.get("SCREENKIT_LINK_COLOR_POLICY", "fixed")
    LINK_COLOR: str = os.environ.get("SCREENKIT_LINK_COLOR", "#2563EB")


settings = Settings()
