"""
Screenkit Kernel — the pure engine.

Components:
  tokens    — semantic design token → concrete value tables
  actions   — CTA action dispatch through abstract capabilities
  sections  — one section → render node
  layout    — layout identifier → arrangement rule
  composer  — ScreenConfig → RenderTree  (pure, deterministic)

Documents:
  models    — pydantic ScreenConfig, strict/lenient loaders, wire dump
  html      — RenderTree → standalone HTML
"""

from screenkit.kernel.actions import (
    Capabilities,
    DispatchResult,
    HandlerRegistry,
    RecordingCapabilities,
    dispatch,
)
from screenkit.kernel.composer import RenderTree, compose, is_visible, sort_sections
from screenkit.kernel.errors import CapabilityError, ConfigError, MissingAssetWarning
from screenkit.kernel.html import render_html
from screenkit.kernel.layout import ArrangementRule, arrange
from screenkit.kernel.models import (
    CTAConfig,
    ScreenConfig,
    dump_screen,
    load_screen,
    parse_screen,
    screen_to_json,
)
from screenkit.kernel.sections import render_section
from screenkit.kernel.tokens import resolve_style, resolve_theme
from screenkit.kernel.types import RenderContext, RenderNode, RenderOptions

__all__ = [
    "ArrangementRule",
    "CTAConfig",
    "Capabilities",
    "CapabilityError",
    "ConfigError",
    "DispatchResult",
    "HandlerRegistry",
    "MissingAssetWarning",
    "RecordingCapabilities",
    "RenderContext",
    "RenderNode",
    "RenderOptions",
    "RenderTree",
    "ScreenConfig",
    "arrange",
    "compose",
    "dispatch",
    "dump_screen",
    "is_visible",
    "load_screen",
    "parse_screen",
    "render_html",
    "render_section",
    "resolve_style",
    "resolve_theme",
    "screen_to_json",
    "sort_sections",
]
