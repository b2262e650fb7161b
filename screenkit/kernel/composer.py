"""
Screenkit Kernel — Screen Composer

Pure function: (screen, context, options?) → RenderTree
No IO. Deterministic: same document + same context → same tree, always.

Steps:
  1. resolve theme (defaults light / surface / primary)
  2. drop sections whose visibility predicate fails for the context
  3. stable-sort survivors by `order` (missing → 0)
  4. render each section
  5. wrap them in the layout's arrangement
  6. global CTAs as a right-aligned closing row
  7. identity strip: "Screen: <id> · Layout: <layout>"

A malformed section or CTA is skipped and reported on RenderTree.errors;
a bad layout or theme token falls back to its default. Nothing here raises
for document content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from screenkit.kernel.actions import Capabilities, DispatchResult, dispatch
from screenkit.kernel.errors import ConfigError, MissingAssetWarning
from screenkit.kernel.layout import apply_arrangement, arrange, viewport_frame_style
from screenkit.kernel.models import ScreenTheme
from screenkit.kernel.sections import RenderReport, render_cta_row, render_section
from screenkit.kernel.tokens import resolve_theme
from screenkit.kernel.types import (
    DEFAULT_ACCENT,
    DEFAULT_BACKGROUND,
    DEFAULT_COLOR_SCHEME,
    DEFAULT_LAYOUT,
    RenderContext,
    RenderNode,
    RenderOptions,
    ResolvedTheme,
)

if TYPE_CHECKING:
    from screenkit.kernel.models import CtaAction, ScreenConfig, Section, VisibilityConfig

logger = logging.getLogger(__name__)

GLOBAL_CTA_SCOPE = "screen"


@dataclass
class RenderTree:
    """A composed screen: the node tree plus what was skipped or substituted."""

    root: RenderNode
    errors: list[ConfigError] = field(default_factory=list)
    warnings: list[MissingAssetWarning] = field(default_factory=list)
    bindings: dict[str, CtaAction] = field(default_factory=dict)

    def activate(self, key: str, capabilities: Capabilities) -> DispatchResult:
        """Dispatch the action bound to the CTA rendered under `key`."""
        try:
            action = self.bindings[key]
        except KeyError:
            raise KeyError(f"No CTA rendered under '{key}'") from None
        return dispatch(action, capabilities)

    def section_order(self) -> list[str]:
        return [n.key for n in self.root.find("section")]

    def to_dict(self) -> dict[str, Any]:
        return self.root.to_dict()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compose(
    screen: ScreenConfig,
    context: RenderContext | None = None,
    options: RenderOptions | None = None,
) -> RenderTree:
    ctx = context or RenderContext()
    opts = options or RenderOptions()
    report = RenderReport()

    theme = _resolve_theme_or_default(screen.theme, report)
    layout = screen.layout
    try:
        rule = arrange(layout)
    except ConfigError as e:
        report.errors.append(e)
        logger.warning("Screen '%s': %s; using '%s'", screen.id, e, DEFAULT_LAYOUT)
        layout = DEFAULT_LAYOUT
        rule = arrange(layout)

    unique: list[Section] = []
    seen: set[str] = set()
    for i, section in enumerate(screen.sections):
        if section.id in seen:
            err = ConfigError(f"Duplicate section id '{section.id}'", path=f"sections.{i}")
            logger.warning("Skipping section: %s", err)
            report.errors.append(err)
            continue
        seen.add(section.id)
        unique.append(section)

    visible = [s for s in unique if is_visible(s.visibility, ctx)]
    ordered = sort_sections(visible)

    rendered: list[RenderNode] = []
    for section in ordered:
        try:
            rendered.append(render_section(section, theme, opts, report))
        except ConfigError as e:
            logger.warning("Skipping section '%s': %s", section.id, e)
            report.errors.append(e)

    card_children = [
        _identity_strip(screen.id, layout, theme),
        apply_arrangement(rule, rendered),
    ]

    if screen.ctas:
        row = render_cta_row(screen.ctas, GLOBAL_CTA_SCOPE, opts, report, justify="flex-end")
        if row.children:
            row.style["marginTop"] = 24
            card_children.append(row)

    card = RenderNode(kind="card", key=screen.id, style=_card_style(theme), children=card_children)
    frame = RenderNode(kind="frame", style=viewport_frame_style(rule), children=[card])
    root = RenderNode(
        kind="screen",
        key=screen.id,
        style={
            "background": theme.page_background,
            "minHeight": "100vh",
            "padding": 16,
            "boxSizing": "border-box",
        },
        props={"id": screen.id, "version": screen.version, "layout": layout},
        children=[frame],
    )

    return RenderTree(
        root=root,
        errors=report.errors,
        warnings=report.warnings,
        bindings=report.bindings,
    )


def is_visible(visibility: VisibilityConfig | None, context: RenderContext) -> bool:
    """
    Evaluate a section's visibility predicate. Each unset axis is unconstrained;
    an empty platform list is unconstrained; an unknown viewport width passes
    the width checks.
    """
    if visibility is None:
        return True
    if visibility.platforms and context.platform not in visibility.platforms:
        return False
    width = context.viewport_width_px
    if width is None:
        return True
    if visibility.min_width_px is not None and width < visibility.min_width_px:
        return False
    if visibility.max_width_px is not None and width > visibility.max_width_px:
        return False
    return True


def sort_sections(sections: list[Section]) -> list[Section]:
    """Stable sort by `order` ascending; missing order counts as 0."""
    return sorted(sections, key=lambda s: s.order if s.order is not None else 0)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _resolve_theme_or_default(theme: ScreenTheme | None, report: RenderReport) -> ResolvedTheme:
    try:
        return resolve_theme(theme)
    except ConfigError:
        pass

    # Resolve field by field so one bad token doesn't reset the others
    fields = {
        "color_scheme": DEFAULT_COLOR_SCHEME,
        "background": DEFAULT_BACKGROUND,
        "accent": DEFAULT_ACCENT,
    }
    kept: dict[str, Any] = {}
    for name, default in fields.items():
        value = getattr(theme, name, None)
        try:
            resolve_theme(ScreenTheme.model_construct(**{name: value}))
        except ConfigError as e:
            err = ConfigError(f"{e.message}; using '{default}'", path=f"theme.{name}")
            logger.warning("%s", err)
            report.errors.append(err)
            continue
        kept[name] = value
    return resolve_theme(ScreenTheme.model_construct(**kept))


def _card_style(theme: ResolvedTheme) -> dict[str, Any]:
    return {
        "maxWidth": 900,
        "margin": "0 auto",
        "background": theme.card_background,
        "borderRadius": 12 if theme.background == "inset" else 24,
        "padding": 24,
        "boxShadow": "none" if theme.background == "transparent" else "0 18px 45px rgba(15,23,42,0.12)",
        "boxSizing": "border-box",
    }


def _identity_strip(screen_id: str, layout: str, theme: ResolvedTheme) -> RenderNode:
    label = RenderNode(
        kind="text",
        key="identity/label",
        style={
            "fontSize": 11,
            "textTransform": "uppercase",
            "letterSpacing": 1.4,
            "color": "#6B7280",
        },
        props={"text": f"Screen: {screen_id} · Layout: {layout}"},
    )
    return RenderNode(
        kind="identity",
        key="identity",
        style={
            "borderLeft": f"3px solid {theme.accent_color}",
            "paddingLeft": 8,
            "marginBottom": 8,
        },
        children=[label],
    )
