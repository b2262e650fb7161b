"""
Screenkit Kernel — Section Renderer

render_section(section, theme) → RenderNode for one text, hero, or image
section. Pure: reads the section, never writes it.

  image with src     → image node, sized to container, rounded, shadowed
  image without src  → fixed-height dashed placeholder + MissingAssetWarning
  text / hero        → one text node per block, then an optional CTA row

A CTA that fails to resolve is skipped and reported; its siblings still render.
Visibility is the composer's job and is not checked here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from screenkit.kernel.errors import ConfigError, MissingAssetWarning
from screenkit.kernel.models import dump_action
from screenkit.kernel.tokens import (
    resolve_cta_style,
    resolve_spacing,
    resolve_style,
    resolve_variant,
)
from screenkit.kernel.types import (
    CTA_KINDS,
    DEFAULT_CTA_SIZE,
    ResolvedTheme,
    RenderNode,
    RenderOptions,
)

if TYPE_CHECKING:
    from screenkit.kernel.models import CTAConfig, CtaAction, ImageSection, Section, TextBlock

logger = logging.getLogger(__name__)

SECTION_INNER_GAP = 8
IMAGE_RADIUS = 16
IMAGE_SHADOW = "0 8px 24px rgba(0,0,0,0.08)"
PLACEHOLDER_HEIGHT = 200
PLACEHOLDER_TEXT = "Image placeholder"

WIDTH_STYLES: dict[str, dict[str, Any]] = {
    "auto": {"width": "100%"},
    "full": {"width": "100%"},
    "1/2": {"flex": 1},
    "1/3": {"flex": 1},
    "2/3": {"flex": 2},
}

ALIGN_STYLES: dict[str, dict[str, Any]] = {
    "left": {"textAlign": "left", "alignItems": "flex-start"},
    "center": {"textAlign": "center", "alignItems": "center"},
    "right": {"textAlign": "right", "alignItems": "flex-end"},
}


@dataclass
class RenderReport:
    """Collects what went wrong (or was substituted) while rendering."""

    errors: list[ConfigError] = field(default_factory=list)
    warnings: list[MissingAssetWarning] = field(default_factory=list)
    bindings: dict[str, CtaAction] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_section(
    section: Section,
    theme: ResolvedTheme,
    options: RenderOptions | None = None,
    report: RenderReport | None = None,
) -> RenderNode:
    """
    Render one section. Raises ConfigError when the section itself is out of
    domain (unknown type, width, align, or spacing token); the caller decides
    whether to skip it.
    """
    opts = options or RenderOptions()
    report = report if report is not None else RenderReport()

    container_style = _section_style(section)

    if section.type == "image":
        children = [_render_image(section, report)]
    elif section.type in ("text", "hero"):
        children = [_render_text_block(b, f"{section.id}/{b.id}") for b in section.blocks]
        if section.ctas:
            row = render_cta_row(section.ctas, section.id, opts, report)
            if row.children:
                row.style["marginTop"] = SECTION_INNER_GAP
                children.append(row)
    else:
        raise ConfigError(f"Unknown section type: {section.type!r}", path=f"sections.{section.id}")

    return RenderNode(
        kind="section",
        key=section.id,
        style=container_style,
        props={"type": section.type, "accent": theme.accent_color},
        children=children,
    )


def render_cta_row(
    ctas: list[CTAConfig],
    scope: str,
    options: RenderOptions,
    report: RenderReport,
    justify: str | None = None,
) -> RenderNode:
    """
    Wrapped row of CTA nodes. Each CTA is bound under `<scope>/<cta id>`.
    A key already bound in `report` (same row, or another scope that spells
    the same key) is skipped and reported; the first binding keeps it.
    """
    style: dict[str, Any] = {"display": "flex", "flexWrap": "wrap", "gap": SECTION_INNER_GAP}
    if justify:
        style["justifyContent"] = justify

    nodes: list[RenderNode] = []
    for cta in ctas:
        key = f"{scope}/{cta.id}"
        if key in report.bindings:
            err = ConfigError(f"Duplicate CTA key '{key}'", path=key)
            logger.warning("Skipping CTA: %s", err)
            report.errors.append(err)
            continue
        try:
            node = render_cta(cta, key, options)
        except ConfigError as e:
            err = ConfigError(e.message, path=key)
            logger.warning("Skipping CTA: %s", err)
            report.errors.append(err)
            continue
        report.bindings[key] = cta.action
        nodes.append(node)

    return RenderNode(kind="cta_row", key=scope, style=style, children=nodes)


def render_cta(cta: CTAConfig, key: str, options: RenderOptions) -> RenderNode:
    if cta.kind not in CTA_KINDS:
        raise ConfigError(f"Unknown CTA kind: {cta.kind!r}")
    style = resolve_cta_style(cta, options.link_color_policy, options.link_color)
    props: dict[str, Any] = {
        "label": cta.label,
        "kind": cta.kind,
        "priority": cta.priority,
        "size": cta.size or DEFAULT_CTA_SIZE,
        "action": dump_action(cta.action),
    }
    if cta.icon:
        props["icon"] = cta.icon
    return RenderNode(kind="cta", key=key, style=style, props=props)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _section_style(section: Section) -> dict[str, Any]:
    width = section.width or "full"
    align = section.align or "left"
    if width not in WIDTH_STYLES:
        raise ConfigError(f"Unknown section width: {width!r}", path=f"sections.{section.id}")
    if align not in ALIGN_STYLES:
        raise ConfigError(f"Unknown section align: {align!r}", path=f"sections.{section.id}")

    style: dict[str, Any] = dict(WIDTH_STYLES[width])
    style["padding"] = resolve_spacing(section.padding) if section.padding else 0
    style["margin"] = resolve_spacing(section.margin) if section.margin else 0
    style["display"] = "flex"
    style["flexDirection"] = "column"
    style["gap"] = SECTION_INNER_GAP
    style.update(ALIGN_STYLES[align])
    return style


def _render_image(section: ImageSection, report: RenderReport) -> RenderNode:
    if section.src:
        return RenderNode(
            kind="image",
            key=f"{section.id}/image",
            style={"maxWidth": "100%", "borderRadius": IMAGE_RADIUS, "boxShadow": IMAGE_SHADOW},
            props={"src": section.src, "alt": section.alt or ""},
        )

    report.warnings.append(MissingAssetWarning(section.id))
    return RenderNode(
        kind="placeholder",
        key=f"{section.id}/image",
        style={
            "width": "100%",
            "height": PLACEHOLDER_HEIGHT,
            "borderRadius": IMAGE_RADIUS,
            "border": "1px dashed #D1D5DB",
            "display": "flex",
            "alignItems": "center",
            "justifyContent": "center",
            "color": "#9CA3AF",
        },
        props={"text": PLACEHOLDER_TEXT, "alt": section.alt or ""},
    )


def _render_text_block(block: TextBlock, key: str) -> RenderNode:
    style = resolve_style(resolve_variant(block.variant), block.style)
    return RenderNode(
        kind="text",
        key=key,
        style=style,
        props={"text": block.text, "variant": block.variant},
    )
