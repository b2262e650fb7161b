"""
Screenkit Kernel — Token Resolution

Pure mapping tables from semantic design tokens to concrete visual values.
Every table is total over its token domain (see types.py). An out-of-domain
token is a caller contract violation and raises ConfigError.

Style layering for text blocks is explicit in resolve_style():
  1. variant preset      (font size, weight, family, letter spacing)
  2. token overrides     (color, weight, spacingTop, spacingBottom)
  3. inline overrides    (align, transform, maxLines)
Later layers always win.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from screenkit.kernel.errors import ConfigError
from screenkit.kernel.types import (
    DEFAULT_ACCENT,
    DEFAULT_BACKGROUND,
    DEFAULT_COLOR_SCHEME,
    DEFAULT_CTA_SIZE,
    DEFAULT_LINK_COLOR,
    ResolvedTheme,
    TypographyPreset,
)

if TYPE_CHECKING:
    from screenkit.kernel.models import CTAConfig, ScreenTheme, TextStyle

ResolvedStyle = dict[str, Any]

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

SPACING_PX: dict[str, int] = {
    "none": 0,
    "xs": 4,
    "sm": 8,
    "md": 16,
    "lg": 24,
    "xl": 32,
    "2xl": 48,
}

BODY_FONT = "system-ui, -apple-system, BlinkMacSystemFont, sans-serif"

TEXT_VARIANT_PRESETS: dict[str, TypographyPreset] = {
    "display": TypographyPreset(size=32, weight=600, family=BODY_FONT),
    "heading1": TypographyPreset(size=28, weight=600, family=BODY_FONT),
    "heading2": TypographyPreset(size=24, weight=600, family=BODY_FONT),
    "heading3": TypographyPreset(size=20, weight=600, family=BODY_FONT),
    "heading4": TypographyPreset(size=18, weight=600, family=BODY_FONT),
    "subtitle1": TypographyPreset(size=16, weight=500, family=BODY_FONT),
    "subtitle2": TypographyPreset(size=14, weight=500, family=BODY_FONT),
    "body1": TypographyPreset(size=16, family=BODY_FONT),
    "body2": TypographyPreset(size=14, family=BODY_FONT),
    "caption": TypographyPreset(size=12, family=BODY_FONT),
    "eyebrow": TypographyPreset(size=11, family=BODY_FONT, letter_spacing=1.5, transform="uppercase"),
    "code": TypographyPreset(size=13, family="monospace"),
}

TEXT_COLORS: dict[str, str] = {
    "default": "#111827",
    "muted": "#6B7280",
    "danger": "#DC2626",
    "warning": "#D97706",
    "success": "#16A34A",
    "primary": "#2563EB",
}

# Outer page background per color scheme
COLOR_SCHEME_BACKGROUNDS: dict[str, str] = {
    "light": "#F9FAFB",
    "dark": "#020617",
    "brand": "#F5F3FF",
    "neutral": "#F3F4F6",
    "success": "#ECFDF3",
    "warning": "#FFFBEB",
    "error": "#FEF2F2",
}

# Inner card background
BACKGROUNDS: dict[str, str] = {
    "surface": "#FFFFFF",
    "surface-alt": "#F3F4F6",
    "muted": "#E5E7EB",
    "brand": "#EEF2FF",
    "transparent": "transparent",
    "gradient": "linear-gradient(135deg, rgba(59,130,246,0.1), rgba(16,185,129,0.1))",
    "inset": "#F9FAFB",
}

ACCENT_COLORS: dict[str, str] = {
    "primary": "#2563EB",
    "secondary": "#7C3AED",
    "success": "#16A34A",
    "warning": "#D97706",
    "danger": "#DC2626",
    "info": "#0EA5E9",
    "brand": "#4C1D95",
    "neutral": "#6B7280",
}

FONT_WEIGHTS: dict[str, int] = {
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
}

CTA_BASE_STYLE: dict[str, Any] = {
    "borderRadius": 999,
    "fontSize": 14,
    "cursor": "pointer",
    "borderWidth": 1,
    "borderStyle": "solid",
    "display": "inline-flex",
    "alignItems": "center",
    "justifyContent": "center",
    "gap": 6,
}

CTA_SIZE_PADDING: dict[str, str] = {
    "sm": "4px 10px",
    "md": "6px 14px",
    "lg": "8px 18px",
}

CTA_PRIORITY_COLORS: dict[str, dict[str, str]] = {
    "primary": {"backgroundColor": "#2563EB", "color": "#FFFFFF", "borderColor": "#2563EB"},
    "secondary": {"backgroundColor": "#FFFFFF", "color": "#111827", "borderColor": "#D1D5DB"},
    "tertiary": {"backgroundColor": "transparent", "color": "#2563EB", "borderColor": "transparent"},
    "danger": {"backgroundColor": "#DC2626", "color": "#FFFFFF", "borderColor": "#DC2626"},
    "ghost": {"backgroundColor": "transparent", "color": "#111827", "borderColor": "#D1D5DB"},
}

# Readable link color for priorities whose own foreground sits on a filled background
_LINK_PRIORITY_COLORS: dict[str, str] = {
    "primary": "#2563EB",
    "secondary": "#111827",
    "tertiary": "#2563EB",
    "danger": "#DC2626",
    "ghost": "#111827",
}


# ---------------------------------------------------------------------------
# Single-token lookups
# ---------------------------------------------------------------------------


def _lookup(table: dict[str, Any], token: Any, domain: str) -> Any:
    try:
        return table[token]
    except (KeyError, TypeError):
        raise ConfigError(f"Unknown {domain} token: {token!r}") from None


def resolve_spacing(token: str) -> int:
    return _lookup(SPACING_PX, token, "spacing")


def resolve_text_color(token: str) -> str:
    return _lookup(TEXT_COLORS, token, "text color")


def resolve_color_scheme(token: str) -> str:
    return _lookup(COLOR_SCHEME_BACKGROUNDS, token, "color scheme")


def resolve_background(token: str) -> str:
    return _lookup(BACKGROUNDS, token, "background")


def resolve_accent(token: str) -> str:
    return _lookup(ACCENT_COLORS, token, "accent")


def resolve_variant(variant: str) -> TypographyPreset:
    return _lookup(TEXT_VARIANT_PRESETS, variant, "text variant")


def resolve_weight(weight: str) -> int:
    return _lookup(FONT_WEIGHTS, weight, "font weight")


# ---------------------------------------------------------------------------
# Composite resolution
# ---------------------------------------------------------------------------


def resolve_theme(theme: ScreenTheme | None) -> ResolvedTheme:
    """
    Resolve a screen theme, defaulting missing fields to light/surface/primary.
    Raises ConfigError on an out-of-domain token; the composer catches this
    per field and substitutes the default.
    """
    color_scheme = (theme.color_scheme if theme else None) or DEFAULT_COLOR_SCHEME
    background = (theme.background if theme else None) or DEFAULT_BACKGROUND
    accent = (theme.accent if theme else None) or DEFAULT_ACCENT

    return ResolvedTheme(
        color_scheme=color_scheme,
        background=background,
        accent=accent,
        page_background=resolve_color_scheme(color_scheme),
        card_background=resolve_background(background),
        accent_color=resolve_accent(accent),
    )


def resolve_style(preset: TypographyPreset, overrides: TextStyle | None = None) -> ResolvedStyle:
    """
    Layer a text block's style overrides on top of its variant preset.
    Returns a fresh dict; neither argument is mutated.
    """
    style: ResolvedStyle = preset.to_style()
    if overrides is None:
        return style

    # Token overrides
    if overrides.color is not None:
        style["color"] = resolve_text_color(overrides.color)
    if overrides.weight is not None:
        style["fontWeight"] = resolve_weight(overrides.weight)
    if overrides.spacing_top is not None:
        style["marginTop"] = resolve_spacing(overrides.spacing_top)
    if overrides.spacing_bottom is not None:
        style["marginBottom"] = resolve_spacing(overrides.spacing_bottom)

    # Inline overrides
    if overrides.align is not None:
        style["textAlign"] = overrides.align
    if overrides.transform is not None:
        if overrides.transform == "none":
            style.pop("textTransform", None)
        else:
            style["textTransform"] = overrides.transform
    if overrides.max_lines:
        style["display"] = "-webkit-box"
        style["WebkitBoxOrient"] = "vertical"
        style["WebkitLineClamp"] = overrides.max_lines
        style["overflow"] = "hidden"

    return style


def resolve_cta_style(
    cta: CTAConfig,
    link_color_policy: str = "fixed",
    link_color: str = DEFAULT_LINK_COLOR,
) -> ResolvedStyle:
    """Base + size + priority. Link-kind CTAs drop the button chrome."""
    size = cta.size or DEFAULT_CTA_SIZE
    style: ResolvedStyle = dict(CTA_BASE_STYLE)
    style["padding"] = _lookup(CTA_SIZE_PADDING, size, "CTA size")
    style.update(_lookup(CTA_PRIORITY_COLORS, cta.priority, "CTA priority"))

    if cta.kind == "link":
        style["backgroundColor"] = "transparent"
        style["borderStyle"] = "none"
        style["borderWidth"] = 0
        style["textDecoration"] = "underline"
        if link_color_policy == "priority":
            style["color"] = _LINK_PRIORITY_COLORS[cta.priority]
        elif link_color_policy == "fixed":
            style["color"] = link_color
        else:
            raise ConfigError(f"Unknown link color policy: {link_color_policy!r}")

    return style
