"""
Screenkit Kernel — Shared Types

Token domains, render-tree data classes, and the options/context objects
passed between the composer, section renderer, layout engine, and dispatcher.
These are the contracts that bind the kernel together.

Token domains are `Literal` aliases so pydantic enforces them on load; the
matching `*_VALUES` tuples are derived from them for totality checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, get_args

# ---------------------------------------------------------------------------
# Token domains
# ---------------------------------------------------------------------------

SpacingToken = Literal["none", "xs", "sm", "md", "lg", "xl", "2xl"]

ColorScheme = Literal["light", "dark", "brand", "neutral", "success", "warning", "error"]

BackgroundToken = Literal["surface", "surface-alt", "muted", "brand", "transparent", "gradient", "inset"]

AccentToken = Literal["primary", "secondary", "success", "warning", "danger", "info", "brand", "neutral"]

TextVariant = Literal[
    "display",
    "heading1",
    "heading2",
    "heading3",
    "heading4",
    "subtitle1",
    "subtitle2",
    "body1",
    "body2",
    "caption",
    "eyebrow",
    "code",
]

TextColorToken = Literal["default", "muted", "danger", "warning", "success", "primary"]

LayoutType = Literal[
    "stacked",
    "centered-card",
    "split-left-text-right-media",
    "split-right-text-left-media",
    "banner-top",
    "banner-bottom",
    "side-panel",
    "modal",
]

SectionType = Literal["text", "hero", "image"]
SectionWidth = Literal["auto", "full", "1/2", "1/3", "2/3"]
SectionAlign = Literal["left", "center", "right"]

TextWeight = Literal["regular", "medium", "semibold", "bold"]
TextAlign = Literal["left", "right", "center", "justify"]
TextTransform = Literal["none", "uppercase", "lowercase", "capitalize"]

CTAKind = Literal["button", "link", "icon-button"]
CTAPriority = Literal["primary", "secondary", "tertiary", "danger", "ghost"]
CTASize = Literal["sm", "md", "lg"]

ActionType = Literal[
    "route",
    "external_url",
    "mailto",
    "phone",
    "download",
    "copy_to_clipboard",
    "custom",
    "noop",
]

Platform = Literal["web", "ios", "android"]

LinkColorPolicy = Literal["fixed", "priority"]

SPACING_TOKENS: tuple[str, ...] = get_args(SpacingToken)
COLOR_SCHEMES: tuple[str, ...] = get_args(ColorScheme)
BACKGROUND_TOKENS: tuple[str, ...] = get_args(BackgroundToken)
ACCENT_TOKENS: tuple[str, ...] = get_args(AccentToken)
TEXT_VARIANTS: tuple[str, ...] = get_args(TextVariant)
TEXT_COLOR_TOKENS: tuple[str, ...] = get_args(TextColorToken)
LAYOUT_TYPES: tuple[str, ...] = get_args(LayoutType)
SECTION_TYPES: tuple[str, ...] = get_args(SectionType)
CTA_KINDS: tuple[str, ...] = get_args(CTAKind)
CTA_PRIORITIES: tuple[str, ...] = get_args(CTAPriority)
CTA_SIZES: tuple[str, ...] = get_args(CTASize)
ACTION_TYPES: tuple[str, ...] = get_args(ActionType)
PLATFORMS: tuple[str, ...] = get_args(Platform)

# Substituted when the document's own value is missing or out of domain
DEFAULT_LAYOUT = "stacked"
DEFAULT_COLOR_SCHEME = "light"
DEFAULT_BACKGROUND = "surface"
DEFAULT_ACCENT = "primary"
DEFAULT_CTA_SIZE = "md"
DEFAULT_LINK_COLOR = "#2563EB"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypographyPreset:
    """Base typographic values for one text variant."""

    size: int
    weight: int = 400
    family: str = "inherit"
    letter_spacing: float = 0
    transform: str | None = None

    def to_style(self) -> dict[str, Any]:
        style: dict[str, Any] = {
            "fontSize": self.size,
            "fontWeight": self.weight,
            "fontFamily": self.family,
            "letterSpacing": self.letter_spacing,
        }
        if self.transform:
            style["textTransform"] = self.transform
        return style


@dataclass(frozen=True)
class ResolvedTheme:
    """Theme tokens after defaulting, plus their concrete values."""

    color_scheme: str
    background: str
    accent: str
    page_background: str
    card_background: str
    accent_color: str


@dataclass(frozen=True)
class RenderContext:
    """
    Where the screen is being shown. Consumed only by visibility filtering.
    viewport_width_px=None means the width is unknown; width predicates pass.
    """

    platform: str = "web"
    viewport_width_px: int | None = None


@dataclass(frozen=True)
class RenderOptions:
    """Knobs that change styling policy without changing the document."""

    link_color_policy: str = "fixed"
    link_color: str = DEFAULT_LINK_COLOR

    @classmethod
    def from_settings(cls, settings: Any = None) -> RenderOptions:
        if settings is None:
            from screenkit.kernel.config import settings as default_settings

            settings = default_settings
        return cls(
            link_color_policy=settings.LINK_COLOR_POLICY,
            link_color=settings.LINK_COLOR,
        )


@dataclass
class RenderNode:
    """
    One node of the render tree.

    kind:     screen | frame | card | identity | sections | section | text |
              image | placeholder | cta_row | cta
    key:      stable identity (section id, block id, or CTA binding key)
    style:    concrete style values (camelCase keys, ints are px where dimensional)
    props:    kind-specific data (text, src, label, action wire dict, ...)
    """

    kind: str
    key: str = ""
    style: dict[str, Any] = field(default_factory=dict)
    props: dict[str, Any] = field(default_factory=dict)
    children: list[RenderNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"kind": self.kind}
        if self.key:
            d["key"] = self.key
        if self.style:
            d["style"] = dict(self.style)
        if self.props:
            d["props"] = dict(self.props)
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d

    def walk(self):
        """Yield this node and all descendants, depth-first, document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, kind: str) -> list[RenderNode]:
        return [n for n in self.walk() if n.kind == kind]
