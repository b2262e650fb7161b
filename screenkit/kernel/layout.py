"""
Screenkit Kernel — Layout Engine

arrange(layout) → ArrangementRule. Pure function of the layout identifier;
never inspects section contents.

  layout                          family  axis        reversed  wrap  cross   centered
  stacked, centered-card          stack   vertical    -         -     -       -
  split-left-text-right-media     split   horizontal  no        yes   center  -
  split-right-text-left-media     split   horizontal  yes       yes   center  -
  banner-top, banner-bottom       banner  horizontal  no        no    center  -
  side-panel                      panel   horizontal  no        no    -       -
  modal                           modal   vertical    -         -     -       viewport

Reversal is visual only: children keep their `order` sequence in the tree and
the container's flexDirection flips.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from screenkit.kernel.errors import ConfigError
from screenkit.kernel.types import RenderNode

SECTION_GAP = 16


@dataclass(frozen=True)
class ArrangementRule:
    family: str
    axis: str  # "vertical" | "horizontal"
    reversed: bool = False
    wrap: bool = False
    cross_align: str | None = None
    center_in_viewport: bool = False
    gap: int = SECTION_GAP

    def container_style(self) -> dict[str, Any]:
        if self.axis == "vertical":
            direction = "column-reverse" if self.reversed else "column"
        else:
            direction = "row-reverse" if self.reversed else "row"
        style: dict[str, Any] = {
            "display": "flex",
            "flexDirection": direction,
            "gap": self.gap,
        }
        if self.cross_align:
            style["alignItems"] = self.cross_align
        if self.wrap:
            style["flexWrap"] = "wrap"
        return style

    def visual_sequence(self, items: list[Any]) -> list[Any]:
        """Items in the order a viewer sees them along the main axis."""
        return list(reversed(items)) if self.reversed else list(items)


_STACK = ArrangementRule(family="stack", axis="vertical")
_BANNER = ArrangementRule(family="banner", axis="horizontal", cross_align="center")

LAYOUT_RULES: dict[str, ArrangementRule] = {
    "stacked": _STACK,
    "centered-card": _STACK,
    "split-left-text-right-media": ArrangementRule(
        family="split", axis="horizontal", wrap=True, cross_align="center"
    ),
    "split-right-text-left-media": ArrangementRule(
        family="split", axis="horizontal", reversed=True, wrap=True, cross_align="center"
    ),
    "banner-top": _BANNER,
    "banner-bottom": _BANNER,
    "side-panel": ArrangementRule(family="panel", axis="horizontal"),
    "modal": ArrangementRule(family="modal", axis="vertical", center_in_viewport=True),
}


def arrange(layout: str) -> ArrangementRule:
    rule = LAYOUT_RULES.get(layout)
    if rule is None:
        raise ConfigError(f"Unknown layout: {layout!r}", path="layout")
    return rule


def apply_arrangement(rule: ArrangementRule, nodes: list[RenderNode]) -> RenderNode:
    """Wrap rendered sections in the arrangement container. Order is kept as given."""
    return RenderNode(
        kind="sections",
        style=rule.container_style(),
        props={"family": rule.family, "axis": rule.axis, "reversed": rule.reversed},
        children=list(nodes),
    )


def viewport_frame_style(rule: ArrangementRule) -> dict[str, Any]:
    """Style for the frame around the card. Only modal centers it in the viewport."""
    if not rule.center_in_viewport:
        return {}
    return {
        "display": "flex",
        "justifyContent": "center",
        "alignItems": "center",
        "minHeight": "80vh",
    }
