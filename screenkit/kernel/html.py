"""
Screenkit Kernel — HTML Surface

Pure function: RenderTree → standalone HTML string.
Deterministic: same tree → same bytes. All user content is escaped.

CTA buttons carry their binding key in data-cta and the wire form of their
action in data-action, so a page script can route clicks back to
RenderTree.activate().
"""

from __future__ import annotations

import json
import re
from html import escape as _html_escape
from typing import Any

from screenkit.kernel.types import RenderNode

# Numeric style values that are not lengths
UNITLESS: set[str] = {"fontWeight", "flex", "WebkitLineClamp", "lineHeight", "opacity", "zIndex"}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

BASE_CSS = """
*, *::before, *::after { box-sizing: border-box; }
body { margin: 0; font-family: system-ui, -apple-system, BlinkMacSystemFont, sans-serif; }
img { display: block; }
button { font: inherit; }
""".strip()


def escape(text: Any) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


def css_property(name: str) -> str:
    """fontSize → font-size, WebkitLineClamp → -webkit-line-clamp."""
    kebab = _CAMEL_RE.sub("-", name).lower()
    if name.startswith("Webkit"):
        kebab = "-" + kebab
    return kebab


def css_value(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)) and name not in UNITLESS:
        return f"{value}px"
    return str(value)


def style_attr(style: dict[str, Any]) -> str:
    if not style:
        return ""
    decls = "; ".join(f"{css_property(k)}: {css_value(k, v)}" for k, v in style.items())
    return f' style="{escape(decls)}"'


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_html(tree: Any, title: str | None = None) -> str:
    """Render a composed screen as a complete HTML document."""
    root: RenderNode = tree.root
    page_title = title or f"Screen {root.props.get('id', root.key)}"

    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
    parts.append(f"  <title>{escape(page_title)}</title>")
    parts.append("  <style>")
    parts.append(BASE_CSS)
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append(render_node(root))
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts)


def render_node(node: RenderNode) -> str:
    """Render a single node and its children recursively."""
    style = style_attr(node.style)
    kind = node.kind

    if kind == "text":
        return f"<div{style}>{escape(node.props.get('text', ''))}</div>"

    if kind == "image":
        src = escape(node.props.get("src", ""))
        alt = escape(node.props.get("alt", ""))
        return f'<img src="{src}" alt="{alt}" loading="lazy"{style}>'

    if kind == "placeholder":
        alt = escape(node.props.get("alt", ""))
        text = escape(node.props.get("text", ""))
        return f'<div class="screen-placeholder" role="img" aria-label="{alt}"{style}>{text}</div>'

    if kind == "cta":
        return _render_cta(node, style)

    inner = "".join(render_node(c) for c in node.children)
    attrs = f' class="screen-{kind}"'
    if kind == "section":
        attrs += f' data-section="{escape(node.key)}" data-type="{escape(node.props.get("type", ""))}"'
    elif kind == "sections":
        attrs += f' data-layout-family="{escape(node.props.get("family", ""))}"'
    elif kind == "screen":
        attrs += f' data-screen="{escape(node.key)}" data-version="{escape(node.props.get("version", ""))}"'

    tag = "main" if kind == "screen" else "div"
    return f"<{tag}{attrs}{style}>{inner}</{tag}>"


def _render_cta(node: RenderNode, style: str) -> str:
    props = node.props
    action_json = json.dumps(props.get("action", {}), sort_keys=True, ensure_ascii=False)
    attrs = (
        f' type="button"'
        f' class="screen-cta screen-cta-{escape(props.get("kind", ""))}"'
        f' data-cta="{escape(node.key)}"'
        f' data-priority="{escape(props.get("priority", ""))}"'
        f' data-size="{escape(props.get("size", ""))}"'
        f" data-action='{escape(action_json)}'"
    )
    icon = props.get("icon")
    label = escape(props.get("label", ""))
    if icon:
        label = f'<span class="screen-cta-icon" data-icon="{escape(icon)}"></span>{label}'
    return f"<button{attrs}{style}>{label}</button>"
