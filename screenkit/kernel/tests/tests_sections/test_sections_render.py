"""
Screenkit Sections -- Render Tests

One section in, one positioned, styled node out.

  image + src       → image node (radius 16, shadow)
  image, no src     → 200px dashed placeholder, MissingAssetWarning, no error
  text / hero       → text node per block, in order, then a CTA row
"""

import pytest

from screenkit.kernel.errors import ConfigError, MissingAssetWarning
from screenkit.kernel.models import (
    CTAConfig,
    ImageSection,
    MailtoAction,
    NoopAction,
    PhoneAction,
    RouteAction,
    TextBlock,
    TextSection,
    TextStyle,
)
from screenkit.kernel.sections import RenderReport, render_cta_row, render_section
from screenkit.kernel.tokens import resolve_theme
from screenkit.kernel.types import RenderOptions

THEME = resolve_theme(None)


def make_text_section(**overrides):
    fields = {
        "id": "intro",
        "type": "text",
        "blocks": [
            TextBlock(id="title", variant="heading2", text="Welcome"),
            TextBlock(id="body", variant="body1", text="Hello there", style=TextStyle(color="muted")),
        ],
    }
    fields.update(overrides)
    return TextSection(**fields)


def make_cta(cta_id="go", **overrides):
    fields = {"id": cta_id, "label": "Go", "kind": "button", "priority": "primary", "action": NoopAction()}
    fields.update(overrides)
    return CTAConfig(**fields)


# ============================================================================
# Image sections
# ============================================================================


class TestImageSection:
    def test_with_src(self):
        report = RenderReport()
        node = render_section(ImageSection(id="pic", src="https://x/y.png", alt="Y"), THEME, report=report)
        image = node.children[0]
        assert image.kind == "image"
        assert image.props == {"src": "https://x/y.png", "alt": "Y"}
        assert image.style["borderRadius"] == 16
        assert "boxShadow" in image.style
        assert image.style["maxWidth"] == "100%"
        assert report.warnings == []

    def test_without_src_renders_placeholder(self):
        report = RenderReport()
        node = render_section(ImageSection(id="pic"), THEME, report=report)
        placeholder = node.children[0]
        assert placeholder.kind == "placeholder"
        assert placeholder.style["height"] == 200
        assert "dashed" in placeholder.style["border"]
        assert "src" not in placeholder.props
        assert report.errors == []

    def test_missing_src_is_a_warning(self):
        report = RenderReport()
        render_section(ImageSection(id="pic"), THEME, report=report)
        assert len(report.warnings) == 1
        assert isinstance(report.warnings[0], MissingAssetWarning)
        assert report.warnings[0].section_id == "pic"

    def test_empty_string_src_is_placeholder(self):
        node = render_section(ImageSection(id="pic", src=""), THEME)
        assert node.children[0].kind == "placeholder"


# ============================================================================
# Text and hero sections
# ============================================================================


class TestTextSection:
    def test_blocks_render_in_order(self):
        node = render_section(make_text_section(), THEME)
        assert [c.key for c in node.children] == ["intro/title", "intro/body"]
        assert [c.props["text"] for c in node.children] == ["Welcome", "Hello there"]

    def test_block_style_layers_over_preset(self):
        node = render_section(make_text_section(), THEME)
        title, body = node.children
        assert title.style["fontSize"] == 24
        assert "color" not in title.style
        assert body.style["color"] == "#6B7280"
        assert body.style["fontSize"] == 16

    def test_hero_renders_like_text(self):
        node = render_section(make_text_section(type="hero"), THEME)
        assert node.props["type"] == "hero"
        assert [c.kind for c in node.children] == ["text", "text"]

    def test_no_blocks_no_ctas(self):
        node = render_section(make_text_section(blocks=[], ctas=[]), THEME)
        assert node.children == []

    def test_cta_row_follows_blocks(self):
        section = make_text_section(ctas=[make_cta("a"), make_cta("b", kind="link")])
        report = RenderReport()
        node = render_section(section, THEME, report=report)
        row = node.children[-1]
        assert row.kind == "cta_row"
        assert row.style["flexWrap"] == "wrap"
        assert [c.key for c in row.children] == ["intro/a", "intro/b"]
        assert set(report.bindings) == {"intro/a", "intro/b"}

    def test_cta_node_props(self):
        action = MailtoAction(email="am@example.com", subject="Enable Experiments")
        section = make_text_section(ctas=[make_cta("mail", action=action, icon="mail")])
        cta = render_section(section, THEME).children[-1].children[0]
        assert cta.props["label"] == "Go"
        assert cta.props["size"] == "md"
        assert cta.props["icon"] == "mail"
        assert cta.props["action"] == {"type": "mailto", "email": "am@example.com", "subject": "Enable Experiments"}

    def test_bad_cta_is_skipped_not_fatal(self):
        bad = CTAConfig.model_construct(id="bad", label="x", kind="button", priority="mega", action=NoopAction())
        section = make_text_section(ctas=[make_cta("ok"), bad])
        report = RenderReport()
        node = render_section(section, THEME, report=report)
        assert [c.key for c in node.children[-1].children] == ["intro/ok"]
        assert len(report.errors) == 1
        assert report.errors[0].path == "intro/bad"
        assert "intro/bad" not in report.bindings

    def test_repeated_cta_id_keeps_first_binding(self):
        first = make_cta("x", action=PhoneAction(number="1"))
        second = make_cta("x", action=RouteAction(target="/x"))
        report = RenderReport()
        node = render_section(make_text_section(ctas=[first, second]), THEME, report=report)

        assert [c.key for c in node.children[-1].children] == ["intro/x"]
        assert report.bindings["intro/x"] == first.action
        assert len(report.errors) == 1
        assert report.errors[0].path == "intro/x"

    def test_key_bound_by_earlier_row_is_not_rebound(self):
        report = RenderReport()
        render_cta_row([make_cta("go", action=PhoneAction(number="1"))], "intro", RenderOptions(), report)
        row = render_cta_row([make_cta("go", action=RouteAction(target="/"))], "intro", RenderOptions(), report)
        assert row.children == []
        assert isinstance(report.bindings["intro/go"], PhoneAction)
        assert [e.path for e in report.errors] == ["intro/go"]

    def test_bad_block_variant_raises(self):
        bad_block = TextBlock.model_construct(id="b", variant="huge", text="t")
        section = make_text_section(blocks=[bad_block])
        with pytest.raises(ConfigError):
            render_section(section, THEME)


# ============================================================================
# Container styling
# ============================================================================


class TestSectionContainer:
    @pytest.mark.parametrize(
        "width,expected",
        [
            ("full", {"width": "100%"}),
            ("auto", {"width": "100%"}),
            ("1/2", {"flex": 1}),
            ("1/3", {"flex": 1}),
            ("2/3", {"flex": 2}),
        ],
    )
    def test_width(self, width, expected):
        style = render_section(ImageSection(id="p", width=width), THEME).style
        for key, value in expected.items():
            assert style[key] == value

    def test_default_width_is_full(self):
        assert render_section(ImageSection(id="p"), THEME).style["width"] == "100%"

    @pytest.mark.parametrize(
        "align,text_align,items",
        [("left", "left", "flex-start"), ("center", "center", "center"), ("right", "right", "flex-end")],
    )
    def test_align(self, align, text_align, items):
        style = render_section(ImageSection(id="p", align=align), THEME).style
        assert style["textAlign"] == text_align
        assert style["alignItems"] == items

    def test_spacing_tokens(self):
        style = render_section(ImageSection(id="p", padding="lg", margin="xs"), THEME).style
        assert style["padding"] == 24
        assert style["margin"] == 4

    def test_missing_spacing_is_zero(self):
        style = render_section(ImageSection(id="p"), THEME).style
        assert style["padding"] == 0
        assert style["margin"] == 0

    def test_bad_padding_raises(self):
        section = ImageSection.model_construct(id="p", type="image", padding="huge")
        with pytest.raises(ConfigError):
            render_section(section, THEME)

    def test_unknown_section_type_raises(self):
        section = ImageSection.model_construct(id="p", type="video")
        with pytest.raises(ConfigError, match="video"):
            render_section(section, THEME)


class TestLinkColorOption:
    def test_priority_policy_reaches_cta_nodes(self):
        section = make_text_section(ctas=[make_cta("l", kind="link", priority="danger")])
        opts = RenderOptions(link_color_policy="priority")
        cta = render_section(section, THEME, opts).children[-1].children[0]
        assert cta.style["color"] == "#DC2626"

    def test_fixed_policy_by_default(self):
        section = make_text_section(ctas=[make_cta("l", kind="link", priority="danger")])
        cta = render_section(section, THEME).children[-1].children[0]
        assert cta.style["color"] == "#2563EB"
