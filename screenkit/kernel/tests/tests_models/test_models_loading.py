"""
Screenkit Models -- Loading and Wire Format Tests

Field names and enum strings on the wire are a contract: camelCase keys
(openInNewTab, fileUrl, minWidthPx, ...) and values like
"split-left-text-right-media" and "copy_to_clipboard" must match exactly.

Two loaders:
  parse_screen  strict; any violation raises ConfigError
  load_screen   lenient; drops the bad section / CTA, keeps the rest
"""

import json

import pytest

from screenkit.kernel.errors import ConfigError
from screenkit.kernel.models import (
    CopyToClipboardAction,
    CTAConfig,
    DownloadAction,
    ExternalUrlAction,
    ImageSection,
    MailtoAction,
    NoopAction,
    RouteAction,
    TextSection,
    blank_action,
    dump_screen,
    load_screen,
    new_global_cta,
    new_text_section,
    parse_screen,
    screen_to_json,
    switch_action_type,
)
from screenkit.kernel.types import ACTION_TYPES


def minimal(**extra):
    doc = {"id": "s", "version": 1, "layout": "stacked", "sections": []}
    doc.update(extra)
    return doc


def cta_dict(cta_id="c", **action):
    return {
        "id": cta_id,
        "label": "Go",
        "kind": "button",
        "priority": "primary",
        "action": action or {"type": "noop"},
    }


# ============================================================================
# Strict parsing
# ============================================================================


class TestParseScreen:
    def test_sample_document(self, screen):
        assert screen.id == "module_not_enabled_example"
        hero, image = screen.sections
        assert isinstance(hero, TextSection)
        assert isinstance(image, ImageSection)
        assert hero.blocks[0].style.spacing_bottom == "xs"
        assert isinstance(hero.ctas[0].action, MailtoAction)

    def test_json_text_accepted(self, screen_dict):
        assert parse_screen(json.dumps(screen_dict)).id == "module_not_enabled_example"

    def test_camel_case_wire_fields(self):
        doc = minimal(
            sections=[
                {
                    "id": "a",
                    "type": "text",
                    "visibility": {"platforms": ["web"], "minWidthPx": 768, "maxWidthPx": 1440},
                    "blocks": [{"id": "b", "variant": "body1", "text": "t", "style": {"maxLines": 2}}],
                    "ctas": [
                        cta_dict("u", type="external_url", url="https://x", openInNewTab=True),
                        cta_dict("d", type="download", fileUrl="https://x/f.pdf", fileName="f.pdf"),
                        cta_dict("k", type="copy_to_clipboard", text="t", toastMessage="Copied"),
                        cta_dict("h", type="custom", handlerId="h1", payload={"a": 1}),
                    ],
                }
            ]
        )
        section = parse_screen(doc).sections[0]
        assert section.visibility.min_width_px == 768
        assert section.blocks[0].style.max_lines == 2
        url, download, copy_, custom = (c.action for c in section.ctas)
        assert isinstance(url, ExternalUrlAction) and url.open_in_new_tab is True
        assert isinstance(download, DownloadAction) and download.file_name == "f.pdf"
        assert isinstance(copy_, CopyToClipboardAction) and copy_.toast_message == "Copied"
        assert custom.handler_id == "h1" and custom.payload == {"a": 1}

    def test_unknown_layout(self):
        with pytest.raises(ConfigError, match="layout"):
            parse_screen(minimal(layout="carousel"))

    def test_unknown_section_type(self):
        with pytest.raises(ConfigError):
            parse_screen(minimal(sections=[{"id": "v", "type": "video"}]))

    def test_discriminant_payload_mismatch(self):
        """A route action carrying external_url fields is not a route action."""
        doc = minimal(
            sections=[{"id": "a", "type": "text", "blocks": [], "ctas": [cta_dict(type="route", url="https://x")]}]
        )
        with pytest.raises(ConfigError):
            parse_screen(doc)

    def test_unknown_action_type(self):
        doc = minimal(ctas=[cta_dict(type="teleport")])
        with pytest.raises(ConfigError):
            parse_screen(doc)

    def test_duplicate_section_ids(self):
        doc = minimal(sections=[{"id": "a", "type": "image"}, {"id": "a", "type": "image"}])
        with pytest.raises(ConfigError, match="Duplicate"):
            parse_screen(doc)

    def test_negative_version(self):
        with pytest.raises(ConfigError):
            parse_screen(minimal(version=-1))

    def test_not_json(self):
        with pytest.raises(ConfigError, match="JSON"):
            parse_screen("{nope")

    def test_not_an_object(self):
        with pytest.raises(ConfigError):
            parse_screen([1, 2, 3])

    def test_documents_are_frozen(self, screen):
        with pytest.raises(Exception):
            screen.layout = "modal"


# ============================================================================
# Lenient loading
# ============================================================================


class TestLoadScreen:
    def test_clean_document_has_no_errors(self, screen_dict):
        result = load_screen(screen_dict)
        assert result.errors == []
        assert dump_screen(result.screen) == dump_screen(parse_screen(screen_dict))

    def test_bad_section_dropped_rest_kept(self):
        doc = minimal(
            sections=[
                {"id": "a", "type": "image"},
                {"id": "b", "type": "text", "blocks": [{"id": "x", "variant": "jumbo", "text": "t"}]},
                {"id": "c", "type": "image"},
            ]
        )
        result = load_screen(doc)
        assert [s.id for s in result.screen.sections] == ["a", "c"]
        assert len(result.errors) == 1
        assert result.errors[0].path == "sections.1"

    def test_bad_cta_dropped_section_kept(self):
        doc = minimal(
            sections=[
                {
                    "id": "a",
                    "type": "hero",
                    "blocks": [],
                    "ctas": [cta_dict("ok"), cta_dict("bad", type="route", url="https://x")],
                }
            ]
        )
        result = load_screen(doc)
        section = result.screen.sections[0]
        assert [c.id for c in section.ctas] == ["ok"]
        assert result.errors[0].path == "sections.0.ctas.1"

    def test_bad_global_cta_dropped(self):
        result = load_screen(minimal(ctas=[cta_dict("a"), cta_dict("b", type="phone")]))
        assert [c.id for c in result.screen.ctas] == ["a"]
        assert result.errors[0].path == "ctas.1"

    def test_invalid_layout_defaults_to_stacked(self):
        result = load_screen(minimal(layout="carousel"))
        assert result.screen.layout == "stacked"
        assert result.errors[0].path == "layout"

    def test_invalid_theme_field_dropped_alone(self):
        result = load_screen(minimal(theme={"colorScheme": "dark", "background": "plaid"}))
        assert result.screen.theme.color_scheme == "dark"
        assert result.screen.theme.background is None
        assert len(result.errors) == 1

    def test_duplicate_section_keeps_first(self):
        doc = minimal(sections=[{"id": "a", "type": "image", "alt": "first"}, {"id": "a", "type": "image"}])
        result = load_screen(doc)
        assert len(result.screen.sections) == 1
        assert result.screen.sections[0].alt == "first"

    def test_image_section_with_ctas_keeps_image(self):
        doc = minimal(sections=[{"id": "a", "type": "image", "ctas": [cta_dict()]}])
        result = load_screen(doc)
        assert result.screen.sections[0].id == "a"
        assert result.errors[0].path == "sections.0.ctas"

    def test_missing_id_is_fatal(self):
        with pytest.raises(ConfigError):
            load_screen({"layout": "stacked", "sections": []})


# ============================================================================
# Serialization
# ============================================================================


class TestSerialization:
    def test_dump_uses_wire_names(self, screen):
        data = dump_screen(screen)
        assert data["theme"] == {"colorScheme": "light", "background": "surface", "accent": "primary"}
        block = data["sections"][0]["blocks"][0]
        assert block["style"] == {"color": "muted", "spacingBottom": "xs"}

    def test_dump_omits_unset_optionals(self):
        screen = parse_screen(minimal(sections=[{"id": "a", "type": "image"}]))
        assert dump_screen(screen)["sections"] == [{"id": "a", "type": "image"}]

    def test_round_trip(self, screen_dict):
        screen = parse_screen(screen_dict)
        assert parse_screen(screen_to_json(screen)) == screen

    def test_pretty_print(self, screen):
        text = screen_to_json(screen)
        assert text.startswith("{\n  ")
        assert '"layout": "split-left-text-right-media"' in text


# ============================================================================
# Editing helpers
# ============================================================================


class TestEditingHelpers:
    @pytest.mark.parametrize("action_type", ACTION_TYPES)
    def test_blank_action_for_every_type(self, action_type):
        assert blank_action(action_type).type == action_type

    def test_blank_action_unknown(self):
        with pytest.raises(ConfigError):
            blank_action("teleport")

    def test_switch_discards_previous_payload(self):
        cta = CTAConfig(
            id="c",
            label="Mail",
            kind="button",
            priority="primary",
            action=MailtoAction(email="am@example.com", subject="Hi"),
        )
        switched = switch_action_type(cta, "route")
        assert isinstance(switched.action, RouteAction)
        assert switched.action.model_dump(by_alias=True, exclude_none=True) == {"type": "route", "target": ""}
        assert switched.label == "Mail"
        assert isinstance(cta.action, MailtoAction)

    def test_switch_to_same_type_keeps_payload(self):
        cta = CTAConfig(id="c", label="x", kind="button", priority="primary", action=RouteAction(target="/a"))
        assert switch_action_type(cta, "route").action.target == "/a"

    def test_new_text_section(self):
        section = new_text_section(3)
        assert section.id == "section_3"
        assert (section.width, section.align, section.padding, section.margin) == ("full", "left", "md", "none")
        assert section.blocks[0].variant == "heading2"
        assert section.ctas == []

    def test_new_global_cta(self):
        cta = new_global_cta(2)
        assert cta.id == "global_cta_2"
        assert (cta.kind, cta.priority, cta.size) == ("button", "secondary", "md")
        assert isinstance(cta.action, NoopAction)
