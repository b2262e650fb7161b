"""Screen document models, loaders, and wire serialization."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from screenkit.kernel.errors import ConfigError
from screenkit.kernel.types import (
    DEFAULT_LAYOUT,
    LAYOUT_TYPES,
    AccentToken,
    ActionType,
    BackgroundToken,
    CTAKind,
    CTAPriority,
    CTASize,
    ColorScheme,
    LayoutType,
    Platform,
    SectionAlign,
    SectionWidth,
    SpacingToken,
    TextAlign,
    TextColorToken,
    TextTransform,
    TextVariant,
    TextWeight,
)

logger = logging.getLogger(__name__)


class DocumentModel(BaseModel):
    """Base for every document entity: immutable, closed, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


# ---------------------------------------------------------------------------
# CTA actions
# ---------------------------------------------------------------------------


class RouteAction(DocumentModel):
    type: Literal["route"] = "route"
    target: str
    method: Literal["push", "replace"] | None = None


class ExternalUrlAction(DocumentModel):
    type: Literal["external_url"] = "external_url"
    url: str
    open_in_new_tab: bool | None = None


class MailtoAction(DocumentModel):
    type: Literal["mailto"] = "mailto"
    email: str
    subject: str | None = None
    body: str | None = None


class PhoneAction(DocumentModel):
    type: Literal["phone"] = "phone"
    number: str


class DownloadAction(DocumentModel):
    type: Literal["download"] = "download"
    file_url: str
    file_name: str | None = None


class CopyToClipboardAction(DocumentModel):
    type: Literal["copy_to_clipboard"] = "copy_to_clipboard"
    text: str
    toast_message: str | None = None


class CustomAction(DocumentModel):
    type: Literal["custom"] = "custom"
    handler_id: str
    payload: dict[str, Any] | None = None


class NoopAction(DocumentModel):
    type: Literal["noop"] = "noop"


CtaAction = Annotated[
    Union[
        RouteAction,
        ExternalUrlAction,
        MailtoAction,
        PhoneAction,
        DownloadAction,
        CopyToClipboardAction,
        CustomAction,
        NoopAction,
    ],
    Field(discriminator="type"),
]

ACTION_MODELS: dict[str, type[DocumentModel]] = {
    "route": RouteAction,
    "external_url": ExternalUrlAction,
    "mailto": MailtoAction,
    "phone": PhoneAction,
    "download": DownloadAction,
    "copy_to_clipboard": CopyToClipboardAction,
    "custom": CustomAction,
    "noop": NoopAction,
}


class CTAConfig(DocumentModel):
    id: str
    label: str
    kind: CTAKind
    priority: CTAPriority
    size: CTASize | None = None
    icon: str | None = None
    action: CtaAction


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class TextStyle(DocumentModel):
    color: TextColorToken | None = None
    weight: TextWeight | None = None
    align: TextAlign | None = None
    transform: TextTransform | None = None
    max_lines: int | None = Field(default=None, ge=0)
    spacing_top: SpacingToken | None = None
    spacing_bottom: SpacingToken | None = None


class TextBlock(DocumentModel):
    id: str
    variant: TextVariant
    text: str
    style: TextStyle | None = None


class VisibilityConfig(DocumentModel):
    platforms: list[Platform] | None = None
    min_width_px: int | None = Field(default=None, ge=0)
    max_width_px: int | None = Field(default=None, ge=0)


class SectionBase(DocumentModel):
    id: str
    width: SectionWidth | None = None
    align: SectionAlign | None = None
    order: int | None = None
    padding: SpacingToken | None = None
    margin: SpacingToken | None = None
    visibility: VisibilityConfig | None = None


class TextSection(SectionBase):
    type: Literal["text", "hero"]
    blocks: list[TextBlock] = Field(default_factory=list)
    ctas: list[CTAConfig] | None = None


class ImageSection(SectionBase):
    type: Literal["image"] = "image"
    src: str | None = None
    alt: str | None = None


Section = Annotated[Union[TextSection, ImageSection], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


class ScreenTheme(DocumentModel):
    color_scheme: ColorScheme | None = None
    background: BackgroundToken | None = None
    accent: AccentToken | None = None


class ScreenConfig(DocumentModel):
    """Root document. Owned and versioned by the editing collaborator."""

    id: str
    version: int = Field(default=1, ge=0)
    layout: LayoutType
    theme: ScreenTheme | None = None
    sections: list[Section] = Field(default_factory=list)
    ctas: list[CTAConfig] | None = None


_section_adapter: TypeAdapter[Any] = TypeAdapter(Section)
_cta_adapter: TypeAdapter[CTAConfig] = TypeAdapter(CTAConfig)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


@dataclass
class LoadResult:
    """Result of lenient loading: the usable document plus what was dropped."""

    screen: ScreenConfig
    errors: list[ConfigError] = field(default_factory=list)


def _config_error(exc: ValidationError, prefix: str = "") -> ConfigError:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        if prefix:
            loc = f"{prefix}.{loc}" if loc else prefix
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return ConfigError("; ".join(parts), path=prefix or None)


def _as_mapping(data: dict[str, Any] | str | bytes) -> dict[str, Any]:
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Document is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Document must be an object")
    return data


def parse_screen(data: dict[str, Any] | str | bytes) -> ScreenConfig:
    """
    Strict load. Any violation anywhere in the document raises ConfigError.
    Duplicate section ids are rejected as well.
    """
    mapping = _as_mapping(data)
    try:
        screen = ScreenConfig.model_validate(mapping)
    except ValidationError as e:
        raise _config_error(e) from e

    seen: set[str] = set()
    for i, section in enumerate(screen.sections):
        if section.id in seen:
            raise ConfigError(f"Duplicate section id '{section.id}'", path=f"sections.{i}")
        seen.add(section.id)
    return screen


def load_screen(data: dict[str, Any] | str | bytes) -> LoadResult:
    """
    Lenient load. Each section and each CTA is validated on its own so one
    malformed entry doesn't take the rest of the screen with it.

    - invalid section / CTA       → dropped, ConfigError recorded
    - duplicate section id        → later one dropped, ConfigError recorded
    - invalid layout              → "stacked"
    - invalid theme field         → that field unset (renderer default applies)
    - missing id / non-object     → ConfigError raised
    """
    mapping = _as_mapping(data)
    errors: list[ConfigError] = []

    screen_id = mapping.get("id")
    if not isinstance(screen_id, str):
        raise ConfigError("Screen requires a string 'id'", path="id")

    version = mapping.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 0:
        errors.append(ConfigError(f"Invalid version {version!r}; using 1", path="version"))
        version = 1

    layout = mapping.get("layout")
    if layout not in LAYOUT_TYPES:
        errors.append(ConfigError(f"Unknown layout {layout!r}; using '{DEFAULT_LAYOUT}'", path="layout"))
        layout = DEFAULT_LAYOUT

    theme = _load_theme(mapping.get("theme"), errors)

    sections: list[Any] = []
    seen: set[str] = set()
    raw_sections = mapping.get("sections") or []
    if not isinstance(raw_sections, list):
        errors.append(ConfigError("'sections' must be a list", path="sections"))
        raw_sections = []
    for i, raw in enumerate(raw_sections):
        section = _load_section(raw, f"sections.{i}", errors)
        if section is None:
            continue
        if section.id in seen:
            errors.append(ConfigError(f"Duplicate section id '{section.id}'", path=f"sections.{i}"))
            continue
        seen.add(section.id)
        sections.append(section)

    ctas = None
    if mapping.get("ctas") is not None:
        ctas = _load_ctas(mapping["ctas"], "ctas", errors)

    for err in errors:
        logger.warning("Screen '%s': %s", screen_id, err)

    screen = ScreenConfig(
        id=screen_id,
        version=version,
        layout=layout,
        theme=theme,
        sections=sections,
        ctas=ctas,
    )
    return LoadResult(screen=screen, errors=errors)


def _load_theme(raw: Any, errors: list[ConfigError]) -> ScreenTheme | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        errors.append(ConfigError("'theme' must be an object; using defaults", path="theme"))
        return None

    kept: dict[str, Any] = {}
    for key, value in raw.items():
        try:
            ScreenTheme.model_validate({key: value})
        except ValidationError as e:
            errors.append(_config_error(e, "theme"))
            continue
        kept[key] = value
    return ScreenTheme.model_validate(kept)


def _load_section(raw: Any, path: str, errors: list[ConfigError]) -> Any:
    if isinstance(raw, dict) and isinstance(raw.get("ctas"), list):
        # Validate the section shell first, then each CTA independently
        shell = {k: v for k, v in raw.items() if k != "ctas"}
        try:
            section = _section_adapter.validate_python(shell)
        except ValidationError as e:
            errors.append(_config_error(e, path))
            return None
        if not isinstance(section, TextSection):
            errors.append(ConfigError("Image sections do not take 'ctas'", path=f"{path}.ctas"))
            return section
        ctas = _load_ctas(raw["ctas"], f"{path}.ctas", errors)
        return section.model_copy(update={"ctas": ctas})

    try:
        return _section_adapter.validate_python(raw)
    except ValidationError as e:
        errors.append(_config_error(e, path))
        return None


def _load_ctas(raw: Any, path: str, errors: list[ConfigError]) -> list[CTAConfig]:
    if not isinstance(raw, list):
        errors.append(ConfigError("CTAs must be a list", path=path))
        return []
    ctas: list[CTAConfig] = []
    for i, item in enumerate(raw):
        try:
            ctas.append(_cta_adapter.validate_python(item))
        except ValidationError as e:
            errors.append(_config_error(e, f"{path}.{i}"))
    return ctas


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def dump_screen(screen: ScreenConfig) -> dict[str, Any]:
    """Wire form: camelCase aliases, unset optional fields omitted."""
    return screen.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_action(action: Any) -> dict[str, Any]:
    return action.model_dump(mode="json", by_alias=True, exclude_none=True)


def screen_to_json(screen: ScreenConfig, indent: int | None = 2) -> str:
    return json.dumps(dump_screen(screen), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Editing helpers
# ---------------------------------------------------------------------------

_BLANK_PAYLOADS: dict[str, dict[str, Any]] = {
    "route": {"target": ""},
    "external_url": {"url": ""},
    "mailto": {"email": ""},
    "phone": {"number": ""},
    "download": {"file_url": ""},
    "copy_to_clipboard": {"text": ""},
    "custom": {"handler_id": ""},
    "noop": {},
}


def blank_action(action_type: ActionType) -> Any:
    """A fresh action of the given type with empty required fields."""
    model = ACTION_MODELS.get(action_type)
    if model is None:
        raise ConfigError(f"Unknown action type: {action_type!r}")
    return model(**_BLANK_PAYLOADS[action_type])


def switch_action_type(cta: CTAConfig, action_type: ActionType) -> CTAConfig:
    """
    Return a copy of `cta` whose action is a blank `action_type` variant.
    Payload fields of the previous variant are discarded, never carried over.
    Switching to the current type is a no-op.
    """
    if cta.action.type == action_type:
        return cta
    return cta.model_copy(update={"action": blank_action(action_type)})


def new_text_section(index: int) -> TextSection:
    """Default section the editor appends: `section_<index>`."""
    return TextSection(
        id=f"section_{index}",
        type="text",
        width="full",
        align="left",
        padding="md",
        margin="none",
        blocks=[TextBlock(id="block_1", variant="heading2", text="New section")],
        ctas=[],
    )


def new_global_cta(index: int) -> CTAConfig:
    """Default global CTA the editor appends: `global_cta_<index>`."""
    return CTAConfig(
        id=f"global_cta_{index}",
        label="Global CTA",
        kind="button",
        priority="secondary",
        size="md",
        action=NoopAction(),
    )
