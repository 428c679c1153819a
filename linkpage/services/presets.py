from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from linkpage.core.errors import PresetNotFoundError
from linkpage.schemas.theme import THEME_FIELDS, Theme

PRESENTATION = "presentation"
BUTTON_FONT = "button_font"
FAMILIES = (PRESENTATION, BUTTON_FONT)

PRESENTATION_FIELDS = (
    "background_color",
    "wallpaper",
    "button_color",
    "button_text_color",
    "button_style",
    "title_color",
    "title_font",
)
BUTTON_FONT_FIELDS = (
    "button_style",
    "button_style_type",
    "button_color",
    "button_text_color",
    "title_font",
)


@dataclass(frozen=True)
class Preset:
    """Named partial theme. ``fields`` is the declared field set, applied verbatim."""

    name: str
    family: str
    fields: Mapping[str, Any]
    description: str = ""
    icon: str | None = None
    button_border: str | None = None

    def __post_init__(self) -> None:
        unknown = set(self.fields) - set(THEME_FIELDS)
        if unknown:
            raise ValueError(f"Preset {self.name} declares unknown theme fields: {sorted(unknown)}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "family": self.family,
            "fields": dict(self.fields),
            "description": self.description,
            "icon": self.icon,
            "button_border": self.button_border,
        }


def apply_preset(current: Theme, preset: Preset) -> Theme:
    """Overwrite exactly the preset's declared fields; everything else is kept."""
    return current.model_copy(update=dict(preset.fields))


def _presentation(name: str, background: str, wallpaper: str, button: str, text: str, style: str, title: str, font: str) -> Preset:
    values = (background, wallpaper, button, text, style, title, font)
    return Preset(name=name, family=PRESENTATION, fields=dict(zip(PRESENTATION_FIELDS, values)))


PRESENTATION_PRESETS: tuple[Preset, ...] = (
    _presentation("Agate", "#1a4d3e", "linear-gradient(135deg, #1a4d3e 0%, #2d7a5f 100%)", "#d4ff00", "#000000", "rounded", "#d4ff00", "Arial"),
    _presentation("Air", "#f5f5f7", "#f5f5f7", "#ffffff", "#000000", "rounded", "#000000", "Arial"),
    _presentation("Astrid", "#0a0a0a", "#0a0a0a", "#1a1a1a", "#ffffff", "rounded", "#ffffff", "Arial"),
    _presentation("Aura", "#e8e4dc", "#e8e4dc", "#f5f1e8", "#333333", "rounded", "#333333", "Georgia"),
    _presentation("Bliss", "#f8f8f8", "linear-gradient(180deg, #4a4a4a 0%, #f8f8f8 50%)", "#ffffff", "#000000", "rounded", "#000000", "Arial"),
    _presentation("Blocks", "#6b2ff5", "linear-gradient(180deg, #6b2ff5 0%, #ff3a9d 100%)", "#ff3a9d", "#ffffff", "rounded", "#ffffff", "Arial"),
    _presentation("Bloom", "#8b4fc7", "linear-gradient(135deg, #ff4757 0%, #8b4fc7 100%)", "#ffffff", "#8b4fc7", "pill", "#ffffff", "Arial"),
    _presentation("Breeze", "#ffb3d9", "linear-gradient(180deg, #ffb3d9 0%, #ffd9ec 100%)", "#ffd9ec", "#8b4789", "rounded", "#8b4789", "Arial"),
    _presentation("Dark", "#1a1a1a", "#1a1a1a", "#ffffff", "#000000", "rounded", "#ffffff", "Arial"),
    _presentation("Encore", "#1a1a1a", "#1a1a1a", "#0a0a0a", "#d4a574", "rounded", "#d4a574", "Georgia"),
    _presentation("Grid", "#d4e89e", "#d4e89e", "#ffffff", "#000000", "pill", "#000000", "Arial"),
    _presentation("Groove", "#ff6b9d", "linear-gradient(45deg, #ff6b9d 0%, #c471ed 50%, #12c2e9 100%)", "rgba(255, 255, 255, 0.2)", "#ffffff", "pill", "#ffffff", "Arial"),
    _presentation("Haven", "#a08968", "linear-gradient(180deg, #a08968 0%, #f5f1e8 50%)", "#e8dcc8", "#5a4a3a", "rounded", "#5a4a3a", "Georgia"),
    _presentation("Lake", "#0a1929", "#0a1929", "#132f4c", "#ffffff", "rounded", "#ffffff", "Arial"),
    _presentation("Mineral", "#f5f1e8", "linear-gradient(180deg, #f5f1e8 0%, #e8dcc8 100%)", "#e8dcc8", "#5a4a3a", "rounded", "#5a4a3a", "Georgia"),
    _presentation("Nourish", "#6b7c3a", "linear-gradient(180deg, #6b7c3a 0%, #d4e89e 50%)", "#d4e89e", "#3a4a1a", "pill", "#d4e89e", "Arial"),
    _presentation("Rise", "#ff8a65", "linear-gradient(135deg, #ff8a65 0%, #ffab91 100%)", "#ffccbc", "#bf360c", "pill", "#ffffff", "Arial"),
    _presentation("Sweat", "#2196f3", "linear-gradient(135deg, #ff4081 0%, #2196f3 100%)", "#64b5f6", "#ffffff", "pill", "#ffffff", "Arial"),
    _presentation("Tress", "#8b7355", "linear-gradient(180deg, #8b7355 0%, #d4c4aa 50%)", "#d4c4aa", "#5a4a3a", "rounded", "#5a4a3a", "Georgia"),
    _presentation("Twilight", "#4a5568", "linear-gradient(135deg, #4a5568 0%, #9f7aea 100%)", "#d8b4fe", "#4c1d95", "pill", "#ffffff", "Arial"),
)


def _button_font(
    name: str,
    style: str,
    style_type: str,
    button: str,
    text: str,
    font: str,
    border: str,
    description: str,
    icon: str | None = None,
) -> Preset:
    values = (style, style_type, button, text, font)
    return Preset(
        name=name,
        family=BUTTON_FONT,
        fields=dict(zip(BUTTON_FONT_FIELDS, values)),
        description=description,
        icon=icon,
        button_border=border,
    )


# Outlined presets carry their border color as the button color: the outline
# treatment draws a transparent fill with a border in button_color.
BUTTON_FONT_PRESETS: tuple[Preset, ...] = (
    _button_font("Custom", "rounded", "solid", "#ffffff", "#000000", "Arial", "2px solid transparent", "Customize your own style", icon="Palette"),
    _button_font("Minimal", "rounded", "outline", "#000000", "#000000", "Arial", "2px solid #000000", "Clean and simple outlined buttons"),
    _button_font("Classic", "rounded", "solid", "#ffffff", "#000000", "Georgia", "none", "Timeless white buttons with serif font"),
    _button_font("Unique", "rounded", "solid", "#ffffff", "#000000", "Arial", "none", "Soft rounded corners with sans-serif"),
    _button_font("Zen", "pill", "solid", "#ffffff", "#000000", "Arial", "none", "Smooth pill-shaped buttons"),
    _button_font("Simple", "pill", "solid", "#ffffff", "#000000", "Verdana", "none", "Easy on the eyes"),
    _button_font("Precise", "square", "outline", "#000000", "#000000", "Arial", "2px solid #000000", "Sharp corners and defined edges"),
    _button_font("Retro", "pill", "solid", "#000000", "#ffffff", "Arial", "3px solid #000000", "Bold vintage style"),
    _button_font("Modern", "pill", "solid", "#f5f5f5", "#000000", "Arial", "none", "Contemporary and sleek"),
    _button_font("Industrial", "pill", "outline", "#000000", "#000000", "Courier New", "2px solid #000000", "Technical monospace look"),
)

_CATALOGS: dict[str, tuple[Preset, ...]] = {
    PRESENTATION: PRESENTATION_PRESETS,
    BUTTON_FONT: BUTTON_FONT_PRESETS,
}


def list_presets(family: str | None = None) -> list[Preset]:
    if family is None:
        return [preset for presets in _CATALOGS.values() for preset in presets]
    return list(_CATALOGS.get(family, ()))


def get_preset(family: str, name: str) -> Preset:
    wanted = name.strip().lower()
    for preset in _CATALOGS.get(family, ()):
        if preset.name.lower() == wanted:
            return preset
    raise PresetNotFoundError(family, name)
