import pytest

from linkpage.core.errors import PresetNotFoundError
from linkpage.services.presets import (
    BUTTON_FONT,
    BUTTON_FONT_FIELDS,
    BUTTON_FONT_PRESETS,
    PRESENTATION,
    PRESENTATION_FIELDS,
    PRESENTATION_PRESETS,
    Preset,
    apply_preset,
    get_preset,
    list_presets,
)
from linkpage.services.theme_model import DEFAULT_THEME, normalize


def test_catalog_sizes_and_declared_fields():
    assert len(PRESENTATION_PRESETS) >= 18
    assert len(BUTTON_FONT_PRESETS) == 10

    for preset in PRESENTATION_PRESETS:
        assert tuple(preset.fields) == PRESENTATION_FIELDS
    for preset in BUTTON_FONT_PRESETS:
        assert tuple(preset.fields) == BUTTON_FONT_FIELDS
        assert "wallpaper" not in preset.fields
        assert "background_color" not in preset.fields


def test_dark_preset_keeps_wallpaper_style():
    theme = normalize({"backgroundColor": "#ffffff", "buttonStyle": "rounded", "wallpaperStyle": "solid"})

    result = apply_preset(theme, get_preset(PRESENTATION, "Dark"))

    assert result.background_color == "#1a1a1a"
    assert result.button_color == "#ffffff"
    assert result.button_text_color == "#000000"
    assert result.title_color == "#ffffff"
    assert result.wallpaper_style == "solid"


@pytest.mark.parametrize("preset", list_presets(), ids=lambda preset: f"{preset.family}:{preset.name}")
def test_apply_preset_is_idempotent(preset):
    theme = normalize({"buttonShadow": "hard", "wallpaperStyle": "pattern", "buttonCornerRadius": 6})

    once = apply_preset(theme, preset)

    assert apply_preset(once, preset) == once
    # fields outside the declared set are untouched
    assert once.button_shadow == "hard"
    assert once.wallpaper_style == "pattern"
    assert once.button_corner_radius == 6


def test_apply_preset_overwrites_even_equal_values():
    preset = get_preset(BUTTON_FONT, "Classic")
    theme = DEFAULT_THEME.model_copy(update={"title_font": "Georgia", "button_style_type": "glass"})

    result = apply_preset(theme, preset)

    assert result.title_font == "Georgia"
    assert result.button_style_type == "solid"
    assert result.button_color == "#ffffff"


def test_outlined_presets_use_outline_style_type():
    for name in ("Minimal", "Precise", "Industrial"):
        preset = get_preset(BUTTON_FONT, name)
        assert preset.fields["button_style_type"] == "outline"
        assert preset.fields["button_color"] == "#000000"


def test_get_preset_is_case_insensitive_and_raises_for_unknown():
    assert get_preset(PRESENTATION, "  agate ").name == "Agate"

    with pytest.raises(PresetNotFoundError):
        get_preset(PRESENTATION, "Nope")
    with pytest.raises(PresetNotFoundError):
        get_preset("colors", "Dark")


def test_list_presets_by_family():
    assert list_presets(BUTTON_FONT) == list(BUTTON_FONT_PRESETS)
    assert list_presets("unknown") == []
    assert len(list_presets()) == len(PRESENTATION_PRESETS) + len(BUTTON_FONT_PRESETS)


def test_preset_is_immutable_and_checks_field_names():
    preset = get_preset(PRESENTATION, "Air")

    with pytest.raises(TypeError):
        preset.fields["button_color"] = "#000000"
    with pytest.raises(ValueError):
        Preset(name="Broken", family=PRESENTATION, fields={"glow": "on"})

    data = preset.as_dict()
    assert data["name"] == "Air"
    assert data["fields"]["wallpaper"] == "#f5f5f7"
