from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from pydantic.alias_generators import to_snake

from linkpage.core.errors import ValidationError
from linkpage.schemas.common import resolve_enum
from linkpage.schemas.theme import (
    COLOR_FIELDS,
    DEFAULT_GRADIENT_END,
    DEFAULT_GRADIENT_START,
    THEME_FIELDS,
    BlurWallpaper,
    GradientWallpaper,
    ImageWallpaper,
    PatternWallpaper,
    SolidWallpaper,
    Theme,
    VideoWallpaper,
    Wallpaper,
    WallpaperPattern,
    WallpaperStyle,
)

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")
RGBA_COLOR_PATTERN = re.compile(
    r"^rgba?\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*(,\s*(0|1|0?\.\d+|1\.0+)\s*)?\)$"
)
COLOR_KEYWORDS = {"transparent"}

# Editors before the wallpaper rework stored "fill" for a plain color.
LEGACY_WALLPAPER_STYLES = {"fill": WallpaperStyle.SOLID.value}

DEFAULT_THEME = Theme()

_REQUIRED_FIELDS = tuple(
    name for name in THEME_FIELDS if getattr(DEFAULT_THEME, name) is not None
)


def _field_name(key: str) -> str | None:
    if key in THEME_FIELDS:
        return key
    snake = to_snake(key)
    if snake in THEME_FIELDS:
        return snake
    return None


def normalize(raw: Mapping[str, Any] | Theme | None) -> Theme:
    """Fill every unset field of ``raw`` from the default theme.

    Keys may be camelCase (client shape) or snake_case (persistence shape);
    unknown keys are dropped. Values are not validated, malformed colors
    reach the renderer as-is.
    """
    if raw is None:
        return DEFAULT_THEME
    if isinstance(raw, Theme):
        raw = raw.model_dump()

    values: dict[str, Any] = {}
    for key, value in raw.items():
        name = _field_name(key)
        if name is None:
            continue
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            continue
        if name != "button_corner_radius" and not isinstance(value, str):
            value = str(value)
        values[name] = value

    for name in _REQUIRED_FIELDS:
        values.setdefault(name, getattr(DEFAULT_THEME, name))

    style = values["wallpaper_style"]
    if isinstance(style, str):
        values["wallpaper_style"] = LEGACY_WALLPAPER_STYLES.get(style.lower(), style)

    radius = values.get("button_corner_radius")
    if radius is not None and not isinstance(radius, int):
        try:
            values["button_corner_radius"] = int(float(radius))
        except (TypeError, ValueError, OverflowError):
            logger.debug("Dropping unreadable button_corner_radius=%r", radius)
            values.pop("button_corner_radius")

    return Theme(**values)


def is_valid_color(value: str | None) -> bool:
    if value is None:
        return False
    candidate = value.strip()
    return (
        bool(HEX_COLOR_PATTERN.match(candidate))
        or bool(RGBA_COLOR_PATTERN.match(candidate))
        or candidate.lower() in COLOR_KEYWORDS
    )


def theme_issues(theme: Theme) -> list[str]:
    issues: list[str] = []
    for name in COLOR_FIELDS:
        value = getattr(theme, name)
        if value is None:
            continue
        if not is_valid_color(value):
            issues.append(f"{name} must be #RRGGBB or rgba(...), got {value!r}")
    if theme.button_corner_radius is not None and theme.button_corner_radius < 0:
        issues.append("button_corner_radius must be >= 0")
    return issues


def validate(theme: Theme, *, strict: bool = False) -> Theme:
    issues = theme_issues(theme)
    if not issues:
        return theme
    if strict:
        raise ValidationError(issues)
    logger.debug("Theme passed through with %s lexical issue(s)", len(issues))
    return theme


def to_persistence_payload(theme: Theme) -> dict[str, Any]:
    return theme.model_dump(by_alias=False)


def to_client_payload(theme: Theme) -> dict[str, Any]:
    return theme.model_dump(by_alias=True)


# --- wallpaper adapter -------------------------------------------------------


def wallpaper_from_theme(theme: Theme) -> Wallpaper:
    style = resolve_enum(WallpaperStyle, theme.wallpaper_style, WallpaperStyle.SOLID)
    if style is WallpaperStyle.GRADIENT:
        return GradientWallpaper(start=theme.wallpaper_gradient_start, end=theme.wallpaper_gradient_end)
    if style is WallpaperStyle.BLUR:
        return BlurWallpaper(fill=theme.wallpaper)
    if style is WallpaperStyle.PATTERN:
        pattern = resolve_enum(WallpaperPattern, theme.wallpaper_pattern, WallpaperPattern.DOTS)
        return PatternWallpaper(tint=theme.wallpaper, pattern=pattern)
    if style is WallpaperStyle.IMAGE:
        return ImageWallpaper(url=theme.wallpaper_image_url or None)
    if style is WallpaperStyle.VIDEO:
        return VideoWallpaper(url=theme.wallpaper_video_url or None)
    return SolidWallpaper(fill=theme.wallpaper)


def with_wallpaper(theme: Theme, wallpaper: Wallpaper) -> Theme:
    """Activate ``wallpaper`` on the flat theme; other style groups keep their values."""
    update: dict[str, Any] = {"wallpaper_style": wallpaper.style}
    if isinstance(wallpaper, (SolidWallpaper, BlurWallpaper)):
        update["wallpaper"] = wallpaper.fill
    elif isinstance(wallpaper, GradientWallpaper):
        update["wallpaper_gradient_start"] = wallpaper.start
        update["wallpaper_gradient_end"] = wallpaper.end
        update["wallpaper"] = wallpaper.css
    elif isinstance(wallpaper, PatternWallpaper):
        update["wallpaper"] = wallpaper.tint
        update["wallpaper_pattern"] = wallpaper.pattern.value
    elif isinstance(wallpaper, ImageWallpaper):
        update["wallpaper_image_url"] = wallpaper.url
    elif isinstance(wallpaper, VideoWallpaper):
        update["wallpaper_video_url"] = wallpaper.url
    return theme.model_copy(update=update)


# --- editing helpers ---------------------------------------------------------


def apply_color(theme: Theme, field: str, color: str) -> Theme:
    name = _field_name(field)
    if name is None or name not in COLOR_FIELDS + ("wallpaper",):
        raise ValidationError(f"{field} is not a color field")
    return theme.model_copy(update={name: color})


def set_wallpaper_color(theme: Theme, color: str, *, style: str = WallpaperStyle.SOLID.value) -> Theme:
    """Solid and blur wallpapers paint the page and the wallpaper with one color."""
    if style == WallpaperStyle.BLUR.value:
        wallpaper: Wallpaper = BlurWallpaper(fill=color)
    else:
        wallpaper = SolidWallpaper(fill=color)
    return with_wallpaper(theme, wallpaper).model_copy(update={"background_color": color})


def set_gradient_colors(theme: Theme, *, start: str | None = None, end: str | None = None) -> Theme:
    start = start or theme.wallpaper_gradient_start or DEFAULT_GRADIENT_START
    end = end or theme.wallpaper_gradient_end or DEFAULT_GRADIENT_END
    updated = with_wallpaper(theme, GradientWallpaper(start=start, end=end))
    return updated.model_copy(update={"background_color": start})


def set_wallpaper_pattern(theme: Theme, pattern: str) -> Theme:
    resolved = resolve_enum(WallpaperPattern, pattern, WallpaperPattern.DOTS)
    return with_wallpaper(theme, PatternWallpaper(tint=theme.wallpaper, pattern=resolved))


def set_wallpaper_media(theme: Theme, style: str, url: str | None) -> Theme:
    if style == WallpaperStyle.VIDEO.value:
        return with_wallpaper(theme, VideoWallpaper(url=url or None))
    if style == WallpaperStyle.IMAGE.value:
        return with_wallpaper(theme, ImageWallpaper(url=url or None))
    raise ValidationError(f"{style} is not a media wallpaper style")
