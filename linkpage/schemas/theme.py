from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from linkpage.schemas.common import CamelModel

DEFAULT_GRADIENT_START = "#6b2ff5"
DEFAULT_GRADIENT_END = "#ff3a9d"
GRADIENT_ANGLE = "135deg"


class WallpaperStyle(str, Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    BLUR = "blur"
    PATTERN = "pattern"
    IMAGE = "image"
    VIDEO = "video"


class WallpaperPattern(str, Enum):
    DOTS = "dots"
    GRID = "grid"


class ButtonStyle(str, Enum):
    ROUNDED = "rounded"
    SQUARE = "square"
    PILL = "pill"


class ButtonStyleType(str, Enum):
    SOLID = "solid"
    GLASS = "glass"
    OUTLINE = "outline"


class ButtonShadow(str, Enum):
    NONE = "none"
    SUBTLE = "subtle"
    STRONG = "strong"
    HARD = "hard"


class FontFamily(str, Enum):
    SANS = "sans"
    SERIF = "serif"
    MONO = "mono"


class TitleSize(str, Enum):
    SMALL = "small"
    LARGE = "large"


class TitleStyle(str, Enum):
    TEXT = "text"
    LOGO = "logo"


class ProfileImageLayout(str, Enum):
    CLASSIC = "classic"
    HERO = "hero"


# Fields that hold a single color value (as opposed to css backgrounds or enums).
COLOR_FIELDS = (
    "background_color",
    "button_color",
    "button_text_color",
    "title_color",
    "wallpaper_gradient_start",
    "wallpaper_gradient_end",
)


class Theme(CamelModel):
    """Flat theme record, the shape persisted and exchanged with clients.

    Enum-like fields are kept as raw strings so records written by older
    clients survive a round-trip; the renderer resolves them against the
    closed enums and falls back to the defaults.
    """

    model_config = ConfigDict(frozen=True)

    background_color: str = "#ffffff"
    wallpaper_style: str = WallpaperStyle.SOLID.value
    wallpaper: str = "#ffffff"
    wallpaper_gradient_start: Optional[str] = None
    wallpaper_gradient_end: Optional[str] = None
    wallpaper_pattern: Optional[str] = None
    wallpaper_image_url: Optional[str] = None
    wallpaper_video_url: Optional[str] = None
    button_color: str = "#000000"
    button_text_color: str = "#ffffff"
    button_style: str = ButtonStyle.ROUNDED.value
    button_style_type: Optional[str] = None
    button_corner_radius: Optional[int] = None
    button_shadow: Optional[str] = None
    font_family: str = FontFamily.SANS.value
    title_font: str = "Link Sans"
    title_color: str = "#000000"
    title_size: str = TitleSize.SMALL.value
    title_style: str = TitleStyle.TEXT.value
    profile_image_layout: str = ProfileImageLayout.CLASSIC.value


THEME_FIELDS = tuple(Theme.model_fields)


class SolidWallpaper(BaseModel):
    style: Literal["solid"] = "solid"
    fill: str


class GradientWallpaper(BaseModel):
    style: Literal["gradient"] = "gradient"
    start: Optional[str] = None
    end: Optional[str] = None

    @property
    def css(self) -> str:
        start = self.start or DEFAULT_GRADIENT_START
        end = self.end or DEFAULT_GRADIENT_END
        return f"linear-gradient({GRADIENT_ANGLE}, {start} 0%, {end} 100%)"


class BlurWallpaper(BaseModel):
    style: Literal["blur"] = "blur"
    fill: str


class PatternWallpaper(BaseModel):
    style: Literal["pattern"] = "pattern"
    tint: str
    pattern: WallpaperPattern = WallpaperPattern.DOTS


class ImageWallpaper(BaseModel):
    style: Literal["image"] = "image"
    url: Optional[str] = None


class VideoWallpaper(BaseModel):
    style: Literal["video"] = "video"
    url: Optional[str] = None


Wallpaper = Annotated[
    Union[SolidWallpaper, GradientWallpaper, BlurWallpaper, PatternWallpaper, ImageWallpaper, VideoWallpaper],
    Field(discriminator="style"),
]


class ThemeNormalizeResponse(CamelModel):
    theme: Theme
    warnings: list[str] = Field(default_factory=list)


# Picker catalog for title_font. Not enforced: stored font names pass through.
FONT_OPTIONS: tuple[str, ...] = (
    # System
    "Arial", "Helvetica", "Times New Roman", "Georgia", "Courier New", "Verdana",
    "Trebuchet MS", "Comic Sans MS", "Impact",
    # Sans serif
    "Inter", "Roboto", "Open Sans", "Lato", "Montserrat", "Poppins", "Source Sans Pro",
    "Raleway", "Nunito", "Ubuntu", "Rubik", "Work Sans", "DM Sans", "Josefin Sans",
    "IBM Plex Sans", "Outfit", "Manrope", "Space Grotesk",
    # Serif
    "Playfair Display", "Merriweather", "Lora", "PT Serif", "Crimson Text", "EB Garamond",
    "Libre Baskerville", "Cormorant Garamond",
    # Display
    "Bebas Neue", "Pacifico", "Righteous", "Permanent Marker", "Lobster", "Anton",
    "Fjalla One", "Archivo Black",
    # Monospace
    "Roboto Mono", "Source Code Pro", "JetBrains Mono", "Fira Code", "IBM Plex Mono", "Space Mono",
    "Link Sans",
)
