"""Theme + links -> visual description.

Everything in here is a pure function of its inputs. The editor preview and
the public page both call :func:`render_page`, which is what keeps the two
surfaces identical.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional

from linkpage.schemas.common import resolve_enum
from linkpage.schemas.link import Link, LinkLayout, known_icon
from linkpage.schemas.profile import PageProfile
from linkpage.schemas.theme import (
    BlurWallpaper,
    ButtonShadow,
    ButtonStyle,
    ButtonStyleType,
    FontFamily,
    GradientWallpaper,
    ImageWallpaper,
    PatternWallpaper,
    ProfileImageLayout,
    SolidWallpaper,
    Theme,
    TitleSize,
    TitleStyle,
    VideoWallpaper,
    WallpaperPattern,
)
from linkpage.schemas.visual import LinkVisual, PageVisual, VisualNode, WallpaperVisual
from linkpage.services.theme_model import wallpaper_from_theme

_HEX6 = re.compile(r"^#([0-9a-fA-F]{6})([0-9a-fA-F]{2})?$")
_HEX3 = re.compile(r"^#([0-9a-fA-F]{3})$")
_RGB = re.compile(r"^rgba?\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s\)]+)\s*(?:,\s*([^\s\)]+)\s*)?\)$")
_SCHEME = re.compile(r"^https?://")

GLASS_ALPHA = 0.25
FEATURED_ALPHA = 0.8

SHADOWS = {
    ButtonShadow.NONE: "none",
    ButtonShadow.SUBTLE: "0 1px 3px rgba(0,0,0,0.12)",
    ButtonShadow.STRONG: "0 10px 25px rgba(0,0,0,0.25)",
    ButtonShadow.HARD: "4px 4px 0px rgba(0,0,0,0.3)",
}

LEGACY_RADII = {
    ButtonStyle.ROUNDED: "0.5rem",
    ButtonStyle.PILL: "9999px",
    ButtonStyle.SQUARE: "0.25rem",
}

FONT_STACKS = {
    FontFamily.SANS: "sans-serif",
    FontFamily.SERIF: "serif",
    FontFamily.MONO: "monospace",
}

TITLE_SIZES = {
    TitleSize.SMALL: "1.25rem",
    TitleSize.LARGE: "1.5rem",
}

DOTS_IMAGE = "radial-gradient(circle, rgba(0,0,0,0.15) 1px, transparent 1px)"
BLUR_OVERLAY = {"backdrop-filter": "blur(12px)", "background-color": "rgba(255,255,255,0.1)"}
EMPTY_PLACEHOLDER = "Your links will appear here"


# --- color helpers -----------------------------------------------------------


def _format_alpha(value: float) -> str:
    return ("%.3f" % value).rstrip("0").rstrip(".")


def with_alpha(color: str, alpha: float) -> str:
    """Scale the opacity of ``color``; unparseable colors come back unchanged."""
    candidate = color.strip()
    match = _HEX6.match(candidate)
    if match:
        base = int(match.group(2), 16) / 255 if match.group(2) else 1.0
        return f"#{match.group(1)}{round(base * alpha * 255):02X}"
    match = _HEX3.match(candidate)
    if match:
        expanded = "".join(ch * 2 for ch in match.group(1))
        return f"#{expanded}{round(alpha * 255):02X}"
    match = _RGB.match(candidate)
    if match:
        red, green, blue, current = match.groups()
        try:
            base = float(current) if current is not None else 1.0
        except ValueError:
            return color
        return f"rgba({red}, {green}, {blue}, {_format_alpha(base * alpha)})"
    return color


def strip_scheme(url: str) -> str:
    return _SCHEME.sub("", url)


# --- button surface ----------------------------------------------------------


def corner_radius(theme: Theme) -> str:
    if theme.button_corner_radius is not None:
        return f"{max(theme.button_corner_radius, 0)}px"
    style = resolve_enum(ButtonStyle, theme.button_style, ButtonStyle.ROUNDED)
    return LEGACY_RADII[style]


def button_surface(theme: Theme, *, radius: str | None = None) -> dict[str, str]:
    style_type = resolve_enum(ButtonStyleType, theme.button_style_type, ButtonStyleType.SOLID)
    shadow = resolve_enum(ButtonShadow, theme.button_shadow, ButtonShadow.NONE)

    if style_type is ButtonStyleType.OUTLINE:
        fill, border, backdrop = "transparent", f"2px solid {theme.button_color}", "none"
    elif style_type is ButtonStyleType.GLASS:
        fill, border, backdrop = with_alpha(theme.button_color, GLASS_ALPHA), "1px solid rgba(255,255,255,0.3)", "blur(12px)"
    else:
        fill, border, backdrop = theme.button_color, "none", "none"

    return {
        "background-color": fill,
        "color": theme.button_text_color,
        "border": border,
        "border-radius": radius or corner_radius(theme),
        "backdrop-filter": backdrop,
        "box-shadow": SHADOWS[shadow],
    }


# --- link layouts ------------------------------------------------------------


def _icon(link: Link) -> Optional[VisualNode]:
    icon = known_icon(link.icon)
    if icon is None:
        return None
    return VisualNode(kind="icon", icon=icon, style={"width": "1.25rem", "height": "1.25rem"})


def _text(text: str, **style: str) -> VisualNode:
    return VisualNode(kind="text", text=text, style={key.replace("_", "-"): value for key, value in style.items()})


def _nodes(*nodes: Optional[VisualNode]) -> tuple[VisualNode, ...]:
    return tuple(node for node in nodes if node is not None)


def _render_default(theme: Theme, link: Link) -> VisualNode:
    style = {
        **button_surface(theme),
        "width": "100%",
        "display": "flex",
        "align-items": "center",
        "justify-content": "center",
        "gap": "0.5rem",
        "padding": "0.625rem 1rem",
        "font-weight": "500",
        "text-align": "center",
    }
    return VisualNode(kind="block", style=style, children=_nodes(_icon(link), _text(link.title)))


def _render_icon_only(theme: Theme, link: Link) -> VisualNode:
    content = _icon(link) or VisualNode(kind="glyph", text=link.title[:1], style={"font-size": "0.75rem"})
    badge = VisualNode(
        kind="badge",
        style={
            **button_surface(theme, radius="9999px"),
            "width": "3rem",
            "height": "3rem",
            "display": "flex",
            "align-items": "center",
            "justify-content": "center",
        },
        children=(content,),
    )
    return VisualNode(kind="row", style={"display": "flex", "justify-content": "center"}, children=(badge,))


def _render_thumbnail(theme: Theme, link: Link) -> VisualNode:
    tile = VisualNode(
        kind="tile",
        style={
            "width": "2.5rem",
            "height": "2.5rem",
            "border-radius": "0.25rem",
            "background-color": "rgba(255,255,255,0.2)",
            "display": "flex",
            "align-items": "center",
            "justify-content": "center",
        },
        children=_nodes(_icon(link)),
    )
    column = VisualNode(
        kind="column",
        style={"flex": "1", "text-align": "left", "min-width": "0"},
        children=(
            _text(link.title, font_size="0.75rem", font_weight="500"),
            _text(link.url, font_size="0.625rem", opacity="0.7"),
        ),
    )
    style = {
        **button_surface(theme, radius="0.5rem"),
        "width": "100%",
        "display": "flex",
        "align-items": "center",
        "gap": "0.75rem",
        "padding": "0.75rem",
    }
    return VisualNode(kind="block", style=style, children=(tile, column))


def _render_card(theme: Theme, link: Link) -> VisualNode:
    band = VisualNode(
        kind="band",
        style={
            "width": "100%",
            "height": "4rem",
            "background": "linear-gradient(to right, rgba(255,255,255,0.2), rgba(255,255,255,0.05))",
        },
    )
    body = VisualNode(
        kind="column",
        style={"padding": "0.75rem"},
        children=(
            _text(link.title, font_size="0.75rem", font_weight="500", margin_bottom="0.25rem"),
            _text(strip_scheme(link.url), font_size="0.625rem", opacity="0.7"),
        ),
    )
    style = {**button_surface(theme, radius="0.5rem"), "width": "100%", "overflow": "hidden"}
    return VisualNode(kind="block", style=style, children=(band, body))


def _render_minimal(theme: Theme, link: Link) -> VisualNode:
    return VisualNode(
        kind="block",
        style={"width": "100%", "text-align": "center", "padding": "0.5rem 0"},
        children=(
            _text(link.title, color=theme.title_color, font_size="0.875rem", font_weight="500"),
            _text(strip_scheme(link.url), color=theme.title_color, font_size="0.625rem", opacity="0.5"),
        ),
    )


def _render_featured(theme: Theme, link: Link) -> VisualNode:
    color = theme.button_color
    header = VisualNode(
        kind="row",
        style={"display": "flex", "align-items": "center", "gap": "0.5rem", "margin-bottom": "0.5rem"},
        children=_nodes(_icon(link), _text(link.title, font_size="0.875rem", font_weight="700")),
    )
    body = VisualNode(
        kind="column",
        style={"padding": "1rem"},
        children=(header, _text(strip_scheme(link.url), font_size="0.625rem", opacity="0.7")),
    )
    style = {
        "background": f"linear-gradient(135deg, {color} 0%, {with_alpha(color, FEATURED_ALPHA)} 100%)",
        "color": theme.button_text_color,
        "border-radius": "0.5rem",
        "overflow": "hidden",
        "width": "100%",
    }
    return VisualNode(kind="block", style=style, children=(body,))


LayoutRenderer = Callable[[Theme, Link], VisualNode]

_LAYOUT_RENDERERS: dict[LinkLayout, LayoutRenderer] = {
    LinkLayout.DEFAULT: _render_default,
    LinkLayout.ICON_ONLY: _render_icon_only,
    LinkLayout.THUMBNAIL: _render_thumbnail,
    LinkLayout.CARD: _render_card,
    LinkLayout.MINIMAL: _render_minimal,
    LinkLayout.FEATURED: _render_featured,
}


def render_link(theme: Theme, link: Link) -> LinkVisual:
    layout = resolve_enum(LinkLayout, link.layout, LinkLayout.DEFAULT)
    renderer = _LAYOUT_RENDERERS.get(layout)
    if renderer is None:
        layout, renderer = LinkLayout.DEFAULT, _render_default
    return LinkVisual(link_id=link.id, layout=layout.value, href=link.url, node=renderer(theme, link))


# --- wallpaper ---------------------------------------------------------------


def _fill(background: str) -> VisualNode:
    return VisualNode(kind="fill", style={"background": background})


def _render_solid(wallpaper: SolidWallpaper) -> tuple[VisualNode, ...]:
    return (_fill(wallpaper.fill),)


def _render_gradient(wallpaper: GradientWallpaper) -> tuple[VisualNode, ...]:
    return (_fill(wallpaper.css),)


def _render_blur(wallpaper: BlurWallpaper) -> tuple[VisualNode, ...]:
    return (_fill(wallpaper.fill), VisualNode(kind="blur", style=dict(BLUR_OVERLAY)))


_GRID_CELLS = tuple(
    VisualNode(kind="cell", style={"background-color": "rgba(0,0,0,0.05)", "border-radius": "0.25rem"})
    for _ in range(64)
)


def _render_pattern(wallpaper: PatternWallpaper) -> tuple[VisualNode, ...]:
    if wallpaper.pattern is WallpaperPattern.GRID:
        grid = VisualNode(
            kind="grid",
            style={"display": "grid", "grid-template-columns": "repeat(8, 1fr)", "gap": "0.5rem", "padding": "0.5rem"},
            children=_GRID_CELLS,
        )
        return (VisualNode(kind="pattern", style={"background-color": wallpaper.tint}, children=(grid,)),)
    style = {
        "background-color": wallpaper.tint,
        "background-image": DOTS_IMAGE,
        "background-size": "12px 12px",
    }
    return (VisualNode(kind="pattern", style=style),)


def _media(kind: str, url: str | None) -> tuple[VisualNode, ...]:
    if not url:
        return ()
    return (VisualNode(kind=kind, src=url, style={"width": "100%", "height": "100%", "object-fit": "cover"}),)


def _render_image(wallpaper: ImageWallpaper) -> tuple[VisualNode, ...]:
    return _media("image", wallpaper.url)


def _render_video(wallpaper: VideoWallpaper) -> tuple[VisualNode, ...]:
    return _media("video", wallpaper.url)


_WALLPAPER_RENDERERS: dict[type, Callable] = {
    SolidWallpaper: _render_solid,
    GradientWallpaper: _render_gradient,
    BlurWallpaper: _render_blur,
    PatternWallpaper: _render_pattern,
    ImageWallpaper: _render_image,
    VideoWallpaper: _render_video,
}


def render_wallpaper(theme: Theme) -> WallpaperVisual:
    wallpaper = wallpaper_from_theme(theme)
    renderer = _WALLPAPER_RENDERERS.get(type(wallpaper))
    if renderer is None:
        wallpaper = SolidWallpaper(fill=theme.wallpaper)
        renderer = _render_solid
    return WallpaperVisual(style=wallpaper.style, layers=renderer(wallpaper))


# --- page --------------------------------------------------------------------


def _profile_image(theme: Theme, url: str) -> VisualNode:
    layout = resolve_enum(ProfileImageLayout, theme.profile_image_layout, ProfileImageLayout.CLASSIC)
    if layout is ProfileImageLayout.HERO:
        style = {"width": "100%", "height": "8rem", "border-radius": "0.5rem", "object-fit": "cover"}
    else:
        style = {"width": "5rem", "height": "5rem", "border-radius": "9999px", "object-fit": "cover"}
    return VisualNode(kind="profile-image", src=url, style=style)


def _header(theme: Theme, profile: PageProfile) -> tuple[VisualNode, ...]:
    nodes: list[VisualNode] = []
    image = profile.profile_image_url or None
    if image:
        nodes.append(_profile_image(theme, image))

    size = TITLE_SIZES[resolve_enum(TitleSize, theme.title_size, TitleSize.SMALL)]
    title_style = resolve_enum(TitleStyle, theme.title_style, TitleStyle.TEXT)
    if title_style is TitleStyle.LOGO and image:
        nodes.append(VisualNode(kind="logo", src=image, style={"height": size, "object-fit": "contain"}))
    else:
        nodes.append(
            VisualNode(
                kind="title",
                text=profile.name or f"@{profile.username}",
                style={
                    "color": theme.title_color,
                    "font-family": theme.title_font,
                    "font-size": size,
                    "font-weight": "700",
                },
            )
        )

    if profile.bio:
        nodes.append(
            VisualNode(
                kind="bio",
                text=profile.bio,
                style={"color": theme.title_color, "opacity": "0.7", "text-align": "center", "font-size": "0.75rem"},
            )
        )
    return tuple(nodes)


def visible_links(links: Iterable[Link]) -> list[Link]:
    active = [link for link in links if link.is_active]
    return sorted(active, key=lambda link: (link.position, link.id if link.id is not None else -1))


def render_page(theme: Theme, links: Iterable[Link], *, profile: PageProfile | None = None) -> PageVisual:
    font = resolve_enum(FontFamily, theme.font_family, FontFamily.SANS)
    shown = visible_links(links)
    placeholder = None
    if not shown:
        placeholder = VisualNode(
            kind="placeholder",
            text=EMPTY_PLACEHOLDER,
            style={"color": theme.title_color, "opacity": "0.5", "text-align": "center"},
        )
    return PageVisual(
        canvas={"background-color": theme.background_color, "font-family": FONT_STACKS[font]},
        wallpaper=render_wallpaper(theme),
        header=_header(theme, profile) if profile is not None else (),
        links=tuple(render_link(theme, link) for link in shown),
        placeholder=placeholder,
    )


__all__ = [
    "button_surface",
    "corner_radius",
    "render_link",
    "render_page",
    "render_wallpaper",
    "strip_scheme",
    "visible_links",
    "with_alpha",
]
