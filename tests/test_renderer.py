import pytest

from linkpage.schemas.link import Link
from linkpage.schemas.profile import PageProfile
from linkpage.services.renderer import (
    EMPTY_PLACEHOLDER,
    button_surface,
    corner_radius,
    render_link,
    render_page,
    render_wallpaper,
    with_alpha,
)
from linkpage.services.theme_model import DEFAULT_THEME, normalize
from tests.fixtures_data import ALICE_LINKS, ALICE_THEME, ALICE_USER


def _link(**overrides) -> Link:
    data = {"id": 1, "title": "Shop", "url": "https://shop.example/items", "position": 0}
    data.update(overrides)
    return Link(**data)


def test_render_page_is_pure():
    theme = normalize(ALICE_THEME)
    links = [Link.model_validate(item) for item in ALICE_LINKS]
    profile = PageProfile(**ALICE_USER)

    first = render_page(theme, links, profile=profile)
    second = render_page(theme, links, profile=profile)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_icon_only_without_icon_falls_back_to_first_letter():
    visual = render_link(DEFAULT_THEME, _link(layout="icon-only", icon=None))

    badge = visual.node.children[0]
    glyph = badge.children[0]
    assert visual.layout == "icon-only"
    assert badge.kind == "badge"
    assert badge.style["border-radius"] == "9999px"
    assert glyph.kind == "glyph"
    assert glyph.text == "S"


def test_icon_only_with_known_icon():
    visual = render_link(DEFAULT_THEME, _link(layout="icon-only", icon="Instagram"))

    assert visual.node.children[0].children[0].icon == "Instagram"


def test_unknown_icon_renders_no_icon():
    visual = render_link(DEFAULT_THEME, _link(icon="NotAnIcon"))

    assert [child.kind for child in visual.node.children] == ["text"]


def test_unknown_layout_falls_back_to_default():
    visual = render_link(DEFAULT_THEME, _link(layout="carousel"))

    assert visual.layout == "default"
    assert visual.node.style["width"] == "100%"
    assert visual.href == "https://shop.example/items"


def test_gradient_with_only_start_uses_default_end():
    theme = normalize({"wallpaperStyle": "gradient", "wallpaperGradientStart": "#112233"})

    wallpaper = render_wallpaper(theme)

    assert wallpaper.style == "gradient"
    assert wallpaper.layers[0].style["background"] == "linear-gradient(135deg, #112233 0%, #ff3a9d 100%)"


def test_wallpaper_variants():
    assert render_wallpaper(normalize({"wallpaper": "#abcdef"})).layers[0].style == {"background": "#abcdef"}

    blur = render_wallpaper(normalize({"wallpaperStyle": "blur", "wallpaper": "#abcdef"}))
    assert [layer.kind for layer in blur.layers] == ["fill", "blur"]
    assert blur.layers[1].style["backdrop-filter"] == "blur(12px)"

    dots = render_wallpaper(normalize({"wallpaperStyle": "pattern"}))
    assert dots.layers[0].style["background-image"].startswith("radial-gradient(circle")
    assert dots.layers[0].style["background-size"] == "12px 12px"

    grid = render_wallpaper(normalize({"wallpaperStyle": "pattern", "wallpaperPattern": "grid"}))
    cells = grid.layers[0].children[0].children
    assert len(cells) == 64
    assert cells[0].style["background-color"] == "rgba(0,0,0,0.05)"

    image = render_wallpaper(normalize({"wallpaperStyle": "image", "wallpaperImageUrl": "https://cdn.example.com/a.jpg"}))
    assert image.layers[0].kind == "image"
    assert image.layers[0].src == "https://cdn.example.com/a.jpg"

    assert render_wallpaper(normalize({"wallpaperStyle": "video"})).layers == ()


def test_unknown_wallpaper_style_renders_solid():
    wallpaper = render_wallpaper(normalize({"wallpaperStyle": "hologram", "wallpaper": "#123456"}))

    assert wallpaper.style == "solid"
    assert wallpaper.layers[0].style == {"background": "#123456"}


def test_button_surface_by_style_type():
    solid = button_surface(normalize({"buttonColor": "#ff0000"}))
    assert solid["background-color"] == "#ff0000"
    assert solid["border"] == "none"

    outline = button_surface(normalize({"buttonStyleType": "outline", "buttonColor": "#ff0000"}))
    assert outline["background-color"] == "transparent"
    assert outline["border"] == "2px solid #ff0000"

    glass = button_surface(normalize({"buttonStyleType": "glass", "buttonColor": "#ff0000"}))
    assert glass["background-color"] == "#ff000040"
    assert glass["backdrop-filter"] == "blur(12px)"
    assert glass["border"] == "1px solid rgba(255,255,255,0.3)"

    unknown = button_surface(normalize({"buttonStyleType": "neon", "buttonColor": "#ff0000"}))
    assert unknown == solid


@pytest.mark.parametrize(
    "raw,expected",
    [
        ({}, "0.5rem"),
        ({"buttonStyle": "pill"}, "9999px"),
        ({"buttonStyle": "square"}, "0.25rem"),
        ({"buttonStyle": "blob"}, "0.5rem"),
        ({"buttonStyle": "pill", "buttonCornerRadius": 0}, "0px"),
        ({"buttonCornerRadius": 14}, "14px"),
        ({"buttonCornerRadius": -5}, "0px"),
    ],
)
def test_corner_radius(raw, expected):
    assert corner_radius(normalize(raw)) == expected


@pytest.mark.parametrize(
    "shadow,expected",
    [
        (None, "none"),
        ("subtle", "0 1px 3px rgba(0,0,0,0.12)"),
        ("strong", "0 10px 25px rgba(0,0,0,0.25)"),
        ("hard", "4px 4px 0px rgba(0,0,0,0.3)"),
    ],
)
def test_shadow_presets(shadow, expected):
    assert button_surface(normalize({"buttonShadow": shadow}))["box-shadow"] == expected


@pytest.mark.parametrize(
    "color,alpha,expected",
    [
        ("#000000", 0.8, "#000000CC"),
        ("#abc", 0.25, "#aabbcc40"),
        ("rgba(10, 20, 30, 0.5)", 0.8, "rgba(10, 20, 30, 0.4)"),
        ("rgb(10,20,30)", 0.25, "rgba(10, 20, 30, 0.25)"),
        ("transparent", 0.5, "transparent"),
        ("not-a-color", 0.5, "not-a-color"),
    ],
)
def test_with_alpha(color, alpha, expected):
    assert with_alpha(color, alpha) == expected


def test_featured_layout_uses_button_color_gradient():
    visual = render_link(DEFAULT_THEME, _link(layout="featured", icon="Star"))

    assert visual.node.style["background"] == "linear-gradient(135deg, #000000 0%, #000000CC 100%)"
    header, url = visual.node.children[0].children
    assert [child.kind for child in header.children] == ["icon", "text"]
    assert url.text == "shop.example/items"


def test_card_strips_scheme_and_thumbnail_keeps_full_url():
    card = render_link(DEFAULT_THEME, _link(layout="card"))
    band, body = card.node.children
    assert band.kind == "band"
    assert body.children[1].text == "shop.example/items"

    thumbnail = render_link(DEFAULT_THEME, _link(layout="thumbnail"))
    tile, column = thumbnail.node.children
    assert tile.kind == "tile"
    assert column.children[1].text == "https://shop.example/items"


def test_minimal_layout_has_no_button_surface():
    theme = normalize({"titleColor": "#333333"})
    visual = render_link(theme, _link(layout="minimal"))

    assert "background-color" not in visual.node.style
    assert "border" not in visual.node.style
    title, url = visual.node.children
    assert title.style["color"] == "#333333"
    assert url.style["opacity"] == "0.5"


def test_page_skips_inactive_links_and_orders_by_position():
    links = [
        _link(id=1, title="B", position=1),
        _link(id=2, title="A", position=0),
        _link(id=3, title="Hidden", position=2, is_active=False),
    ]

    page = render_page(DEFAULT_THEME, links)

    assert [visual.link_id for visual in page.links] == [2, 1]
    assert page.placeholder is None
    assert page.header == ()


def test_empty_page_shows_placeholder():
    page = render_page(DEFAULT_THEME, [_link(is_active=False)])

    assert page.links == ()
    assert page.placeholder.text == EMPTY_PLACEHOLDER


def test_page_header_and_canvas():
    theme = normalize({"fontFamily": "serif", "titleSize": "large", "profileImageLayout": "hero"})
    profile = PageProfile(username="bob", bio="Hello", profile_image_url="https://cdn.example.com/bob.png")

    page = render_page(theme, [], profile=profile)

    assert page.canvas == {"background-color": "#ffffff", "font-family": "serif"}
    image, title, bio = page.header
    assert image.style["width"] == "100%"
    assert image.style["height"] == "8rem"
    assert title.text == "@bob"
    assert title.style["font-size"] == "1.5rem"
    assert bio.style["opacity"] == "0.7"


def test_logo_title_style_needs_an_image():
    theme = normalize({"titleStyle": "logo"})

    with_image = render_page(theme, [], profile=PageProfile(username="bob", name="Bob", profile_image_url="https://x.example/l.png"))
    without_image = render_page(theme, [], profile=PageProfile(username="bob", name="Bob"))

    assert [node.kind for node in with_image.header] == ["profile-image", "logo"]
    assert [node.kind for node in without_image.header] == ["title"]
    assert without_image.header[0].text == "Bob"
    assert with_image.header[0].style["border-radius"] == "9999px"
