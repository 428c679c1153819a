"""Renderer output.

A visual description is a small tree of nodes carrying css-like style
properties. It is the one artifact both the editor preview and the public
page are built from, so its JSON dump is compared byte for byte.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VisualNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    style: dict[str, str] = Field(default_factory=dict)
    text: Optional[str] = None
    icon: Optional[str] = None
    src: Optional[str] = None
    children: tuple["VisualNode", ...] = ()


class LinkVisual(BaseModel):
    model_config = ConfigDict(frozen=True)

    link_id: Optional[int] = None
    layout: str
    href: str
    node: VisualNode


class WallpaperVisual(BaseModel):
    model_config = ConfigDict(frozen=True)

    style: str
    layers: tuple[VisualNode, ...] = ()


class PageVisual(BaseModel):
    model_config = ConfigDict(frozen=True)

    canvas: dict[str, str]
    wallpaper: WallpaperVisual
    header: tuple[VisualNode, ...] = ()
    links: tuple[LinkVisual, ...] = ()
    placeholder: Optional[VisualNode] = None
