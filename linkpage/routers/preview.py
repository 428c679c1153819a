from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import Field

from linkpage.core.config import STRICT_THEME_COLORS
from linkpage.core.errors import ValidationError
from linkpage.schemas.common import CamelModel
from linkpage.schemas.link import Link
from linkpage.schemas.profile import PageProfile
from linkpage.schemas.visual import PageVisual
from linkpage.services.renderer import render_page
from linkpage.services.theme_model import normalize, validate

router = APIRouter(prefix="/api/preview", tags=["preview"])


class PreviewRequest(CamelModel):
    # Partial theme as the editor holds it; missing fields take the defaults.
    theme: dict[str, Any] = Field(default_factory=dict)
    links: list[Link] = Field(default_factory=list)
    profile: Optional[PageProfile] = None


@router.post("", response_model=PageVisual)
def preview_page(payload: PreviewRequest) -> PageVisual:
    try:
        theme = validate(normalize(payload.theme), strict=STRICT_THEME_COLORS)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors) from exc
    return render_page(theme, payload.links, profile=payload.profile)
