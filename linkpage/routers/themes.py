from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from linkpage.core.config import STRICT_THEME_COLORS
from linkpage.core.errors import ValidationError
from linkpage.schemas.link import ICON_OPTIONS
from linkpage.schemas.theme import FONT_OPTIONS, ThemeNormalizeResponse
from linkpage.services.theme_model import normalize, theme_issues, validate

router = APIRouter(prefix="/api/themes", tags=["themes"])


@router.post("/normalize", response_model=ThemeNormalizeResponse)
def normalize_theme(
    raw: Optional[dict[str, Any]] = Body(default=None),
    strict: Optional[bool] = Query(default=None),
) -> ThemeNormalizeResponse:
    theme = normalize(raw)
    try:
        validate(theme, strict=STRICT_THEME_COLORS if strict is None else strict)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.errors) from exc
    return ThemeNormalizeResponse(theme=theme, warnings=theme_issues(theme))


@router.get("/options")
def theme_options():
    return {
        "fonts": list(FONT_OPTIONS),
        "icons": [{"value": key, "label": label} for key, label in ICON_OPTIONS.items()],
    }
