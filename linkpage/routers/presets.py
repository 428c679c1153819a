from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from linkpage.core.errors import PresetNotFoundError
from linkpage.services.presets import FAMILIES, apply_preset, get_preset, list_presets
from linkpage.services.theme_model import normalize, to_client_payload

router = APIRouter(prefix="/api/presets", tags=["presets"])


@router.get("")
def presets(family: Optional[str] = Query(default=None)):
    if family is not None and family not in FAMILIES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown preset family: {family}")
    return {"presets": [preset.as_dict() for preset in list_presets(family)]}


@router.post("/{family}/{name}/apply")
def apply_named_preset(family: str, name: str, theme: Optional[dict[str, Any]] = Body(default=None)):
    try:
        preset = get_preset(family, name)
    except PresetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return to_client_payload(apply_preset(normalize(theme), preset))
