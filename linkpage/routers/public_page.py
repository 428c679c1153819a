from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from linkpage.core.errors import NetworkError, ProfileNotFoundError
from linkpage.deps import get_gateway
from linkpage.persistence.base import PersistenceGateway
from linkpage.schemas.visual import PageVisual
from linkpage.services.renderer import render_page
from linkpage.services.theme_model import normalize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public", tags=["public-page"])


@router.get("/{username}", response_model=PageVisual)
async def public_page(username: str, gateway: PersistenceGateway = Depends(get_gateway)) -> PageVisual:
    try:
        profile = await gateway.fetch_user(username)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found") from exc
    except NetworkError as exc:
        logger.warning("public page fetch failed", extra={"operation": "fetch_user", "status_code": exc.status_code})
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Persistence service unavailable") from exc

    # Stored colors are rendered as stored; strict checking is an editor concern.
    return render_page(normalize(profile.theme), profile.links, profile=profile)
