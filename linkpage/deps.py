# linkpage/deps.py
from __future__ import annotations

import logging

from fastapi import Request

from linkpage.core.config import PERSISTENCE_BASE_URL
from linkpage.persistence.base import PersistenceGateway
from linkpage.persistence.http_gateway import HttpPersistenceGateway
from linkpage.persistence.memory_gateway import InMemoryPersistenceGateway

logger = logging.getLogger(__name__)


def build_gateway(base_url: str | None = None) -> PersistenceGateway:
    base_url = PERSISTENCE_BASE_URL if base_url is None else base_url
    if base_url:
        logger.info("Using persistence service at %s", base_url)
        return HttpPersistenceGateway(base_url)
    logger.warning("PERSISTENCE_BASE_URL not set; using the in-memory gateway")
    return InMemoryPersistenceGateway()


def get_gateway(request: Request) -> PersistenceGateway:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        # App used without its lifespan (e.g. a bare TestClient).
        gateway = build_gateway()
        request.app.state.gateway = gateway
    return gateway
