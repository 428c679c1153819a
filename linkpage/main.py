import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkpage.core.config import CORS_ORIGINS, ENV, SYNC_MODE
from linkpage.core.logging_setup import configure_logging
from linkpage.deps import build_gateway
from linkpage.middleware.observability import ObservabilityMiddleware
from linkpage.routers.internal_metrics import router as internal_metrics_router
from linkpage.routers.presets import router as presets_router
from linkpage.routers.preview import router as preview_router
from linkpage.routers.public_page import router as public_page_router
from linkpage.routers.themes import router as themes_router

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.gateway = build_gateway()
    logger.info("startup env=%s sync_mode=%s", ENV, SYNC_MODE)
    try:
        yield
    finally:
        await app.state.gateway.aclose()


app = FastAPI(
    title="Linkpage API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Routers
app.include_router(preview_router)
app.include_router(public_page_router)
app.include_router(presets_router)
app.include_router(themes_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
