"""Entry point for the Othello Plus API service."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import openings, stream, watches
from .catalogue import OpeningForest, load_forest
from .config import Settings, settings
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_forest(config: Settings) -> OpeningForest:
    logger.info(f"Loading opening catalogue from {config.catalogue_path}")
    return load_forest(
        config.catalogue_path,
        strict=config.catalogue_strict,
        symmetric=config.catalogue_symmetric,
    )


app = FastAPI(title=settings.project_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(openings.router, prefix=settings.api_prefix)
app.include_router(watches.router, prefix=settings.api_prefix)
app.include_router(stream.router)


@app.get("/healthz")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.on_event("startup")
def _startup() -> None:
    setup_logging(settings.log_level, settings.log_json)
    app.state.forest = build_forest(settings)
