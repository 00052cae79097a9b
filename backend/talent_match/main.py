from __future__ import annotations

from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from talent_match.api import jobs, matches, users
from talent_match.config import settings
from talent_match.database import engine, init_db
from talent_match.deps import get_object_store
from talent_match.error_handlers import attach_error_handlers
from talent_match.logging_config import configure_logging


configure_logging()
app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
attach_error_handlers(app)


@app.on_event("startup")
def on_startup() -> None:
    settings.ensure_directories()
    init_db(engine)
    get_object_store().ensure_bucket()
    logger.info(f"{settings.app_name} ready on port {settings.port} ({settings.environment})")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(matches.router, prefix="/api", tags=["matches"])

static_dir = Path(settings.static_dir)
if static_dir.exists():
    app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")


def run() -> None:
    uvicorn.run("talent_match.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
