"""
Foxie backend application.

Routers: /sessions, /chat, /notes, /files. Collaborators (document store,
blob store, completion provider) are built per request in ``api.deps``.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .api import sessions_router, chat_router, notes_router, files_router, register_exception_handlers
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def _completion_configured() -> bool:
    return bool(settings.llm_api_key or settings.openai_api_key)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version}",
        extra={"extra_fields": {
            "storage": settings.storage_type,
            "storage_path": settings.local_storage_path,
            "blob_store": settings.blob_store_type,
            "llm": f"{settings.llm_provider}/{settings.llm_model}",
            "auth_enabled": settings.auth_enabled,
        }}
    )
    if not _completion_configured():
        logger.warning("No LLM API key configured; chat replies will fail with 502")
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Chat sessions, note sync and file management for the Foxie student dashboard",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

for router in (sessions_router, chat_router, notes_router, files_router):
    app.include_router(router)


@app.get("/")
async def root():
    return {"app": settings.app_name, "version": settings.app_version, "status": "running"}


@app.get("/health")
async def health_check():
    """Liveness plus the configured backends; does not call them."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "files": settings.blob_store_type,
        "completion": "configured" if _completion_configured() else "missing",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("foxie.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
