"""
PetCare Backend API
Pets, owners, medical records, appointments, reminders and admin login
over a JSON key-value record store.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import (
    admin_router,
    health_router,
    owners_router,
    pets_router,
    records_router,
)
from config import get_settings
from store import CorruptCollectionError, PetStore, build_store

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(store: Optional[PetStore] = None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app.state.store.initialize()
        logger.info("PetCare store ready")
        yield

    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION, lifespan=lifespan)
    app.state.store = store or build_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CorruptCollectionError)
    async def corrupt_collection_handler(request: Request, exc: CorruptCollectionError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=500,
            content={"detail": exc.message, "code": exc.code, "collection": exc.key},
        )

    app.include_router(health_router)
    app.include_router(pets_router)
    app.include_router(owners_router)
    app.include_router(records_router)
    app.include_router(admin_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
