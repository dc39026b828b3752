#!/usr/bin/env python3
"""
Planning Poker - backend entry point
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.core.config import settings
from app.api import api_router
from app.services.record_store import RecordStore

def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    """Build the application around a record store that lives as long as the app"""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Planning poker estimation rooms with optional Jira sync",
        version=settings.VERSION
    )

    app.state.store = store or RecordStore.from_url(settings.DATABASE_URL)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed payloads are a 400, not FastAPI's default 422"""
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors())}
        )

    # Register the API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Root health check"""
        return {"message": f"{settings.APP_NAME} backend running", "status": "healthy"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "planning-poker"}

    print(f"🚀 {settings.APP_NAME} backend ready (storage: {settings.DATABASE_URL})")
    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
