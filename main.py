"""
Chatty - Main Application Entry Point

Gemini chat with follow-up suggestions and sentiment tagging.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chatty.core.config import get_settings
from chatty.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Chatty in {settings.ENVIRONMENT} mode...")

    # Initialize database if needed
    if settings.uses_sqlite_storage:
        from chatty.infrastructure.local.database import init_db

        await init_db()

    # Conversations are restored once per process
    from chatty.api.deps import get_conversation_store

    await get_conversation_store().load()

    yield

    # Shutdown
    logger.info("Shutting down Chatty...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Chatty",
        description="Gemini chat with suggestions and sentiment tagging",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from chatty.api import chat, conversations

    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    app.include_router(conversations.router, prefix="/api/conversations", tags=["conversations"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
