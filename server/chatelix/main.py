from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import get_settings
from fastapi import APIRouter

# API routers
from .api.v1.models import router as models_router
from .api.v1.chat import router as chat_router
from .api.v1.recommendations import router as recommendations_router
from .core.logging import setup_logging

VERSION = "0.1.0"


def create_app() -> FastAPI:
    settings = get_settings()
    # Setup logging early
    setup_logging(settings.log_level)
    app = FastAPI(title="Chatelix Relay", version=VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(o).rstrip("/") for o in settings.allowed_origins],
        allow_origin_regex=r"https?://(localhost|127\.0\.0\.1)(:\d+)?",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API v1
    api_v1 = APIRouter()
    api_v1.include_router(models_router, prefix="/v1")
    api_v1.include_router(chat_router, prefix="/v1")
    api_v1.include_router(recommendations_router, prefix="/v1")
    app.include_router(api_v1, prefix="/api")

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/")
    def root():
        return {"service": "chatelix", "version": VERSION}

    return app


app = create_app()
