# recipe_lens/app/main.py
from __future__ import annotations

import logging
import sys

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from recipe_lens.app.config import Settings
from recipe_lens.app.deps import get_settings
from recipe_lens.app.routers.analyze import error_response
from recipe_lens.app.routers.analyze import router as analyze_router

# Plain stdout logging, fine for dev and containers
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

log = logging.getLogger("app")


async def _invalid_request_handler(request: Request, exc: RequestValidationError):
    log.warning("request.invalid path=%s errors=%s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body: expected JSON with a sourceUrl field")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="Recipe Lens API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _invalid_request_handler)
    app.include_router(analyze_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
