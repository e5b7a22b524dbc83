# recipe_lens/app/routers/analyze.py
from __future__ import annotations

import logging
import time
from urllib.parse import urlparse

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from recipe_lens.app.config import Settings
from recipe_lens.app.deps import (
    ModelFactory,
    get_metadata_fetcher,
    get_model_factory,
    get_settings,
)
from recipe_lens.app.schemas.analyze import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    RecipeData,
    RecipeImageOut,
    SummaryItem,
)
from recipe_lens.services.analyze import MetadataFetcher
from recipe_lens.services.analyze import analyze as run_analysis
from recipe_lens.services.errors import (
    InvalidURLError,
    ServiceError,
    UnsupportedPlatformError,
    UpstreamError,
)
from recipe_lens.services.render import summary_items
from recipe_lens.services.types import AnalysisResult, RecipeImage

log = logging.getLogger("analyze")
router = APIRouter(tags=["analyze"])

_CLIENT_ERRORS = (InvalidURLError, UnsupportedPlatformError)


def _status_for(error: ServiceError) -> int:
    if isinstance(error, _CLIENT_ERRORS):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message_for(error: ServiceError) -> str:
    if isinstance(error, UpstreamError):
        return f"Failed to get recipe. {error}"
    return str(error)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _host_of(url: str) -> str | None:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def _image_out(image: RecipeImage | None) -> RecipeImageOut | None:
    if image is None:
        return None
    return RecipeImageOut(url=image.url, description=image.description, category=image.category)


def _build_response(result: AnalysisResult) -> AnalyzeResponse:
    recipe = result.recipe
    data = RecipeData(
        recipeName=recipe.recipe_name,
        description=recipe.description,
        ingredients=recipe.ingredients,
        instructions=recipe.instructions,
        prepTime=recipe.prep_time,
        cookTime=recipe.cook_time,
        totalTime=recipe.total_time,
        servings=recipe.servings,
        prepMinutes=recipe.prep_minutes,
        cookMinutes=recipe.cook_minutes,
        totalMinutes=recipe.total_minutes,
        servingsCount=recipe.servings_count,
        images=[_image_out(image) for image in recipe.images],
        mainImage=_image_out(recipe.main_image),
        summary=[SummaryItem(**item) for item in summary_items(recipe)],
        url=recipe.source_url,
        host=_host_of(recipe.source_url),
    )
    return AnalyzeResponse(
        source=result.platform.value,
        processing_time=result.processing_time,
        data=data,
        html=result.html,
    )


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_source(
    body: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    model_factory: ModelFactory = Depends(get_model_factory),
    metadata_fetcher: MetadataFetcher = Depends(get_metadata_fetcher),
):
    t0 = time.time()
    log.info("analyze.start url=%s", body.sourceUrl)
    try:
        result = await run_in_threadpool(
            run_analysis,
            body.sourceUrl,
            model_factory,
            strict_urls=settings.STRICT_URL_VALIDATION,
            include_html=body.includeHtml,
            oembed_timeout=settings.OEMBED_TIMEOUT_SECONDS,
            metadata_fetcher=metadata_fetcher,
        )
        response = _build_response(result)
    except ServiceError as exc:
        dt = time.time() - t0
        status_code = _status_for(exc)
        if status_code >= 500:
            log.error("analyze.fail url=%s error=%s dt=%.2fs", body.sourceUrl, exc, dt)
        else:
            log.warning("analyze.rejected url=%s error=%s", body.sourceUrl, exc)
        return error_response(status_code, _message_for(exc))
    except Exception:
        dt = time.time() - t0
        log.exception("analyze.fail url=%s dt=%.2fs", body.sourceUrl, dt)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to get recipe.")

    log.info("analyze.ok url=%s platform=%s dt=%.2fs", body.sourceUrl, result.platform.value, result.processing_time)
    return response
