from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .errors import InvalidURLError
from .gemini_client import RecipeModel
from .ids import detect_platform
from .normalize import normalize_recipe
from .oembed import DEFAULT_TIMEOUT_SECONDS, fetch_video_metadata
from .prompt import build_prompt, build_schema
from .render import render_recipe_html
from .types import AnalysisResult, Platform, VideoMetadata

logger = logging.getLogger(__name__)

MetadataFetcher = Callable[..., Optional[VideoMetadata]]


def _clean_url(url: Optional[str]) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError("Missing sourceUrl in request body")
    return url.strip()


def _lookup_metadata(
    url: str,
    platform: Platform,
    fetcher: MetadataFetcher,
    timeout: float,
) -> Optional[VideoMetadata]:
    if not platform.is_video:
        return None
    return fetcher(url, platform, timeout=timeout)


def analyze(
    url: Optional[str],
    model_factory: Callable[[], RecipeModel],
    *,
    strict_urls: bool = False,
    include_html: bool = False,
    oembed_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    metadata_fetcher: MetadataFetcher = fetch_video_metadata,
) -> AnalysisResult:
    """
    Run the full pipeline for one source URL.

    The model is built before any network activity so a missing credential
    fails fast. Metadata lookup is best effort; every other stage either
    feeds the next one or raises a ServiceError.
    """
    t0 = time.time()
    source_url = _clean_url(url)
    model = model_factory()

    platform = detect_platform(source_url, strict=strict_urls)
    logger.info("analyze.classified url=%s platform=%s", source_url, platform.value)
    if platform is Platform.UNKNOWN:
        raise InvalidURLError(f"Invalid sourceUrl: {source_url}")

    # Unsupported platforms are rejected before the oEmbed call
    build_schema(platform)
    metadata = _lookup_metadata(source_url, platform, metadata_fetcher, oembed_timeout)
    bundle = build_prompt(source_url, platform, metadata)
    logger.info("analyze.prompt platform=%s prompt=%s", platform.value, bundle.user_prompt)

    raw_text = model.generate_json(bundle.system_instruction, bundle.user_prompt, bundle.schema)
    recipe = normalize_recipe(raw_text, bundle.schema, source_url)
    html = render_recipe_html(recipe) if include_html else None

    return AnalysisResult(
        platform=platform,
        recipe=recipe,
        processing_time=round(time.time() - t0, 3),
        html=html,
    )
