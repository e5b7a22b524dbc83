# recipe_lens/app/deps.py (settings are built once and injected as a dependency)

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from fastapi import Depends

from recipe_lens.app.config import Settings
from recipe_lens.services.analyze import MetadataFetcher
from recipe_lens.services.gemini_client import GeminiClient, RecipeModel
from recipe_lens.services.oembed import fetch_video_metadata


@lru_cache
def get_settings() -> Settings:
    return Settings()


ModelFactory = Callable[[], RecipeModel]


def get_model_factory(settings: Settings = Depends(get_settings)) -> ModelFactory:
    """
    Return a factory instead of a client so a missing API key surfaces
    inside the request handler, where it is mapped to an error response.
    """
    def build() -> RecipeModel:
        return GeminiClient(
            api_key=settings.gemini_api_key,
            model_name=settings.GEMINI_MODEL,
            timeout_seconds=settings.MODEL_TIMEOUT_SECONDS,
        )

    return build


def get_metadata_fetcher() -> MetadataFetcher:
    return fetch_video_metadata

