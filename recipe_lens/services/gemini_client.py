from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .errors import (
    EmptyResponseError,
    ModelConfigurationError,
    UpstreamError,
    UpstreamTimeoutError,
)
from .types import RecipeSchema

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 120.0


class GeminiConfigurationError(ModelConfigurationError):
    pass


class RecipeModel(ABC):
    """
    Interface for a schema-constrained text generator.

    Implementations:
    - GeminiClient: Google Gemini through the google-genai SDK
    """

    @abstractmethod
    def generate_json(self, system_instruction: str, user_prompt: str, schema: RecipeSchema) -> str:
        pass


class GeminiClient(RecipeModel):
    def __init__(
        self,
        api_key: str | None,
        model_name: str = DEFAULT_MODEL_NAME,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._client = self._configure_api()

    def _configure_api(self) -> genai.Client:
        if not self.api_key:
            raise GeminiConfigurationError("API key is not configured on the server.")
        return genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
        )

    def _build_config(self, system_instruction: str, schema: RecipeSchema) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema.to_genai(),
        )

    def generate_json(self, system_instruction: str, user_prompt: str, schema: RecipeSchema) -> str:
        """Run one schema-constrained generation and return the raw JSON text."""
        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=user_prompt,
                config=self._build_config(system_instruction, schema),
            )
        except httpx.TimeoutException as err:
            raise UpstreamTimeoutError(self.timeout_seconds) from err
        except genai_errors.APIError as err:
            raise UpstreamError(f"AI service error: {err}") from err
        except httpx.HTTPError as err:
            raise UpstreamError(f"Network error calling AI service: {err}") from err

        text = response.text
        if not text or not text.strip():
            logger.error("gemini.empty_response model=%s", self.model_name)
            raise EmptyResponseError("Failed to get recipe data from AI. The response was empty.")
        return text
