from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

from .errors import ImageResolutionError, InvalidFormatError
from .types import IMAGE_CATEGORIES, RecipeImage, RecipeResult, RecipeSchema

logger = logging.getLogger(__name__)

_DIGITS_PATTERN = re.compile(r"\d+")


def _clean_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _clean_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for entry in value:
        text = _clean_str(entry)
        if text:
            items.append(text)
    return items


def parse_leading_int(value: Optional[str]) -> int:
    """First contiguous run of digits in a free-text field ("15 minutes" -> 15), else 0."""
    if not value:
        return 0
    match = _DIGITS_PATTERN.search(value)
    if not match:
        return 0
    try:
        return int(match.group(0))
    except ValueError:
        # Digit run longer than the interpreter allows converting
        return 0


def resolve_image_url(url: str, base_url: str) -> str:
    try:
        resolved = urljoin(base_url, url)
        parsed = urlparse(resolved)
    except ValueError as error:
        raise ImageResolutionError(url, base_url) from error

    if not parsed.scheme:
        raise ImageResolutionError(url, base_url)
    if parsed.scheme in ("http", "https") and not parsed.netloc:
        raise ImageResolutionError(url, base_url)
    return resolved


def _sanitize_images(value: Any, source_url: str) -> list[RecipeImage]:
    if not isinstance(value, list):
        return []

    images: list[RecipeImage] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        url = _clean_str(entry.get("url"))
        if not url:
            continue
        try:
            absolute_url = resolve_image_url(url, source_url)
        except ImageResolutionError as error:
            logger.warning("normalize.image_skipped %s", error)
            continue

        category = _clean_str(entry.get("category"))
        if category not in IMAGE_CATEGORIES:
            category = "additional"

        images.append(
            RecipeImage(
                url=absolute_url,
                description=_clean_str(entry.get("description")) or "",
                category=category,  # type: ignore[arg-type]
            )
        )
    return images


def select_main_image(images: list[RecipeImage]) -> Optional[RecipeImage]:
    for image in images:
        if image.category == "main":
            return image
    return images[0] if images else None


def _parse_payload(raw_text: str) -> dict[str, Any]:
    try:
        data = json.loads(raw_text)
    except (TypeError, ValueError) as error:
        logger.error("normalize.invalid_json raw=%r error=%s", raw_text, error)
        raise InvalidFormatError(
            "Failed to parse recipe data from AI. The format was invalid.",
            raw_text=raw_text,
        ) from error

    if not isinstance(data, dict):
        logger.error("normalize.unexpected_shape raw=%r", raw_text)
        raise InvalidFormatError(
            "Failed to parse recipe data from AI. Expected a JSON object.",
            raw_text=raw_text,
        )
    return data


def normalize_recipe(raw_text: str, schema: RecipeSchema, source_url: str) -> RecipeResult:
    data = _parse_payload(raw_text)

    prep_time = _clean_str(data.get("prepTime"))
    cook_time = _clean_str(data.get("cookTime"))
    total_time = _clean_str(data.get("totalTime"))
    servings = _clean_str(data.get("servings"))

    images = _sanitize_images(data.get("images"), source_url) if schema.declares_images else []

    return RecipeResult(
        recipe_name=_clean_str(data.get("recipeName")) or "",
        description=_clean_str(data.get("description")) or "",
        ingredients=_clean_str_list(data.get("ingredients")),
        instructions=_clean_str_list(data.get("instructions")),
        source_url=source_url,
        prep_time=prep_time,
        cook_time=cook_time,
        total_time=total_time,
        servings=servings,
        images=images,
        prep_minutes=parse_leading_int(prep_time),
        cook_minutes=parse_leading_int(cook_time),
        total_minutes=parse_leading_int(total_time),
        servings_count=parse_leading_int(servings),
        main_image=select_main_image(images),
    )
