from __future__ import annotations

from .errors import UnsupportedPlatformError
from .types import (
    Platform,
    PromptBundle,
    RecipeSchema,
    VideoMetadata,
    VideoRecipeSchema,
    WebsiteRecipeSchema,
)

VIDEO_SYSTEM_INSTRUCTION = (
    "You are an expert recipe bot. Your task is to analyze a video and extract the recipe from it. "
    "Respond only with the recipe in a structured JSON format that adheres to the provided schema. "
    "Do not include any other text, greetings, or explanations."
)

WEBSITE_SYSTEM_INSTRUCTION = (
    "You are an expert recipe web scraper and formatter. Your task is to extract only the core recipe "
    "content from the provided URL's webpage, including all relevant images. You MUST ignore all "
    "non-recipe content like headers, footers, navigation bars, ads, user comments, and any sections "
    "containing links to other recipes (e.g., 'More Recipes', 'You Might Also Like'). Respond only with "
    "the recipe in a structured JSON format that adheres to the provided schema. Do not include any "
    "other text, greetings, or explanations."
)

_UNSUPPORTED_REASONS = {
    Platform.INSTAGRAM: "Instagram restricts automated access to its posts",
    Platform.UNKNOWN: "the URL is not a valid http(s) address",
}


def build_schema(platform: Platform) -> RecipeSchema:
    if platform.is_video:
        return VideoRecipeSchema()
    if platform is Platform.WEBSITE:
        return WebsiteRecipeSchema()
    raise UnsupportedPlatformError(
        platform.value,
        _UNSUPPORTED_REASONS.get(platform, "platform restrictions prevent access to its content"),
    )


def _title_author_clause(metadata: VideoMetadata | None) -> str:
    if metadata is None or not (metadata.title and metadata.author):
        return ""
    return f'titled "{metadata.title}" by author "{metadata.author}"'


def _video_prompt(url: str, platform: Platform, metadata: VideoMetadata | None) -> str:
    subject = " ".join(
        part for part in (f"the {platform.display_name} video", _title_author_clause(metadata)) if part
    )
    return (
        f"Analyze {subject} available at this URL: {url}. "
        "Extract a detailed recipe from the video's content. Your response must include the following "
        "details if they are available: ingredients with precise quantities, step-by-step instructions "
        "for preparation, the preparation time, the cooking time, the total time, and the number of "
        "servings this recipe yields."
    )


def _website_prompt(url: str) -> str:
    return (
        f"Scrape the recipe from the webpage at this URL: {url}. "
        "Extract the exact step-by-step instructions and ingredients from the main body of the page. "
        "Extract the following details: the recipe's name, a brief description of the dish, the "
        "preparation time, the cooking time, the total time, the number of servings, and all relevant "
        "images. You must categorize each image found: "
        "1. The primary 'main' image of the finished dish (the hero or thumbnail image). "
        "2. Any 'step' images that visually correspond to a specific instruction. "
        "3. Any other 'additional' photos of the dish. "
        "For each image, provide its full, direct URL, a concise description, and its category "
        "('main', 'step', or 'additional')."
    )


def build_prompt(url: str, platform: Platform, metadata: VideoMetadata | None = None) -> PromptBundle:
    """Pick instruction, prompt and response schema for the platform.

    Raises UnsupportedPlatformError for platforms that cannot be analyzed.
    """
    schema = build_schema(platform)
    if platform.is_video:
        return PromptBundle(
            system_instruction=VIDEO_SYSTEM_INSTRUCTION,
            user_prompt=_video_prompt(url, platform, metadata),
            schema=schema,
        )
    return PromptBundle(
        system_instruction=WEBSITE_SYSTEM_INSTRUCTION,
        user_prompt=_website_prompt(url),
        schema=schema,
    )
