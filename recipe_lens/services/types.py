from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Union

from google.genai import types as genai_types

ImageCategory = Literal["main", "step", "additional"]
IMAGE_CATEGORIES: tuple[str, ...] = ("main", "step", "additional")


class Platform(str, Enum):
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    WEBSITE = "website"
    UNKNOWN = "unknown"

    @property
    def is_video(self) -> bool:
        return self in (Platform.TIKTOK, Platform.YOUTUBE)

    @property
    def display_name(self) -> str:
        return {
            Platform.TIKTOK: "TikTok",
            Platform.YOUTUBE: "YouTube",
            Platform.INSTAGRAM: "Instagram",
        }.get(self, self.value.capitalize())


@dataclass(frozen=True)
class VideoMetadata:
    title: str
    author: str


def _text_schema(description: str) -> genai_types.Schema:
    return genai_types.Schema(type=genai_types.Type.STRING, description=description)


def _base_properties() -> dict[str, genai_types.Schema]:
    return {
        "recipeName": _text_schema("The title or name of the recipe."),
        "description": _text_schema("A brief, enticing description of the dish."),
        "prepTime": _text_schema("Preparation time, e.g., '15 minutes'."),
        "cookTime": _text_schema("Cooking time, e.g., '30 minutes'."),
        "totalTime": _text_schema("Total time from start to finish, e.g., '45 minutes'."),
        "servings": _text_schema("Number of servings the recipe makes, e.g., '4 servings'."),
        "ingredients": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            description="A list of all ingredients with quantities.",
            items=genai_types.Schema(type=genai_types.Type.STRING),
        ),
        "instructions": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            description="A step-by-step list of instructions.",
            items=genai_types.Schema(type=genai_types.Type.STRING),
        ),
    }


REQUIRED_RECIPE_FIELDS = ["recipeName", "description", "ingredients", "instructions"]


@dataclass(frozen=True)
class VideoRecipeSchema:
    """Output shape for video platforms: text fields only, no images."""

    kind: Literal["video"] = "video"
    declares_images: bool = False

    def to_genai(self) -> genai_types.Schema:
        return genai_types.Schema(
            type=genai_types.Type.OBJECT,
            properties=_base_properties(),
            required=list(REQUIRED_RECIPE_FIELDS),
        )


@dataclass(frozen=True)
class WebsiteRecipeSchema:
    """Output shape for webpages: the video fields plus a categorized image list."""

    kind: Literal["website"] = "website"
    declares_images: bool = True

    def to_genai(self) -> genai_types.Schema:
        properties = _base_properties()
        properties["images"] = genai_types.Schema(
            type=genai_types.Type.ARRAY,
            description=(
                "A list of relevant images from the webpage. Each image must be "
                "categorized as 'main', 'step', or 'additional'."
            ),
            items=genai_types.Schema(
                type=genai_types.Type.OBJECT,
                properties={
                    "url": _text_schema("The full, direct URL to the image file."),
                    "description": _text_schema("A brief description of the image content."),
                    "category": genai_types.Schema(
                        type=genai_types.Type.STRING,
                        description=(
                            "The category of the image: 'main' for the primary dish photo, "
                            "'step' for an instructional photo, or 'additional' for other relevant photos."
                        ),
                        enum=list(IMAGE_CATEGORIES),
                    ),
                },
                required=["url", "description", "category"],
            ),
        )
        return genai_types.Schema(
            type=genai_types.Type.OBJECT,
            properties=properties,
            required=list(REQUIRED_RECIPE_FIELDS),
        )


RecipeSchema = Union[VideoRecipeSchema, WebsiteRecipeSchema]


@dataclass(frozen=True)
class PromptBundle:
    system_instruction: str
    user_prompt: str
    schema: RecipeSchema


@dataclass
class RecipeImage:
    url: str
    description: str
    category: ImageCategory


@dataclass
class RecipeResult:
    recipe_name: str
    description: str
    ingredients: list[str]
    instructions: list[str]
    source_url: str
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    total_time: Optional[str] = None
    servings: Optional[str] = None
    images: list[RecipeImage] = field(default_factory=list)

    # Derived from the free-text fields above
    prep_minutes: int = 0
    cook_minutes: int = 0
    total_minutes: int = 0
    servings_count: int = 0
    main_image: Optional[RecipeImage] = None

    @property
    def other_images(self) -> list[RecipeImage]:
        return [
            image
            for image in self.images
            if image is not self.main_image and image.category != "main"
        ]


@dataclass
class AnalysisResult:
    platform: Platform
    recipe: RecipeResult
    processing_time: float
    html: Optional[str] = None
