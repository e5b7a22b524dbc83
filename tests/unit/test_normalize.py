from __future__ import annotations

import json

import pytest

from recipe_lens.services.errors import ImageResolutionError, InvalidFormatError
from recipe_lens.services.normalize import (
    normalize_recipe,
    parse_leading_int,
    resolve_image_url,
    select_main_image,
)
from recipe_lens.services.types import RecipeImage, VideoRecipeSchema, WebsiteRecipeSchema

SOURCE_URL = "https://example.com/recipe"


def make_payload(**overrides) -> str:
    payload = {
        "recipeName": "Pancakes",
        "description": "Fluffy.",
        "ingredients": ["2 eggs", "200 g flour"],
        "instructions": ["Mix.", "Fry."],
        "prepTime": "15 minutes",
        "cookTime": "20 minutes",
        "servings": "4 servings",
    }
    payload.update(overrides)
    return json.dumps(payload)


class TestParseLeadingInt:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("15 minutes", 15),
            ("4 servings", 4),
            ("Serves 6-8", 6),
            ("about 1 hour 30 minutes", 1),
            ("a few minutes", 0),
            ("9" * 5000 + " servings", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_first_digit_run(self, text, expected) -> None:
        assert parse_leading_int(text) == expected


class TestResolveImageUrl:
    def test_relative_path_resolved_against_source(self) -> None:
        assert resolve_image_url("/img/x.jpg", SOURCE_URL) == "https://example.com/img/x.jpg"

    def test_absolute_url_kept(self) -> None:
        assert resolve_image_url("https://cdn.example.net/a.png", SOURCE_URL) == "https://cdn.example.net/a.png"

    def test_protocol_relative_url(self) -> None:
        assert resolve_image_url("//cdn.example.net/a.png", SOURCE_URL) == "https://cdn.example.net/a.png"

    def test_malformed_url_raises(self) -> None:
        with pytest.raises(ImageResolutionError):
            resolve_image_url("http://[::1/broken.jpg", SOURCE_URL)

    def test_relative_url_against_non_url_base_raises(self) -> None:
        with pytest.raises(ImageResolutionError):
            resolve_image_url("/img/x.jpg", "not a url")


class TestSelectMainImage:
    def test_first_main_wins(self) -> None:
        images = [
            RecipeImage(url="a", description="", category="step"),
            RecipeImage(url="b", description="", category="main"),
            RecipeImage(url="c", description="", category="main"),
        ]
        assert select_main_image(images).url == "b"

    def test_falls_back_to_first_image(self) -> None:
        images = [
            RecipeImage(url="a", description="", category="step"),
            RecipeImage(url="b", description="", category="additional"),
        ]
        assert select_main_image(images).url == "a"

    def test_empty_list(self) -> None:
        assert select_main_image([]) is None


class TestNormalizeRecipe:
    def test_parses_fields_and_derives_numbers(self) -> None:
        recipe = normalize_recipe(make_payload(totalTime="35 min"), VideoRecipeSchema(), SOURCE_URL)

        assert recipe.recipe_name == "Pancakes"
        assert recipe.ingredients == ["2 eggs", "200 g flour"]
        assert recipe.instructions == ["Mix.", "Fry."]
        assert recipe.prep_minutes == 15
        assert recipe.cook_minutes == 20
        assert recipe.total_minutes == 35
        assert recipe.servings_count == 4
        assert recipe.source_url == SOURCE_URL

    def test_missing_optional_fields_become_zero(self) -> None:
        raw = json.dumps({"recipeName": "Toast", "description": "", "ingredients": [], "instructions": []})
        recipe = normalize_recipe(raw, VideoRecipeSchema(), SOURCE_URL)

        assert recipe.prep_time is None
        assert recipe.prep_minutes == 0
        assert recipe.servings_count == 0
        assert recipe.main_image is None

    def test_relative_image_is_made_absolute(self) -> None:
        raw = make_payload(images=[{"url": "/img/x.jpg", "description": "Plated", "category": "main"}])
        recipe = normalize_recipe(raw, WebsiteRecipeSchema(), SOURCE_URL)

        assert recipe.images[0].url == "https://example.com/img/x.jpg"
        assert recipe.main_image is recipe.images[0]

    def test_bad_images_dropped_silently(self) -> None:
        raw = make_payload(
            images=[
                {"url": "http://[::1/bad.jpg", "description": "broken", "category": "main"},
                {"url": "", "description": "empty", "category": "main"},
                {"description": "no url", "category": "main"},
                "not an object",
                {"url": "/img/step1.jpg", "description": "Step 1", "category": "step"},
            ]
        )
        recipe = normalize_recipe(raw, WebsiteRecipeSchema(), SOURCE_URL)

        assert [image.url for image in recipe.images] == ["https://example.com/img/step1.jpg"]
        assert recipe.main_image.url == "https://example.com/img/step1.jpg"

    def test_unknown_category_becomes_additional(self) -> None:
        raw = make_payload(images=[{"url": "/a.jpg", "description": "x", "category": "hero"}])
        recipe = normalize_recipe(raw, WebsiteRecipeSchema(), SOURCE_URL)

        assert recipe.images[0].category == "additional"

    def test_images_ignored_when_schema_has_none(self) -> None:
        raw = make_payload(images=[{"url": "/a.jpg", "description": "x", "category": "main"}])
        recipe = normalize_recipe(raw, VideoRecipeSchema(), "https://youtu.be/abc")

        assert recipe.images == []
        assert recipe.main_image is None

    def test_other_images_exclude_main(self) -> None:
        raw = make_payload(
            images=[
                {"url": "/main.jpg", "description": "Main", "category": "main"},
                {"url": "/step.jpg", "description": "Step", "category": "step"},
                {"url": "/extra.jpg", "description": "Extra", "category": "additional"},
            ]
        )
        recipe = normalize_recipe(raw, WebsiteRecipeSchema(), SOURCE_URL)

        assert [image.description for image in recipe.other_images] == ["Step", "Extra"]

    def test_invalid_json_raises_format_error(self) -> None:
        with pytest.raises(InvalidFormatError) as exc_info:
            normalize_recipe("Sure! Here is your recipe:", VideoRecipeSchema(), SOURCE_URL)

        assert exc_info.value.raw_text == "Sure! Here is your recipe:"

    def test_non_object_json_raises_format_error(self) -> None:
        with pytest.raises(InvalidFormatError):
            normalize_recipe('["not", "an", "object"]', VideoRecipeSchema(), SOURCE_URL)

    def test_oversized_digit_run_does_not_fail_recipe(self) -> None:
        recipe = normalize_recipe(make_payload(servings="9" * 5000), VideoRecipeSchema(), SOURCE_URL)

        assert recipe.servings_count == 0
        assert recipe.recipe_name == "Pancakes"
        assert recipe.prep_minutes == 15

    def test_non_string_list_entries_filtered(self) -> None:
        raw = make_payload(ingredients=["1 egg", None, {"x": 1}, "  ", 3])
        recipe = normalize_recipe(raw, VideoRecipeSchema(), SOURCE_URL)

        assert recipe.ingredients == ["1 egg", "3"]
