from __future__ import annotations

from html import escape
from typing import Optional

from .types import RecipeImage, RecipeResult


def format_time(minutes: int) -> Optional[str]:
    """Readable duration: 45 -> "45 min", 75 -> "1h 15m", 60 -> "1h". Non-positive -> None."""
    if not minutes or minutes <= 0:
        return None
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins else f"{hours}h"


def summary_items(recipe: RecipeResult) -> list[dict[str, str]]:
    yields = f"{recipe.servings_count} servings" if recipe.servings_count > 0 else None
    candidates = [
        ("Prep Time", format_time(recipe.prep_minutes)),
        ("Cook Time", format_time(recipe.cook_minutes)),
        ("Total Time", format_time(recipe.total_minutes)),
        ("Yields", yields),
    ]
    return [{"label": label, "value": value} for label, value in candidates if value]


def _main_image_html(image: Optional[RecipeImage]) -> str:
    if image is None:
        return ""
    return (
        '<figure class="my-4">'
        f'<img src="{escape(image.url)}" alt="{escape(image.description)}" '
        'class="w-full h-auto rounded-lg shadow-md object-cover" loading="lazy" />'
        f'<figcaption class="text-center text-sm text-gray-400 mt-2">{escape(image.description)}</figcaption>'
        "</figure>"
    )


def _other_images_html(images: list[RecipeImage]) -> str:
    if not images:
        return ""
    figures = "".join(
        "<figure>"
        f'<img src="{escape(image.url)}" alt="{escape(image.description)}" '
        'class="w-full h-auto rounded-lg shadow-md object-cover aspect-square" loading="lazy" />'
        f'<figcaption class="text-center text-xs text-gray-400 mt-1">{escape(image.description)}</figcaption>'
        "</figure>"
        for image in images
    )
    return f'<div class="grid grid-cols-2 md:grid-cols-3 gap-4 my-4">{figures}</div>'


def _info_html(recipe: RecipeResult) -> str:
    fields = [
        ("Prep Time", recipe.prep_time),
        ("Cook Time", recipe.cook_time),
        ("Total Time", recipe.total_time),
        ("Servings", recipe.servings),
    ]
    items = "".join(
        f'<li><strong class="font-semibold text-indigo-400">{label}:</strong> {escape(value)}</li>'
        for label, value in fields
        if value
    )
    if not items:
        return ""
    return (
        '<div class="my-6 p-4 bg-gray-900/70 rounded-lg border border-gray-700">'
        f'<ul class="flex flex-wrap items-center gap-x-6 gap-y-2 !text-gray-300">{items}</ul>'
        "</div>"
    )


def _list_items(entries: list[str]) -> str:
    return "".join(f"<li>{escape(entry)}</li>" for entry in entries)


def render_recipe_html(recipe: RecipeResult) -> str:
    """Render the recipe as an HTML fragment. All interpolated text is escaped."""
    return (
        "<div>"
        f"{_main_image_html(recipe.main_image)}"
        f'<h3 class="text-3xl font-bold !text-purple-300 !mt-0">{escape(recipe.recipe_name)}</h3>'
        f'<p class="!text-gray-300 italic mt-2">{escape(recipe.description)}</p>'
        f"{_other_images_html(recipe.other_images)}"
        f"{_info_html(recipe)}"
        '<div class="grid grid-cols-1 md:grid-cols-2 gap-x-8 mt-6">'
        "<div>"
        '<h4 class="text-xl font-bold !text-indigo-300 mb-2">Ingredients</h4>'
        f'<ul class="list-disc list-inside !text-gray-300 space-y-1">{_list_items(recipe.ingredients)}</ul>'
        "</div>"
        "<div>"
        '<h4 class="text-xl font-bold !text-indigo-300 mb-2">Instructions</h4>'
        f'<ol class="list-decimal list-inside !text-gray-300 space-y-2">{_list_items(recipe.instructions)}</ol>'
        "</div>"
        "</div>"
        "</div>"
    )
