from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    sourceUrl: Optional[str] = None
    includeHtml: bool = False


class RecipeImageOut(BaseModel):
    url: str
    description: str
    category: Literal["main", "step", "additional"]


class SummaryItem(BaseModel):
    label: str
    value: str


class RecipeData(BaseModel):
    recipeName: str
    description: str
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prepTime: Optional[str] = None
    cookTime: Optional[str] = None
    totalTime: Optional[str] = None
    servings: Optional[str] = None
    prepMinutes: int = 0
    cookMinutes: int = 0
    totalMinutes: int = 0
    servingsCount: int = 0
    images: list[RecipeImageOut] = Field(default_factory=list)
    mainImage: Optional[RecipeImageOut] = None
    summary: list[SummaryItem] = Field(default_factory=list)
    url: str
    host: Optional[str] = None


class AnalyzeResponse(BaseModel):
    success: Literal[True] = True
    source: Literal["tiktok", "youtube", "website"]
    processing_time: float
    data: RecipeData
    html: Optional[str] = None


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
