"""Recipe models."""

from pydantic import BaseModel
from typing import Optional, List, Literal


class NutritionFacts(BaseModel):
    """Per-serving nutrition."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0


class Ingredient(BaseModel):
    name: str
    amount: float = 1
    unit: str = "piece"
    aisle: str = "Other"
    original: Optional[str] = None


class Instruction(BaseModel):
    number: int
    step: str


class Recipe(BaseModel):
    """A recipe with nutrition facts, either from the static catalog or generated."""

    id: str
    title: str
    summary: str = ""
    ready_in_minutes: int = 0
    servings: int = 1
    nutrition: NutritionFacts = NutritionFacts()
    ingredients: List[Ingredient] = []
    instructions: List[Instruction] = []
    diets: List[str] = []
    dish_types: List[str] = []
    cuisines: List[str] = []
    difficulty: Literal["easy", "medium", "hard"] = "easy"
    tags: List[str] = []


class RecipeFilters(BaseModel):
    """Independent AND filters applied to recipe search results."""

    diet: Optional[str] = None
    max_ready_time: Optional[int] = None
    dish_type: Optional[str] = None
    max_calories: Optional[float] = None
    min_protein: Optional[float] = None
