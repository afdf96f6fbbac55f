"""Recipe catalog: static table, search and profile-based filtering."""

import logging
from typing import Any, Dict, List, Optional

from nutritrack.models.meal import MealPlanPreferences
from nutritrack.models.profile import NutritionProfile
from nutritrack.models.recipe import Ingredient, Instruction, NutritionFacts, Recipe, RecipeFilters
from nutritrack.services.ai_providers import AIProvider
from nutritrack.services.fallback import with_fallback
from nutritrack.services.recipe_data import STATIC_RECIPES


logger = logging.getLogger(__name__)

RECOMMENDATION_LIMIT = 6


def recipe_from_ai(
    data: Dict[str, Any],
    recipe_id: str,
    ready_in_minutes: int,
    diets: List[str],
    dish_types: List[str],
    tags: Optional[List[str]] = None,
) -> Recipe:
    """
    Convert a generated recipe or meal into a Recipe.

    Generated ingredients are plain strings, so each one becomes a single
    piece in the "General" aisle.
    """
    nutrition = data.get("nutrition") or {}
    difficulty = data.get("difficulty")
    return Recipe(
        id=recipe_id,
        title=data["name"],
        summary=data.get("description") or f"Delicious {data['name']} with balanced nutrition",
        ready_in_minutes=ready_in_minutes,
        servings=data.get("servings") or 1,
        nutrition=NutritionFacts(
            calories=data.get("calories", 0),
            protein=nutrition.get("protein", 0),
            carbs=nutrition.get("carbs", 0),
            fat=nutrition.get("fat", 0),
            fiber=nutrition.get("fiber", 0),
        ),
        ingredients=[
            Ingredient(name=name, amount=1, unit="piece", aisle="General", original=name)
            for name in data.get("ingredients", [])
        ],
        instructions=[
            Instruction(number=i, step=step)
            for i, step in enumerate(data.get("instructions", []), start=1)
        ],
        diets=diets,
        dish_types=dish_types,
        cuisines=["international"],
        difficulty=difficulty if difficulty in ("easy", "medium", "hard") else "easy",
        tags=tags if tags is not None else list(data.get("tags", [])),
    )


def _matches_query(recipe: Recipe, query: str) -> bool:
    needle = query.lower()
    if needle in recipe.title.lower() or needle in recipe.summary.lower():
        return True
    return any(needle in tag.lower() for tag in recipe.tags)


def _passes_numeric_filters(recipe: Recipe, filters: RecipeFilters) -> bool:
    if filters.max_ready_time is not None and recipe.ready_in_minutes > filters.max_ready_time:
        return False
    if filters.max_calories is not None and recipe.nutrition.calories > filters.max_calories:
        return False
    if filters.min_protein is not None and recipe.nutrition.protein < filters.min_protein:
        return False
    return True


def _passes_filters(recipe: Recipe, filters: RecipeFilters) -> bool:
    if filters.diet is not None and filters.diet not in recipe.diets:
        return False
    if filters.dish_type is not None and filters.dish_type not in recipe.dish_types:
        return False
    return _passes_numeric_filters(recipe, filters)


def _contains_ingredient(recipe: Recipe, needles: List[str]) -> bool:
    lowered = [n.lower() for n in needles if n]
    return any(
        needle in ingredient.name.lower()
        for ingredient in recipe.ingredients
        for needle in lowered
    )


class RecipeCatalog:
    """Static recipe table with optional AI-backed search."""

    def __init__(self, provider: Optional[AIProvider] = None, recipes: Optional[List[Recipe]] = None):
        self.provider = provider
        self.recipes = list(recipes) if recipes is not None else list(STATIC_RECIPES)

    def get(self, recipe_id: str) -> Optional[Recipe]:
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def search_local(self, query: str = "", filters: Optional[RecipeFilters] = None) -> List[Recipe]:
        """Case-insensitive substring match on title, summary and tags, then AND filters."""
        filters = filters or RecipeFilters()
        return [
            recipe for recipe in self.recipes
            if _matches_query(recipe, query) and _passes_filters(recipe, filters)
        ]

    async def search(self, query: str = "", filters: Optional[RecipeFilters] = None) -> List[Recipe]:
        """
        Search recipes, asking the AI provider first.

        AI results skip the diet and dish type checks (the diet is part of the
        prompt) but still go through the time, calorie and protein filters.
        """
        filters = filters or RecipeFilters()
        diets = [filters.diet] if filters.diet else []
        dish_types = [filters.dish_type or "main course"]

        remote = None
        if self.provider is not None:
            async def remote() -> List[Recipe]:
                generated = await self.provider.recommend_recipes(query, diets)
                return [
                    recipe_from_ai(
                        item,
                        recipe_id=str(item.get("id") or f"ai-{index}"),
                        ready_in_minutes=int(item.get("prepTime", 0)) + int(item.get("cookTime", 0)),
                        diets=diets,
                        dish_types=dish_types,
                    )
                    for index, item in enumerate(generated, start=1)
                ]

        recipes, source = await with_fallback(
            remote,
            lambda: self.search_local(query, filters),
            label="recipe search",
            accept=bool,
        )
        if source == "ai":
            recipes = [r for r in recipes if _passes_numeric_filters(r, filters)]
        return recipes

    def filter_for_profile(
        self,
        profile: NutritionProfile,
        preferences: Optional[MealPlanPreferences] = None,
    ) -> List[Recipe]:
        """
        Recipes a profile can eat.

        Every dietary restriction must be among the recipe's diets; recipes
        with an ingredient matching an allergy or excluded ingredient
        (case-insensitive substring) are dropped, as are recipes slower than
        the preferred ready time.
        """
        preferences = preferences or MealPlanPreferences()
        candidates = []
        for recipe in self.recipes:
            if not all(restriction in recipe.diets for restriction in profile.dietary_restrictions):
                continue
            if _contains_ingredient(recipe, profile.allergies):
                continue
            if preferences.max_ready_time is not None and recipe.ready_in_minutes > preferences.max_ready_time:
                continue
            if _contains_ingredient(recipe, preferences.exclude_ingredients):
                continue
            candidates.append(recipe)
        return candidates

    def recommendations(self, profile: NutritionProfile, meal_type: str) -> List[Recipe]:
        """Profile-safe recipes of one dish type."""
        matching = [r for r in self.filter_for_profile(profile) if meal_type in r.dish_types]
        return matching[:RECOMMENDATION_LIMIT]
