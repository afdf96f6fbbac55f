"""Multi-day meal plan generation with AI and local strategies."""

import logging
import random
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

from nutritrack.errors import InvalidInputError
from nutritrack.models.meal import DayMeals, MealPlan, MealPlanDay, MealPlanPreferences
from nutritrack.models.profile import NutritionProfile
from nutritrack.models.recipe import Recipe
from nutritrack.services.ai_providers import AIProvider
from nutritrack.services.catalog import RecipeCatalog, recipe_from_ai
from nutritrack.services.fallback import with_fallback
from nutritrack.services.shopping import build_shopping_list


logger = logging.getLogger(__name__)


class MealPlanGenerator:
    """Build meal plans from AI recommendations, or from the recipe catalog."""

    # Share of the daily calorie goal per slot
    SLOT_FRACTIONS = {
        "breakfast": 0.25,
        "lunch": 0.35,
        "dinner": 0.35,
        "snack": 0.05,
    }
    TOP_CANDIDATES = 3
    MEALS_PER_DAY = 3
    DEFAULT_DIET = "balanced"

    def __init__(
        self,
        catalog: RecipeCatalog,
        provider: Optional[AIProvider] = None,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
    ):
        self.catalog = catalog
        self.provider = provider
        self.rng = rng or random.Random()
        self.today = today

    async def generate_plan(
        self,
        profile: NutritionProfile,
        day_count: int,
        preferences: Optional[MealPlanPreferences] = None,
        start_date: Optional[date] = None,
    ) -> MealPlan:
        """
        Generate a plan of ``day_count`` days starting at ``start_date`` (default today).

        The AI plan is used as-is when it returns at least one meal; otherwise
        recipes are picked locally per slot. Either way the shopping list is
        built from the chosen recipes before returning.
        """
        if day_count < 1:
            raise InvalidInputError("day_count must be at least 1")
        if profile.daily_calorie_goal <= 0:
            raise InvalidInputError("Profile has no daily calorie goal")

        preferences = preferences or MealPlanPreferences()
        start = start_date or self.today()
        dates = [start + timedelta(days=offset) for offset in range(day_count)]

        remote = None
        if self.provider is not None:
            async def remote() -> List[MealPlanDay]:
                return await self._remote_days(profile, preferences, dates)

        days, source = await with_fallback(
            remote,
            lambda: self._local_days(profile, preferences, dates),
            label="meal plan",
            accept=bool,
        )

        plan = MealPlan(
            user_id=profile.id,
            start_date=dates[0],
            end_date=dates[-1],
            days=days,
            source=source,
        )
        plan.shopping_list = build_shopping_list(plan)

        logger.info(
            "Generated %d-day %s meal plan for %s (%.0f kcal)",
            day_count, source, profile.id, plan.total_calories,
        )
        return plan

    async def _remote_days(
        self,
        profile: NutritionProfile,
        preferences: MealPlanPreferences,
        dates: List[date],
    ) -> List[MealPlanDay]:
        diet = preferences.diet or self.DEFAULT_DIET
        data = await self.provider.generate_meal_plan(
            diet_type=diet,
            calories=profile.daily_calorie_goal,
            meals=self.MEALS_PER_DAY,
            allergies=profile.allergies + preferences.exclude_ingredients,
            preferences=preferences.include_ingredients,
        )
        meals: List[Dict[str, Any]] = data.get("meals") or []
        if not meals:
            return []

        days = []
        for day_index, day in enumerate(dates):
            slots = DayMeals()
            # Rotate the canonical list so consecutive days differ
            for index in range(len(meals)):
                meal = meals[(index + day_index) % len(meals)]
                meal_type = meal.get("type", "snack")
                recipe = recipe_from_ai(
                    meal,
                    recipe_id=f"plan-{day_index}-{index}",
                    ready_in_minutes=int(meal.get("prepTime", 0)),
                    diets=[diet],
                    dish_types=[meal_type],
                    tags=[meal_type, "healthy"],
                )
                slots.place(meal_type, recipe)
            days.append(MealPlanDay(date=day, meals=slots))
        return days

    def _local_days(
        self,
        profile: NutritionProfile,
        preferences: MealPlanPreferences,
        dates: List[date],
    ) -> List[MealPlanDay]:
        candidates = self.catalog.filter_for_profile(profile, preferences)
        if not candidates:
            logger.info("No catalog recipes fit profile %s, plan will be empty", profile.id)

        days = []
        for day in dates:
            slots = DayMeals()
            for slot, fraction in self.SLOT_FRACTIONS.items():
                recipe = self._select_recipe(candidates, slot, profile.daily_calorie_goal * fraction)
                if recipe is not None:
                    slots.assign(slot, recipe)
            days.append(MealPlanDay(date=day, meals=slots))
        return days

    def _select_recipe(self, candidates: List[Recipe], slot: str, target: float) -> Optional[Recipe]:
        """Random pick among the recipes closest to the slot's calorie target."""
        matching = [r for r in candidates if slot in r.dish_types]
        if not matching:
            return None
        matching.sort(key=lambda r: abs(r.nutrition.calories - target))
        return self.rng.choice(matching[:self.TOP_CANDIDATES])
