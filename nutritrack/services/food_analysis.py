"""Food analysis from free text, and meal log summaries."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from nutritrack.models.tracking import DailyTotals, FoodAnalysis, FoodItem, MealLog, WeeklyStats
from nutritrack.services.ai_providers import AIProvider
from nutritrack.services.fallback import with_fallback


logger = logging.getLogger(__name__)


# Nutrition per 100g: calories, protein, carbs, fat, fiber, sugar
FOOD_DATABASE: Dict[str, tuple] = {
    # Breakfast
    "eggs": (155, 13, 1.1, 11, 0, 0.6),
    "oatmeal": (389, 16.9, 66.3, 6.9, 10.6, 0),
    "banana": (89, 1.1, 22.8, 0.3, 2.6, 12.2),
    "toast": (265, 9, 49, 3.2, 2.7, 5.7),
    "yogurt": (59, 10, 3.6, 0.4, 0, 3.2),
    "milk": (42, 3.4, 5, 1, 0, 5),
    "coffee": (2, 0.3, 0, 0, 0, 0),
    "cereal": (379, 8, 84, 2.7, 7.3, 29),
    # Mains
    "chicken breast": (165, 31, 0, 3.6, 0, 0),
    "salmon": (208, 20, 0, 12, 0, 0),
    "rice": (130, 2.7, 28, 0.3, 0.4, 0.1),
    "pasta": (220, 8, 44, 1.1, 2.5, 1.6),
    "broccoli": (34, 2.8, 7, 0.4, 2.6, 1.5),
    "salad": (20, 1.4, 4, 0.2, 1.9, 2.3),
    "pizza": (266, 11, 33, 10, 2.3, 3.6),
    "burger": (295, 17, 28, 14, 2.2, 4),
    "sandwich": (250, 12, 30, 8, 2, 3),
    "soup": (85, 4.1, 9, 2.9, 1.6, 3.5),
    # Vegetables
    "carrot": (41, 0.9, 10, 0.2, 2.8, 4.7),
    "tomato": (18, 0.9, 3.9, 0.2, 1.2, 2.6),
    "spinach": (23, 2.9, 3.6, 0.4, 2.2, 0.4),
    "potato": (77, 2, 17, 0.1, 2.2, 0.8),
    "onion": (40, 1.1, 9.3, 0.1, 1.7, 4.2),
    # Fruit
    "apple": (52, 0.3, 14, 0.2, 2.4, 10.4),
    "orange": (47, 0.9, 12, 0.1, 2.4, 9.4),
    "strawberry": (32, 0.7, 7.7, 0.3, 2, 4.9),
    "grapes": (62, 0.6, 16, 0.2, 0.9, 16),
    # Snacks
    "nuts": (607, 15, 7, 54, 8, 3.9),
    "cheese": (113, 7, 1, 9, 0, 0.1),
    "crackers": (503, 8.8, 62, 23, 2.1, 2.8),
    "chocolate": (546, 4.9, 61, 31, 7, 48),
    "cookies": (502, 5.9, 64, 25, 2.3, 39),
}

DEFAULT_SERVING = FoodItem(
    name="Mixed meal",
    calories=200,
    protein=10,
    carbs=25,
    fat=7,
    fiber=2,
    sugar=5,
    quantity="1 serving",
)

SEARCH_LIMIT = 10


def _food_item(name: str, quantity: str = "100g") -> FoodItem:
    calories, protein, carbs, fat, fiber, sugar = FOOD_DATABASE[name]
    return FoodItem(
        name=name.title(),
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        sugar=sugar,
        quantity=quantity,
    )


def _analysis_text(foods: List[FoodItem]) -> str:
    total = sum(f.calories for f in foods)
    protein = sum(f.protein for f in foods)
    text = f"Estimated {round(total)} kcal with {round(protein)}g protein."
    if protein >= 20:
        text += " Good protein content for satiety and muscle maintenance."
    elif foods:
        text += " Consider adding a protein source to make this meal more filling."
    return text


class FoodAnalyzer:
    """Turn food descriptions into nutrition estimates."""

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider

    async def analyze(
        self,
        description: str,
        image: Optional[bytes] = None,
        mime_type: str = "image/jpeg",
    ) -> FoodAnalysis:
        """
        Analyze with the AI provider, falling back to the built-in food table.

        A photo is only understood by the AI provider; the fallback works from
        the description alone.
        """
        remote = None
        if self.provider is not None:
            async def remote() -> FoodAnalysis:
                data = await self.provider.analyze_food(description, image=image, mime_type=mime_type)
                return self._from_ai(data)

        analysis, source = await with_fallback(
            remote,
            lambda: self.analyze_local(description),
            label="food analysis",
            accept=lambda result: bool(result.foods),
        )
        analysis.source = source
        return analysis

    @staticmethod
    def _from_ai(data: Dict[str, Any]) -> FoodAnalysis:
        foods = [FoodItem(**food) for food in data.get("foods", [])]
        total = data.get("totalCalories")
        return FoodAnalysis(
            foods=foods,
            total_calories=total if total is not None else sum(f.calories for f in foods),
            analysis=data.get("analysis", ""),
        )

    @staticmethod
    def analyze_local(description: str) -> FoodAnalysis:
        """One item per known food named in the description, or a default serving."""
        lowered = description.lower()
        foods = [_food_item(name) for name in FOOD_DATABASE if name in lowered]
        if not foods:
            foods = [DEFAULT_SERVING.model_copy()]
        return FoodAnalysis(
            foods=foods,
            total_calories=sum(f.calories for f in foods),
            analysis=_analysis_text(foods),
        )

    @staticmethod
    def search_foods(query: str) -> List[FoodItem]:
        lowered = query.lower()
        matches = [name for name in FOOD_DATABASE if lowered in name]
        return [_food_item(name) for name in matches[:SEARCH_LIMIT]]


def daily_totals(meals: Sequence[MealLog]) -> DailyTotals:
    return DailyTotals(
        calories=sum(m.total_calories for m in meals),
        protein=sum(m.total_protein for m in meals),
        carbs=sum(m.total_carbs for m in meals),
        fat=sum(m.total_fat for m in meals),
        meals_logged=len(meals),
    )


def weekly_stats(meals: Sequence[MealLog]) -> WeeklyStats:
    """Totals over a set of meal logs; the average only counts days with a log."""
    total_calories = sum(m.total_calories for m in meals)
    days_logged = len({m.date.date() for m in meals})
    return WeeklyStats(
        total_meals=len(meals),
        avg_daily_calories=round(total_calories / days_logged) if days_logged else 0,
        total_calories=total_calories,
        days_logged=days_logged,
    )
