"""Meal plan and shopping list models."""

from pydantic import BaseModel, Field, computed_field
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import uuid4

from .recipe import Recipe


MealSlot = Literal["breakfast", "lunch", "dinner", "snack"]
MAIN_SLOTS = ("breakfast", "lunch", "dinner")


class Macros(BaseModel):
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class DayMeals(BaseModel):
    """Slot assignments for one day: at most one recipe per main slot, any number of snacks."""

    breakfast: Optional[Recipe] = None
    lunch: Optional[Recipe] = None
    dinner: Optional[Recipe] = None
    snacks: List[Recipe] = []

    def assign(self, slot: MealSlot, recipe: Recipe) -> None:
        """Put a recipe in a slot, replacing any recipe already there."""
        if slot == "snack":
            self.snacks.append(recipe)
        else:
            setattr(self, slot, recipe)

    def place(self, slot: str, recipe: Recipe) -> MealSlot:
        """Put a recipe in its declared slot if free, otherwise with the snacks."""
        if slot in MAIN_SLOTS and getattr(self, slot) is None:
            setattr(self, slot, recipe)
            return slot
        self.snacks.append(recipe)
        return "snack"

    def recipes(self) -> List[Recipe]:
        """All assigned recipes, main slots first."""
        assigned = [getattr(self, slot) for slot in MAIN_SLOTS]
        return [r for r in assigned if r is not None] + list(self.snacks)


class MealPlanDay(BaseModel):
    """One day of a plan. Totals are always derived from the assigned recipes."""

    date: date
    meals: DayMeals = Field(default_factory=DayMeals)

    @computed_field
    @property
    def total_calories(self) -> float:
        return sum(r.nutrition.calories for r in self.meals.recipes())

    @computed_field
    @property
    def macros(self) -> Macros:
        recipes = self.meals.recipes()
        return Macros(
            protein=sum(r.nutrition.protein for r in recipes),
            carbs=sum(r.nutrition.carbs for r in recipes),
            fat=sum(r.nutrition.fat for r in recipes),
        )


class ShoppingListItem(BaseModel):
    """One aggregated ingredient across the whole plan."""

    id: str
    name: str
    amount: float
    unit: str
    aisle: str = "Other"
    checked: bool = False
    recipe_ids: List[str] = []


class MealPlanPreferences(BaseModel):
    """Per-request options for plan generation."""

    exclude_ingredients: List[str] = []
    include_ingredients: List[str] = []
    diet: Optional[str] = None
    max_ready_time: Optional[int] = None


class MealPlan(BaseModel):
    """Multi-day meal plan."""

    id: str = Field(default_factory=lambda: f"plan_{uuid4().hex}")
    user_id: str
    start_date: date
    end_date: date
    days: List[MealPlanDay] = []
    shopping_list: List[ShoppingListItem] = []
    source: Literal["ai", "local"] = "local"
    created_at: datetime = Field(default_factory=datetime.now)

    @computed_field
    @property
    def total_calories(self) -> float:
        return sum(day.total_calories for day in self.days)

    def recipes(self) -> List[Recipe]:
        return [recipe for day in self.days for recipe in day.meals.recipes()]

    class Config:
        from_attributes = True


class GeneratePlanRequest(BaseModel):
    """Body of the plan generation endpoint."""

    user_id: str
    days: int = Field(7, ge=1, le=28)
    preferences: MealPlanPreferences = MealPlanPreferences()
