"""Data models for NutriTrack."""

from .profile import NutritionProfile, ProfileUpdate, MacroTargets
from .recipe import Recipe, Ingredient, NutritionFacts, RecipeFilters
from .meal import MealPlan, MealPlanDay, DayMeals, ShoppingListItem, MealPlanPreferences
from .tracking import FoodItem, FoodAnalysis, MealLog, MealLogCreate
from .challenge import (
    Challenge,
    ChallengeGoal,
    ChallengeParticipant,
    ChallengeProgress,
    Leaderboard,
)
from .chat import ChatMessage, TextMessage

__all__ = [
    "NutritionProfile",
    "ProfileUpdate",
    "MacroTargets",
    "Recipe",
    "Ingredient",
    "NutritionFacts",
    "RecipeFilters",
    "MealPlan",
    "MealPlanDay",
    "DayMeals",
    "ShoppingListItem",
    "MealPlanPreferences",
    "FoodItem",
    "FoodAnalysis",
    "MealLog",
    "MealLogCreate",
    "Challenge",
    "ChallengeGoal",
    "ChallengeParticipant",
    "ChallengeProgress",
    "Leaderboard",
    "ChatMessage",
    "TextMessage",
]
