"""Nutrition profile models."""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime


Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose_weight", "maintain_weight", "gain_weight", "build_muscle"]


class MacroTargets(BaseModel):
    """Daily macronutrient targets in grams."""

    protein: float = 0
    carbs: float = 0
    fat: float = 0


class ProfilePreferences(BaseModel):
    """Food preferences kept alongside the profile."""

    cuisine_types: List[str] = []
    avoided_ingredients: List[str] = []
    meal_prep_time: Optional[int] = None  # minutes


class ProfileUpdate(BaseModel):
    """Biometrics and goals submitted by the user."""

    name: Optional[str] = None
    email: Optional[str] = None
    age: int = Field(ge=10, le=120)
    gender: Gender
    height_cm: float = Field(ge=50, le=300)
    weight_kg: float = Field(ge=20, le=500)
    activity_level: ActivityLevel = "moderate"
    goal: Goal = "maintain_weight"
    target_weight_kg: Optional[float] = Field(None, ge=20, le=500)
    weekly_goal_kg: Optional[float] = Field(None, gt=0, le=2)
    dietary_restrictions: List[str] = []
    allergies: List[str] = []
    preferences: ProfilePreferences = ProfilePreferences()


class NutritionProfile(ProfileUpdate):
    """Stored profile with derived calorie and macro targets.

    ``daily_calorie_goal`` and ``macro_targets`` are only ever written by
    ``NutritionCalculator.apply_goals`` so they always describe the same
    biometric snapshot.
    """

    id: str
    daily_calorie_goal: float = 0
    macro_targets: MacroTargets = MacroTargets()
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    class Config:
        from_attributes = True


class BMIResult(BaseModel):
    """Body mass index with its category."""

    bmi: float
    category: Literal["Underweight", "Normal Weight", "Overweight", "Obese"]


class WeightRange(BaseModel):
    min: float
    max: float


class ProfileTargets(BaseModel):
    """Derived targets shown on the dashboard."""

    daily_calorie_goal: float
    macro_targets: MacroTargets
    water_liters: float
    ideal_weight: WeightRange
    bmi: BMIResult
