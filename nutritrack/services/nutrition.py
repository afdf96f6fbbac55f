"""Nutrition calculations and formulas."""

from datetime import datetime

from nutritrack.models.profile import (
    BMIResult,
    MacroTargets,
    NutritionProfile,
    ProfileTargets,
    WeightRange,
)


class NutritionCalculator:
    """Calculate BMR, TDEE, calorie goal and macro targets from a profile."""

    # Activity level multipliers
    ACTIVITY_MULTIPLIERS = {
        "sedentary": 1.2,      # Little or no exercise
        "light": 1.375,         # Light exercise 1-3 days/week
        "moderate": 1.55,       # Moderate exercise 3-5 days/week
        "active": 1.725,        # Hard exercise 6-7 days/week
        "very_active": 1.9,     # Very hard exercise, physical job
    }

    # Water intake multipliers on top of 35ml per kg
    WATER_MULTIPLIERS = {
        "sedentary": 1.0,
        "light": 1.1,
        "moderate": 1.2,
        "active": 1.3,
        "very_active": 1.4,
    }

    # Macro ratios by goal (protein%, carbs%, fat%)
    MACRO_RATIOS = {
        "lose_weight": (0.30, 0.45, 0.25),
        "build_muscle": (0.30, 0.45, 0.25),
        "gain_weight": (0.20, 0.50, 0.30),
        "maintain_weight": (0.25, 0.50, 0.25),
    }

    KCAL_PER_KG = 7700
    DEFAULT_WEEKLY_GOAL = 0.5  # kg per week
    MIN_DAILY_CALORIES = 1200
    MUSCLE_SURPLUS = 300

    @staticmethod
    def calculate_bmr(profile: NutritionProfile) -> float:
        """
        Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

        Anything other than "male" uses the female constant.
        """
        base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
        if profile.gender == "male":
            return base + 5
        return base - 161

    @classmethod
    def calculate_tdee(cls, profile: NutritionProfile) -> float:
        """Calculate Total Daily Energy Expenditure."""
        bmr = cls.calculate_bmr(profile)
        return bmr * cls.ACTIVITY_MULTIPLIERS.get(profile.activity_level, 1.2)

    @classmethod
    def calculate_daily_calorie_goal(cls, profile: NutritionProfile) -> float:
        """Daily calories for the profile's goal, never below 1200 when losing weight."""
        tdee = cls.calculate_tdee(profile)
        weekly_goal = profile.weekly_goal_kg or cls.DEFAULT_WEEKLY_GOAL
        daily_delta = weekly_goal * cls.KCAL_PER_KG / 7

        if profile.goal == "lose_weight":
            return max(tdee - daily_delta, cls.MIN_DAILY_CALORIES)
        if profile.goal == "gain_weight":
            return tdee + daily_delta
        if profile.goal == "build_muscle":
            return tdee + cls.MUSCLE_SURPLUS
        return tdee

    @classmethod
    def calculate_macro_targets(cls, profile: NutritionProfile, daily_calories: float) -> MacroTargets:
        """Split daily calories into grams (protein & carbs = 4 cal/g, fat = 9 cal/g)."""
        protein_ratio, carbs_ratio, fat_ratio = cls.MACRO_RATIOS.get(
            profile.goal, cls.MACRO_RATIOS["maintain_weight"]
        )
        return MacroTargets(
            protein=daily_calories * protein_ratio / 4,
            carbs=daily_calories * carbs_ratio / 4,
            fat=daily_calories * fat_ratio / 9,
        )

    @classmethod
    def apply_goals(cls, profile: NutritionProfile) -> NutritionProfile:
        """Return a copy with calorie goal and macros recomputed from the same snapshot."""
        daily_calories = cls.calculate_daily_calorie_goal(profile)
        return profile.model_copy(update={
            "daily_calorie_goal": daily_calories,
            "macro_targets": cls.calculate_macro_targets(profile, daily_calories),
            "updated_at": datetime.now(),
        })

    @classmethod
    def calculate_water_intake(cls, profile: NutritionProfile) -> float:
        """Recommended water intake in liters."""
        base = profile.weight_kg * 0.035
        return base * cls.WATER_MULTIPLIERS.get(profile.activity_level, 1.0)

    @staticmethod
    def calculate_ideal_weight_range(height_cm: float) -> WeightRange:
        """Weight range for a BMI between 18.5 and 24.9."""
        height_m = height_cm / 100
        return WeightRange(
            min=round(18.5 * height_m * height_m, 1),
            max=round(24.9 * height_m * height_m, 1),
        )

    @staticmethod
    def calculate_bmi(weight_kg: float, height_cm: float) -> BMIResult:
        height_m = height_cm / 100
        bmi = round(weight_kg / (height_m * height_m), 1)

        if bmi < 18.5:
            category = "Underweight"
        elif bmi < 25:
            category = "Normal Weight"
        elif bmi < 30:
            category = "Overweight"
        else:
            category = "Obese"

        return BMIResult(bmi=bmi, category=category)

    @classmethod
    def targets_for(cls, profile: NutritionProfile) -> ProfileTargets:
        return ProfileTargets(
            daily_calorie_goal=profile.daily_calorie_goal,
            macro_targets=profile.macro_targets,
            water_liters=round(cls.calculate_water_intake(profile), 2),
            ideal_weight=cls.calculate_ideal_weight_range(profile.height_cm),
            bmi=cls.calculate_bmi(profile.weight_kg, profile.height_cm),
        )
