import pytest

from nutritrack.models.profile import NutritionProfile
from nutritrack.services.nutrition import NutritionCalculator


def make_profile(**overrides):
    fields = dict(
        id="p",
        age=30,
        gender="male",
        height_cm=180,
        weight_kg=80,
        activity_level="moderate",
        goal="maintain_weight",
    )
    fields.update(overrides)
    return NutritionProfile(**fields)


class TestCalorieGoal:
    def test_bmr_male_and_female(self):
        assert NutritionCalculator.calculate_bmr(make_profile()) == pytest.approx(1780)
        assert NutritionCalculator.calculate_bmr(make_profile(gender="female")) == pytest.approx(1614)

    def test_other_gender_uses_female_constant(self):
        assert NutritionCalculator.calculate_bmr(make_profile(gender="other")) == pytest.approx(1614)

    def test_lose_weight_subtracts_weekly_deficit(self):
        profile = make_profile(goal="lose_weight", weekly_goal_kg=0.5)
        tdee = NutritionCalculator.calculate_tdee(profile)

        goal = NutritionCalculator.calculate_daily_calorie_goal(profile)

        assert tdee == pytest.approx(1780 * 1.55)
        assert goal == pytest.approx(tdee - 0.5 * 7700 / 7)

    def test_lose_weight_floored_at_1200(self):
        profile = make_profile(
            goal="lose_weight", weekly_goal_kg=1.0, gender="female",
            age=70, height_cm=150, weight_kg=45, activity_level="sedentary",
        )
        assert NutritionCalculator.calculate_daily_calorie_goal(profile) == 1200

    def test_weekly_goal_defaults_to_half_kilo(self):
        profile = make_profile(goal="gain_weight")
        tdee = NutritionCalculator.calculate_tdee(profile)
        assert NutritionCalculator.calculate_daily_calorie_goal(profile) == pytest.approx(tdee + 550)

    def test_build_muscle_adds_surplus(self):
        profile = make_profile(goal="build_muscle")
        tdee = NutritionCalculator.calculate_tdee(profile)
        assert NutritionCalculator.calculate_daily_calorie_goal(profile) == pytest.approx(tdee + 300)


class TestApplyGoals:
    def test_goal_and_macros_recomputed_together(self):
        profile = NutritionCalculator.apply_goals(make_profile(goal="lose_weight"))

        calories = profile.daily_calorie_goal
        assert profile.macro_targets.protein == pytest.approx(calories * 0.30 / 4)
        assert profile.macro_targets.carbs == pytest.approx(calories * 0.45 / 4)
        assert profile.macro_targets.fat == pytest.approx(calories * 0.25 / 9)

    def test_returns_copy(self):
        original = make_profile()
        updated = NutritionCalculator.apply_goals(original)
        assert original.daily_calorie_goal == 0
        assert updated.daily_calorie_goal > 0


class TestExtras:
    @pytest.mark.parametrize("weight,height,category", [
        (50, 180, "Underweight"),
        (70, 180, "Normal Weight"),
        (90, 180, "Overweight"),
        (110, 180, "Obese"),
    ])
    def test_bmi_categories(self, weight, height, category):
        assert NutritionCalculator.calculate_bmi(weight, height).category == category

    def test_water_intake(self):
        assert NutritionCalculator.calculate_water_intake(make_profile()) == pytest.approx(80 * 0.035 * 1.2)

    def test_ideal_weight_range(self):
        weight_range = NutritionCalculator.calculate_ideal_weight_range(180)
        assert weight_range.min == 59.9
        assert weight_range.max == 80.7
