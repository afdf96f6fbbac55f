import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from nutritrack.errors import ExternalServiceError
from nutritrack.models.chat import TextMessage
from nutritrack.models.tracking import FoodItem, MealLog
from nutritrack.services.coach import (
    GENERAL_TIPS,
    MOTIVATIONAL_MESSAGES,
    CoachResponder,
    classify_intent,
)


def meal(calories, protein=10):
    return MealLog(
        user_id="user-1",
        meal_type="lunch",
        foods=[FoodItem(name="food", calories=calories, protein=protein)],
    )


def provider_with(mock):
    provider = MagicMock()
    provider.coach_reply = mock
    return provider


@pytest.mark.parametrize("message,intent", [
    ("How do I lose weight fast?", "weight_loss"),
    ("Best cardio workout?", "exercise"),
    ("How much protein should I eat", "nutrition"),
    ("I'm struggling lately", "motivation"),
    ("Can you suggest a menu", "meal_planning"),
    ("Show my progress", "progress"),
    ("Hello there", "general"),
    # weight_loss is checked before exercise
    ("Is a gym good for weight loss?", "weight_loss"),
])
def test_classify_intent(message, intent):
    assert classify_intent(message) == intent


class TestRespond:
    @pytest.mark.asyncio
    async def test_uses_ai_reply_verbatim(self, profile):
        mock = AsyncMock(return_value="Drink more water.")
        coach = CoachResponder(provider_with(mock))

        reply = await coach.respond("hi", profile)

        assert reply.reply == "Drink more water."
        assert reply.source == "ai"
        prompt = mock.await_args.args[0]
        assert "Age: 30" in prompt
        assert 'User Message: "hi"' in prompt

    @pytest.mark.asyncio
    async def test_prompt_includes_history(self, profile):
        mock = AsyncMock(return_value="ok")
        history = [TextMessage(user_id="user-1", role="user", content="I ate pizza")]

        await CoachResponder(provider_with(mock)).respond("now what?", profile, [], history)

        assert "user: I ate pizza" in mock.await_args.args[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mock", [
        AsyncMock(return_value="   "),
        AsyncMock(side_effect=ExternalServiceError("quota")),
    ])
    async def test_falls_back_to_rules(self, profile, mock):
        coach = CoachResponder(provider_with(mock), rng=random.Random(3))

        reply = await coach.respond("I need motivation", profile)

        assert reply.source == "rules"
        assert reply.intent == "motivation"
        assert reply.reply in MOTIVATIONAL_MESSAGES

    @pytest.mark.asyncio
    async def test_general_answer_is_one_of_pool(self, profile):
        reply = await CoachResponder(rng=random.Random(0)).respond("hello", profile)
        assert reply.reply in GENERAL_TIPS


class TestRuleBasedReplies:
    def test_weight_loss_mentions_remaining_calories(self, profile):
        coach = CoachResponder()
        remaining = round(profile.daily_calorie_goal - 500)

        text = coach.rule_based_reply("weight_loss", profile, [meal(500)])

        assert f"{remaining} calories remaining" in text

    def test_weight_loss_over_goal(self, profile):
        text = CoachResponder().rule_based_reply("weight_loss", profile, [meal(profile.daily_calorie_goal + 300)])
        assert "300 calories over your goal" in text

    def test_nutrition_low_protein(self, profile):
        meals = [meal(400, protein=5) for _ in range(3)]
        assert "more protein" in CoachResponder().rule_based_reply("nutrition", profile, meals)

    def test_exercise_includes_goal_tip(self, profile):
        seen = {CoachResponder(rng=random.Random(seed)).rule_based_reply("exercise", profile, [])
                for seed in range(40)}
        assert any("For weight loss" in tip for tip in seen)


class TestDailyRecommendations:
    def test_under_goal(self, profile):
        recs = CoachResponder.daily_recommendations(profile, [], 0)
        titles = [r.title for r in recs]
        assert titles == ["Fuel Your Body", "Cardio for Weight Loss", "Stay Hydrated", "Meal Consistency"]

    def test_over_goal(self, profile):
        meals = [meal(1000), meal(1000), meal(1000)]
        recs = CoachResponder.daily_recommendations(profile, meals, 3000)
        titles = [r.title for r in recs]
        assert titles == ["Balance Your Intake", "Cardio for Weight Loss", "Stay Hydrated"]
