"""AI coach with a rule-based fallback."""

import logging
import random
from typing import List, Optional, Sequence

from nutritrack.models.chat import CoachRecommendation, CoachReply
from nutritrack.models.profile import NutritionProfile
from nutritrack.models.tracking import MealLog
from nutritrack.services.ai_providers import AIProvider
from nutritrack.services.fallback import with_fallback
from nutritrack.services.nutrition import NutritionCalculator


logger = logging.getLogger(__name__)


# Checked in order, first match wins
INTENT_KEYWORDS = [
    ("weight_loss", ["lose weight", "weight loss", "shed pounds", "get lean", "cut fat"]),
    ("exercise", ["workout", "exercise", "gym", "training", "fitness", "cardio"]),
    ("nutrition", ["eat", "food", "nutrition", "diet", "calories", "protein"]),
    ("motivation", ["motivation", "discouraged", "give up", "struggling", "hard"]),
    ("meal_planning", ["meal plan", "what to eat", "food plan", "menu", "recipes"]),
    ("progress", ["progress", "results", "how am i doing", "tracking"]),
]

EXERCISE_TIPS = [
    "For optimal health, aim for at least 150 minutes of moderate-intensity cardio per week, "
    "plus 2-3 strength training sessions.",
    "Start small if you're new to exercise - even 10 minutes of walking makes a difference!",
    "Mix up your routine with cardio, strength training, and flexibility work to prevent "
    "boredom and overuse injuries.",
]

GOAL_EXERCISE_TIPS = {
    "lose_weight": "For weight loss, focus on creating a calorie deficit through a combination of "
                   "diet and exercise. Cardio helps burn calories, while strength training preserves "
                   "muscle mass.",
    "build_muscle": "For muscle building, prioritize progressive resistance training 3-4 times per "
                    "week. Don't forget adequate protein and rest for recovery!",
}

MOTIVATIONAL_MESSAGES = [
    "Every healthy choice you make is an investment in your future self. You've got this!",
    "Progress isn't always linear, but consistency is key. Keep showing up for yourself every day.",
    "Remember why you started. Your health is worth every effort you're putting in.",
    "Small steps daily lead to big changes yearly. Celebrate your progress, no matter how small!",
    "You're building habits that will last a lifetime. That's something to be proud of!",
    "Setbacks are part of the journey. What matters is getting back on track - and you're here, "
    "so you're already doing that!",
]

GENERAL_TIPS = [
    "Focus on building sustainable healthy habits rather than quick fixes. What you do "
    "consistently matters more than what you do occasionally.",
    "Remember the basics: eat mostly whole foods, stay hydrated, move your body daily, and get "
    "adequate sleep.",
    "Listen to your body. Rest when you need to rest, fuel when you need to fuel, and move when "
    "you need to move.",
    "Health is about more than just weight - focus on how you feel, your energy levels, and your "
    "overall well-being.",
]

HISTORY_TURNS = 6


def classify_intent(message: str) -> str:
    lowered = message.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return "general"


class CoachResponder:
    """Answer coaching questions with the AI provider, or with canned advice."""

    def __init__(self, provider: Optional[AIProvider] = None, rng: Optional[random.Random] = None):
        self.provider = provider
        self.rng = rng or random.Random()

    async def respond(
        self,
        message: str,
        profile: NutritionProfile,
        recent_meals: Sequence[MealLog] = (),
        history: Sequence = (),
    ) -> CoachReply:
        """
        Reply to a user message.

        The AI answer is returned verbatim when it is non-empty. Otherwise the
        message is classified by keywords and answered from the rule set;
        motivational and general answers are drawn at random from a fixed pool.
        """
        remote = None
        if self.provider is not None:
            prompt = self.build_prompt(message, profile, recent_meals, history)

            async def remote() -> str:
                return await self.provider.coach_reply(prompt)

        intent = classify_intent(message)
        reply, source = await with_fallback(
            remote,
            lambda: self.rule_based_reply(intent, profile, recent_meals),
            label="coach",
            accept=lambda text: bool(text and text.strip()),
        )
        if source == "ai":
            return CoachReply(reply=reply, source="ai")
        return CoachReply(reply=reply, intent=intent, source="rules")

    @staticmethod
    def build_prompt(
        message: str,
        profile: NutritionProfile,
        recent_meals: Sequence[MealLog],
        history: Sequence,
    ) -> str:
        today_calories = sum(meal.total_calories for meal in recent_meals)
        lines = [
            "You are a professional health and fitness coach. Respond to this user message "
            "with helpful, personalized advice.",
            "",
            "User Profile Context:",
            f"- Age: {profile.age}",
            f"- Weight: {profile.weight_kg}kg",
            f"- Height: {profile.height_cm}cm",
            f"- Activity Level: {profile.activity_level}",
            f"- Goal: {profile.goal}",
            f"- Dietary Restrictions: {', '.join(profile.dietary_restrictions) or 'none'}",
            f"- Daily Calorie Goal: {round(profile.daily_calorie_goal)}",
            f"- Calories Eaten Today: {round(today_calories)} across {len(recent_meals)} meals",
        ]
        if history:
            lines += ["", "Recent conversation:"]
            lines += [f"{m.role}: {m.content}" for m in list(history)[-HISTORY_TURNS:]]
        lines += [
            "",
            f'User Message: "{message}"',
            "",
            "Keep it conversational and supportive, limited to 2-3 paragraphs.",
        ]
        return "\n".join(lines)

    def rule_based_reply(self, intent: str, profile: NutritionProfile, recent_meals: Sequence[MealLog]) -> str:
        today_calories = sum(meal.total_calories for meal in recent_meals)
        balance = round(profile.daily_calorie_goal - today_calories)

        if intent == "weight_loss":
            if balance > 0:
                return (
                    "Great job staying within your calorie goal! For healthy weight loss, maintain "
                    f"a moderate deficit of 300-500 calories daily. You currently have {balance} "
                    "calories remaining today. Consider adding a protein-rich snack to support your "
                    "metabolism while staying in a deficit."
                )
            return (
                "Weight loss happens when we burn more calories than we consume. You're "
                f"{abs(balance)} calories over your goal today. Try incorporating more vegetables "
                "into your meals and adding a 20-30 minute walk. Remember, small consistent changes "
                "lead to lasting results!"
            )

        if intent == "exercise":
            tips = list(EXERCISE_TIPS)
            if profile.goal in GOAL_EXERCISE_TIPS:
                tips.append(GOAL_EXERCISE_TIPS[profile.goal])
            return self.rng.choice(tips)

        if intent == "nutrition":
            if len(recent_meals) < 3:
                return (
                    "Try to eat regular meals throughout the day to maintain stable blood sugar and "
                    "energy levels. Aim for 3 main meals with 1-2 healthy snacks if needed."
                )
            avg_protein = sum(meal.total_protein for meal in recent_meals) / len(recent_meals)
            if avg_protein < 20:
                return (
                    "Consider adding more protein to your meals! Good sources include lean meats, "
                    "fish, eggs, beans, Greek yogurt, and nuts. Protein helps with satiety and "
                    "muscle maintenance."
                )
            return (
                "You're doing well with your nutrition! Keep focusing on whole foods, adequate "
                "protein, and staying within your calorie goals. Remember to include plenty of "
                "vegetables for vitamins and fiber."
            )

        if intent == "motivation":
            return self.rng.choice(MOTIVATIONAL_MESSAGES)

        if intent == "meal_planning":
            return (
                f"Based on your {profile.goal} goal, focus on meals that include lean protein, "
                f"complex carbs, and healthy fats. With your {round(profile.daily_calorie_goal)} "
                "calorie target, try to distribute this across 3 main meals and 1-2 snacks. "
                "Meal prep on Sundays can help you stay consistent!"
            )

        if intent == "progress":
            consistency = "excellent" if len(recent_meals) >= 3 else "good"
            accuracy = "right on target" if abs(balance) < 200 else "needs adjustment"
            if balance > 0:
                advice = f"You have {balance} calories remaining - consider a balanced snack."
            else:
                advice = f"You're {abs(balance)} calories over - a short walk could help balance things out."
            return f"Your tracking consistency is {consistency} today! Your calorie intake is {accuracy}. {advice}"

        return self.rng.choice(GENERAL_TIPS)

    @staticmethod
    def daily_recommendations(
        profile: NutritionProfile,
        recent_meals: Sequence[MealLog],
        today_calories: float,
    ) -> List[CoachRecommendation]:
        """Rule-based suggestions for the rest of the day."""
        recommendations = []
        deficit = round(profile.daily_calorie_goal - today_calories)

        if deficit > 500:
            recommendations.append(CoachRecommendation(
                type="nutrition",
                title="Fuel Your Body",
                description=f"You're {deficit} calories below your goal. Your body needs more fuel "
                            "to function optimally.",
                action_items=[
                    "Add a protein-rich snack like Greek yogurt with nuts",
                    "Include healthy fats like avocado or olive oil in your next meal",
                    "Consider a banana with peanut butter for quick energy",
                ],
                priority="high",
                category="calorie_intake",
            ))
        elif deficit < -200:
            recommendations.append(CoachRecommendation(
                type="exercise",
                title="Balance Your Intake",
                description=f"You're {abs(deficit)} calories over your goal. Let's balance it out!",
                action_items=[
                    "Take a 20-30 minute walk after dinner",
                    "Choose lighter options for your remaining meals",
                    "Drink more water to help with satiety",
                ],
                priority="medium",
                category="calorie_balance",
            ))

        if profile.goal == "lose_weight":
            recommendations.append(CoachRecommendation(
                type="exercise",
                title="Cardio for Weight Loss",
                description="Cardio exercise helps create the calorie deficit needed for weight loss.",
                action_items=[
                    "30 minutes of brisk walking or cycling",
                    "Try high-intensity interval training (HIIT)",
                    "Take stairs instead of elevators",
                ],
                priority="high",
                category="weight_loss",
            ))
        elif profile.goal == "build_muscle":
            recommendations.append(CoachRecommendation(
                type="exercise",
                title="Strength Training Focus",
                description="Resistance training is essential for building and maintaining muscle mass.",
                action_items=[
                    "Include compound exercises like squats and deadlifts",
                    "Progressive overload: gradually increase weights",
                    "Ensure adequate protein intake (1.6-2.2g per kg body weight)",
                ],
                priority="high",
                category="muscle_building",
            ))

        water = NutritionCalculator.calculate_water_intake(profile)
        recommendations.append(CoachRecommendation(
            type="hydration",
            title="Stay Hydrated",
            description=f"Aim for {water:.1f}L of water today for optimal health and performance.",
            action_items=[
                "Keep a water bottle at your desk",
                "Drink a glass of water before each meal",
                "Add lemon or cucumber for flavor variety",
            ],
            priority="medium",
            category="hydration",
        ))

        if len(recent_meals) < 3:
            recommendations.append(CoachRecommendation(
                type="nutrition",
                title="Meal Consistency",
                description="Regular meals help maintain stable energy levels and metabolism.",
                action_items=[
                    "Aim for 3 main meals and 1-2 healthy snacks",
                    "Don't skip breakfast - it kickstarts your metabolism",
                    "Plan your meals in advance to avoid impulsive choices",
                ],
                priority="medium",
                category="meal_timing",
            ))

        return recommendations
