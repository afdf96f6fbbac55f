"""Coach chat endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends

from nutritrack.api.deps import get_chat_repo, get_coach, get_meal_log_repo, get_profile_repo
from nutritrack.api.profiles import load_profile
from nutritrack.db.repositories import ChatRepository, MealLogRepository, ProfileRepository
from nutritrack.models.chat import ChatMessage, CoachRecommendation, CoachReply, CoachRequest, TextMessage
from nutritrack.services.coach import HISTORY_TURNS, CoachResponder


router = APIRouter(prefix="/coach", tags=["Coach"])


@router.post("/{user_id}", response_model=CoachReply)
async def ask_coach(
    user_id: str,
    request: CoachRequest,
    profiles: ProfileRepository = Depends(get_profile_repo),
    meals: MealLogRepository = Depends(get_meal_log_repo),
    chat: ChatRepository = Depends(get_chat_repo),
    coach: CoachResponder = Depends(get_coach),
):
    """Answer a message using the profile, today's meals and recent chat turns."""
    profile = load_profile(profiles, user_id)
    today = date.today()
    history = chat.history(user_id, limit=HISTORY_TURNS)

    reply = await coach.respond(request.message, profile, meals.for_range(user_id, today, today), history)

    chat.add(TextMessage(user_id=user_id, role="user", content=request.message))
    chat.add(TextMessage(user_id=user_id, role="assistant", content=reply.reply))
    return reply


@router.get("/{user_id}/history", response_model=List[ChatMessage])
async def get_history(
    user_id: str,
    limit: Optional[int] = None,
    chat: ChatRepository = Depends(get_chat_repo),
):
    return chat.history(user_id, limit=limit)


@router.get("/{user_id}/recommendations", response_model=List[CoachRecommendation])
async def get_recommendations(
    user_id: str,
    profiles: ProfileRepository = Depends(get_profile_repo),
    meals: MealLogRepository = Depends(get_meal_log_repo),
):
    profile = load_profile(profiles, user_id)
    today = date.today()
    todays_meals = meals.for_range(user_id, today, today)
    today_calories = sum(m.total_calories for m in todays_meals)
    return CoachResponder.daily_recommendations(profile, todays_meals, today_calories)
