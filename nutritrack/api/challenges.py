"""Community challenge endpoints.

Handlers are plain functions so FastAPI runs them in its threadpool; the
engine serializes writes per challenge with a lock.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from nutritrack.api.deps import get_challenge_engine
from nutritrack.api.errors import http_error
from nutritrack.errors import NutriTrackError
from nutritrack.models.challenge import (
    Challenge,
    ChallengeCreate,
    ChallengeParticipant,
    ChallengeProgress,
    JoinRequest,
    Leaderboard,
    LeaveRequest,
    ProgressRequest,
    UserStats,
)
from nutritrack.services.challenges import ChallengeEngine


router = APIRouter(prefix="/challenges", tags=["Challenges"])


@router.get("", response_model=List[Challenge])
def list_challenges(
    type: Optional[str] = None,
    difficulty: Optional[str] = None,
    status: Optional[str] = None,
    category: Optional[str] = None,
    engine: ChallengeEngine = Depends(get_challenge_engine),
):
    return engine.list_challenges(type=type, difficulty=difficulty, status=status, category=category)


@router.post("", response_model=Challenge, status_code=201)
def create_challenge(data: ChallengeCreate, engine: ChallengeEngine = Depends(get_challenge_engine)):
    return engine.create(data)


@router.get("/users/{user_id}/stats", response_model=UserStats)
def get_user_stats(user_id: str, engine: ChallengeEngine = Depends(get_challenge_engine)):
    return engine.get_user_stats(user_id)


@router.get("/{challenge_id}", response_model=Challenge)
def get_challenge(challenge_id: str, engine: ChallengeEngine = Depends(get_challenge_engine)):
    try:
        return engine.get(challenge_id)
    except NutriTrackError as e:
        raise http_error(e)


@router.post("/{challenge_id}/join", response_model=ChallengeParticipant)
def join_challenge(
    challenge_id: str,
    request: JoinRequest,
    engine: ChallengeEngine = Depends(get_challenge_engine),
):
    try:
        return engine.join(challenge_id, request.user_id, request.username)
    except NutriTrackError as e:
        raise http_error(e)


@router.post("/{challenge_id}/progress", response_model=ChallengeProgress)
def log_progress(
    challenge_id: str,
    request: ProgressRequest,
    engine: ChallengeEngine = Depends(get_challenge_engine),
):
    """Record today's value for a goal; resubmitting the same goal replaces the entry."""
    try:
        return engine.update_progress(challenge_id, request.user_id, request.goal_id, request.value)
    except NutriTrackError as e:
        raise http_error(e)


@router.post("/{challenge_id}/leave", response_model=ChallengeParticipant)
def leave_challenge(
    challenge_id: str,
    request: LeaveRequest,
    engine: ChallengeEngine = Depends(get_challenge_engine),
):
    try:
        return engine.leave(challenge_id, request.user_id)
    except NutriTrackError as e:
        raise http_error(e)


@router.post("/{challenge_id}/cancel", response_model=Challenge)
def cancel_challenge(challenge_id: str, engine: ChallengeEngine = Depends(get_challenge_engine)):
    try:
        return engine.cancel(challenge_id)
    except NutriTrackError as e:
        raise http_error(e)


@router.get("/{challenge_id}/leaderboard", response_model=Leaderboard)
def get_leaderboard(challenge_id: str, engine: ChallengeEngine = Depends(get_challenge_engine)):
    try:
        return engine.get_leaderboard(challenge_id)
    except NutriTrackError as e:
        raise http_error(e)
