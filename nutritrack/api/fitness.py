"""Step data endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from nutritrack.api.deps import get_fitness_repo, get_step_client
from nutritrack.api.errors import http_error
from nutritrack.db.repositories import FitnessCredentialRepository
from nutritrack.errors import ExternalServiceError
from nutritrack.models.fitness import ConnectRequest, FitnessCredentials, StepHistory, TodaySteps
from nutritrack.services.fitness import StepDataClient


router = APIRouter(prefix="/fitness", tags=["Fitness"])


def load_token(repo: FitnessCredentialRepository, user_id: str) -> str:
    credentials = repo.get(user_id)
    if not credentials:
        raise HTTPException(status_code=404, detail="Step data not connected")
    return credentials.access_token


@router.post("/{user_id}/connect", response_model=FitnessCredentials)
async def connect(
    user_id: str,
    request: ConnectRequest,
    repo: FitnessCredentialRepository = Depends(get_fitness_repo),
):
    credentials = FitnessCredentials(
        user_id=user_id,
        access_token=request.access_token,
        connected_at=datetime.now(),
    )
    return repo.save(credentials)


@router.post("/{user_id}/disconnect")
async def disconnect(user_id: str, repo: FitnessCredentialRepository = Depends(get_fitness_repo)):
    """Forget the stored token."""
    return {"success": True, "was_connected": repo.delete(user_id)}


@router.get("/{user_id}/steps", response_model=StepHistory)
async def get_step_history(
    user_id: str,
    days: int = 7,
    repo: FitnessCredentialRepository = Depends(get_fitness_repo),
    client: StepDataClient = Depends(get_step_client),
):
    token = load_token(repo, user_id)
    try:
        return await client.get_step_history(user_id, token, days=days)
    except ExternalServiceError as e:
        raise http_error(e)


@router.get("/{user_id}/steps/today", response_model=TodaySteps)
async def get_today_steps(
    user_id: str,
    repo: FitnessCredentialRepository = Depends(get_fitness_repo),
    client: StepDataClient = Depends(get_step_client),
):
    token = load_token(repo, user_id)
    try:
        return await client.get_today_steps(token)
    except ExternalServiceError as e:
        raise http_error(e)
