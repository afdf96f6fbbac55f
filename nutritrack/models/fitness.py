"""Step data models for the fitness integration."""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime


class FitnessCredentials(BaseModel):
    """Stored access token for the step-data service."""

    user_id: str
    access_token: str
    connected_at: datetime


class ConnectRequest(BaseModel):
    access_token: str


class StepData(BaseModel):
    date: date
    steps: int


class StepHistory(BaseModel):
    user_id: str
    start: date
    end: date
    data: List[StepData]
    total_steps: int
    average_steps: int
    calories_burned: int


class TodaySteps(BaseModel):
    date: date
    steps: int
    calories_burned: int
    distance_km: float
    timestamp: Optional[datetime] = None
