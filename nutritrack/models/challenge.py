"""Community challenge models."""

from pydantic import BaseModel, Field, computed_field
from typing import Optional, List, Literal
from datetime import date, datetime
from uuid import uuid4


ChallengeType = Literal["nutrition", "exercise", "weight_loss", "hydration", "meditation", "custom"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
ChallengeStatus = Literal["upcoming", "active", "completed", "cancelled"]
ParticipantStatus = Literal["active", "completed", "dropped_out"]


class ChallengeGoal(BaseModel):
    id: str
    type: Literal["calories", "steps", "water", "workouts", "weight", "custom"] = "custom"
    target: float
    unit: str
    description: str = ""
    is_required: bool = True


class ChallengeReward(BaseModel):
    id: str
    type: Literal["badge", "points", "discount", "feature_unlock"] = "badge"
    name: str
    description: str = ""
    requirement: str = ""
    value: Optional[float] = None


class ChallengeProgress(BaseModel):
    """One goal entry for one day. ``target_value`` is copied from the goal when logged."""

    date: date
    goal_id: str
    current_value: float
    target_value: float
    is_completed: bool
    points: float


class ChallengeParticipant(BaseModel):
    user_id: str
    username: str
    joined_at: datetime = Field(default_factory=datetime.now)
    progress: List[ChallengeProgress] = []
    total_score: float = 0
    ranking: int = 0
    status: ParticipantStatus = "active"
    achievements: List[str] = []


class ChallengeCreate(BaseModel):
    """Data for creating a challenge."""

    title: str
    description: str = ""
    type: ChallengeType = "custom"
    category: Literal["daily", "weekly", "monthly"] = "daily"
    duration: int = Field(ge=1)
    start_date: date
    goals: List[ChallengeGoal] = Field(min_length=1)
    rewards: List[ChallengeReward] = []
    rules: List[str] = []
    is_public: bool = True
    created_by: str = "system"
    max_participants: Optional[int] = Field(None, ge=1)
    difficulty: Difficulty = "beginner"
    tags: List[str] = []


class Challenge(ChallengeCreate):
    """A challenge with its participants.

    Status is derived from the dates and the cancellation flag; nothing
    writes it directly.
    """

    id: str = Field(default_factory=lambda: f"challenge_{uuid4().hex}")
    end_date: date
    participants: List[ChallengeParticipant] = []
    cancelled: bool = False

    def status_on(self, day: date) -> ChallengeStatus:
        if self.cancelled:
            return "cancelled"
        if day < self.start_date:
            return "upcoming"
        if day <= self.end_date:
            return "active"
        return "completed"

    @computed_field
    @property
    def status(self) -> ChallengeStatus:
        return self.status_on(date.today())

    def find_participant(self, user_id: str) -> Optional[ChallengeParticipant]:
        return next((p for p in self.participants if p.user_id == user_id), None)

    def find_goal(self, goal_id: str) -> Optional[ChallengeGoal]:
        return next((g for g in self.goals if g.id == goal_id), None)

    class Config:
        from_attributes = True


class JoinRequest(BaseModel):
    user_id: str
    username: str


class ProgressRequest(BaseModel):
    user_id: str
    goal_id: str
    value: float


class LeaveRequest(BaseModel):
    user_id: str


class LeaderboardEntry(BaseModel):
    user_id: str
    username: str
    score: float
    rank: int
    completed_goals: int
    total_goals: int
    streak: int
    badges: List[str] = []


class Leaderboard(BaseModel):
    challenge_id: str
    participants: List[LeaderboardEntry]
    last_updated: datetime


class UserStats(BaseModel):
    total_challenges_joined: int
    total_challenges_completed: int
    total_points: float
    current_streak: int
    longest_streak: int
    badges: List[str] = []
    favorite_challenge_type: str
