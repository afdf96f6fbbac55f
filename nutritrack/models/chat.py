"""Coach chat models.

Messages are a tagged union on ``type``; each variant carries its own
typed metadata instead of an open-ended blob.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Union, Annotated
from datetime import datetime
from uuid import uuid4

from .tracking import FoodAnalysis


Role = Literal["user", "assistant"]


class _MessageBase(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)


class TextMessage(_MessageBase):
    type: Literal["text"] = "text"


class NutritionAnalysisMessage(_MessageBase):
    type: Literal["nutrition_analysis"] = "nutrition_analysis"
    metadata: FoodAnalysis


class WorkoutSuggestion(BaseModel):
    activity: str
    duration_minutes: int
    intensity: Literal["low", "moderate", "high"] = "moderate"


class WorkoutSuggestionMessage(_MessageBase):
    type: Literal["workout_suggestion"] = "workout_suggestion"
    metadata: WorkoutSuggestion


class MealPlanReference(BaseModel):
    plan_id: str
    days: int
    total_calories: float


class MealPlanMessage(_MessageBase):
    type: Literal["meal_plan"] = "meal_plan"
    metadata: MealPlanReference


ChatMessage = Annotated[
    Union[TextMessage, NutritionAnalysisMessage, WorkoutSuggestionMessage, MealPlanMessage],
    Field(discriminator="type"),
]


class CoachRequest(BaseModel):
    message: str = Field(min_length=1)


class CoachReply(BaseModel):
    reply: str
    intent: Optional[str] = None
    source: Literal["ai", "rules"]


class CoachRecommendation(BaseModel):
    type: Literal["nutrition", "exercise", "hydration", "sleep", "motivation"]
    title: str
    description: str
    action_items: List[str]
    priority: Literal["low", "medium", "high"]
    category: str
