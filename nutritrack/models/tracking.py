"""Tracking models for food analysis and meal logs."""

import base64
import binascii

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime
from uuid import uuid4


MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class FoodItem(BaseModel):
    """Individual food item with nutritional info."""

    name: str
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    quantity: str = "1 serving"


class FoodAnalysis(BaseModel):
    """Nutrition breakdown of a free-text food description."""

    foods: List[FoodItem] = []
    total_calories: float = 0
    analysis: str = ""
    source: Literal["ai", "local"] = "local"


class FoodAnalysisRequest(BaseModel):
    """A text description, a base64 photo (plain or ``data:`` URL), or both."""

    description: str = ""
    image_base64: Optional[str] = None
    image_mime_type: str = "image/jpeg"

    @model_validator(mode="after")
    def check_image(self) -> "FoodAnalysisRequest":
        if self.image_base64:
            if self.image_base64.startswith("data:"):
                header, _, data = self.image_base64.partition(",")
                self.image_mime_type = header[len("data:"):].split(";")[0] or self.image_mime_type
                self.image_base64 = data
            try:
                base64.b64decode(self.image_base64, validate=True)
            except binascii.Error as e:
                raise ValueError(f"image_base64 is not valid base64: {e}")
        elif not self.description.strip():
            raise ValueError("Provide a description or an image")
        return self

    def image_bytes(self) -> Optional[bytes]:
        if not self.image_base64:
            return None
        return base64.b64decode(self.image_base64)


class MealLogCreate(BaseModel):
    """Data for logging a meal."""

    user_id: str
    foods: List[FoodItem]
    meal_type: MealType
    date: Optional[datetime] = None
    image_url: Optional[str] = None
    analysis: Optional[str] = None


class MealLog(BaseModel):
    """Meal log entry. Totals are derived from its foods."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    user_id: str
    foods: List[FoodItem] = []
    meal_type: MealType
    date: datetime = Field(default_factory=datetime.now)
    image_url: Optional[str] = None
    analysis: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("date")
    @classmethod
    def to_local_time(cls, value: datetime) -> datetime:
        """Store every log date as naive local time so logs stay comparable."""
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @computed_field
    @property
    def total_calories(self) -> float:
        return sum(food.calories for food in self.foods)

    @computed_field
    @property
    def total_protein(self) -> float:
        return sum(food.protein for food in self.foods)

    @computed_field
    @property
    def total_carbs(self) -> float:
        return sum(food.carbs for food in self.foods)

    @computed_field
    @property
    def total_fat(self) -> float:
        return sum(food.fat for food in self.foods)

    class Config:
        from_attributes = True


class DailyTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    meals_logged: int = 0


class WeeklyStats(BaseModel):
    total_meals: int
    avg_daily_calories: int
    total_calories: float
    days_logged: int
