"""Typed repositories over a DocumentStore."""

from datetime import date
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from nutritrack.db.store import DocumentStore
from nutritrack.models.challenge import Challenge
from nutritrack.models.chat import ChatMessage
from nutritrack.models.fitness import FitnessCredentials
from nutritrack.models.meal import MealPlan
from nutritrack.models.profile import NutritionProfile
from nutritrack.models.tracking import MealLog


ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Generic[ModelT]):
    """Stores one pydantic model type in one collection, keyed by ``id``."""

    collection: str
    model: Type[ModelT]
    key_field = "id"

    def __init__(self, store: DocumentStore):
        self.store = store

    def get(self, doc_id: str) -> Optional[ModelT]:
        document = self.store.get(self.collection, doc_id)
        if document is None:
            return None
        return self.model.model_validate(document)

    def save(self, item: ModelT) -> ModelT:
        document = item.model_dump(mode="json")
        self.store.put(self.collection, getattr(item, self.key_field), document)
        return item

    def delete(self, doc_id: str) -> bool:
        return self.store.delete(self.collection, doc_id)

    def find(self, **equals) -> List[ModelT]:
        return [self.model.model_validate(d) for d in self.store.find(self.collection, **equals)]


class ProfileRepository(Repository[NutritionProfile]):
    collection = "profiles"
    model = NutritionProfile


class MealPlanRepository(Repository[MealPlan]):
    collection = "meal_plans"
    model = MealPlan

    def for_user(self, user_id: str) -> List[MealPlan]:
        """Saved plans, newest first."""
        plans = self.find(user_id=user_id)
        return sorted(plans, key=lambda p: p.created_at, reverse=True)


class MealLogRepository(Repository[MealLog]):
    collection = "meal_logs"
    model = MealLog

    def for_user(self, user_id: str) -> List[MealLog]:
        """All meal logs, newest first."""
        logs = self.find(user_id=user_id)
        return sorted(logs, key=lambda m: m.date, reverse=True)

    def for_range(self, user_id: str, start: date, end: date) -> List[MealLog]:
        """Meal logs whose date falls within ``start``..``end`` inclusive."""
        return [m for m in self.for_user(user_id) if start <= m.date.date() <= end]


class ChallengeRepository(Repository[Challenge]):
    collection = "challenges"
    model = Challenge

    def all(self) -> List[Challenge]:
        return self.find()


class FitnessCredentialRepository(Repository[FitnessCredentials]):
    collection = "fitness_credentials"
    model = FitnessCredentials
    key_field = "user_id"


class ChatRepository:
    """Coach chat history. Messages are a tagged union so they go through a TypeAdapter."""

    collection = "chat_messages"

    def __init__(self, store: DocumentStore):
        self.store = store
        self.adapter = TypeAdapter(ChatMessage)

    def add(self, message) -> None:
        self.store.put(self.collection, message.id, self.adapter.dump_python(message, mode="json"))

    def history(self, user_id: str, limit: Optional[int] = None) -> list:
        """Messages for a user in chronological order, optionally only the last ``limit``."""
        messages = [
            self.adapter.validate_python(d)
            for d in self.store.find(self.collection, user_id=user_id)
        ]
        messages.sort(key=lambda m: m.timestamp)
        if limit is not None:
            messages = messages[-limit:]
        return messages
