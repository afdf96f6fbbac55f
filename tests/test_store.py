from datetime import date, datetime, timedelta
from unittest.mock import MagicMock

from nutritrack.db import MemoryStore, SupabaseStore
from nutritrack.db.repositories import (
    ChatRepository,
    FitnessCredentialRepository,
    MealLogRepository,
    ProfileRepository,
)
from nutritrack.models.chat import NutritionAnalysisMessage, TextMessage
from nutritrack.models.fitness import FitnessCredentials
from nutritrack.models.tracking import FoodAnalysis, FoodItem, MealLog


class TestMemoryStore:
    def test_documents_are_copied(self, store):
        doc = {"id": "1", "tags": ["a"]}
        store.put("things", "1", doc)
        doc["tags"].append("b")

        fetched = store.get("things", "1")
        fetched["tags"].append("c")

        assert store.get("things", "1") == {"id": "1", "tags": ["a"]}

    def test_find_and_delete(self, store):
        store.put("things", "1", {"owner": "ann", "n": 1})
        store.put("things", "2", {"owner": "ben", "n": 2})
        store.put("things", "3", {"owner": "ann", "n": 3})

        assert sorted(d["n"] for d in store.find("things", owner="ann")) == [1, 3]
        assert len(store.find("things")) == 3
        assert store.find("missing") == []

        assert store.delete("things", "1") is True
        assert store.delete("things", "1") is False
        assert store.get("things", "1") is None


class TestRepositories:
    def test_profile_round_trip(self, store, profile):
        repo = ProfileRepository(store)
        repo.save(profile)

        loaded = repo.get(profile.id)

        assert loaded == profile
        assert repo.get("nobody") is None

    def test_meal_logs_by_range_newest_first(self, store):
        repo = MealLogRepository(store)
        for day in (1, 2, 5):
            repo.save(MealLog(user_id="u1", meal_type="lunch", date=datetime(2024, 1, day, 12),
                              foods=[FoodItem(name="x", calories=100 * day)]))
        repo.save(MealLog(user_id="u2", meal_type="lunch", date=datetime(2024, 1, 2, 12)))

        logs = repo.for_range("u1", date(2024, 1, 1), date(2024, 1, 2))

        assert [m.date.day for m in logs] == [2, 1]
        assert logs[0].total_calories == 200

    def test_credentials_keyed_by_user(self, store):
        repo = FitnessCredentialRepository(store)
        repo.save(FitnessCredentials(user_id="u1", access_token="t", connected_at=datetime(2024, 1, 1)))

        assert repo.get("u1").access_token == "t"
        assert repo.delete("u1") is True

    def test_chat_history_keeps_message_variants(self, store):
        repo = ChatRepository(store)
        start = datetime(2024, 1, 1, 9)
        repo.add(TextMessage(user_id="u1", role="user", content="first", timestamp=start))
        repo.add(NutritionAnalysisMessage(
            user_id="u1", role="assistant", content="analysis", timestamp=start + timedelta(minutes=1),
            metadata=FoodAnalysis(foods=[FoodItem(name="Apple", calories=52)], total_calories=52),
        ))
        repo.add(TextMessage(user_id="u1", role="assistant", content="last", timestamp=start + timedelta(minutes=2)))
        repo.add(TextMessage(user_id="u2", role="user", content="other user"))

        history = repo.history("u1")

        assert [m.content for m in history] == ["first", "analysis", "last"]
        assert isinstance(history[1], NutritionAnalysisMessage)
        assert history[1].metadata.total_calories == 52
        assert [m.content for m in repo.history("u1", limit=2)] == ["analysis", "last"]


class TestSupabaseStore:
    def test_get_reads_data_column(self):
        client = MagicMock()
        query = client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value.data = [{"data": {"id": "1"}}]

        assert SupabaseStore(client).get("profiles", "1") == {"id": "1"}
        client.table.assert_called_with("profiles")

    def test_find_filters_with_contains(self):
        client = MagicMock()
        query = client.table.return_value.select.return_value.contains.return_value
        query.execute.return_value.data = [{"data": {"user_id": "u1"}}]

        assert SupabaseStore(client).find("meal_logs", user_id="u1") == [{"user_id": "u1"}]
        client.table.return_value.select.return_value.contains.assert_called_with("data", {"user_id": "u1"})

    def test_put_upserts(self):
        client = MagicMock()
        client.table.return_value.upsert.return_value.execute.return_value.data = [{"data": {"id": "1"}}]

        SupabaseStore(client).put("profiles", "1", {"id": "1"})

        client.table.return_value.upsert.assert_called_with({"id": "1", "data": {"id": "1"}}, on_conflict="id")
