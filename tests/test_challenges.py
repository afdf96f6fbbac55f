from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from nutritrack.errors import (
    AlreadyJoinedError,
    ChallengeCancelledError,
    ChallengeFullError,
    InactiveParticipantError,
    NotFoundError,
)
from nutritrack.models.challenge import ChallengeGoal, ChallengeProgress
from nutritrack.services import challenges as challenges_module
from nutritrack.services.challenges import ChallengeEngine


def entry(day, completed=True):
    return ChallengeProgress(
        date=day, goal_id="g", current_value=1, target_value=1, is_completed=completed, points=10,
    )


class TestPoints:
    @pytest.mark.parametrize("required,difficulty,points", [
        (True, "beginner", 10),
        (True, "intermediate", 15),
        (True, "advanced", 20),
        (False, "beginner", 5),
        (False, "intermediate", 7.5),
        (False, "advanced", 10),
    ])
    def test_formula(self, required, difficulty, points):
        goal = ChallengeGoal(id="g", target=1, unit="x", is_required=required)
        assert ChallengeEngine.calculate_points(goal, difficulty) == points

    def test_incomplete_entry_scores_zero(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        progress = engine.update_progress(challenge.id, "u1", "water", 1.0)
        assert progress.is_completed is False
        assert progress.points == 0
        assert progress.target_value == 2.5


class TestJoin:
    def test_provisional_rank(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        second = engine.join(challenge.id, "u2", "Ben")
        assert second.ranking == 2
        assert second.total_score == 0
        assert second.status == "active"

    def test_full_challenge_rejected_without_mutation(self, engine, challenge_data):
        challenge = engine.create(challenge_data.model_copy(update={"max_participants": 2}))
        engine.join(challenge.id, "u1", "Ann")
        engine.join(challenge.id, "u2", "Ben")

        with pytest.raises(ChallengeFullError, match="Challenge is full"):
            engine.join(challenge.id, "u3", "Cat")

        assert [p.user_id for p in engine.get(challenge.id).participants] == ["u1", "u2"]

    def test_already_joined(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        with pytest.raises(AlreadyJoinedError):
            engine.join(challenge.id, "u1", "Ann")

    def test_unknown_challenge(self, engine):
        with pytest.raises(NotFoundError):
            engine.join("nope", "u1", "Ann")

    def test_cancelled_challenge(self, engine, challenge):
        engine.cancel(challenge.id)
        with pytest.raises(ChallengeCancelledError):
            engine.join(challenge.id, "u1", "Ann")
        assert engine.get(challenge.id).status == "cancelled"


class TestProgress:
    def test_same_day_same_goal_replaces_entry(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")

        engine.update_progress(challenge.id, "u1", "water", 3.0)
        engine.update_progress(challenge.id, "u1", "water", 3.0)

        participant = engine.get(challenge.id).find_participant("u1")
        assert len(participant.progress) == 1
        assert participant.total_score == 15

    def test_score_sums_goals(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        engine.update_progress(challenge.id, "u1", "water", 3.0)
        engine.update_progress(challenge.id, "u1", "steps", 9000)

        participant = engine.get(challenge.id).find_participant("u1")
        assert participant.total_score == 15 + 7.5

    def test_global_rerank(self, engine, challenge):
        for user in ("u1", "u2", "u3"):
            engine.join(challenge.id, user, user.upper())

        engine.update_progress(challenge.id, "u3", "water", 3.0)
        engine.update_progress(challenge.id, "u2", "steps", 9000)

        participants = engine.get(challenge.id).participants
        assert [p.user_id for p in participants] == ["u3", "u2", "u1"]
        assert [p.ranking for p in participants] == [1, 2, 3]
        scores = [p.total_score for p in participants]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_existing_order(self, engine, challenge):
        for user in ("u1", "u2", "u3"):
            engine.join(challenge.id, user, user.upper())

        engine.update_progress(challenge.id, "u2", "water", 1.0)

        participants = engine.get(challenge.id).participants
        assert [p.user_id for p in participants] == ["u1", "u2", "u3"]
        assert [p.ranking for p in participants] == [1, 2, 3]

    def test_missing_participant_or_goal(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        with pytest.raises(NotFoundError):
            engine.update_progress(challenge.id, "ghost", "water", 3.0)
        with pytest.raises(NotFoundError):
            engine.update_progress(challenge.id, "u1", "sleep", 8)

    def test_dropped_out_cannot_log(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        engine.leave(challenge.id, "u1")
        with pytest.raises(InactiveParticipantError):
            engine.update_progress(challenge.id, "u1", "water", 3.0)

    def test_completion_awards_badges(self, challenge_repo, challenge_data):
        days = iter([date(2024, 1, 1), date(2024, 1, 2)])
        current = {"day": None}

        def today():
            return current["day"]

        engine = ChallengeEngine(challenge_repo, today=today)
        challenge = engine.create(challenge_data.model_copy(update={
            "duration": 2, "goals": challenge_data.goals[:1],
        }))
        engine.join(challenge.id, "u1", "Ann")

        for day in days:
            current["day"] = day
            engine.update_progress(challenge.id, "u1", "water", 3.0)

        participant = engine.get(challenge.id).find_participant("u1")
        assert participant.status == "completed"
        assert participant.achievements == ["Hydration Hero"]


class TestStreak:
    def test_consecutive_days_until_gap(self):
        progress = [
            entry(date(2024, 1, 3)),
            entry(date(2024, 1, 2)),
            entry(date(2024, 1, 1)),
            entry(date(2023, 12, 30)),
        ]
        assert ChallengeEngine.calculate_streak(progress) == 3

    def test_incomplete_days_break_streak(self):
        progress = [entry(date(2024, 1, 3)), entry(date(2024, 1, 2), completed=False), entry(date(2024, 1, 1))]
        assert ChallengeEngine.calculate_streak(progress) == 1

    def test_no_progress(self):
        assert ChallengeEngine.calculate_streak([]) == 0

    def test_longest_streak(self):
        progress = [entry(date(2024, 1, d)) for d in (1, 2, 5, 6, 7, 9)]
        assert ChallengeEngine.longest_streak(progress) == 3


class TestLeaderboard:
    def test_entries(self, engine, challenge):
        engine.join(challenge.id, "u1", "Ann")
        engine.join(challenge.id, "u2", "Ben")
        engine.update_progress(challenge.id, "u2", "water", 3.0)

        board = engine.get_leaderboard(challenge.id)

        top, second = board.participants
        assert (top.user_id, top.rank, top.score) == ("u2", 1, 15)
        assert top.completed_goals == 1
        assert top.total_goals == 2 * 7
        assert top.streak == 1
        assert (second.user_id, second.rank, second.streak) == ("u1", 2, 0)


class TestCatalog:
    def test_seeds_popular_challenges_when_empty(self, engine):
        challenges = engine.list_challenges()
        assert len(challenges) == 3
        starts = [c.start_date for c in challenges]
        assert starts == sorted(starts, reverse=True)
        for c in challenges:
            assert 0 <= (c.start_date - date(2024, 1, 3)).days <= 6

    def test_filters(self, engine):
        engine.list_challenges()
        assert [c.title for c in engine.list_challenges(type="exercise")] == ["10,000 Steps Daily"]
        assert len(engine.list_challenges(difficulty="intermediate")) == 2
        assert engine.list_challenges(category="yearly") == []

    def test_create_sets_end_date(self, engine, challenge):
        assert challenge.end_date == date(2024, 1, 7)
        assert challenge.status_on(date(2023, 12, 31)) == "upcoming"
        assert challenge.status_on(date(2024, 1, 7)) == "active"
        assert challenge.status_on(date(2024, 1, 8)) == "completed"


def test_user_stats(engine, challenge, challenge_data):
    other = engine.create(challenge_data.model_copy(update={"type": "exercise", "title": "Other"}))
    third = engine.create(challenge_data.model_copy(update={"type": "exercise", "title": "Third"}))
    for c in (challenge, other, third):
        engine.join(c.id, "u1", "Ann")
    engine.update_progress(challenge.id, "u1", "water", 3.0)
    engine.update_progress(other.id, "u1", "steps", 9000)

    stats = engine.get_user_stats("u1")

    assert stats.total_challenges_joined == 3
    assert stats.total_challenges_completed == 0
    assert stats.total_points == 22.5
    assert stats.current_streak == 1
    assert stats.favorite_challenge_type == "exercise"


def test_user_stats_for_newcomer(engine):
    stats = engine.get_user_stats("nobody")
    assert stats.total_challenges_joined == 0
    assert stats.favorite_challenge_type == "nutrition"


class TestCompletedParticipant:
    def test_can_correct_todays_entry(self, engine, challenge_data):
        challenge = engine.create(challenge_data.model_copy(update={
            "duration": 1, "goals": challenge_data.goals[:1],
        }))
        engine.join(challenge.id, "u1", "Ann")

        engine.update_progress(challenge.id, "u1", "water", 3.0)
        assert engine.get(challenge.id).find_participant("u1").status == "completed"

        corrected = engine.update_progress(challenge.id, "u1", "water", 4.0)

        participant = engine.get(challenge.id).find_participant("u1")
        assert corrected.current_value == 4.0
        assert len(participant.progress) == 1
        assert participant.total_score == 15
        assert participant.achievements == ["Hydration Hero"]


class TestLocking:
    def test_unknown_challenge_leaves_no_lock(self, engine):
        with pytest.raises(NotFoundError):
            engine.join("missing-challenge", "u1", "Ann")
        with pytest.raises(NotFoundError):
            engine.update_progress("missing-challenge", "u1", "water", 1)

        assert "missing-challenge" not in challenges_module._locks

    def test_concurrent_first_listing_seeds_once(self, engine, challenge_repo):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: engine.list_challenges(), range(8)))

        assert len(challenge_repo.all()) == 3
        assert all(len(r) == 3 for r in results)
