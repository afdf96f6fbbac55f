"""Community challenges: enrollment, progress scoring, rankings and streaks."""

import logging
import random
import threading
from collections import Counter
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from nutritrack.db.repositories import ChallengeRepository
from nutritrack.errors import (
    AlreadyJoinedError,
    ChallengeCancelledError,
    ChallengeFullError,
    InactiveParticipantError,
    NotFoundError,
)
from nutritrack.models.challenge import (
    Challenge,
    ChallengeCreate,
    ChallengeGoal,
    ChallengeParticipant,
    ChallengeProgress,
    ChallengeReward,
    Leaderboard,
    LeaderboardEntry,
    UserStats,
)


logger = logging.getLogger(__name__)

_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()
_seed_lock = threading.Lock()


def _challenge_lock(challenge_id: str) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(challenge_id, threading.Lock())


POPULAR_CHALLENGES: List[Dict[str, Any]] = [
    dict(
        title="30-Day Hydration Challenge",
        description="Drink your daily water goal every day for 30 days",
        type="hydration",
        category="monthly",
        duration=30,
        goals=[ChallengeGoal(
            id="hydration_goal", type="water", target=2.5, unit="liters",
            description="Drink at least 2.5L of water daily",
        )],
        rewards=[ChallengeReward(
            id="hydration_badge", type="badge", name="Hydration Hero",
            description="Completed 30-day hydration challenge",
            requirement="Complete all 30 days",
        )],
        rules=[
            "Log your water intake daily",
            "Plain water, herbal teas count",
            "Sodas and alcohol don't count",
        ],
        difficulty="beginner",
        tags=["hydration", "health", "daily habit"],
    ),
    dict(
        title="7-Day Meal Prep Challenge",
        description="Prepare healthy meals in advance for a full week",
        type="nutrition",
        category="weekly",
        duration=7,
        goals=[ChallengeGoal(
            id="meal_prep_goal", type="custom", target=2, unit="meals",
            description="Prep at least 2 meals for the day",
        )],
        rewards=[ChallengeReward(
            id="meal_prep_badge", type="badge", name="Prep Master",
            description="Successfully meal prepped for a full week",
            requirement="Complete 7 days of meal prep",
        )],
        rules=[
            "Plan and prep at least 2 meals per day",
            "Include protein, vegetables, and complex carbs",
            "Budget tracking is optional but encouraged",
        ],
        difficulty="intermediate",
        tags=["meal prep", "nutrition", "planning"],
    ),
    dict(
        title="10,000 Steps Daily",
        description="Walk at least 10,000 steps every day for 21 days",
        type="exercise",
        category="daily",
        duration=21,
        goals=[ChallengeGoal(
            id="steps_goal", type="steps", target=10000, unit="steps",
            description="Walk 10,000 steps daily",
        )],
        rewards=[ChallengeReward(
            id="walker_badge", type="badge", name="Step Master",
            description="Walked 10,000 steps for 21 consecutive days",
            requirement="Complete 21 days",
        )],
        rules=[
            "Use any step tracking device/app",
            "Steps must be achieved in a single day",
            "Encourage fellow participants",
        ],
        difficulty="intermediate",
        tags=["walking", "cardio", "daily activity"],
    ),
]


class ChallengeEngine:
    """Challenge lifecycle and scoring.

    Every write loads the challenge, mutates it and saves it back under a
    per-challenge lock, so progress updates on one challenge are applied one
    at a time within the process.
    """

    REQUIRED_GOAL_POINTS = 10
    OPTIONAL_GOAL_POINTS = 5
    DIFFICULTY_MULTIPLIERS = {
        "beginner": 1,
        "intermediate": 1.5,
        "advanced": 2,
    }

    def __init__(
        self,
        repo: ChallengeRepository,
        today: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
    ):
        self.repo = repo
        self.today = today
        self.rng = rng or random.Random()

    # Scoring

    @classmethod
    def calculate_points(cls, goal: ChallengeGoal, difficulty: str) -> float:
        """Points for a completed goal entry."""
        base = cls.REQUIRED_GOAL_POINTS if goal.is_required else cls.OPTIONAL_GOAL_POINTS
        return base * cls.DIFFICULTY_MULTIPLIERS.get(difficulty, 1)

    @staticmethod
    def calculate_streak(progress: Iterable[ChallengeProgress]) -> int:
        """
        Consecutive days with a completed entry, counted back from the most
        recent completed day and stopping at the first gap.
        """
        dates = sorted({p.date for p in progress if p.is_completed}, reverse=True)
        if not dates:
            return 0

        streak = 1
        for previous, current in zip(dates, dates[1:]):
            if previous - current != timedelta(days=1):
                break
            streak += 1
        return streak

    @staticmethod
    def longest_streak(progress: Iterable[ChallengeProgress]) -> int:
        dates = sorted({p.date for p in progress if p.is_completed})
        longest = current = 0
        previous = None
        for day in dates:
            current = current + 1 if previous and day - previous == timedelta(days=1) else 1
            longest = max(longest, current)
            previous = day
        return longest

    @staticmethod
    def _rerank(challenge: Challenge) -> None:
        # list.sort is stable, so equal scores keep their current order
        challenge.participants.sort(key=lambda p: p.total_score, reverse=True)
        for position, participant in enumerate(challenge.participants, start=1):
            participant.ranking = position

    # Catalog

    def get(self, challenge_id: str) -> Challenge:
        challenge = self.repo.get(challenge_id)
        if challenge is None:
            raise NotFoundError(f"Challenge {challenge_id} not found")
        return challenge

    @contextmanager
    def _locked(self, challenge_id: str) -> Iterator[Challenge]:
        """Load a challenge under its lock. Unknown ids fail before any lock is created."""
        self.get(challenge_id)
        with _challenge_lock(challenge_id):
            yield self.get(challenge_id)

    def create(self, data: ChallengeCreate) -> Challenge:
        """Create a challenge running ``duration`` days from its start date."""
        challenge = Challenge(
            **data.model_dump(),
            end_date=data.start_date + timedelta(days=data.duration - 1),
        )
        self.repo.save(challenge)
        logger.info("Created challenge %s (%s)", challenge.id, challenge.title)
        return challenge

    def seed_popular_challenges(self) -> List[Challenge]:
        """Install the built-in challenges, each starting within the next week."""
        seeded = []
        for template in POPULAR_CHALLENGES:
            start = self.today() + timedelta(days=self.rng.randint(0, 6))
            seeded.append(self.create(ChallengeCreate(**template, start_date=start)))
        return seeded

    def list_challenges(
        self,
        type: Optional[str] = None,
        difficulty: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Challenge]:
        """Challenges matching every given filter, latest start first."""
        with _seed_lock:
            challenges = self.repo.all()
            if not challenges:
                challenges = self.seed_popular_challenges()

        today = self.today()
        if type is not None:
            challenges = [c for c in challenges if c.type == type]
        if difficulty is not None:
            challenges = [c for c in challenges if c.difficulty == difficulty]
        if status is not None:
            challenges = [c for c in challenges if c.status_on(today) == status]
        if category is not None:
            challenges = [c for c in challenges if c.category == category]

        return sorted(challenges, key=lambda c: c.start_date, reverse=True)

    def cancel(self, challenge_id: str) -> Challenge:
        with self._locked(challenge_id) as challenge:
            challenge.cancelled = True
            self.repo.save(challenge)
        logger.info("Cancelled challenge %s", challenge_id)
        return challenge

    # Participation

    def _participant(self, challenge: Challenge, user_id: str) -> ChallengeParticipant:
        participant = challenge.find_participant(user_id)
        if participant is None:
            raise NotFoundError(f"User {user_id} is not a participant of this challenge")
        return participant

    def join(self, challenge_id: str, user_id: str, username: str) -> ChallengeParticipant:
        """Add a user with a provisional rank at the bottom of the table."""
        with self._locked(challenge_id) as challenge:
            if challenge.cancelled:
                raise ChallengeCancelledError(challenge_id)
            if (
                challenge.max_participants is not None
                and len(challenge.participants) >= challenge.max_participants
            ):
                raise ChallengeFullError(challenge_id)
            if challenge.find_participant(user_id) is not None:
                raise AlreadyJoinedError(challenge_id, user_id)

            participant = ChallengeParticipant(
                user_id=user_id,
                username=username,
                ranking=len(challenge.participants) + 1,
            )
            challenge.participants.append(participant)
            self.repo.save(challenge)

        logger.info("%s joined challenge %s", user_id, challenge_id)
        return participant

    def leave(self, challenge_id: str, user_id: str) -> ChallengeParticipant:
        """Mark a participant as dropped out. Their entries and score stay on the board."""
        with self._locked(challenge_id) as challenge:
            participant = self._participant(challenge, user_id)
            participant.status = "dropped_out"
            self.repo.save(challenge)
        return participant

    def update_progress(
        self,
        challenge_id: str,
        user_id: str,
        goal_id: str,
        value: float,
    ) -> ChallengeProgress:
        """
        Record today's value for one goal.

        A second submission for the same goal on the same day replaces the
        first. The participant's score is re-summed and every participant in
        the challenge is re-ranked.
        """
        with self._locked(challenge_id) as challenge:
            if challenge.cancelled:
                raise ChallengeCancelledError(challenge_id)
            participant = self._participant(challenge, user_id)
            if participant.status == "dropped_out":
                raise InactiveParticipantError(user_id, participant.status)
            goal = challenge.find_goal(goal_id)
            if goal is None:
                raise NotFoundError(f"Goal {goal_id} not found")

            is_completed = value >= goal.target
            entry = ChallengeProgress(
                date=self.today(),
                goal_id=goal_id,
                current_value=value,
                target_value=goal.target,
                is_completed=is_completed,
                points=self.calculate_points(goal, challenge.difficulty) if is_completed else 0,
            )

            for index, existing in enumerate(participant.progress):
                if existing.date == entry.date and existing.goal_id == goal_id:
                    participant.progress[index] = entry
                    break
            else:
                participant.progress.append(entry)

            participant.total_score = sum(p.points for p in participant.progress)
            self._check_completion(challenge, participant)
            self._rerank(challenge)
            self.repo.save(challenge)

        logger.debug(
            "Progress %s/%s for %s: %s (%s pts)",
            challenge_id, goal_id, user_id, value, entry.points,
        )
        return entry

    def _check_completion(self, challenge: Challenge, participant: ChallengeParticipant) -> None:
        completed = sum(1 for p in participant.progress if p.is_completed)
        if completed < len(challenge.goals) * challenge.duration:
            return
        participant.status = "completed"
        for reward in challenge.rewards:
            if reward.type == "badge" and reward.name not in participant.achievements:
                participant.achievements.append(reward.name)
        logger.info("%s completed challenge %s", participant.user_id, challenge.id)

    # Reporting

    def get_leaderboard(self, challenge_id: str) -> Leaderboard:
        challenge = self.get(challenge_id)
        total_goals = len(challenge.goals) * challenge.duration
        ranked = sorted(challenge.participants, key=lambda p: p.total_score, reverse=True)

        entries = [
            LeaderboardEntry(
                user_id=p.user_id,
                username=p.username,
                score=p.total_score,
                rank=position,
                completed_goals=sum(1 for entry in p.progress if entry.is_completed),
                total_goals=total_goals,
                streak=self.calculate_streak(p.progress),
                badges=list(p.achievements),
            )
            for position, p in enumerate(ranked, start=1)
        ]
        return Leaderboard(challenge_id=challenge_id, participants=entries, last_updated=datetime.now())

    def get_user_stats(self, user_id: str) -> UserStats:
        joined = [
            (challenge, challenge.find_participant(user_id))
            for challenge in self.repo.all()
            if challenge.find_participant(user_id) is not None
        ]

        badges: List[str] = []
        for _, participant in joined:
            badges.extend(b for b in participant.achievements if b not in badges)

        type_counts = Counter(challenge.type for challenge, _ in joined)
        favorite = type_counts.most_common(1)[0][0] if type_counts else "nutrition"

        return UserStats(
            total_challenges_joined=len(joined),
            total_challenges_completed=sum(1 for _, p in joined if p.status == "completed"),
            total_points=sum(p.total_score for _, p in joined),
            current_streak=max((self.calculate_streak(p.progress) for _, p in joined), default=0),
            longest_streak=max((self.longest_streak(p.progress) for _, p in joined), default=0),
            badges=badges,
            favorite_challenge_type=favorite,
        )
