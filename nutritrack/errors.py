"""Exception types shared by the NutriTrack services."""


class NutriTrackError(Exception):
    """Base class for all NutriTrack errors."""


class NotFoundError(NutriTrackError):
    """A referenced record (profile, plan, challenge, goal, participant) does not exist."""


class InvalidInputError(NutriTrackError):
    """An argument is outside the range an operation accepts."""


class BusinessRuleError(NutriTrackError):
    """The request is well-formed but breaks a rule of the domain."""


class ChallengeFullError(BusinessRuleError):
    def __init__(self, challenge_id: str):
        super().__init__("Challenge is full")
        self.challenge_id = challenge_id


class AlreadyJoinedError(BusinessRuleError):
    def __init__(self, challenge_id: str, user_id: str):
        super().__init__("Already joined this challenge")
        self.challenge_id = challenge_id
        self.user_id = user_id


class InactiveParticipantError(BusinessRuleError):
    def __init__(self, user_id: str, status: str):
        super().__init__(f"Participant is {status} and can no longer log progress")
        self.user_id = user_id
        self.status = status


class ChallengeCancelledError(BusinessRuleError):
    def __init__(self, challenge_id: str):
        super().__init__("Challenge has been cancelled")
        self.challenge_id = challenge_id


class ExternalServiceError(NutriTrackError):
    """The AI or fitness service failed, timed out, or returned unusable data."""
