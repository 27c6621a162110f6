"""
Custom exceptions for the points status engine with user-friendly error messages.
"""

class PointsException(Exception):
    """Base exception for points-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class ParticipantNotFoundError(PointsException):
    """Raised when a participant is absent from the population snapshot."""
    def __init__(self, participant_id: str):
        super().__init__(
            f"Participant '{participant_id}' not found in population",
            "❌ You haven't been registered for this event yet!"
        )
        self.participant_id = participant_id

# Short alias used by callers that only care about the lookup failing
NotFoundError = ParticipantNotFoundError

class TierConfigurationError(PointsException):
    """Raised at startup when the level tier table is malformed."""
    def __init__(self, reason: str):
        super().__init__(
            f"Invalid level tier table: {reason}",
            "❌ Level configuration is broken. Please contact an administrator."
        )
        self.reason = reason

class SnapshotFormatError(PointsException):
    """Raised when a points snapshot cannot be read or parsed."""
    def __init__(self, source: str, details: str = None):
        super().__init__(
            f"Invalid points snapshot {source}: {details}",
            "❌ Points data is unavailable right now. Please try again later."
        )
        self.source = source
        self.details = details
