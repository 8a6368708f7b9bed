"""
Custom Exceptions - Audition Judging Platform
judging/core/exceptions.py

Custom exception classes for repository and scoring operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class CrossTenantAccessException(RepositoryException):
    """Entity belongs to a different organization."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"Access denied: {entity_type} {entity_id} belongs to a different organization"
        )


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class ScoreAlreadySubmittedException(RepositoryException):
    """Judge already submitted a final score for the candidate."""

    def __init__(self, candidate_id: str, judge_id: str):
        self.candidate_id = candidate_id
        self.judge_id = judge_id
        super().__init__(
            "You have already submitted scores for this candidate. Use unsubmit to make changes."
        )


class InvalidStatusTransitionException(RepositoryException):
    """Audition event status change not allowed by the lifecycle."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move audition event from '{current}' to '{requested}'")


class ScoringClosedException(RepositoryException):
    """Scores can only be written while the audition event is active."""

    def __init__(self, event_id: str, status: str):
        self.event_id = event_id
        self.status = status
        super().__init__(f"Scoring is closed for audition event {event_id} (status: {status})")


class TransferFailedException(RepositoryException):
    """Deliberation transfer aborted under the fail-fast policy."""

    def __init__(self, event_id: str, candidate_id: str, cause: Exception):
        self.event_id = event_id
        self.candidate_id = candidate_id
        self.cause = cause
        super().__init__(
            f"Deliberation transfer for event {event_id} failed on candidate {candidate_id}: {cause}"
        )
