"""
Core Package - Audition Judging Platform
judging/core/__init__.py

Core infrastructure: tenant context, dependencies, exceptions.
"""

from judging.core.exceptions import (
    CrossTenantAccessException,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    InvalidStatusTransitionException,
    RepositoryException,
    ScoreAlreadySubmittedException,
    ScoringClosedException,
    TransferFailedException,
)
from judging.core.tenant import Actor, TenantContext

__all__ = [
    # Tenant
    "Actor",
    "TenantContext",
    # Exceptions
    "CrossTenantAccessException",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "InvalidStatusTransitionException",
    "RepositoryException",
    "ScoreAlreadySubmittedException",
    "ScoringClosedException",
    "TransferFailedException",
]
