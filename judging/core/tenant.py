"""
Tenant Context - Audition Judging Platform
judging/core/tenant.py

Resolves every request to an organization and an acting user. Both arrive as
headers set by the authentication layer in front of this service.
"""

from dataclasses import dataclass

from fastapi import Header, HTTPException, status

from judging.models.enumerations import JudgeRole


@dataclass(frozen=True)
class TenantContext:
    """Organization scope handed to every repository."""

    organization_id: str

    def __post_init__(self):
        if not self.organization_id or not self.organization_id.strip():
            raise ValueError("organization_id must be a non-empty string")


@dataclass(frozen=True)
class Actor:
    """The authenticated user performing an operation."""

    id: str
    name: str
    role: JudgeRole = JudgeRole.JUDGE

    @property
    def display_name(self) -> str:
        return self.name or self.id


def get_tenant(
    x_organization_id: str = Header(..., alias="X-Organization-Id"),
) -> TenantContext:
    """FastAPI dependency: organization scope from the request headers."""
    try:
        return TenantContext(organization_id=x_organization_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error_code": "INVALID_REQUEST",
                "message": "X-Organization-Id header must not be empty",
                "details": None,
            },
        )


def get_actor(
    x_user_id: str = Header(..., alias="X-User-Id"),
    x_user_name: str = Header(default="", alias="X-User-Name"),
    x_user_role: JudgeRole = Header(default=JudgeRole.JUDGE, alias="X-User-Role"),
) -> Actor:
    """FastAPI dependency: acting user from the request headers."""
    return Actor(id=x_user_id, name=x_user_name, role=x_user_role)
