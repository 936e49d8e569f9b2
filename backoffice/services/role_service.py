"""
Role & Profile Service

Role assignment administration and profile edits, guarded by the
user_roles and profiles policies.
"""

import logging
from typing import List

from django.contrib.auth import get_user_model

from .. import policies
from ..models import Profile, UserRole

logger = logging.getLogger(__name__)


class RoleService:
    """Service for role assignments."""

    @staticmethod
    def list_assignments(actor):
        return policies.scope(actor, UserRole).select_related('user').order_by('created_at')

    @staticmethod
    def roles_for(actor, user) -> List[str]:
        return list(
            policies.scope(actor, UserRole)
            .filter(user_id=user.pk)
            .values_list('role', flat=True)
        )

    @staticmethod
    def assign_role(actor, user, role: str) -> UserRole:
        if role not in dict(UserRole.ROLE_CHOICES):
            raise ValueError(f"Invalid role: {role}")
        assignment = UserRole(user=user, role=role)
        policies.check(actor, policies.INSERT, assignment)

        existing = UserRole.objects.filter(user=user, role=role).first()
        if existing:
            return existing
        assignment.save()
        logger.info("Role %s granted to user %s by %s", role, user.pk, getattr(actor, 'pk', None))
        return assignment

    @staticmethod
    def update_assignment(actor, assignment: UserRole, role: str) -> UserRole:
        policies.check(actor, policies.UPDATE, assignment)
        if role not in dict(UserRole.ROLE_CHOICES):
            raise ValueError(f"Invalid role: {role}")
        if UserRole.objects.filter(user_id=assignment.user_id, role=role).exclude(pk=assignment.pk).exists():
            raise ValueError(f"User already has role {role}")
        assignment.role = role
        assignment.save(update_fields=['role'])
        return assignment

    @staticmethod
    def revoke_role(actor, assignment: UserRole) -> None:
        policies.check(actor, policies.DELETE, assignment)
        logger.info(
            "Role %s revoked from user %s by %s",
            assignment.role, assignment.user_id, getattr(actor, 'pk', None),
        )
        assignment.delete()

    @staticmethod
    def find_user(identifier):
        """Look up an identity by username or email."""
        User = get_user_model()
        user = User.objects.filter(username=identifier).first()
        if user is None:
            user = User.objects.filter(email__iexact=identifier).first()
        if user is None:
            raise ValueError(f"User not found: {identifier}")
        return user


class ProfileService:
    """Service for the caller's own profile."""

    @staticmethod
    def get_profile(actor) -> Profile:
        return policies.scope(actor, Profile).get(user_id=actor.pk)

    @staticmethod
    def update_profile(actor, profile: Profile, **data) -> Profile:
        policies.check(actor, policies.UPDATE, profile)
        for field in ('full_name', 'avatar_url'):
            if field in data:
                setattr(profile, field, data[field] or None)
        profile.save()
        return profile
