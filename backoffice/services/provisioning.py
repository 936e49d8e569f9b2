"""
Identity Provisioning

Creates the profile and the role assignment of a new identity.
"""

import logging

from django.conf import settings
from django.db import connection, transaction

from ..models import Profile, UserRole

logger = logging.getLogger(__name__)


def _lock_role_assignments():
    """Serialize concurrent provisioning so only one identity can bootstrap as admin."""
    if connection.vendor == 'postgresql':
        with connection.cursor() as cursor:
            cursor.execute('LOCK TABLE user_roles IN SHARE ROW EXCLUSIVE MODE')


def role_for_new_identity():
    """
    Role for a freshly created identity.

    ``admin`` when no role has been assigned to anybody yet, ``staff``
    otherwise. Called with user_roles locked, so the check and the insert
    that follows it cannot interleave with another provisioning.
    With BACKOFFICE_FIRST_USER_IS_ADMIN disabled everybody starts as staff
    and admins are seeded with the ``grant_role`` command.
    """
    if not getattr(settings, 'BACKOFFICE_FIRST_USER_IS_ADMIN', True):
        return UserRole.ROLE_STAFF

    if UserRole.objects.exists():
        return UserRole.ROLE_STAFF
    return UserRole.ROLE_ADMIN


@transaction.atomic
def provision_identity(user, full_name=None):
    """
    Insert the profile and the single role assignment for ``user``.

    Runs once per identity, from the post_save receiver.
    Returns (profile, role_assignment).
    """
    _lock_role_assignments()

    if not full_name:
        full_name = user.get_full_name() or None

    profile = Profile.objects.create(
        user=user,
        email=user.email or '',
        full_name=full_name,
    )
    role = role_for_new_identity()
    assignment = UserRole.objects.create(user=user, role=role)

    logger.info("Provisioned identity %s with role %s", user.pk, role)
    return profile, assignment
