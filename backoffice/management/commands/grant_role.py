"""
Grant or revoke a back-office role from the command line.

Operator tool for seeding the first admin when
BACKOFFICE_FIRST_USER_IS_ADMIN is disabled, or for recovering access.
It writes user_roles directly and is not subject to row-level policies.
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from backoffice.models import UserRole
from backoffice.services import RoleService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Grant (or with --revoke, remove) a role for a user given by username or email."

    def add_arguments(self, parser):
        parser.add_argument("user", help="Username or email")
        parser.add_argument(
            "role",
            choices=[value for value, _label in UserRole.ROLE_CHOICES],
            help="Role to grant",
        )
        parser.add_argument(
            "--revoke",
            action="store_true",
            help="Remove the role instead of granting it",
        )

    def handle(self, *args, **options):
        try:
            user = RoleService.find_user(options["user"])
        except ValueError as exc:
            raise CommandError(str(exc))

        role = options["role"]
        if options["revoke"]:
            deleted, _rows = UserRole.objects.filter(user=user, role=role).delete()
            if not deleted:
                raise CommandError(f"{user.get_username()} does not have role {role}")
            logger.info("Role %s revoked from user %s from the command line", role, user.pk)
            self.stdout.write(self.style.SUCCESS(f"Role {role} revoked from {user.get_username()}"))
            return

        _assignment, created = UserRole.objects.get_or_create(user=user, role=role)
        if created:
            logger.info("Role %s granted to user %s from the command line", role, user.pk)
            self.stdout.write(self.style.SUCCESS(f"Role {role} granted to {user.get_username()}"))
        else:
            self.stdout.write(f"{user.get_username()} already has role {role}")
