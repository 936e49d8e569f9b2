"""
Row-level authorization policies.

Every read and write issued by the back-office goes through the policy
of its table. A policy turns the rules in ``module.TABLE_POLICIES`` into
a queryset filter for the caller (``scope``) and a row check (``check``).

The two predicates the rules are built from:

- ``has_role(user, role)``: exact membership in ``user_roles``.
- ``is_admin_or_staff(user)``: the caller holds either role.
"""

from django.core.exceptions import PermissionDenied
from django.db.models import Q

from .models import MenuCategory, MenuItem, Order, OrderItem, Profile, UserRole
from .module import TABLE_POLICIES

SELECT = 'select'
INSERT = 'insert'
UPDATE = 'update'
DELETE = 'delete'

ACTIONS = (SELECT, INSERT, UPDATE, DELETE)


# =============================================================================
# Predicates
# =============================================================================

def _is_authenticated(user):
    return user is not None and getattr(user, 'is_authenticated', False)


def has_role(user, role) -> bool:
    if not _is_authenticated(user):
        return False
    return UserRole.objects.filter(user_id=user.pk, role=role).exists()


def is_admin_or_staff(user) -> bool:
    if not _is_authenticated(user):
        return False
    return UserRole.objects.filter(
        user_id=user.pk,
        role__in=[UserRole.ROLE_ADMIN, UserRole.ROLE_STAFF],
    ).exists()


def is_admin(user) -> bool:
    return has_role(user, UserRole.ROLE_ADMIN)


# =============================================================================
# Table policies
# =============================================================================

class TablePolicy:
    """Policy for one table. Subclasses describe ownership and public rows."""

    model = None

    @property
    def table(self):
        return self.model._meta.db_table

    @property
    def rules(self):
        return TABLE_POLICIES.get(self.table, {})

    def owner_filter(self, user):
        """Q matching rows owned by ``user``; None when the table has no owner."""
        return None

    def public_filter(self):
        """Q matching rows anyone may read; None when nothing is public."""
        return None

    def owns(self, user, obj):
        return False

    def _role_grant(self, user, grants):
        if 'team' in grants and is_admin_or_staff(user):
            return True
        if 'admin' in grants and is_admin(user):
            return True
        return False

    def scope(self, user, action=SELECT):
        """Rows of this table ``user`` may perform ``action`` on."""
        grants = self.rules.get(action, [])
        qs = self.model.objects.all()
        if self._role_grant(user, grants):
            return qs

        condition = None
        if 'own' in grants and _is_authenticated(user):
            condition = self.owner_filter(user)
        if 'public' in grants:
            public = self.public_filter()
            if public is not None:
                condition = public if condition is None else condition | public
        if condition is None:
            return qs.none()
        return qs.filter(condition)

    def can(self, user, action, obj=None) -> bool:
        grants = self.rules.get(action, [])
        if self._role_grant(user, grants):
            return True
        if obj is None:
            return False
        if action == INSERT:
            return 'own' in grants and _is_authenticated(user) and self.owns(user, obj)
        return self.scope(user, action).filter(pk=obj.pk).exists()

    def check(self, user, action, obj=None):
        if not self.can(user, action, obj):
            raise PermissionDenied(
                f"{action} on {self.table} is not allowed for this user"
            )
        return obj


class ProfilePolicy(TablePolicy):
    model = Profile

    def owner_filter(self, user):
        return Q(user_id=user.pk)

    def owns(self, user, obj):
        return obj.user_id == user.pk


class UserRolePolicy(TablePolicy):
    model = UserRole

    def owner_filter(self, user):
        return Q(user_id=user.pk)

    def owns(self, user, obj):
        return obj.user_id == user.pk


class MenuCategoryPolicy(TablePolicy):
    model = MenuCategory

    def public_filter(self):
        return Q(is_active=True)


class MenuItemPolicy(TablePolicy):
    model = MenuItem

    def public_filter(self):
        return Q(is_active=True, is_available=True)


class OrderPolicy(TablePolicy):
    model = Order


class OrderItemPolicy(TablePolicy):
    model = OrderItem


POLICIES = {
    policy.model: policy
    for policy in (
        ProfilePolicy(),
        UserRolePolicy(),
        MenuCategoryPolicy(),
        MenuItemPolicy(),
        OrderPolicy(),
        OrderItemPolicy(),
    )
}


def policy_for(model):
    try:
        return POLICIES[model]
    except KeyError:
        raise LookupError(f"No row-level policy registered for {model.__name__}")


def scope(user, model, action=SELECT):
    return policy_for(model).scope(user, action)


def check(user, action, obj):
    return policy_for(type(obj)).check(user, action, obj)


def check_table(user, model, action):
    """Table-level check for actions that do not target an existing row."""
    return policy_for(model).check(user, action)
