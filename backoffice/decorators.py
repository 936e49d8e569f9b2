"""
View decorators gating access by role.
"""

from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied
from django.http import JsonResponse
from django.utils.translation import gettext as _

from .models import UserRole
from .policies import has_role


def role_required(*roles, json=False):
    """
    Allow the view only to callers holding one of ``roles``.

    Anonymous callers are sent to the login page (401 for JSON views);
    authenticated callers without the role get 403.
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped(request, *args, **kwargs):
            user = request.user
            if not user.is_authenticated:
                if json:
                    return JsonResponse(
                        {'success': False, 'error': _('Authentication required')}, status=401,
                    )
                return redirect_to_login(request.get_full_path())

            if not any(has_role(user, role) for role in roles):
                if json:
                    return JsonResponse(
                        {'success': False, 'error': _('Permission denied')}, status=403,
                    )
                raise PermissionDenied
            return view_func(request, *args, **kwargs)
        return _wrapped
    return decorator


def team_required(view_func=None, json=False):
    """Admin or staff."""
    decorator = role_required(UserRole.ROLE_ADMIN, UserRole.ROLE_STAFF, json=json)
    if view_func is not None:
        return decorator(view_func)
    return decorator


def admin_required(view_func=None, json=False):
    decorator = role_required(UserRole.ROLE_ADMIN, json=json)
    if view_func is not None:
        return decorator(view_func)
    return decorator
