from django.urls import reverse

from .models import UserRole
from .module import NAVIGATION, SETTINGS


def navigation(request):
    """Navigation entries visible to the current user, plus their roles."""
    user = getattr(request, 'user', None)
    roles = []
    if user is not None and user.is_authenticated:
        roles = list(UserRole.objects.filter(user_id=user.pk).values_list('role', flat=True))

    items = [
        {
            'id': entry['id'],
            'label': entry['label'],
            'url': reverse(entry['url_name']),
        }
        for entry in NAVIGATION
        if set(entry['roles']) & set(roles)
    ]
    return {
        'nav_items': items,
        'user_roles': roles,
        'is_admin': UserRole.ROLE_ADMIN in roles,
        'currency_symbol': SETTINGS['currency_symbol'],
    }
