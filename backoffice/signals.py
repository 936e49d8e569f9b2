"""
Back-office Signals

Provisions a profile and a role for every new identity, and defines
the order change notifications emitted by the order service.
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

# Signals this module emits
order_created = Signal()  # Provides: order
order_status_changed = Signal()  # Provides: order, previous_status
# Deleted orders leave no row behind, so polling clients of the change feed
# never see them; only receivers of this signal learn about deletions.
order_deleted = Signal()  # Provides: order_id


@receiver(post_save, sender=settings.AUTH_USER_MODEL, dispatch_uid='backoffice_provision_identity')
def provision_new_identity(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    from .services.provisioning import provision_identity

    full_name = getattr(instance, '_signup_full_name', None)
    provision_identity(instance, full_name=full_name)
