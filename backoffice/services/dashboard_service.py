"""
Dashboard Service

Aggregate statistics for the back-office dashboard.
"""

from typing import Any, Dict

from django.db.models import Sum
from django.utils import timezone

from .. import policies
from ..models import Order, OrderItem, revenue_for
from ..module import SETTINGS


def get_dashboard_stats(user, today=None) -> Dict[str, Any]:
    """
    Dashboard figures for ``today`` (defaults to the current local date).

    - total_orders: all orders
    - pending_orders: orders received or in progress
    - today_revenue: sum of totals of orders created today, any status
    - popular_dishes: top menu items by quantity ordered today
    """
    policies.policy_for(Order).check(user, policies.SELECT)
    if today is None:
        today = timezone.localdate()

    orders = policies.scope(user, Order)
    today_orders = orders.filter(created_at__date=today)

    popular = (
        policies.scope(user, OrderItem)
        .filter(created_at__date=today)
        .values('menu_item__name')
        .annotate(count=Sum('quantity'))
        .order_by('-count', 'menu_item__name')[:SETTINGS['popular_dishes_limit']]
    )

    return {
        'date': today.isoformat(),
        'total_orders': orders.count(),
        'pending_orders': orders.filter(status__in=Order.PENDING_STATUSES).count(),
        'today_revenue': revenue_for(today_orders),
        'popular_dishes': [
            {'name': row['menu_item__name'], 'count': row['count']}
            for row in popular
        ],
    }
