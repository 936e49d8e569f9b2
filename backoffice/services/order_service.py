"""
Order Service

Handles business logic for order operations.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q

from .. import policies
from ..models import MenuItem, Order, OrderItem
from ..signals import order_created, order_deleted, order_status_changed

logger = logging.getLogger(__name__)

ORDER_FIELDS = [
    'customer_name', 'customer_email', 'customer_phone', 'customer_notes',
    'order_type', 'table_number', 'estimated_ready_time',
]


class OrderService:
    """Service for managing orders."""

    @staticmethod
    def _orderable_item(user, menu_item) -> MenuItem:
        """Resolve a menu item (instance or id) that can be ordered right now."""
        if not isinstance(menu_item, MenuItem):
            try:
                menu_item = policies.scope(user, MenuItem).get(pk=menu_item)
            except (MenuItem.DoesNotExist, ValidationError, ValueError, TypeError):
                raise ValueError(f"Menu item not found: {menu_item}")
        if not menu_item.is_orderable:
            raise ValueError(f"Menu item is not available: {menu_item.name}")
        return menu_item

    @staticmethod
    def _recalculate(order: Order) -> Order:
        order.calculate_total()
        order.save(update_fields=['total_amount', 'updated_at'])
        return order

    @staticmethod
    @transaction.atomic
    def create_order(user, items: List[Dict] = None, **data) -> Order:
        """
        Create a new order with items.

        Args:
            user: Caller (admin or staff)
            items: List of dicts with menu_item (instance or id), quantity,
                special_instructions
            **data: Order fields (customer_name, order_type, table_number...)

        Returns:
            Created Order instance with its total computed
        """
        policies.check_table(user, Order, policies.INSERT)
        if not items:
            raise ValueError("At least one item is required")

        order_type = data.get('order_type') or Order.TYPE_DINE_IN
        if order_type not in dict(Order.ORDER_TYPE_CHOICES):
            raise ValueError(f"Invalid order type: {order_type}")

        order = Order(**{k: v for k, v in data.items() if k in ORDER_FIELDS})
        order.order_type = order_type
        order.save()

        for item_data in items:
            menu_item = OrderService._orderable_item(user, item_data.get('menu_item'))
            try:
                quantity = int(item_data.get('quantity', 1))
            except (TypeError, ValueError):
                raise ValueError(f"Invalid quantity: {item_data.get('quantity')!r}")
            if quantity < 1:
                raise ValueError("Quantity must be at least 1")
            OrderItem.objects.create(
                order=order,
                menu_item=menu_item,
                quantity=quantity,
                unit_price=menu_item.price,
                special_instructions=item_data.get('special_instructions') or None,
            )

        OrderService._recalculate(order)
        logger.info(
            "Order %s created with %d items, total %s",
            order.pk, len(items), order.total_amount,
        )
        transaction.on_commit(lambda: order_created.send(sender=Order, order=order))
        return order

    @staticmethod
    def update_order(user, order: Order, **data) -> Order:
        policies.check(user, policies.UPDATE, order)
        if 'order_type' in data and data['order_type'] not in dict(Order.ORDER_TYPE_CHOICES):
            raise ValueError(f"Invalid order type: {data['order_type']}")
        for field in ORDER_FIELDS:
            if field in data:
                setattr(order, field, data[field])
        order.save()
        return order

    @staticmethod
    def add_item(
        user,
        order: Order,
        menu_item,
        quantity: int = 1,
        special_instructions: str = None,
    ) -> OrderItem:
        """Add a line to an existing order at the current menu price."""
        policies.check(user, policies.UPDATE, order)
        policies.check_table(user, OrderItem, policies.INSERT)
        menu_item = OrderService._orderable_item(user, menu_item)
        if int(quantity) < 1:
            raise ValueError("Quantity must be at least 1")

        item = OrderItem.objects.create(
            order=order,
            menu_item=menu_item,
            quantity=int(quantity),
            unit_price=menu_item.price,
            special_instructions=special_instructions or None,
        )
        OrderService._recalculate(order)
        return item

    @staticmethod
    def update_item_quantity(user, item: OrderItem, quantity: int) -> OrderItem:
        policies.check(user, policies.UPDATE, item)
        item.quantity = max(1, int(quantity))
        item.save(update_fields=['quantity'])
        OrderService._recalculate(item.order)
        return item

    @staticmethod
    def remove_item(user, item: OrderItem) -> Order:
        policies.check(user, policies.DELETE, item)
        order = item.order
        item.delete()
        return OrderService._recalculate(order)

    @staticmethod
    def update_status(user, order: Order, status: str) -> Order:
        """Set any status; transitions are not constrained."""
        policies.check(user, policies.UPDATE, order)
        if status not in dict(Order.STATUS_CHOICES):
            raise ValueError(f"Invalid status: {status}")

        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        logger.info("Order %s status %s -> %s", order.pk, previous, status)
        order_status_changed.send(sender=Order, order=order, previous_status=previous)
        return order

    @staticmethod
    def delete_order(user, order: Order) -> int:
        """Delete an order; its line items go with it."""
        policies.check(user, policies.DELETE, order)
        order_id = order.pk
        deleted, _ = order.delete()
        logger.info("Order %s deleted (%d rows)", order_id, deleted)
        order_deleted.send(sender=Order, order_id=order_id)
        return deleted

    @staticmethod
    def list_orders(
        user,
        status: str = '',
        order_type: str = '',
        q: str = '',
        date_from=None,
        date_to=None,
    ):
        orders = policies.scope(user, Order).prefetch_related('items')
        if status:
            orders = orders.filter(status=status)
        if order_type:
            orders = orders.filter(order_type=order_type)
        if q:
            orders = orders.filter(
                Q(customer_name__icontains=q)
                | Q(customer_email__icontains=q)
                | Q(customer_phone__icontains=q)
            )
        if date_from:
            orders = orders.filter(created_at__date__gte=date_from)
        if date_to:
            orders = orders.filter(created_at__date__lte=date_to)
        return orders.order_by('-created_at')

    @staticmethod
    def get_pending_orders(user) -> List[Order]:
        return list(policies.scope(user, Order).filter(
            status__in=Order.PENDING_STATUSES,
        ).prefetch_related('items').order_by('created_at'))

    @staticmethod
    def changes_since(user, since: Optional[datetime]) -> List[Order]:
        """Orders created or updated after ``since``, oldest change first."""
        orders = policies.scope(user, Order)
        if since is not None:
            orders = orders.filter(updated_at__gt=since)
        return list(orders.order_by('updated_at'))

    @staticmethod
    def order_to_dict(order: Order, with_items: bool = True) -> Dict[str, Any]:
        data = {
            'id': str(order.pk),
            'customer_name': order.customer_name,
            'customer_email': order.customer_email,
            'customer_phone': order.customer_phone,
            'customer_notes': order.customer_notes,
            'status': order.status,
            'order_type': order.order_type,
            'table_number': order.table_number,
            'estimated_ready_time': (
                order.estimated_ready_time.isoformat() if order.estimated_ready_time else None
            ),
            'total_amount': str(order.total_amount),
            'created_at': order.created_at.isoformat(),
            'updated_at': order.updated_at.isoformat(),
        }
        if with_items:
            data['items'] = [{
                'id': str(item.pk),
                'menu_item_id': str(item.menu_item_id),
                'menu_item_name': item.menu_item.name,
                'quantity': item.quantity,
                'unit_price': str(item.unit_price),
                'line_total': str(item.line_total),
                'special_instructions': item.special_instructions,
            } for item in order.items.select_related('menu_item')]
        return data
