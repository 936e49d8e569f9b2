"""
Menu Service

Catalog operations on categories and menu items.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from django.db.models import Prefetch

from .. import policies
from ..models import MenuCategory, MenuItem

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = ['name', 'description', 'display_order', 'is_active']
ITEM_FIELDS = [
    'category', 'name', 'description', 'price', 'image_url',
    'display_order', 'is_active', 'is_available', 'allergens',
]


def parse_allergens(value) -> Optional[List[str]]:
    """'Gluten, nuts , ,dairy' -> ['Gluten', 'nuts', 'dairy']; empty -> None."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        parts = [str(part).strip() for part in value]
    else:
        parts = [part.strip() for part in str(value).split(',')]
    parts = [part for part in parts if part]
    return parts or None


def parse_price(value) -> Decimal:
    try:
        price = Decimal(str(value)).quantize(Decimal('0.01'))
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid price: {value!r}")
    if price < 0:
        raise ValueError("Price cannot be negative")
    return price


class MenuService:
    """Service for managing the menu catalog."""

    # ---- Categories ----

    @staticmethod
    def list_categories(user):
        return policies.scope(user, MenuCategory).order_by('display_order', 'name')

    @staticmethod
    def create_category(user, **data) -> MenuCategory:
        policies.check_table(user, MenuCategory, policies.INSERT)
        category = MenuCategory(**{k: v for k, v in data.items() if k in CATEGORY_FIELDS})
        category.save()
        logger.info("Category created: %s", category.name)
        return category

    @staticmethod
    def update_category(user, category: MenuCategory, **data) -> MenuCategory:
        policies.check(user, policies.UPDATE, category)
        for field in CATEGORY_FIELDS:
            if field in data:
                setattr(category, field, data[field])
        category.save()
        return category

    @staticmethod
    def toggle_category_active(user, category: MenuCategory) -> MenuCategory:
        policies.check(user, policies.UPDATE, category)
        category.is_active = not category.is_active
        category.save(update_fields=['is_active', 'updated_at'])
        return category

    @staticmethod
    def delete_category(user, category: MenuCategory) -> int:
        """Delete a category; its menu items go with it."""
        policies.check(user, policies.DELETE, category)
        name = category.name
        deleted, _ = category.delete()
        logger.info("Category deleted: %s (%d rows)", name, deleted)
        return deleted

    # ---- Items ----

    @staticmethod
    def list_items(user, category: MenuCategory = None, q: str = ''):
        items = policies.scope(user, MenuItem).select_related('category')
        if category is not None:
            items = items.filter(category=category)
        if q:
            items = items.filter(name__icontains=q)
        return items.order_by('display_order', 'name')

    @staticmethod
    def create_item(user, **data) -> MenuItem:
        policies.check_table(user, MenuItem, policies.INSERT)
        data = MenuService._clean_item_data(data)
        item = MenuItem(**{k: v for k, v in data.items() if k in ITEM_FIELDS})
        item.save()
        logger.info("Menu item created: %s at %s", item.name, item.price)
        return item

    @staticmethod
    def update_item(user, item: MenuItem, **data) -> MenuItem:
        policies.check(user, policies.UPDATE, item)
        data = MenuService._clean_item_data(data)
        for field in ITEM_FIELDS:
            if field in data:
                setattr(item, field, data[field])
        item.save()
        return item

    @staticmethod
    def toggle_item_available(user, item: MenuItem) -> MenuItem:
        policies.check(user, policies.UPDATE, item)
        item.is_available = not item.is_available
        item.save(update_fields=['is_available', 'updated_at'])
        return item

    @staticmethod
    def toggle_item_active(user, item: MenuItem) -> MenuItem:
        policies.check(user, policies.UPDATE, item)
        item.is_active = not item.is_active
        item.save(update_fields=['is_active', 'updated_at'])
        return item

    @staticmethod
    def delete_item(user, item: MenuItem) -> int:
        policies.check(user, policies.DELETE, item)
        deleted, _ = item.delete()
        return deleted

    @staticmethod
    def _clean_item_data(data: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(data)
        if 'price' in data:
            data['price'] = parse_price(data['price'])
        if 'allergens' in data:
            data['allergens'] = parse_allergens(data['allergens'])
        return data

    # ---- Public ----

    @staticmethod
    def public_menu() -> List[Dict]:
        """Active categories with the items anyone may order."""
        public_items = policies.policy_for(MenuItem).scope(None).order_by('display_order', 'name')
        categories = policies.policy_for(MenuCategory).scope(None).prefetch_related(
            Prefetch('items', queryset=public_items, to_attr='public_items'),
        ).order_by('display_order', 'name')

        return [
            {
                'id': str(category.pk),
                'name': category.name,
                'description': category.description,
                'items': [MenuService.item_to_dict(item) for item in category.public_items],
            }
            for category in categories
        ]

    @staticmethod
    def item_to_dict(item: MenuItem) -> Dict[str, Any]:
        return {
            'id': str(item.pk),
            'category_id': str(item.category_id) if item.category_id else None,
            'name': item.name,
            'description': item.description,
            'price': str(item.price),
            'image_url': item.image_url,
            'is_active': item.is_active,
            'is_available': item.is_available,
            'allergens': item.allergens or [],
        }
