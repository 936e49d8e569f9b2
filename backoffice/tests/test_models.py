"""
Unit tests for back-office models.
"""

import pytest
from decimal import Decimal

from django.db import IntegrityError, transaction

from backoffice.models import (
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    Profile,
    UserRole,
    revenue_for,
)


# ==============================================================================
# PROFILE & ROLE TESTS
# ==============================================================================

@pytest.mark.django_db
class TestProfile:
    """Tests for Profile model."""

    def test_profile_keyed_by_identity(self, admin_user):
        """Test profile primary key is the identity id."""
        profile = Profile.objects.get(pk=admin_user.pk)
        assert profile.user == admin_user
        assert profile.email == 'owner@example.com'

    def test_display_name_prefers_full_name(self, admin_user):
        """Test display name uses full name when set."""
        assert admin_user.profile.display_name == 'Olivia Owner'

    def test_display_name_falls_back_to_email(self, staff_user):
        """Test display name falls back to email."""
        assert staff_user.profile.full_name is None
        assert staff_user.profile.display_name == 'waiter@example.com'
        assert str(staff_user.profile) == 'waiter@example.com'

    def test_profile_deleted_with_identity(self, staff_user):
        """Test profile goes away with its identity."""
        pk = staff_user.pk
        staff_user.delete()
        assert not Profile.objects.filter(pk=pk).exists()


@pytest.mark.django_db
class TestUserRole:
    """Tests for UserRole model."""

    def test_duplicate_role_rejected(self, staff_user):
        """Test (user, role) is unique."""
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                UserRole.objects.create(user=staff_user, role=UserRole.ROLE_STAFF)

    def test_user_can_hold_both_roles(self, staff_user):
        """Test one identity may hold admin and staff."""
        UserRole.objects.create(user=staff_user, role=UserRole.ROLE_ADMIN)
        roles = set(staff_user.roles.values_list('role', flat=True))
        assert roles == {UserRole.ROLE_ADMIN, UserRole.ROLE_STAFF}

    def test_table_name(self):
        """Test the table is user_roles."""
        assert UserRole._meta.db_table == 'user_roles'


# ==============================================================================
# CATALOG TESTS
# ==============================================================================

@pytest.mark.django_db
class TestMenuCategory:
    """Tests for MenuCategory model."""

    def test_default_categories_seeded(self):
        """Test the four default categories exist after migrating."""
        names = set(MenuCategory.objects.values_list('name', flat=True))
        assert {'Appetizers', 'Main Courses', 'Desserts', 'Drinks'} <= names

    def test_category_defaults(self):
        """Test default values."""
        category = MenuCategory.objects.create(name='Specials')
        assert category.is_active is True
        assert category.display_order == 0
        assert category.created_at is not None
        assert category.updated_at is not None

    def test_item_count(self, category, menu_item, drink):
        """Test item count."""
        assert category.item_count == 2

    def test_delete_cascades_to_items(self, category, menu_item):
        """Test deleting a category deletes its items."""
        category.delete()
        assert not MenuItem.objects.filter(pk=menu_item.pk).exists()

    def test_str(self, category):
        """Test string representation."""
        assert str(category) == 'Burgers'


@pytest.mark.django_db
class TestMenuItem:
    """Tests for MenuItem model."""

    def test_item_defaults(self, category):
        """Test default values."""
        item = MenuItem.objects.create(category=category, name='Soup', price=Decimal('5.00'))
        assert item.is_active is True
        assert item.is_available is True
        assert item.allergens is None
        assert item.display_order == 0

    def test_item_without_category(self):
        """Test items may be uncategorized."""
        item = MenuItem.objects.create(name='Bread', price=Decimal('1.00'))
        assert item.category is None

    def test_is_orderable(self, menu_item, unavailable_item):
        """Test only active and available items are orderable."""
        assert menu_item.is_orderable is True
        assert unavailable_item.is_orderable is False

        menu_item.is_active = False
        assert menu_item.is_orderable is False

    def test_allergens_display(self, menu_item, drink):
        """Test allergens are joined for display."""
        assert menu_item.allergens_display == 'Gluten, Dairy'
        assert drink.allergens_display == ''


# ==============================================================================
# ORDER TESTS
# ==============================================================================

@pytest.mark.django_db
class TestOrder:
    """Tests for Order model."""

    def test_order_defaults(self):
        """Test default values."""
        order = Order.objects.create()
        assert order.status == Order.STATUS_RECEIVED
        assert order.order_type == Order.TYPE_DINE_IN
        assert order.total_amount == Decimal('0.00')
        assert order.customer_name is None

    def test_short_id(self):
        """Test short id is the first 8 characters of the id."""
        order = Order.objects.create()
        assert order.short_id == str(order.pk)[:8]
        assert str(order) == f"Order {order.short_id}"

    def test_is_pending(self):
        """Test received and in-progress orders are pending."""
        assert Order(status=Order.STATUS_RECEIVED).is_pending is True
        assert Order(status=Order.STATUS_IN_PROGRESS).is_pending is True
        assert Order(status=Order.STATUS_READY).is_pending is False
        assert Order(status=Order.STATUS_CANCELLED).is_pending is False

    def test_calculate_total(self, menu_item, drink):
        """Test total is the sum of unit price times quantity."""
        order = Order.objects.create()
        OrderItem.objects.create(order=order, menu_item=menu_item, quantity=3, unit_price=Decimal('10.00'))
        OrderItem.objects.create(order=order, menu_item=drink, quantity=1, unit_price=Decimal('2.50'))

        assert order.calculate_total() == Decimal('32.50')
        assert order.item_count == 2

    def test_calculate_total_empty(self):
        """Test an order without items totals zero."""
        order = Order.objects.create()
        assert order.calculate_total() == Decimal('0.00')

    def test_delete_cascades_to_items(self, order_with_items):
        """Test deleting an order deletes its items."""
        order_id = order_with_items.pk
        order_with_items.delete()
        assert not OrderItem.objects.filter(order_id=order_id).exists()


@pytest.mark.django_db
class TestOrderItem:
    """Tests for OrderItem model."""

    def test_unit_price_defaults_to_menu_price(self, menu_item):
        """Test unit price is taken from the menu item when omitted."""
        order = Order.objects.create()
        item = OrderItem.objects.create(order=order, menu_item=menu_item, quantity=2)
        assert item.unit_price == Decimal('12.50')
        assert item.line_total == Decimal('25.00')

    def test_str(self, menu_item):
        """Test string representation."""
        order = Order.objects.create()
        item = OrderItem.objects.create(order=order, menu_item=menu_item, quantity=2)
        assert str(item) == '2x Classic Burger'


@pytest.mark.django_db
class TestRevenue:
    """Tests for revenue_for helper."""

    def test_revenue_sums_totals(self):
        """Test revenue is the sum of order totals."""
        Order.objects.create(total_amount=Decimal('10.00'))
        Order.objects.create(total_amount=Decimal('5.25'), status=Order.STATUS_CANCELLED)
        assert revenue_for(Order.objects.all()) == Decimal('15.25')

    def test_revenue_of_nothing_is_zero(self):
        """Test an empty queryset yields zero."""
        assert revenue_for(Order.objects.none()) == Decimal('0.00')

    def test_revenue_keeps_cents(self):
        """Test whole-unit sums still carry two decimal places."""
        Order.objects.create(total_amount=Decimal('10.00'))
        Order.objects.create(total_amount=Decimal('5.00'))
        assert str(revenue_for(Order.objects.all())) == '15.00'
        assert str(revenue_for(Order.objects.none())) == '0.00'
