"""
Pytest fixtures for back-office tests.

Creating a user runs identity provisioning, so the first user created in a
test becomes admin and every later one becomes staff.
"""

import pytest
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import Client

from backoffice.models import MenuCategory, MenuItem, UserRole
from backoffice.services import OrderService


PASSWORD = 'S3cure-pass-123'


@pytest.fixture
def admin_user(db):
    """First identity: bootstrapped as admin."""
    return get_user_model().objects.create_user(
        username='owner',
        email='owner@example.com',
        password=PASSWORD,
        first_name='Olivia',
        last_name='Owner',
    )


@pytest.fixture
def staff_user(admin_user):
    """Second identity: provisioned as staff."""
    return get_user_model().objects.create_user(
        username='waiter',
        email='waiter@example.com',
        password=PASSWORD,
    )


@pytest.fixture
def outsider(admin_user):
    """Authenticated identity holding no role."""
    user = get_user_model().objects.create_user(
        username='guest',
        email='guest@example.com',
        password=PASSWORD,
    )
    UserRole.objects.filter(user=user).delete()
    return user


def _client_for(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def admin_client(admin_user):
    """Client logged in as the admin (shadows pytest-django's superuser client)."""
    return _client_for(admin_user)


@pytest.fixture
def staff_client(staff_user):
    return _client_for(staff_user)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def category(db):
    return MenuCategory.objects.create(
        name='Burgers',
        description='Grilled to order',
        display_order=10,
    )


@pytest.fixture
def menu_item(category):
    return MenuItem.objects.create(
        category=category,
        name='Classic Burger',
        price=Decimal('12.50'),
        allergens=['Gluten', 'Dairy'],
    )


@pytest.fixture
def drink(category):
    return MenuItem.objects.create(
        category=category,
        name='Lemonade',
        price=Decimal('4.00'),
        display_order=1,
    )


@pytest.fixture
def unavailable_item(category):
    return MenuItem.objects.create(
        category=category,
        name='Seasonal Pie',
        price=Decimal('6.00'),
        is_available=False,
    )


@pytest.fixture
def order_with_items(admin_user, menu_item, drink):
    """Order for 2x Classic Burger and 1x Lemonade (total 29.00)."""
    return OrderService.create_order(
        admin_user,
        items=[
            {'menu_item': menu_item, 'quantity': 2},
            {'menu_item': drink.pk, 'quantity': 1, 'special_instructions': 'No ice'},
        ],
        customer_name='Alice',
        customer_phone='555-0100',
        order_type='takeaway',
    )
