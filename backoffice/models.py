"""
Back-office Models

Restaurant back-office data model.
Features:
- One profile per identity, created automatically on signup
- Role assignments (admin, staff) with first-identity bootstrap
- Ordered menu categories owning menu items
- Menu items with price, active/available flags and allergens
- Orders with customer info, status, type and computed total
- Order line items with a unit price snapshot
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils.translation import gettext_lazy as _


# =============================================================================
# Base
# =============================================================================

class TimestampedModel(models.Model):
    """Adds created_at/updated_at; updated_at is refreshed on every save."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class BaseModel(TimestampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


# =============================================================================
# Identity: Profiles & Roles
# =============================================================================

class Profile(TimestampedModel):
    """Per-identity profile. Its primary key is the identity id."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        db_column='id',
        related_name='profile',
        verbose_name=_('User'),
    )
    email = models.TextField(verbose_name=_('Email'))
    full_name = models.TextField(null=True, blank=True, verbose_name=_('Full Name'))
    avatar_url = models.TextField(null=True, blank=True, verbose_name=_('Avatar URL'))

    class Meta:
        db_table = 'profiles'
        verbose_name = _('Profile')
        verbose_name_plural = _('Profiles')

    def __str__(self):
        return self.full_name or self.email

    @property
    def display_name(self):
        return self.full_name or self.email


class UserRole(models.Model):
    """Role assignment for an identity."""

    ROLE_ADMIN = 'admin'
    ROLE_STAFF = 'staff'

    ROLE_CHOICES = [
        (ROLE_ADMIN, _('Admin')),
        (ROLE_STAFF, _('Staff')),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='roles',
        verbose_name=_('User'),
    )
    role = models.CharField(
        max_length=20, choices=ROLE_CHOICES,
        default=ROLE_STAFF, verbose_name=_('Role'),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_roles'
        verbose_name = _('Role Assignment')
        verbose_name_plural = _('Role Assignments')
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'role'], name='user_roles_user_id_role_key'),
        ]

    def __str__(self):
        return f"{self.user} ({self.role})"


# =============================================================================
# Catalog
# =============================================================================

class MenuCategory(BaseModel):
    """Menu section, e.g. Appetizers or Drinks."""

    name = models.TextField(verbose_name=_('Name'))
    description = models.TextField(null=True, blank=True, verbose_name=_('Description'))
    display_order = models.IntegerField(default=0, verbose_name=_('Display Order'))
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))

    class Meta:
        db_table = 'menu_categories'
        verbose_name = _('Menu Category')
        verbose_name_plural = _('Menu Categories')
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name

    @property
    def item_count(self):
        return self.items.count()


class MenuItem(BaseModel):
    """
    Dish or drink on the menu.

    ``is_active`` lists or unlists the item; ``is_available`` marks a
    listed item as temporarily out of stock. Only items that are both
    can be ordered or shown publicly.
    """

    category = models.ForeignKey(
        MenuCategory,
        on_delete=models.CASCADE,
        null=True, blank=True,
        related_name='items',
        verbose_name=_('Category'),
    )
    name = models.TextField(verbose_name=_('Name'))
    description = models.TextField(null=True, blank=True, verbose_name=_('Description'))
    price = models.DecimalField(
        max_digits=10, decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name=_('Price'),
    )
    image_url = models.TextField(null=True, blank=True, verbose_name=_('Image URL'))
    display_order = models.IntegerField(default=0, verbose_name=_('Display Order'))
    is_active = models.BooleanField(default=True, verbose_name=_('Active'))
    is_available = models.BooleanField(default=True, verbose_name=_('Available'))
    allergens = models.JSONField(null=True, blank=True, verbose_name=_('Allergens'))

    class Meta:
        db_table = 'menu_items'
        verbose_name = _('Menu Item')
        verbose_name_plural = _('Menu Items')
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name

    @property
    def is_orderable(self):
        return self.is_active and self.is_available

    @property
    def allergens_display(self):
        return ', '.join(self.allergens or [])


# =============================================================================
# Orders
# =============================================================================

class Order(BaseModel):
    """Customer order. Status transitions are not constrained."""

    STATUS_RECEIVED = 'received'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_READY = 'ready'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (STATUS_RECEIVED, _('Received')),
        (STATUS_IN_PROGRESS, _('In Progress')),
        (STATUS_READY, _('Ready')),
        (STATUS_DELIVERED, _('Delivered')),
        (STATUS_CANCELLED, _('Cancelled')),
    ]

    PENDING_STATUSES = [STATUS_RECEIVED, STATUS_IN_PROGRESS]

    TYPE_DINE_IN = 'dine_in'
    TYPE_TAKEAWAY = 'takeaway'
    TYPE_DELIVERY = 'delivery'

    ORDER_TYPE_CHOICES = [
        (TYPE_DINE_IN, _('Dine In')),
        (TYPE_TAKEAWAY, _('Takeaway')),
        (TYPE_DELIVERY, _('Delivery')),
    ]

    # Customer
    customer_name = models.TextField(null=True, blank=True, verbose_name=_('Customer Name'))
    customer_email = models.TextField(null=True, blank=True, verbose_name=_('Customer Email'))
    customer_phone = models.TextField(null=True, blank=True, verbose_name=_('Customer Phone'))
    customer_notes = models.TextField(null=True, blank=True, verbose_name=_('Customer Notes'))

    # Financial
    total_amount = models.DecimalField(
        max_digits=10, decimal_places=2,
        default=Decimal('0.00'), verbose_name=_('Total'),
    )

    # Order info
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES,
        default=STATUS_RECEIVED, verbose_name=_('Status'),
    )
    order_type = models.CharField(
        max_length=20, choices=ORDER_TYPE_CHOICES,
        default=TYPE_DINE_IN, verbose_name=_('Order Type'),
    )
    table_number = models.IntegerField(null=True, blank=True, verbose_name=_('Table Number'))
    estimated_ready_time = models.DateTimeField(null=True, blank=True, verbose_name=_('Estimated Ready Time'))

    class Meta:
        db_table = 'orders'
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='orders_status_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]

    def __str__(self):
        return f"Order {self.short_id}"

    @property
    def short_id(self):
        return str(self.pk)[:8]

    @property
    def item_count(self):
        return self.items.count()

    @property
    def is_pending(self):
        return self.status in self.PENDING_STATUSES

    def calculate_total(self):
        total = Decimal('0.00')
        for item in self.items.all():
            total += item.line_total
        self.total_amount = total
        return self.total_amount


class OrderItem(models.Model):
    """Line item. ``unit_price`` is the menu price when the line was created."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order, on_delete=models.CASCADE,
        related_name='items', verbose_name=_('Order'),
    )
    menu_item = models.ForeignKey(
        MenuItem, on_delete=models.CASCADE,
        related_name='order_items', verbose_name=_('Menu Item'),
    )
    quantity = models.IntegerField(
        default=1, validators=[MinValueValidator(1)],
        verbose_name=_('Quantity'),
    )
    unit_price = models.DecimalField(
        max_digits=10, decimal_places=2,
        verbose_name=_('Unit Price'),
    )
    special_instructions = models.TextField(null=True, blank=True, verbose_name=_('Special Instructions'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        verbose_name = _('Order Item')
        verbose_name_plural = _('Order Items')
        ordering = ['created_at']

    def __str__(self):
        return f"{self.quantity}x {self.menu_item.name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity

    def save(self, *args, **kwargs):
        if self.unit_price is None and self.menu_item_id:
            self.unit_price = self.menu_item.price
        super().save(*args, **kwargs)


def revenue_for(queryset):
    """Sum of total_amount over an order queryset."""
    total = queryset.aggregate(total=Sum('total_amount'))['total'] or Decimal('0')
    return total.quantize(Decimal('0.01'))
