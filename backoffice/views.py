"""
Back-office Views

Dashboard, menu catalog, orders, roles, profile and JSON API.
"""

import json
import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import DatabaseError, transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_POST

from . import policies
from .decorators import admin_required, team_required
from .forms import (
    MenuCategoryForm, MenuItemForm, OrderFilterForm, OrderForm, OrderItemForm,
    OrderStatusForm, ProfileForm, RoleAssignForm, SignupForm,
)
from .models import MenuCategory, MenuItem, Order, OrderItem, Profile, UserRole
from .module import SETTINGS
from .services import (
    MenuService, OrderService, ProfileService, RoleService, get_dashboard_stats,
)
from .services.order_service import ORDER_FIELDS

logger = logging.getLogger(__name__)

FAILURES = (ValueError, PermissionDenied, DatabaseError)


def _json_error(error, status=400):
    if isinstance(error, PermissionDenied):
        status = 403
    return JsonResponse({'success': False, 'error': str(error) or _('Permission denied')}, status=status)


def _load_json(request):
    try:
        return json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return None


def _parse_timestamp(value):
    """ISO datetime from client input, made aware; None when unparseable."""
    try:
        parsed = parse_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _scoped_or_404(request, model, pk, action=policies.SELECT):
    return get_object_or_404(policies.scope(request.user, model, action), pk=pk)


# =============================================================================
# Signup
# =============================================================================

def signup(request):
    if request.user.is_authenticated:
        return redirect('backoffice:dashboard')

    if request.method == 'POST':
        form = SignupForm(request.POST)
        if form.is_valid():
            # Identity, profile and role are created together or not at all
            with transaction.atomic():
                user = form.save()
            login(request, user)
            messages.success(request, _('Welcome! Your account has been created.'))
            if policies.is_admin_or_staff(user):
                return redirect('backoffice:dashboard')
            return redirect('backoffice:profile')
    else:
        form = SignupForm()

    return render(request, 'registration/signup.html', {'form': form})


# =============================================================================
# Dashboard
# =============================================================================

@team_required
def dashboard(request):
    try:
        stats = get_dashboard_stats(request.user)
    except FAILURES as exc:
        logger.warning("Dashboard stats failed: %s", exc)
        messages.error(request, _('Failed to fetch dashboard statistics'))
        stats = {
            'total_orders': 0, 'pending_orders': 0,
            'today_revenue': 0, 'popular_dishes': [],
        }
    return render(request, 'backoffice/dashboard.html', {'stats': stats})


# =============================================================================
# Menu Items
# =============================================================================

@team_required
def menu_list(request):
    category_id = request.GET.get('category', '')
    search_query = request.GET.get('q', '').strip()

    categories = MenuService.list_categories(request.user)
    category = None
    if category_id:
        try:
            category = categories.filter(pk=category_id).first()
        except ValidationError:
            messages.error(request, _('Unknown category'))

    items = MenuService.list_items(request.user, category=category, q=search_query)
    return render(request, 'backoffice/menu_list.html', {
        'items': items,
        'categories': categories,
        'current_category': category,
        'search_query': search_query,
    })


@team_required
def menu_item_create(request):
    if request.method == 'POST':
        form = MenuItemForm(request.POST)
        if form.is_valid():
            try:
                MenuService.create_item(request.user, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Menu item added successfully'))
                return redirect('backoffice:menu')
    else:
        form = MenuItemForm()

    return render(request, 'backoffice/menu_item_form.html', {'form': form, 'is_new': True})


@team_required
def menu_item_edit(request, item_id):
    item = _scoped_or_404(request, MenuItem, item_id, policies.UPDATE)

    if request.method == 'POST':
        form = MenuItemForm(request.POST, instance=item)
        if form.is_valid():
            try:
                MenuService.update_item(request.user, item, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Menu item updated successfully'))
                return redirect('backoffice:menu')
    else:
        form = MenuItemForm(instance=item)

    return render(request, 'backoffice/menu_item_form.html', {
        'form': form, 'item': item, 'is_new': False,
    })


@team_required(json=True)
@require_POST
def menu_item_delete(request, item_id):
    item = _scoped_or_404(request, MenuItem, item_id, policies.DELETE)
    try:
        MenuService.delete_item(request.user, item)
    except FAILURES as exc:
        logger.warning("Menu item delete failed: %s", exc)
        return _json_error(_('Failed to delete menu item'))
    return JsonResponse({'success': True, 'message': _('Menu item deleted successfully')})


@team_required(json=True)
@require_POST
def menu_item_toggle_availability(request, item_id):
    item = _scoped_or_404(request, MenuItem, item_id, policies.UPDATE)
    try:
        item = MenuService.toggle_item_available(request.user, item)
    except FAILURES as exc:
        logger.warning("Availability toggle failed: %s", exc)
        return _json_error(_('Failed to update item availability'))

    state = _('enabled') if item.is_available else _('disabled')
    return JsonResponse({
        'success': True,
        'is_available': item.is_available,
        'message': f"{item.name} {state}",
    })


# =============================================================================
# Categories
# =============================================================================

@team_required
def categories_list(request):
    categories = MenuService.list_categories(request.user)
    return render(request, 'backoffice/categories.html', {'categories': categories})


@team_required
def category_create(request):
    if request.method == 'POST':
        form = MenuCategoryForm(request.POST)
        if form.is_valid():
            try:
                MenuService.create_category(request.user, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Category added successfully'))
                return redirect('backoffice:categories')
    else:
        form = MenuCategoryForm()

    return render(request, 'backoffice/category_form.html', {'form': form, 'is_new': True})


@team_required
def category_edit(request, category_id):
    category = _scoped_or_404(request, MenuCategory, category_id, policies.UPDATE)

    if request.method == 'POST':
        form = MenuCategoryForm(request.POST, instance=category)
        if form.is_valid():
            try:
                MenuService.update_category(request.user, category, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Category updated successfully'))
                return redirect('backoffice:categories')
    else:
        form = MenuCategoryForm(instance=category)

    return render(request, 'backoffice/category_form.html', {
        'form': form, 'category': category, 'is_new': False,
    })


@team_required(json=True)
@require_POST
def category_delete(request, category_id):
    category = _scoped_or_404(request, MenuCategory, category_id, policies.DELETE)
    try:
        MenuService.delete_category(request.user, category)
    except FAILURES as exc:
        logger.warning("Category delete failed: %s", exc)
        return _json_error(_('Failed to delete category'))
    return JsonResponse({'success': True, 'message': _('Category deleted successfully')})


@team_required(json=True)
@require_POST
def category_toggle_active(request, category_id):
    category = _scoped_or_404(request, MenuCategory, category_id, policies.UPDATE)
    try:
        category = MenuService.toggle_category_active(request.user, category)
    except FAILURES as exc:
        return _json_error(exc)
    return JsonResponse({
        'success': True,
        'is_active': category.is_active,
        'message': _('Category updated successfully'),
    })


# =============================================================================
# Orders
# =============================================================================

@team_required
def orders_list(request):
    filter_form = OrderFilterForm(request.GET or None)
    filters = {}
    if filter_form.is_valid():
        filters = {k: v for k, v in filter_form.cleaned_data.items() if v}

    orders = OrderService.list_orders(request.user, **filters)
    return render(request, 'backoffice/orders.html', {
        'orders': orders[:SETTINGS['history_limit']],
        'filter_form': filter_form,
        'status_choices': Order.STATUS_CHOICES,
    })


@team_required
def order_detail(request, order_id):
    order = _scoped_or_404(request, Order, order_id)
    items = order.items.select_related('menu_item')
    return render(request, 'backoffice/order_detail.html', {
        'order': order,
        'items': items,
        'status_form': OrderStatusForm(initial={'status': order.status}),
        'item_form': OrderItemForm(),
    })


@team_required
def order_create(request):
    if request.method == 'POST':
        form = OrderForm(request.POST)
        item_form = OrderItemForm(request.POST, prefix='item')
        if form.is_valid() and item_form.is_valid():
            line = item_form.cleaned_data
            try:
                order = OrderService.create_order(
                    request.user,
                    items=[{
                        'menu_item': line['menu_item'],
                        'quantity': line['quantity'],
                        'special_instructions': line.get('special_instructions'),
                    }],
                    **form.cleaned_data,
                )
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Order created successfully'))
                return redirect('backoffice:order_detail', order_id=order.pk)
    else:
        form = OrderForm()
        item_form = OrderItemForm(prefix='item')

    return render(request, 'backoffice/order_form.html', {
        'form': form, 'item_form': item_form, 'is_new': True,
    })


@team_required
def order_edit(request, order_id):
    order = _scoped_or_404(request, Order, order_id, policies.UPDATE)

    if request.method == 'POST':
        form = OrderForm(request.POST, instance=order)
        if form.is_valid():
            try:
                OrderService.update_order(request.user, order, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Order updated successfully'))
                return redirect('backoffice:order_detail', order_id=order.pk)
    else:
        form = OrderForm(instance=order)

    return render(request, 'backoffice/order_form.html', {
        'form': form, 'order': order, 'is_new': False,
    })


@team_required(json=True)
@require_POST
def order_delete(request, order_id):
    order = _scoped_or_404(request, Order, order_id, policies.DELETE)
    try:
        OrderService.delete_order(request.user, order)
    except FAILURES as exc:
        logger.warning("Order delete failed: %s", exc)
        return _json_error(_('Failed to delete order'))
    return JsonResponse({'success': True, 'message': _('Order deleted')})


@team_required
def add_item(request, order_id):
    order = _scoped_or_404(request, Order, order_id, policies.UPDATE)

    if request.method == 'POST':
        form = OrderItemForm(request.POST)
        if form.is_valid():
            try:
                OrderService.add_item(
                    request.user, order,
                    menu_item=form.cleaned_data['menu_item'],
                    quantity=form.cleaned_data['quantity'],
                    special_instructions=form.cleaned_data.get('special_instructions'),
                )
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Item added'))
                return redirect('backoffice:order_detail', order_id=order.pk)
    else:
        form = OrderItemForm()

    return render(request, 'backoffice/add_item.html', {'form': form, 'order': order})


@team_required(json=True)
@require_POST
def update_item_quantity(request, order_id, item_id):
    order = _scoped_or_404(request, Order, order_id, policies.UPDATE)
    item = get_object_or_404(OrderItem, pk=item_id, order=order)

    try:
        quantity = int(request.POST.get('quantity', ''))
    except ValueError:
        return _json_error(_('Invalid quantity'))

    try:
        item = OrderService.update_item_quantity(request.user, item, quantity)
    except FAILURES as exc:
        return _json_error(exc)

    order.refresh_from_db()
    return JsonResponse({
        'success': True,
        'message': _('Item updated'),
        'quantity': item.quantity,
        'line_total': str(item.line_total),
        'order_total': str(order.total_amount),
    })


@team_required(json=True)
@require_POST
def remove_item(request, order_id, item_id):
    order = _scoped_or_404(request, Order, order_id, policies.UPDATE)
    item = get_object_or_404(OrderItem, pk=item_id, order=order)

    try:
        order = OrderService.remove_item(request.user, item)
    except FAILURES as exc:
        return _json_error(exc)

    return JsonResponse({
        'success': True,
        'message': _('Item removed'),
        'order_total': str(order.total_amount),
    })


@team_required(json=True)
@require_POST
def update_status(request, order_id):
    order = _scoped_or_404(request, Order, order_id, policies.UPDATE)
    new_status = request.POST.get('status', '')
    try:
        order = OrderService.update_status(request.user, order, new_status)
    except FAILURES as exc:
        return _json_error(exc)
    return JsonResponse({
        'success': True,
        'status': order.status,
        'message': _('Order status updated'),
    })


# =============================================================================
# Roles
# =============================================================================

@login_required
def roles_list(request):
    assignments = RoleService.list_assignments(request.user)
    return render(request, 'backoffice/roles.html', {
        'assignments': assignments,
        'form': RoleAssignForm() if policies.is_admin(request.user) else None,
    })


@admin_required
@require_POST
def role_assign(request):
    form = RoleAssignForm(request.POST)
    if form.is_valid():
        try:
            user = RoleService.find_user(form.cleaned_data['user'])
            RoleService.assign_role(request.user, user, form.cleaned_data['role'])
        except FAILURES as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, _('Role assigned'))
    else:
        messages.error(request, _('Invalid role assignment'))
    return redirect('backoffice:roles')


@login_required
@require_POST
def role_revoke(request, assignment_id):
    assignment = _scoped_or_404(request, UserRole, assignment_id)
    try:
        RoleService.revoke_role(request.user, assignment)
    except FAILURES as exc:
        return _json_error(exc)
    return JsonResponse({'success': True, 'message': _('Role revoked')})


# =============================================================================
# Profile
# =============================================================================

@login_required
def profile(request):
    try:
        own_profile = ProfileService.get_profile(request.user)
    except Profile.DoesNotExist:
        messages.error(request, _('Profile not found'))
        return redirect('backoffice:public_menu')

    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=own_profile)
        if form.is_valid():
            try:
                ProfileService.update_profile(request.user, own_profile, **form.cleaned_data)
            except FAILURES as exc:
                messages.error(request, str(exc))
            else:
                messages.success(request, _('Profile updated'))
                return redirect('backoffice:profile')
    else:
        form = ProfileForm(instance=own_profile)

    return render(request, 'backoffice/profile.html', {
        'form': form,
        'profile': own_profile,
        'roles': RoleService.roles_for(request.user, request.user),
    })


# =============================================================================
# Public Menu
# =============================================================================

def public_menu(request):
    return render(request, 'backoffice/public_menu.html', {
        'categories': MenuService.public_menu(),
    })


# =============================================================================
# API Endpoints (JSON)
# =============================================================================

@require_GET
def api_public_menu(request):
    return JsonResponse({'success': True, 'categories': MenuService.public_menu()})


@require_GET
def api_menu_items(request):
    """Menu items visible to the caller: everything for the team, public rows otherwise."""
    items = MenuService.list_items(request.user, q=request.GET.get('q', '').strip())
    return JsonResponse({
        'success': True,
        'items': [MenuService.item_to_dict(item) for item in items],
    })


@team_required(json=True)
@require_GET
def api_dashboard_stats(request):
    try:
        stats = get_dashboard_stats(request.user)
    except FAILURES as exc:
        return _json_error(exc)
    stats['today_revenue'] = str(stats['today_revenue'])
    return JsonResponse({'success': True, **stats})


@team_required(json=True)
@require_GET
def api_orders(request):
    orders = OrderService.list_orders(
        request.user,
        status=request.GET.get('status', ''),
        order_type=request.GET.get('order_type', ''),
        q=request.GET.get('q', '').strip(),
    )
    return JsonResponse({
        'success': True,
        'orders': [
            OrderService.order_to_dict(o, with_items=False)
            for o in orders[:SETTINGS['history_limit']]
        ],
    })


@team_required(json=True)
@require_POST
def api_create_order(request):
    """Create order with items via JSON API."""
    data = _load_json(request)
    if data is None:
        return _json_error(_('Invalid JSON'))
    if not isinstance(data, dict):
        return _json_error(_('Expected a JSON object'))

    items_data = data.pop('items', None) or []
    if not isinstance(items_data, list) or not items_data:
        return _json_error(_('At least one item is required'))
    if not all(isinstance(item, dict) for item in items_data):
        return _json_error(_('Each item must be an object'))

    items = [{
        'menu_item': item.get('menu_item_id'),
        'quantity': item.get('quantity', 1),
        'special_instructions': item.get('special_instructions'),
    } for item in items_data]

    fields = {k: v for k, v in data.items() if k in ORDER_FIELDS}
    if fields.get('estimated_ready_time'):
        ready = _parse_timestamp(fields['estimated_ready_time'])
        if ready is None:
            return _json_error(_('Invalid estimated_ready_time'))
        fields['estimated_ready_time'] = ready

    try:
        order = OrderService.create_order(request.user, items=items, **fields)
    except FAILURES as exc:
        return _json_error(exc)

    return JsonResponse({
        'success': True,
        'order_id': str(order.pk),
        'total_amount': str(order.total_amount),
        'item_count': order.item_count,
    }, status=201)


@team_required(json=True)
@require_GET
def api_get_order(request, order_id):
    order = _scoped_or_404(request, Order, order_id)
    return JsonResponse({'success': True, 'order': OrderService.order_to_dict(order)})


@team_required(json=True)
@require_GET
def api_order_changes(request):
    """
    Orders created or updated since ``?since=<iso datetime>``.

    Poll again with the returned cursor. Deleted orders are not reported;
    in-process listeners get them through the ``order_deleted`` signal.
    """
    since_param = request.GET.get('since', '')
    since = None
    if since_param:
        since = _parse_timestamp(since_param)
        if since is None:
            return _json_error(_('Invalid since timestamp'))

    changes = OrderService.changes_since(request.user, since)
    cursor = changes[-1].updated_at if changes else (since or timezone.now())
    return JsonResponse({
        'success': True,
        'orders': [OrderService.order_to_dict(o, with_items=False) for o in changes],
        'cursor': cursor.isoformat(),
    })


@login_required
@require_GET
def api_me(request):
    user = request.user
    return JsonResponse({
        'success': True,
        'id': user.pk,
        'email': user.email,
        'roles': RoleService.roles_for(user, user),
        'is_admin_or_staff': policies.is_admin_or_staff(user),
    })
