"""Back-office URL Configuration"""

from django.contrib.auth import views as auth_views
from django.urls import path

from . import views

app_name = 'backoffice'

urlpatterns = [
    # Auth
    path('login/', auth_views.LoginView.as_view(template_name='registration/login.html'), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),
    path('signup/', views.signup, name='signup'),

    # Dashboard
    path('', views.dashboard, name='dashboard'),

    # Menu items
    path('menu/', views.menu_list, name='menu'),
    path('menu/add/', views.menu_item_create, name='menu_item_add'),
    path('menu/<uuid:item_id>/edit/', views.menu_item_edit, name='menu_item_edit'),
    path('menu/<uuid:item_id>/delete/', views.menu_item_delete, name='menu_item_delete'),
    path('menu/<uuid:item_id>/toggle-availability/', views.menu_item_toggle_availability, name='menu_item_toggle'),

    # Categories
    path('categories/', views.categories_list, name='categories'),
    path('categories/add/', views.category_create, name='category_add'),
    path('categories/<uuid:category_id>/edit/', views.category_edit, name='category_edit'),
    path('categories/<uuid:category_id>/delete/', views.category_delete, name='category_delete'),
    path('categories/<uuid:category_id>/toggle-active/', views.category_toggle_active, name='category_toggle'),

    # Orders
    path('orders/', views.orders_list, name='orders'),
    path('orders/create/', views.order_create, name='order_create'),
    path('orders/<uuid:order_id>/', views.order_detail, name='order_detail'),
    path('orders/<uuid:order_id>/edit/', views.order_edit, name='order_edit'),
    path('orders/<uuid:order_id>/delete/', views.order_delete, name='order_delete'),
    path('orders/<uuid:order_id>/add-item/', views.add_item, name='add_item'),
    path('orders/<uuid:order_id>/items/<uuid:item_id>/update/', views.update_item_quantity, name='update_item_quantity'),
    path('orders/<uuid:order_id>/items/<uuid:item_id>/remove/', views.remove_item, name='remove_item'),
    path('orders/<uuid:order_id>/update-status/', views.update_status, name='update_status'),

    # Roles & profile
    path('roles/', views.roles_list, name='roles'),
    path('roles/assign/', views.role_assign, name='role_assign'),
    path('roles/<uuid:assignment_id>/revoke/', views.role_revoke, name='role_revoke'),
    path('profile/', views.profile, name='profile'),

    # Public
    path('public/menu/', views.public_menu, name='public_menu'),

    # API (JSON)
    path('api/me/', views.api_me, name='api_me'),
    path('api/dashboard/stats/', views.api_dashboard_stats, name='api_dashboard_stats'),
    path('api/menu/public/', views.api_public_menu, name='api_public_menu'),
    path('api/menu/items/', views.api_menu_items, name='api_menu_items'),
    path('api/orders/', views.api_orders, name='api_orders'),
    path('api/orders/create/', views.api_create_order, name='api_create_order'),
    path('api/orders/changes/', views.api_order_changes, name='api_order_changes'),
    path('api/orders/<uuid:order_id>/', views.api_get_order, name='api_get_order'),
]
