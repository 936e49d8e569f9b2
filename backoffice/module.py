"""
Back-office Module Configuration

Menu catalog, order tracking and staff access for a restaurant.
"""
from django.utils.translation import gettext_lazy as _

MODULE_ID = "backoffice"
MODULE_NAME = _("Restaurant Back-Office")
MODULE_VERSION = "1.0.0"

NAVIGATION = [
    {"id": "dashboard", "label": _("Dashboard"), "url_name": "backoffice:dashboard", "roles": ["admin", "staff"]},
    {"id": "menu", "label": _("Menu"), "url_name": "backoffice:menu", "roles": ["admin", "staff"]},
    {"id": "categories", "label": _("Categories"), "url_name": "backoffice:categories", "roles": ["admin", "staff"]},
    {"id": "orders", "label": _("Orders"), "url_name": "backoffice:orders", "roles": ["admin", "staff"]},
    {"id": "roles", "label": _("Staff Roles"), "url_name": "backoffice:roles", "roles": ["admin"]},
    {"id": "profile", "label": _("Profile"), "url_name": "backoffice:profile", "roles": ["admin", "staff"]},
]

SETTINGS = {
    "currency_symbol": "$",
    "popular_dishes_limit": 5,
    "history_limit": 100,
}

ROLES = ["admin", "staff"]

# Row-level policy per table: action -> who may perform it.
#   "admin"      caller has the admin role
#   "team"       caller is admin or staff
#   "own"        row belongs to the caller
#   "public"     anyone, restricted to the table's public rows
TABLE_POLICIES = {
    "profiles": {
        "select": ["own"],
        "update": ["own"],
    },
    "user_roles": {
        "select": ["admin", "own"],
        "insert": ["admin"],
        "update": ["admin"],
        "delete": ["admin"],
    },
    "menu_categories": {
        "select": ["team", "public"],
        "insert": ["team"],
        "update": ["team"],
        "delete": ["team"],
    },
    "menu_items": {
        "select": ["team", "public"],
        "insert": ["team"],
        "update": ["team"],
        "delete": ["team"],
    },
    "orders": {
        "select": ["team"],
        "insert": ["team"],
        "update": ["team"],
        "delete": ["team"],
    },
    "order_items": {
        "select": ["team"],
        "insert": ["team"],
        "update": ["team"],
        "delete": ["team"],
    },
}
