from .dashboard_service import get_dashboard_stats
from .menu_service import MenuService, parse_allergens
from .order_service import OrderService
from .provisioning import provision_identity
from .role_service import ProfileService, RoleService

__all__ = [
    'MenuService',
    'OrderService',
    'ProfileService',
    'RoleService',
    'get_dashboard_stats',
    'parse_allergens',
    'provision_identity',
]
