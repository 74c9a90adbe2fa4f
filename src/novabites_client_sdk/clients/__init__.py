from .auth import AuthClient
from .base import BaseClient
from .bills import BillsClient
from .cash import CashClosingClient, DailyExpensesClient
from .catalog import CatalogClient
from .orders import CustomOrdersClient, OrdersClient
from .store_requests import StoreRequestsClient
from .users import UsersClient

__all__ = [
    "AuthClient",
    "BaseClient",
    "BillsClient",
    "CashClosingClient",
    "CatalogClient",
    "CustomOrdersClient",
    "DailyExpensesClient",
    "OrdersClient",
    "StoreRequestsClient",
    "UsersClient",
]
