from __future__ import annotations

from typing import TYPE_CHECKING, Any

from novabites_pos.app.state import Route
from novabites_pos.services.auth_service import AuthService
from novabites_pos.services.bill_service import BillService
from novabites_pos.services.cash_closing_service import CashClosingService
from novabites_pos.services.custom_order_service import CustomOrderService
from novabites_pos.services.expense_service import ExpenseService
from novabites_pos.services.inventory_service import InventoryService
from novabites_pos.services.orders_service import OrdersService
from novabites_pos.services.profile_service import ProfileService
from novabites_pos.services.sales_service import SalesService
from novabites_pos.services.store_request_service import StoreRequestService
from novabites_pos.ui.bills.bill_detail_view import BillDetailView
from novabites_pos.ui.dashboard_view import DashboardView
from novabites_pos.ui.expenses.daily_report_view import DailyReportView
from novabites_pos.ui.forgot_password_view import ForgotPasswordView
from novabites_pos.ui.inventory.inventory_view import InventoryView
from novabites_pos.ui.orders.custom_orders_view import CustomOrdersView
from novabites_pos.ui.orders.orders_list_view import OrdersListView
from novabites_pos.ui.profile_view import ProfileView
from novabites_pos.ui.requests.requests_list_view import RequestsListView
from novabites_pos.ui.reset_password_view import ResetPasswordView
from novabites_pos.ui.sales.sales_view import SalesView
from novabites_pos.ui.signin_view import SignInView

if TYPE_CHECKING:
    from novabites_pos.app.bootstrap import PosAppBootstrap


def build_screen(app: PosAppBootstrap, route: Route) -> Any | None:
    """View object for a route; routes without a screen of their own return None."""
    session = app.session
    notifications = app.notifications
    if route is Route.SIGNIN:
        return SignInView(login=app.login)
    if route is Route.FORGOT_PASSWORD:
        return ForgotPasswordView(service=AuthService(session), notifications=notifications)
    if route is Route.RESET_PASSWORD:
        return ResetPasswordView(service=AuthService(session), notifications=notifications)
    if route is Route.DASHBOARD:
        return DashboardView(session=app.state.session)
    if route is Route.SALES:
        return SalesView(service=SalesService(session), notifications=notifications)
    if route is Route.ORDER:
        return CustomOrdersView(service=CustomOrderService(session), notifications=notifications)
    if route is Route.INVENTORY:
        return InventoryView(service=InventoryService(session), notifications=notifications)
    if route is Route.ORDERS_LIST:
        return OrdersListView(service=OrdersService(session), notifications=notifications)
    if route is Route.REQUESTS_LIST:
        return RequestsListView(service=StoreRequestService(session), notifications=notifications)
    if route is Route.EXPENSE:
        return DailyReportView(
            service=ExpenseService(session),
            closing_service=CashClosingService(session),
            notifications=notifications,
        )
    if route is Route.PROFILE:
        return ProfileView(service=ProfileService(session), notifications=notifications)
    return None


def build_bill_view(app: PosAppBootstrap, order_id: str, *, custom: bool = False) -> BillDetailView:
    return BillDetailView(
        service=BillService(app.session),
        notifications=app.notifications,
        output_dir=app.app_config.output_dir,
        order_id=order_id,
        custom=custom,
    )
