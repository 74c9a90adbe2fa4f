from novabites_pos.ui.orders.add_order_form import AddOrderForm, CakeDraft
from novabites_pos.ui.orders.custom_orders_view import CustomOrdersView
from novabites_pos.ui.orders.orders_list_view import OrdersListView

__all__ = ["AddOrderForm", "CakeDraft", "CustomOrdersView", "OrdersListView"]
