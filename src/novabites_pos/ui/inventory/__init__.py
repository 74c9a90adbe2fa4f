from novabites_pos.ui.inventory.inventory_view import InventoryView
from novabites_pos.ui.inventory.modal_table import ModalTable
from novabites_pos.ui.inventory.request_modal import RequestModal

__all__ = ["InventoryView", "ModalTable", "RequestModal"]
