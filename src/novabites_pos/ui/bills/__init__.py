from novabites_pos.ui.bills.bill_detail_view import BillDetailView

__all__ = ["BillDetailView"]
