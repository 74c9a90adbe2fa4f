from novabites_pos.ui.requests.request_detail_view import RequestDetailView
from novabites_pos.ui.requests.request_stepper import build_steps
from novabites_pos.ui.requests.requests_list_view import RequestsListView

__all__ = ["RequestDetailView", "RequestsListView", "build_steps"]
