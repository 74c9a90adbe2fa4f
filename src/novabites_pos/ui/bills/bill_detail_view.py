from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from novabites_client_sdk import Bill

from novabites_pos.services.bill_service import BillService, BillServiceError
from novabites_pos.shared.currency import format_cop
from novabites_pos.shared.date_utils import format_date_time_local, today_local
from novabites_pos.ui.shared.notification_center import NotificationCenter


@dataclass
class BillDetailView:
    service: BillService
    notifications: NotificationCenter
    output_dir: Path
    order_id: str
    custom: bool = False
    bill: Bill | None = None
    is_loading: bool = False
    is_generating: bool = False
    saved_pdf: Path | None = None

    def load(self) -> bool:
        self.is_loading = True
        try:
            self.bill = self.service.bill_for(self.order_id, custom=self.custom)
            return True
        except BillServiceError:
            self.notifications.error("No se encontró la factura", "No se pudo cargar la información de la factura.")
            self.bill = None
            return False
        finally:
            self.is_loading = False

    def download_pdf(self, now: datetime | None = None) -> dict[str, Any]:
        if self.bill is None:
            return {"ok": False, "error": "No se encontró la factura"}
        if self.is_generating:
            return {"ok": False, "error": None}
        self.is_generating = True
        tz = self.service.session.config.tzinfo
        try:
            self.saved_pdf = self.service.save_pdf(self.bill, self.output_dir, today_local(tz, now=now))
        except BillServiceError as exc:
            self.notifications.error("Error al generar PDF", "No se pudo generar el archivo PDF.")
            return {"ok": False, "error": exc.message}
        finally:
            self.is_generating = False
        self.notifications.success("PDF generado exitosamente", "El archivo se ha descargado.")
        return {"ok": True, "path": str(self.saved_pdf)}

    def _payment_section(self) -> dict[str, Any] | None:
        bill = self.bill
        if self.custom:
            order = bill.custom_order
            if order is None:
                return None
            status = str(getattr(order.status, "value", order.status or ""))
            return {
                "title": "Información del Pedido",
                "deposit": format_cop(order.deposit_amount),
                "remaining": format_cop(order.remaining_amount),
                "status": status,
            }
        order = bill.order
        if order is None:
            return None
        section: dict[str, Any] = {"title": "Información de Pago", "payment_method": order.payment_method}
        if order.amount_received:
            section["amount_received"] = format_cop(order.amount_received)
            section["change"] = format_cop(order.change or 0)
        return section

    def render(self) -> dict[str, Any]:
        if self.is_loading or self.bill is None:
            return {"title": "Detalles de la Factura", "loading": True, "message": "Cargando información..."}
        bill = self.bill
        tz = self.service.session.config.tzinfo
        client = {"name": bill.client_name or "N/A"}
        if bill.client_doc_id:
            client["document"] = f"{bill.client_doc_type or ''} {bill.client_doc_id}".strip()
        if bill.client_phone:
            client["phone"] = bill.client_phone
        if bill.client_email:
            client["email"] = bill.client_email
        if bill.client_address:
            client["address"] = bill.client_address
        return {
            "title": "Detalles de la Factura",
            "loading": False,
            "kind": "Pedido Personalizado" if self.custom else "Factura",
            "bill_number": f"#{bill.bill_number or bill.id}",
            "date": format_date_time_local(bill.created_at, tz) if bill.created_at else "",
            "total": format_cop(bill.total_price),
            "client": client,
            "products": [
                {
                    "name": detail.display_name,
                    "quantity": detail.quantity,
                    "unit_price": format_cop(detail.unit_price or 0),
                    "total": format_cop(detail.line_total),
                }
                for detail in bill.details
            ],
            "empty_products": "No hay productos registrados" if not bill.details else None,
            "payment": self._payment_section(),
            "pdf_enabled": not self.is_generating,
        }
