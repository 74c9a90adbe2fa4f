from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from novabites_client_sdk import Bill, ClientConfig

from novabites_pos.services.bill_service import BillService, BillServiceError, pdf_filename
from novabites_pos.ui.bills.bill_detail_view import BillDetailView
from novabites_pos.ui.shared.notification_center import NotificationCenter

NOW = datetime(2024, 3, 5, 20, 0, tzinfo=timezone.utc)


@dataclass
class FakeSession:
    config: ClientConfig = field(default_factory=lambda: ClientConfig(env_name="test", api_base_url="https://api.example.com"))


@dataclass
class FakeBillService:
    bill: Bill | None = None
    pdf_error: BillServiceError | None = None
    session: FakeSession = field(default_factory=FakeSession)
    requested: list[tuple[str, bool]] = field(default_factory=list)

    def bill_for(self, order_id: str, *, custom: bool = False) -> Bill:
        self.requested.append((order_id, custom))
        if self.bill is None:
            raise BillServiceError(message="No se encontró la factura", code="BILL_NOT_FOUND", status_code=404)
        return self.bill

    def save_pdf(self, bill: Bill, output_dir: Path, issued_on: str) -> Path:
        if self.pdf_error:
            raise self.pdf_error
        target = output_dir / pdf_filename(bill, issued_on)
        target.write_bytes(b"%PDF-1.4")
        return target


def _bill(**overrides: Any) -> Bill:
    payload: dict[str, Any] = {
        "id": "b1",
        "billNumber": "FV-7",
        "createdAt": "2024-03-05T17:30:00Z",
        "totalPrice": "7500",
        "clientName": "Laura",
        "clientDocType": "CC",
        "clientDocId": "123",
        "order": {"id": "o1", "paymentMethod": "Efectivo", "amountReceived": "10000", "change": "2500"},
        "details": [
            {"id": "d1", "quantity": 3, "unitPrice": "2500", "product": {"id": "p1", "name": "Pan de bono"}},
        ],
    }
    payload.update(overrides)
    return Bill.model_validate(payload)


def _view(tmp_path: Path, bill: Bill | None, **kwargs: Any) -> BillDetailView:
    return BillDetailView(
        service=FakeBillService(bill=bill, **kwargs.pop("service_kwargs", {})),
        notifications=NotificationCenter(),
        output_dir=tmp_path,
        order_id="o1",
        **kwargs,
    )


def test_load_failure_toasts(tmp_path: Path) -> None:
    view = _view(tmp_path, None)

    assert not view.load()
    assert view.notifications.last()["title"] == "No se encontró la factura"
    assert view.render()["loading"] is True
    assert view.download_pdf(NOW) == {"ok": False, "error": "No se encontró la factura"}


def test_regular_bill_render(tmp_path: Path) -> None:
    view = _view(tmp_path, _bill())
    assert view.load()

    rendered = view.render()

    assert view.service.requested == [("o1", False)]
    assert rendered["kind"] == "Factura"
    assert rendered["bill_number"] == "#FV-7"
    assert rendered["date"] == "5 de marzo de 2024, 12:30 p. m."
    assert rendered["client"] == {"name": "Laura", "document": "CC 123"}
    assert rendered["products"] == [{"name": "Pan de bono", "quantity": 3, "unit_price": "$ 2.500", "total": "$ 7.500"}]
    assert rendered["empty_products"] is None
    assert rendered["payment"] == {
        "title": "Información de Pago",
        "payment_method": "Efectivo",
        "amount_received": "$ 10.000",
        "change": "$ 2.500",
    }


def test_card_payment_has_no_cash_fields(tmp_path: Path) -> None:
    bill = _bill(order={"id": "o1", "paymentMethod": "Debito/Crédito"}, details=[])
    view = _view(tmp_path, bill)
    view.load()

    rendered = view.render()

    assert rendered["payment"] == {"title": "Información de Pago", "payment_method": "Debito/Crédito"}
    assert rendered["empty_products"] == "No hay productos registrados"


def test_custom_order_bill_shows_deposit(tmp_path: Path) -> None:
    bill = _bill(
        order=None,
        customOrder={"id": "c1", "depositAmount": "20000", "remainingAmount": "35000", "status": "PENDING"},
    )
    view = _view(tmp_path, bill, custom=True)
    view.load()

    rendered = view.render()

    assert view.service.requested == [("o1", True)]
    assert rendered["kind"] == "Pedido Personalizado"
    assert rendered["payment"] == {
        "title": "Información del Pedido",
        "deposit": "$ 20.000",
        "remaining": "$ 35.000",
        "status": "PENDING",
    }


def test_download_pdf_writes_file(tmp_path: Path) -> None:
    view = _view(tmp_path, _bill())
    view.load()

    result = view.download_pdf(NOW)

    assert result == {"ok": True, "path": str(tmp_path / "factura_FV-7_2024-03-05.pdf")}
    assert view.saved_pdf.read_bytes() == b"%PDF-1.4"
    assert view.notifications.last()["title"] == "PDF generado exitosamente"


def test_download_pdf_failure(tmp_path: Path) -> None:
    view = _view(tmp_path, _bill(), service_kwargs={"pdf_error": BillServiceError(message="Error del servidor")})
    view.load()

    assert view.download_pdf(NOW) == {"ok": False, "error": "Error del servidor"}
    assert view.notifications.last()["title"] == "Error al generar PDF"
    assert view.is_generating is False


@dataclass
class PdfBillsClient:
    bill: Bill

    def bill_for_order(self, order_id: str) -> Bill:
        return self.bill

    def generate_pdf(self, bill_id: str) -> bytes:
        return b"%PDF-1.4"


@dataclass
class BillsSession(FakeSession):
    client: PdfBillsClient | None = None

    def bills_client(self) -> PdfBillsClient:
        return self.client


def test_download_pdf_into_blocked_folder_toasts(tmp_path: Path) -> None:
    blocked = tmp_path / "facturas"
    blocked.write_text("not a directory", encoding="utf-8")
    bill = _bill()
    view = BillDetailView(
        service=BillService(BillsSession(client=PdfBillsClient(bill=bill))),
        notifications=NotificationCenter(),
        output_dir=blocked,
        order_id="o1",
    )
    assert view.load()

    result = view.download_pdf(NOW)

    assert result["ok"] is False
    assert result["error"].startswith("No se pudo guardar el PDF")
    assert view.notifications.last()["title"] == "Error al generar PDF"
    assert view.saved_pdf is None
