from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from novabites_client_sdk import ApiSession, Bill

from novabites_pos.services.errors import ServiceError, normalize_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BillServiceError(ServiceError):
    pass


def pdf_filename(bill: Bill, issued_on: str) -> str:
    return f"factura_{bill.bill_number or bill.id}_{issued_on}.pdf"


class BillService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def bill_for(self, order_id: str, *, custom: bool = False) -> Bill:
        client = self.session.bills_client()
        try:
            if custom:
                return client.bill_for_custom_order(order_id)
            return client.bill_for_order(order_id)
        except Exception as exc:
            raise normalize_error(exc, BillServiceError) from exc

    def save_pdf(self, bill: Bill, output_dir: Path, issued_on: str) -> Path:
        try:
            content = self.session.bills_client().generate_pdf(bill.id)
        except Exception as exc:
            logger.exception("bill_pdf_failure", extra={"bill_id": bill.id})
            raise normalize_error(exc, BillServiceError) from exc
        target = output_dir / pdf_filename(bill, issued_on)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            logger.exception("bill_pdf_write_failure", extra={"bill_id": bill.id, "pdf_name": target.name})
            raise BillServiceError(message=f"No se pudo guardar el PDF: {exc}") from exc
        logger.info("bill_pdf_saved", extra={"bill_id": bill.id, "pdf_name": target.name})
        return target
