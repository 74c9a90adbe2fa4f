"""Cash closing: what was sold since the last closing, and the three-step submit.

A closing first saves the pending expenses, then asks the central store for a
replenishment of what was sold, and finally records the closing itself with
the ids of everything it covers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from novabites_client_sdk import ApiSession, CashClosing, DailyExpense, Order, Product, RequestType, Store
from novabites_client_sdk.models_cash import CashClosingCreate, DailyExpenseCreate
from novabites_client_sdk.models_requests import StoreRequestCreate

from novabites_pos.services.errors import ServiceError, normalize_error
from novabites_pos.services.expense_service import UNKNOWN_PRODUCT_NAME, PendingExpense, pending_total, total_revenue
from novabites_pos.services.inventory_service import CENTRAL_STORE_MISSING, RequestRow, central_store, request_details, rows_complete
from novabites_pos.shared.currency import plain_amount
from novabites_pos.shared.date_utils import iso_date_start, is_after

logger = logging.getLogger(__name__)

REPLENISHMENT_FAILED = "Error al crear la solicitud de reposición"


@dataclass(frozen=True)
class CashClosingServiceError(ServiceError):
    pass


@dataclass(frozen=True)
class ProductSold:
    product_id: str
    product_name: str
    quantity_sold: int


@dataclass
class ClosingContext:
    stores: list[Store] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    last_closing: CashClosing | None = None
    products_sold: list[ProductSold] = field(default_factory=list)
    rows: list[RequestRow] = field(default_factory=list)

    @property
    def last_closing_time(self) -> datetime | None:
        return self.last_closing.created_at if self.last_closing else None


@dataclass(frozen=True)
class ClosingTotals:
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class ClosingResult:
    closing: CashClosing
    saved_expenses: list[DailyExpense]
    product_count: int

    def summary(self) -> str:
        lines = [f"Solicitud de reposición: {self.product_count} productos"]
        if self.saved_expenses:
            lines.append(f"Gastos guardados: {len(self.saved_expenses)}")
        lines.append(f"Cierre #{self.closing.num_id} registrado")
        return "\n".join(lines)


def orders_since(orders: Sequence[Order], last_closing: CashClosing | None) -> list[Order]:
    if last_closing is None or last_closing.created_at is None:
        return list(orders)
    return [order for order in orders if order.created_at is not None and is_after(order.created_at, last_closing.created_at)]


def products_sold(orders: Sequence[Order]) -> list[ProductSold]:
    grouped: dict[str, ProductSold] = {}
    for order in orders:
        for detail in order.details:
            if not detail.product_id:
                continue
            current = grouped.get(detail.product_id)
            if current is None:
                name = (detail.product.name if detail.product else None) or UNKNOWN_PRODUCT_NAME
                current = ProductSold(detail.product_id, name, 0)
            grouped[detail.product_id] = ProductSold(
                current.product_id, current.product_name, current.quantity_sold + detail.quantity
            )
    return list(grouped.values())


def preload_rows(sold: Sequence[ProductSold], products: Sequence[Product]) -> list[RequestRow]:
    by_id = {product.id: product for product in products}
    return [
        RequestRow(product=by_id[item.product_id], quantity=item.quantity_sold)
        for item in sold
        if item.product_id in by_id
    ]


def closing_totals(orders: Sequence[Order], pending: Sequence[PendingExpense]) -> ClosingTotals:
    revenue = total_revenue(orders)
    expenses = pending_total(pending)
    return ClosingTotals(total_revenue=revenue, total_expenses=expenses, net_profit=revenue - expenses)


def validate_closing(description: str, rows: Sequence[RequestRow], pending: Sequence[PendingExpense]) -> tuple[str, str] | None:
    """Return the (title, description) toast for the first problem, or None."""
    if not description.strip():
        return "Descripción requerida", "Debes agregar una descripción del cierre de caja"
    if not rows_complete(rows):
        return "Solicitud incompleta", "Debes completar todos los campos de la solicitud de productos"
    if not all(expense.is_complete() for expense in pending):
        return "Gastos incompletos", "Debes completar todos los campos de los gastos pendientes"
    return None


class CashClosingService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def prepare(self, orders: Sequence[Order], date_string: str, closings_count: int) -> ClosingContext:
        store_id = self.session.store_id
        catalog = self.session.catalog_client()
        try:
            stores = catalog.list_stores()
            products = catalog.list_products()
        except Exception as exc:
            raise normalize_error(exc, CashClosingServiceError) from exc
        last_closing = None
        if closings_count > 0 and store_id:
            last_closing = self._last_closing(store_id, date_string)
        sold = products_sold(orders_since(orders, last_closing))
        return ClosingContext(
            stores=stores,
            products=products,
            last_closing=last_closing,
            products_sold=sold,
            rows=preload_rows(sold, products),
        )

    def _last_closing(self, store_id: str, date_string: str) -> CashClosing | None:
        # Without the last closing every order of the day counts as sold.
        try:
            return self.session.cash_closing_client().last_of_day(store_id, date_string)
        except Exception:
            logger.warning(
                "last_closing_lookup_failed",
                extra={"store_id": store_id, "closing_date": date_string},
                exc_info=True,
            )
            return None

    def submit(
        self,
        *,
        context: ClosingContext,
        orders: Sequence[Order],
        pending: Sequence[PendingExpense],
        description: str,
        date_string: str,
        now: datetime | None = None,
    ) -> ClosingResult:
        store_id = self.session.store_id
        user_id = self.session.user_id
        logger.info("cash_closing_started", extra={"store_id": store_id, "closing_date": date_string})
        try:
            saved = self._save_expenses(pending, date_string)
            central = central_store(context.stores)
            if central is None:
                raise CashClosingServiceError(message=CENTRAL_STORE_MISSING)
            replenishment = self.session.store_requests_client().create_request(
                StoreRequestCreate(
                    type=RequestType.SUPPLY_REQUEST,
                    requesting_store_id=store_id,
                    requesting_user_id=user_id,
                    target_store_id=central.id,
                    requested_date=now or datetime.now(timezone.utc),
                    details=request_details(context.rows),
                )
            )
            if replenishment is None or not replenishment.id:
                raise CashClosingServiceError(message=REPLENISHMENT_FAILED)
            totals = closing_totals(orders, pending)
            closing = self.session.cash_closing_client().create_closing(
                CashClosingCreate(
                    store_id=store_id,
                    user_id=user_id,
                    closing_date=date_string,
                    description=description,
                    total_orders=len(orders),
                    total_revenue=totals.total_revenue,
                    total_expenses=totals.total_expenses,
                    net_profit=totals.net_profit,
                    store_request_id=replenishment.id,
                    order_ids=[order.id for order in orders],
                    expense_ids=[expense.id for expense in saved],
                )
            )
        except Exception as exc:
            logger.exception("cash_closing_failure", extra={"store_id": store_id, "closing_date": date_string})
            raise normalize_error(exc, CashClosingServiceError) from exc
        logger.info(
            "cash_closing_completed",
            extra={"store_id": store_id, "closing_id": closing.id, "expense_count": len(saved)},
        )
        return ClosingResult(closing=closing, saved_expenses=saved, product_count=len(context.rows))

    def _save_expenses(self, pending: Sequence[PendingExpense], date_string: str) -> list[DailyExpense]:
        client = self.session.daily_expenses_client()
        saved = []
        for expense in pending:
            saved.append(
                client.create_expense(
                    DailyExpenseCreate(
                        store_id=self.session.store_id,
                        user_id=self.session.user_id,
                        category=expense.category,
                        description=expense.description,
                        amount=plain_amount(expense.parsed_amount),
                        expense_date=iso_date_start(date_string),
                    )
                )
            )
        return saved
