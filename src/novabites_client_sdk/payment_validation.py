from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum


class PaymentMethod(str, Enum):
    CASH = "Cash"
    TRANSFER = "Transfer"
    CARD = "Card"


TRANSFER_OPTIONS: tuple[str, ...] = ("nequi", "daviplata", "bancolombia", "otros")
DEFAULT_TRANSFER_OPTION = "nequi"


@dataclass(frozen=True)
class PaymentValidationIssue:
    field: str
    title: str
    description: str | None = None


@dataclass(frozen=True)
class PaymentValidationResult:
    ok: bool
    issues: list[PaymentValidationIssue]
    payment_label: str | None
    change: str


def parse_amount(raw: str | None) -> Decimal | None:
    if raw is None or not str(raw).strip():
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def _plain(value: Decimal) -> str:
    text = format(value.normalize(), "f")
    return text if text != "-0" else "0"


def compute_change(total: Decimal, amount_received: str | None) -> str:
    """Change owed to the customer; "0" while the received amount does not cover the total."""
    received = parse_amount(amount_received)
    if received is None or received < total:
        return "0"
    return _plain(received - total)


def payment_label(method: PaymentMethod | str | None, transfer_option: str | None = None) -> str | None:
    if not method:
        return None
    normalized = PaymentMethod(method)
    if normalized is PaymentMethod.CASH:
        return "Efectivo"
    if normalized is PaymentMethod.TRANSFER:
        option = transfer_option or ""
        return f"Transferencia/{option[:1].upper()}{option[1:]}"
    return "Debito/Crédito"


def validate_payment(
    *,
    method: PaymentMethod | str | None,
    total: Decimal,
    amount_received: str | None = None,
    transfer_option: str | None = None,
) -> PaymentValidationResult:
    issues: list[PaymentValidationIssue] = []
    if not method:
        issues.append(PaymentValidationIssue("method", "Método de pago requerido", "Debes seleccionar un método de pago."))
        return PaymentValidationResult(ok=False, issues=issues, payment_label=None, change="0")

    normalized = PaymentMethod(method)
    if normalized is PaymentMethod.CASH:
        received = parse_amount(amount_received)
        if received is None:
            issues.append(
                PaymentValidationIssue(
                    "amount_received",
                    "Monto recibido requerido",
                    "Debes ingresar el monto recibido en efectivo.",
                )
            )
        elif received < total:
            issues.append(
                PaymentValidationIssue(
                    "amount_received",
                    "Monto insuficiente",
                    "El monto recibido debe ser mayor o igual al total.",
                )
            )
    if normalized is PaymentMethod.TRANSFER and not transfer_option:
        issues.append(
            PaymentValidationIssue(
                "transfer_option",
                "Opción de transferencia requerida",
                "Debes seleccionar una opción de transferencia.",
            )
        )

    change = compute_change(total, amount_received) if normalized is PaymentMethod.CASH else "0"
    return PaymentValidationResult(
        ok=not issues,
        issues=issues,
        payment_label=payment_label(normalized, transfer_option),
        change=change,
    )
