from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import field_serializer

from .models import ApiModel, BaseEntity, Store, User
from .models_catalog import Product


class RequestType(str, Enum):
    SUPPLY_REQUEST = "SUPPLY_REQUEST"
    RETURN_REQUEST = "RETURN_REQUEST"
    RELOCATION_REQUEST = "RELOCATION_REQUEST"


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class ReturnReason(str, Enum):
    DAMAGED = "DAMAGED"
    EXPIRED = "EXPIRED"
    INCORRECT = "INCORRECT"
    EXCESS_STOCK = "EXCESS_STOCK"
    OTHER = "OTHER"


class StoreRequestDetail(ApiModel):
    id: str | None = None
    request_id: str | None = None
    product_id: str | None = None
    requested_quantity: int = 0
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    return_reason: ReturnReason | str | None = None
    product: Product | None = None


class StoreRequest(BaseEntity):
    num_id: int | None = None
    type: RequestType | str
    status: RequestStatus | str
    requesting_store_id: str | None = None
    requesting_user_id: str | None = None
    target_store_id: str | None = None
    approved_by_user_id: str | None = None
    requested_date: datetime | None = None
    approved_date: datetime | None = None
    completed_date: datetime | None = None
    requesting_store: Store | None = None
    target_store: Store | None = None
    requesting_user: User | None = None
    approved_by_user: User | None = None
    details: list[StoreRequestDetail] = []


class StoreRequestDetailInput(ApiModel):
    product_id: str
    requested_quantity: int
    unit_price: Decimal
    total_price: Decimal
    return_reason: ReturnReason | None = None

    @field_serializer("unit_price", "total_price")
    def _money_as_number(self, value: Decimal) -> float:
        return float(value)


class StoreRequestCreate(ApiModel):
    type: RequestType
    status: RequestStatus = RequestStatus.PENDING
    requesting_store_id: str | None = None
    requesting_user_id: str | None = None
    target_store_id: str | None = None
    requested_date: datetime
    details: list[StoreRequestDetailInput]
