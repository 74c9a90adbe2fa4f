from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ForbiddenError,
    NotFoundError,
    SessionExpiredError,
    TokenDecodeError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import Role, SessionData, Store, TokenClaims, TypeStore, User
from .models_cash import CashClosing, DailyExpense, ExpenseCategory
from .models_catalog import CategoryProduct, Product, StoreProduct, SubcategoryProduct
from .models_requests import RequestStatus, RequestType, ReturnReason, StoreRequest, StoreRequestDetail
from .models_sales import Bill, CustomOrder, Order, StatusOrder
from .payment_validation import (
    PaymentMethod,
    PaymentValidationIssue,
    PaymentValidationResult,
    compute_change,
    payment_label,
    validate_payment,
)
from .session import ApiSession
from .token_claims import decode_token
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "Bill",
    "CashClosing",
    "CategoryProduct",
    "ClientConfig",
    "ConfigError",
    "CustomOrder",
    "DailyExpense",
    "ExpenseCategory",
    "ForbiddenError",
    "HttpClient",
    "NotFoundError",
    "Order",
    "PaymentMethod",
    "PaymentValidationIssue",
    "PaymentValidationResult",
    "Product",
    "RequestStatus",
    "RequestType",
    "ReturnReason",
    "Role",
    "SessionData",
    "SessionExpiredError",
    "StatusOrder",
    "Store",
    "StoreProduct",
    "StoreRequest",
    "StoreRequestDetail",
    "SubcategoryProduct",
    "TokenClaims",
    "TokenDecodeError",
    "TransportError",
    "TypeStore",
    "UnauthorizedError",
    "User",
    "UserFacingError",
    "ValidationError",
    "compute_change",
    "decode_token",
    "load_config",
    "payment_label",
    "to_user_facing_error",
    "validate_payment",
]
