from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for wire DTOs: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Role(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"


class TypeStore(str, Enum):
    PRINCIPAL = "PRINCIPAL"
    NORMAL = "NORMAL"
    DISTRIBUTION = "DISTRIBUTION"


class TypeId(str, Enum):
    CC = "CC"
    NIT = "NIT"
    TI = "TI"
    CE = "CE"
    PP = "PP"


class TypeIdBusiness(str, Enum):
    CC = "CC"
    NIT = "NIT"


class TypeContract(str, Enum):
    INDEFINITE = "INDEFINITE"
    FIXED_TERM = "FIXED_TERM"
    INTERNSHIP = "INTERNSHIP"
    TEMPORARY = "TEMPORARY"
    PART_TIME = "PART_TIME"


class UnitType(str, Enum):
    KG = "KG"
    L = "L"
    UN = "UN"
    GRAM = "GRAM"
    ML = "ML"
    LB = "LB"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


class LogContext(str, Enum):
    AUTH = "AUTH"
    USER_MANAGEMENT = "USER_MANAGEMENT"
    INVENTORY = "INVENTORY"
    SALES = "SALES"
    ORDERS = "ORDERS"
    BILLING = "BILLING"
    DELIVERY = "DELIVERY"
    SYSTEM = "SYSTEM"
    SECURITY = "SECURITY"


class ActionType(str, Enum):
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    EXPORT = "EXPORT"
    IMPORT = "IMPORT"
    BACKUP = "BACKUP"
    RESTORE = "RESTORE"


class BaseEntity(ApiModel):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BaseEntityWithNumId(BaseEntity):
    num_id: int | None = None


class Store(BaseEntityWithNumId):
    name: str
    phone: str | None = None
    address: str | None = None
    type: TypeStore | str | None = None
    manager_id: str | None = None
    available: bool = True

    @property
    def is_principal(self) -> bool:
        return self.type == TypeStore.PRINCIPAL


class Credentials(BaseEntity):
    user_id: str | None = None
    username: str


class UserDetails(BaseEntity):
    user_id: str | None = None
    address: str | None = None
    birth_date: date | datetime | None = None
    city: str | None = None
    img_url: str | None = None
    position: str | None = None
    type_contract: TypeContract | str | None = None


class User(BaseEntityWithNumId):
    doc_id: str | None = None
    type_id: str | None = None
    status: str | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    role: Role | str | None = None
    store_id: str | None = None
    credentials: Credentials | None = None
    user_details: UserDetails | None = None
    store: Store | None = None


class TokenClaims(ApiModel):
    """Payload carried in the bearer token."""

    user_id: str
    name: str | None = None
    username: str | None = None
    role: Role | str | None = None
    store_id: str | None = None
    exp: int | None = None
    iat: int | None = None

    def is_expired(self, now: datetime) -> bool:
        if self.exp is None:
            return False
        return self.exp < now.timestamp()


class SessionData(BaseModel):
    access_token: str
    claims: TokenClaims | None = None
    env_name: str | None = None


class LoginRequest(ApiModel):
    username: str
    password: str


class PasswordResetRequest(ApiModel):
    email: str
    app_url: str


class PasswordResetConfirm(ApiModel):
    token: str
    new_password: str

