from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _alias(camel: str, snake: str) -> Any:
    return Field(default=None, alias=camel, validation_alias=AliasChoices(camel, snake))


class Role(str, Enum):
    MANAGER = "manager"
    STAFF = "staff"


class ChangeType(str, Enum):
    RESTOCK = "restock"
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    RETURN = "return"


class Actor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | int
    name: str
    email: str
    role: str
    department_id: str | int | None = _alias("departmentId", "department_id")
    department_name: str | None = _alias("departmentName", "department_name")
    phone: str | None = None
    last_login: str | None = _alias("lastLogin", "last_login")
    created_at: str | None = _alias("createdAt", "created_at")
    is_active: bool = Field(
        default=True,
        alias="isActive",
        validation_alias=AliasChoices("isActive", "is_active"),
    )

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER


class SessionData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: Optional[Actor] = None
    access_token: str | None = Field(default=None, alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    is_authenticated: bool = Field(default=False, alias="isAuthenticated")


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: Actor
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


class RefreshResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    refresh_token: str | None = Field(default=None, alias="refreshToken")


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | int
    name: str | None = None
    sku: str | None = None
    quantity_in_stock: int = Field(
        default=0,
        alias="quantityInStock",
        validation_alias=AliasChoices("quantityInStock", "quantity_in_stock"),
    )
    min_stock_level: int | None = _alias("minStockLevel", "min_stock_level")
    department_id: str | int | None = _alias("departmentId", "department_id")
    department_name: str | None = _alias("departmentName", "department_name")
    category_id: str | int | None = _alias("categoryId", "category_id")
    category_name: str | None = _alias("categoryName", "category_name")
    price: float | None = None


class ProductListResponse(BaseModel):
    products: List[Product] = Field(default_factory=list)
    pagination: dict[str, Any] | None = None


class StockAdjustmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str | int = Field(
        alias="productId", validation_alias=AliasChoices("productId", "product_id")
    )
    change_type: ChangeType = Field(
        alias="changeType", validation_alias=AliasChoices("changeType", "change_type")
    )
    quantity_changed: int = Field(
        alias="quantityChanged",
        validation_alias=AliasChoices("quantityChanged", "quantity_changed"),
        strict=True,
    )
    reason: str | None = None
    reference_number: str | None = _alias("referenceNumber", "reference_number")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ReportFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: date | None = Field(default=None, alias="startDate")
    end_date: date | None = Field(default=None, alias="endDate")
    category: str | None = None
    department: str | None = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
