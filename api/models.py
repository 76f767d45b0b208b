"""
API request and response models for StockRoom REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
catalog/models.py, which own the internal domain representation. Route
handlers map between the two.

Request models leave every field optional: a missing field is a 400 decided
by the handler or the store, not a 422 from FastAPI.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from catalog.models import Product

# ---------------------------------------------------------------------------
# Errors / health
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Error envelope returned on 4xx/5xx responses: {"error": ..., "message"?: ...}."""

    model_config = ConfigDict(frozen=True)

    error: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class Credentials(BaseModel):
    """Request body for POST /auth/register and POST /auth/login."""

    username: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=255)


class PublicUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str


class RegisterResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    user: PublicUser


class LoginResponse(BaseModel):
    """Response for POST /auth/login. expiresIn echoes the configured lifetime ("1h")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: str
    expires_in: str = Field(alias="expiresIn")
    user: PublicUser


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class ProductCreate(BaseModel):
    """Request body for POST /products. JSON uses inStock for the stock flag.

    Strict: records are stored verbatim, so "12" is not a price and "yes" is
    not a stock flag.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True)

    id: Optional[int] = None
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Union[int, float]] = None
    in_stock: Optional[bool] = Field(default=None, alias="inStock")


class ProductResponse(BaseModel):
    """A catalog entry as returned to clients."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    category: str
    price: Union[int, float]
    in_stock: bool = Field(alias="inStock")

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            category=product.category,
            price=product.price,
            in_stock=product.in_stock,
        )


class ProductCreatedResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    product: ProductResponse
