"""Commands accepted by the application services and the results they return."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from marketplace.entities import ZERO_TIME, Product, Seller


@dataclass(frozen=True, kw_only=True)
class CreateProductCommand:
    """Request to create a product for an existing seller."""

    name: str
    price: float
    seller_id: UUID
    id: UUID | None = None


@dataclass(frozen=True, kw_only=True)
class CreateSellerCommand:
    """Request to create a seller."""

    name: str


@dataclass(frozen=True, kw_only=True)
class UpdateSellerCommand:
    """Request to rename an existing seller."""

    id: UUID
    name: str


@dataclass(frozen=True, kw_only=True)
class SellerResult:
    """A seller as seen by callers of the application layer."""

    id: UUID
    name: str
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME


@dataclass(frozen=True, kw_only=True)
class ProductResult:
    """A product as seen by callers of the application layer."""

    id: UUID
    name: str
    price: float
    seller: SellerResult | None = None
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME


def seller_result_from_entity(seller: Seller | None) -> SellerResult | None:
    """Build a SellerResult from a seller entity, or None from None."""
    if seller is None:
        return None
    return SellerResult(
        id=seller.id,
        name=seller.name,
        created_at=seller.created_at,
        updated_at=seller.updated_at,
    )


def product_result_from_entity(product: Product | None) -> ProductResult | None:
    """Build a ProductResult from a product entity, or None from None."""
    if product is None:
        return None
    return ProductResult(
        id=product.id,
        name=product.name,
        price=product.price,
        seller=seller_result_from_entity(product.seller),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )