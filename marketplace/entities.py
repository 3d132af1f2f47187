"""Domain entities: sellers and products, with their validation rules."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from uuid import UUID

ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)
NIL_UUID = UUID(int=0)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ValidationError(ValueError):
    """Raised when an entity breaks one of its invariants."""


@dataclass(kw_only=True)
class Seller:
    """A party that offers products on the marketplace."""

    id: UUID = NIL_UUID
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME
    name: str = ""

    @classmethod
    def create(cls, name: str) -> Seller:
        """Make a new seller with a fresh id and current timestamps."""
        now = _now()
        return cls(id=uuid.uuid4(), created_at=now, updated_at=now, name=name)

    def validate(self) -> None:
        """Raise ValidationError if the seller is not consistent."""
        if not self.name:
            raise ValidationError("name must not be empty")
        if self.created_at > self.updated_at:
            raise ValidationError("created_at must be before updated_at")

    def update_name(self, name: str) -> None:
        """Rename the seller, touch updated_at and re-check the invariants."""
        self.name = name
        self.updated_at = _now()
        self.validate()

    def _snapshot(self) -> Seller:
        return Seller(
            id=self.id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            name=self.name,
        )


@dataclass(kw_only=True)
class Product:
    """An item a seller offers at a price."""

    id: UUID = NIL_UUID
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME
    name: str = ""
    price: float = 0.0
    seller: Seller = field(default_factory=Seller)

    @classmethod
    def create(cls, name: str, price: float, seller: Seller) -> Product:
        """Make a new product with a fresh id, owned by a copy of ``seller``."""
        now = _now()
        return cls(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            name=name,
            price=price,
            seller=seller._snapshot(),
        )

    def validate(self) -> None:
        """Raise ValidationError if the product is not consistent."""
        if not self.name:
            raise ValidationError("name must not be empty")
        if self.price <= 0:
            raise ValidationError("price must be greater than 0")
        if self.created_at > self.updated_at:
            raise ValidationError("created_at must be before updated_at")

    def update_name(self, name: str) -> None:
        """Rename the product, touch updated_at and re-check the invariants."""
        self.name = name
        self.updated_at = _now()
        self.validate()

    def update_price(self, price: float) -> None:
        """Change the price, touch updated_at and re-check the invariants."""
        self.price = price
        self.updated_at = _now()
        self.validate()


@dataclass(kw_only=True)
class ValidatedSeller(Seller):
    """A seller that has passed validation."""

    _validated: bool = field(default=False, repr=False, compare=False)

    def is_valid(self) -> bool:
        return self._validated


@dataclass(kw_only=True)
class ValidatedProduct(Product):
    """A product that has passed validation."""

    _validated: bool = field(default=False, repr=False, compare=False)

    def is_valid(self) -> bool:
        return self._validated


def validate_seller(seller: Seller) -> ValidatedSeller:
    """Check ``seller`` and return a validated copy of it."""
    seller.validate()
    values = {f.name: getattr(seller, f.name) for f in fields(Seller)}
    return ValidatedSeller(**values, _validated=True)


def validate_product(product: Product) -> ValidatedProduct:
    """Check ``product`` and return a validated copy of it."""
    product.validate()
    values = {f.name: getattr(product, f.name) for f in fields(Product)}
    values["seller"] = product.seller._snapshot()
    return ValidatedProduct(**values, _validated=True)