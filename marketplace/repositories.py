"""Storage contracts for sellers and products."""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from marketplace.entities import Product, Seller, ValidatedProduct, ValidatedSeller


class NotFoundError(LookupError):
    """Raised when a requested record does not exist."""


class SellerRepository(ABC):
    """Persistence for sellers."""

    @abstractmethod
    def create(self, seller: ValidatedSeller) -> Seller:
        """Store a new seller and return it as persisted."""

    @abstractmethod
    def find_by_id(self, id: UUID) -> Seller:
        """Return the seller with ``id``; raise NotFoundError if absent."""

    @abstractmethod
    def find_all(self) -> list[Seller]:
        """Return every stored seller."""

    @abstractmethod
    def update(self, seller: ValidatedSeller) -> Seller:
        """Save changes to an existing seller and return it as persisted."""

    @abstractmethod
    def delete(self, id: UUID) -> None:
        """Remove the seller with ``id``."""


class ProductRepository(ABC):
    """Persistence for products."""

    @abstractmethod
    def create(self, product: ValidatedProduct) -> Product:
        """Store a new product and return it as persisted."""

    @abstractmethod
    def find_by_id(self, id: UUID) -> Product:
        """Return the product with ``id``; raise NotFoundError if absent."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every stored product."""

    @abstractmethod
    def update(self, product: ValidatedProduct) -> Product:
        """Save changes to an existing product and return it as persisted."""

    @abstractmethod
    def delete(self, id: UUID) -> None:
        """Remove the product with ``id``."""