"""Application services that coordinate entities and repositories."""

from __future__ import annotations

from uuid import UUID

from marketplace.entities import Product, Seller, validate_product, validate_seller
from marketplace.repositories import NotFoundError, ProductRepository, SellerRepository
from marketplace.results import (
    CreateProductCommand,
    CreateSellerCommand,
    ProductResult,
    SellerResult,
    UpdateSellerCommand,
    product_result_from_entity,
    seller_result_from_entity,
)


class ProductService:
    """Use cases around products."""

    def __init__(
        self,
        product_repository: ProductRepository,
        seller_repository: SellerRepository,
    ) -> None:
        self._products = product_repository
        self._sellers = seller_repository

    def create_product(self, command: CreateProductCommand) -> ProductResult:
        """Create a product for an existing seller and store it."""
        stored_seller = self._sellers.find_by_id(command.seller_id)
        if stored_seller is None:
            raise NotFoundError("seller not found")

        seller = validate_seller(stored_seller)
        product = validate_product(Product.create(command.name, command.price, seller))
        self._products.create(product)
        return product_result_from_entity(product)

    def find_all_products(self) -> list[ProductResult]:
        """Return every stored product."""
        return [product_result_from_entity(p) for p in self._products.find_all()]

    def find_product_by_id(self, id: UUID) -> ProductResult | None:
        """Return the product with ``id``."""
        return product_result_from_entity(self._products.find_by_id(id))


class SellerService:
    """Use cases around sellers."""

    def __init__(self, repository: SellerRepository) -> None:
        self._sellers = repository

    def create_seller(self, command: CreateSellerCommand) -> SellerResult:
        """Create a seller and store it."""
        seller = validate_seller(Seller.create(command.name))
        self._sellers.create(seller)
        return seller_result_from_entity(seller)

    def find_all_sellers(self) -> list[SellerResult]:
        """Return every stored seller."""
        return [seller_result_from_entity(s) for s in self._sellers.find_all()]

    def find_seller_by_id(self, id: UUID) -> SellerResult | None:
        """Return the seller with ``id``."""
        return seller_result_from_entity(self._sellers.find_by_id(id))

    def update_seller(self, command: UpdateSellerCommand) -> SellerResult:
        """Rename an existing seller and store the change."""
        seller = self._sellers.find_by_id(command.id)
        if seller is None:
            raise NotFoundError("seller not found")

        seller.update_name(command.name)
        self._sellers.update(validate_seller(seller))
        return seller_result_from_entity(seller)

    def delete_seller(self, id: UUID) -> None:
        """Remove the seller with ``id``."""
        self._sellers.delete(id)