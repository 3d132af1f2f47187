"""Relational persistence for sellers and products."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    DateTime,
    Engine,
    Float,
    ForeignKey,
    String,
    Uuid,
    create_engine,
    delete,
    select,
    update,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    joinedload,
    mapped_column,
    relationship,
)

from marketplace.entities import (
    NIL_UUID,
    ZERO_TIME,
    Product,
    Seller,
    ValidatedProduct,
    ValidatedSeller,
)
from marketplace.repositories import NotFoundError, ProductRepository, SellerRepository


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: Optional[datetime]) -> datetime:
    if value is None:
        return ZERO_TIME
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _set_or_none(value: datetime) -> Optional[datetime]:
    return None if value == ZERO_TIME else value


class Base(DeclarativeBase):
    """Declarative base of the storage models."""


class SellerRow(Base):
    """Stored form of a seller."""

    __tablename__ = "sellers"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )


class ProductRow(Base):
    """Stored form of a product."""

    __tablename__ = "products"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String, default="")
    price: Mapped[float] = mapped_column(Float, default=0.0)
    seller_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("sellers.id"), index=True)
    seller: Mapped[Optional[SellerRow]] = relationship(SellerRow)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )


def connect(dsn: str) -> Engine:
    """Open a database engine for ``dsn``."""
    return create_engine(dsn)


def create_schema(engine: Engine) -> None:
    """Create the seller and product tables if they are missing."""
    Base.metadata.create_all(engine)


def _seller_to_row(seller: ValidatedSeller) -> SellerRow:
    return SellerRow(id=seller.id, name=seller.name)


def _seller_from_row(row: SellerRow) -> Seller:
    return Seller(id=row.id, name=row.name)


def _product_to_row(product: ValidatedProduct) -> ProductRow:
    return ProductRow(
        id=product.id,
        name=product.name,
        price=product.price,
        seller_id=product.seller.id,
        created_at=_set_or_none(product.created_at),
        updated_at=_set_or_none(product.updated_at),
    )


def _product_from_row(row: ProductRow) -> Product:
    seller_row = row.seller
    if seller_row is None:
        seller = Seller()
    else:
        seller = Seller(
            id=seller_row.id,
            name=seller_row.name,
            created_at=_aware(seller_row.created_at),
            updated_at=_aware(seller_row.updated_at),
        )
    return Product(
        id=row.id,
        name=row.name,
        price=row.price,
        seller=seller,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlSellerRepository(SellerRepository):
    """Seller repository backed by a relational database."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, seller: ValidatedSeller) -> Seller:
        with Session(self._engine) as session, session.begin():
            session.add(_seller_to_row(seller))
        return self.find_by_id(seller.id)

    def find_by_id(self, id: UUID) -> Seller:
        with Session(self._engine) as session:
            row = session.get(SellerRow, id)
            if row is None:
                raise NotFoundError(f"seller {id} not found")
            return _seller_from_row(row)

    def find_all(self) -> list[Seller]:
        with Session(self._engine) as session:
            return [_seller_from_row(row) for row in session.scalars(select(SellerRow))]

    def update(self, seller: ValidatedSeller) -> Seller:
        if seller.name:
            with Session(self._engine) as session, session.begin():
                session.execute(
                    update(SellerRow).where(SellerRow.id == seller.id).values(name=seller.name)
                )
        return self.find_by_id(seller.id)

    def delete(self, id: UUID) -> None:
        with Session(self._engine) as session, session.begin():
            session.execute(delete(SellerRow).where(SellerRow.id == id))


class SqlProductRepository(ProductRepository):
    """Product repository backed by a relational database."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, product: ValidatedProduct) -> Product:
        with Session(self._engine) as session, session.begin():
            session.add(_product_to_row(product))
        return self.find_by_id(product.id)

    def find_by_id(self, id: UUID) -> Product:
        with Session(self._engine) as session:
            row = session.get(ProductRow, id, options=[joinedload(ProductRow.seller)])
            if row is None:
                raise NotFoundError(f"product {id} not found")
            return _product_from_row(row)

    def find_all(self) -> list[Product]:
        with Session(self._engine) as session:
            rows = session.scalars(select(ProductRow).options(joinedload(ProductRow.seller)))
            return [_product_from_row(row) for row in rows]

    def update(self, product: ValidatedProduct) -> Product:
        values: dict[str, object] = {}
        if product.name:
            values["name"] = product.name
        if product.price:
            values["price"] = product.price
        if product.seller.id != NIL_UUID:
            values["seller_id"] = product.seller.id
        if product.created_at != ZERO_TIME:
            values["created_at"] = product.created_at
        values["updated_at"] = _set_or_none(product.updated_at) or _now()
        with Session(self._engine) as session, session.begin():
            session.execute(
                update(ProductRow).where(ProductRow.id == product.id).values(**values)
            )
        return self.find_by_id(product.id)

    def delete(self, id: UUID) -> None:
        with Session(self._engine) as session, session.begin():
            session.execute(delete(ProductRow).where(ProductRow.id == id))