"""HTTP interface: request and response shapes and the REST controllers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Iterable, Mapping, Optional
from uuid import UUID

from flask import Flask, jsonify, request

from marketplace.entities import NIL_UUID, ZERO_TIME
from marketplace.results import (
    CreateProductCommand,
    CreateSellerCommand,
    ProductResult,
    SellerResult,
    UpdateSellerCommand,
)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Find ``key`` in a JSON object, preferring an exact match over a case-insensitive one."""
    if key in data:
        return data[key]
    lowered = key.lower()
    return next((value for name, value in data.items() if name.lower() == lowered), None)


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _string_field(data: Mapping[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _number_field(data: Mapping[str, Any], key: str) -> float:
    value = _lookup(data, key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)


def _format_time(moment: datetime) -> str:
    """Render a timestamp as RFC 3339 with trimmed fractional seconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass(frozen=True, kw_only=True)
class CreateProductRequest:
    """Body of a request to create a product."""

    name: str = ""
    price: float = 0.0
    seller_id: str = ""

    @classmethod
    def from_json(cls, data: Any) -> CreateProductRequest:
        """Read the request from a decoded JSON object; raise ValueError on bad types."""
        data = _require_mapping(data)
        return cls(
            name=_string_field(data, "Name"),
            price=_number_field(data, "Price"),
            seller_id=_string_field(data, "SellerId"),
        )

    def to_command(self) -> CreateProductCommand:
        """Turn the request into a command; raise ValueError if the seller id is malformed."""
        return CreateProductCommand(
            name=self.name, price=self.price, seller_id=UUID(self.seller_id)
        )


@dataclass(frozen=True, kw_only=True)
class CreateSellerRequest:
    """Body of a request to create a seller."""

    name: str = ""

    @classmethod
    def from_json(cls, data: Any) -> CreateSellerRequest:
        """Read the request from a decoded JSON object; raise ValueError on bad types."""
        return cls(name=_string_field(_require_mapping(data), "Name"))

    def to_command(self) -> CreateSellerCommand:
        return CreateSellerCommand(name=self.name)


@dataclass(frozen=True, kw_only=True)
class UpdateSellerRequest:
    """Body of a request to rename a seller."""

    id: UUID = NIL_UUID
    name: str = ""

    @classmethod
    def from_json(cls, data: Any) -> UpdateSellerRequest:
        """Read the request from a decoded JSON object; raise ValueError on bad values."""
        data = _require_mapping(data)
        raw_id = _lookup(data, "Id")
        if raw_id is None:
            seller_id = NIL_UUID
        elif isinstance(raw_id, str):
            seller_id = UUID(raw_id)
        else:
            raise ValueError("Id must be a string")
        return cls(id=seller_id, name=_string_field(data, "Name"))

    def to_command(self) -> UpdateSellerCommand:
        return UpdateSellerCommand(id=self.id, name=self.name)


@dataclass(frozen=True, kw_only=True)
class ProductResponse:
    """A product as sent to HTTP clients."""

    id: str
    name: str
    price: float
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_json(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Name": self.name,
            "Price": self.price,
            "CreatedAt": _format_time(self.created_at),
            "UpdatedAt": _format_time(self.updated_at),
        }


@dataclass(frozen=True, kw_only=True)
class SellerResponse:
    """A seller as sent to HTTP clients."""

    id: str
    name: str
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_json(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "Name": self.name,
            "CreatedAt": _format_time(self.created_at),
            "UpdatedAt": _format_time(self.updated_at),
        }


def to_product_response(product: ProductResult) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        price=product.price,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def to_product_list_response(products: Iterable[ProductResult]) -> list[ProductResponse]:
    return [to_product_response(product) for product in products]


def to_seller_response(seller: SellerResult) -> SellerResponse:
    return SellerResponse(
        id=str(seller.id),
        name=seller.name,
        created_at=seller.created_at,
        updated_at=seller.updated_at,
    )


def to_seller_list_response(sellers: Iterable[SellerResult]) -> list[SellerResponse]:
    return [to_seller_response(seller) for seller in sellers]


def _error(status: HTTPStatus, message: str):
    return jsonify({"error": message}), status


def _read_body() -> Any:
    """Decode the JSON body of the current request; an empty body reads as {}."""
    raw = request.get_data()
    if not raw:
        return {}
    if not request.is_json:
        raise ValueError("unsupported media type")
    return json.loads(raw)


def _list_payload(key: str, items: list) -> dict[str, Optional[list]]:
    return {key: [item.to_json() for item in items] or None}


class ProductController:
    """HTTP handlers for products."""

    def __init__(self, service: Any) -> None:
        self._service = service

    def create_product(self):
        try:
            body = CreateProductRequest.from_json(_read_body())
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Failed to parse request body")
        try:
            command = body.to_command()
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Invalid product Id format")
        try:
            result = self._service.create_product(command)
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to create product")
        return jsonify(to_product_response(result).to_json()), HTTPStatus.CREATED

    def get_all_products(self):
        try:
            products = self._service.find_all_products()
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch products")
        payload = _list_payload("Products", to_product_list_response(products))
        return jsonify(payload), HTTPStatus.OK

    def get_product_by_id(self, id: str):
        try:
            product_id = UUID(id)
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Invalid product Id format")
        try:
            product = self._service.find_product_by_id(product_id)
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch product")
        if product is None:
            return _error(HTTPStatus.NOT_FOUND, "Product not found")
        return jsonify(to_product_response(product).to_json()), HTTPStatus.OK


class SellerController:
    """HTTP handlers for sellers."""

    def __init__(self, service: Any) -> None:
        self._service = service

    def create_seller(self):
        try:
            body = CreateSellerRequest.from_json(_read_body())
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Failed to parse request body")
        try:
            result = self._service.create_seller(body.to_command())
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to create seller")
        return jsonify(to_seller_response(result).to_json()), HTTPStatus.CREATED

    def get_all_sellers(self):
        try:
            sellers = self._service.find_all_sellers()
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch sellers")
        payload = _list_payload("Sellers", to_seller_list_response(sellers))
        return jsonify(payload), HTTPStatus.OK

    def get_seller_by_id(self, id: str):
        try:
            seller_id = UUID(id)
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Invalid seller Id format")
        try:
            seller = self._service.find_seller_by_id(seller_id)
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to fetch seller")
        if seller is None:
            return _error(HTTPStatus.NOT_FOUND, "Seller not found")
        return jsonify(to_seller_response(seller).to_json()), HTTPStatus.OK

    def put_seller(self):
        try:
            body = UpdateSellerRequest.from_json(_read_body())
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Failed to parse request body")
        try:
            result = self._service.update_seller(body.to_command())
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to update seller")
        return jsonify(to_seller_response(result).to_json()), HTTPStatus.OK

    def delete_seller(self, id: str):
        try:
            seller_id = UUID(id)
        except ValueError:
            return _error(HTTPStatus.BAD_REQUEST, "Invalid seller Id format")
        try:
            self._service.delete_seller(seller_id)
        except Exception:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to delete seller")
        return "", HTTPStatus.NO_CONTENT


def create_app(product_service: Any, seller_service: Any) -> Flask:
    """Build the web application with the product and seller routes."""
    app = Flask(__name__)
    products = ProductController(product_service)
    sellers = SellerController(seller_service)

    routes = [
        ("/api/v1/products", "create_product", products.create_product, "POST"),
        ("/api/v1/products", "get_all_products", products.get_all_products, "GET"),
        ("/api/v1/products/<id>", "get_product_by_id", products.get_product_by_id, "GET"),
        ("/api/v1/sellers", "create_seller", sellers.create_seller, "POST"),
        ("/api/v1/sellers", "get_all_sellers", sellers.get_all_sellers, "GET"),
        ("/api/v1/sellers/<id>", "get_seller_by_id", sellers.get_seller_by_id, "GET"),
        ("/api/v1/sellers", "put_seller", sellers.put_seller, "PUT"),
        ("/api/v1/sellers/<id>", "delete_seller", sellers.delete_seller, "DELETE"),
    ]
    for rule, endpoint, view, method in routes:
        app.add_url_rule(rule, endpoint, view, methods=[method])
    return app