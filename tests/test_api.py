from datetime import datetime, timezone
from http import HTTPStatus
from uuid import UUID, uuid4

import pytest

from marketplace.api import (
    CreateProductRequest,
    CreateSellerRequest,
    ProductResponse,
    SellerResponse,
    UpdateSellerRequest,
    create_app,
    to_product_list_response,
    to_product_response,
    to_seller_list_response,
    to_seller_response,
)
from marketplace.results import (
    CreateSellerCommand,
    ProductResult,
    SellerResult,
    UpdateSellerCommand,
)

SELLER_ID = "123e4567-e89b-12d3-a456-426614174000"


class FakeProductService:
    def __init__(self, products=None, create_result=None, fail=False):
        self.products = list(products or [])
        self.create_result = create_result
        self.fail = fail
        self.commands = []

    def create_product(self, command):
        self.commands.append(command)
        if self.fail:
            raise RuntimeError("boom")
        return self.create_result

    def find_all_products(self):
        if self.fail:
            raise RuntimeError("boom")
        return list(self.products)

    def find_product_by_id(self, id):
        return next((p for p in self.products if p.id == id), None)


class FakeSellerService:
    def __init__(self):
        self.sellers = {}

    def create_seller(self, command):
        result = SellerResult(id=uuid4(), name=command.name)
        self.sellers[result.id] = result
        return result

    def find_all_sellers(self):
        return list(self.sellers.values())

    def find_seller_by_id(self, id):
        return self.sellers.get(id)

    def update_seller(self, command):
        if command.id not in self.sellers:
            raise LookupError("seller not found")
        result = SellerResult(id=command.id, name=command.name)
        self.sellers[command.id] = result
        return result

    def delete_seller(self, id):
        self.sellers.pop(id, None)


def make_client(product_service=None, seller_service=None):
    app = create_app(product_service or FakeProductService(), seller_service or FakeSellerService())
    return app.test_client()


def test_create_product():
    result = ProductResult(id=uuid4(), name="TestProduct", price=9.99)
    service = FakeProductService(create_result=result)
    client = make_client(product_service=service)
    req_body = {"Name": "TestProduct", "Price": 9.99, "SellerId": SELLER_ID}

    resp = client.post("/api/v1/products", json=req_body)

    assert resp.status_code == HTTPStatus.CREATED
    body = resp.get_json()
    for key in ("Id", "Seller", "CreatedAt", "UpdatedAt"):
        body.pop(key, None)
    del req_body["SellerId"]
    assert body == req_body
    assert service.commands[0].seller_id == UUID(SELLER_ID)


def test_get_all_products():
    products = [
        ProductResult(id=uuid4(), name="TestProduct1", price=9.99),
        ProductResult(id=uuid4(), name="TestProduct2", price=14.99),
    ]
    client = make_client(product_service=FakeProductService(products=products))

    resp = client.get("/api/v1/products")

    assert resp.status_code == HTTPStatus.OK
    received = resp.get_json()["Products"]
    expected = sorted((str(p.id), p.name, p.price) for p in products)
    assert sorted((r["Id"], r["Name"], r["Price"]) for r in received) == expected
    assert all(r["CreatedAt"] == "0001-01-01T00:00:00Z" for r in received)


def test_get_all_products_empty_is_null():
    resp = make_client().get("/api/v1/products")
    assert resp.status_code == HTTPStatus.OK
    assert resp.get_json() == {"Products": None}


def test_get_all_products_failure():
    resp = make_client(product_service=FakeProductService(fail=True)).get("/api/v1/products")
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_json() == {"error": "Failed to fetch products"}


def test_create_product_invalid_seller_id():
    resp = make_client().post(
        "/api/v1/products", json={"Name": "X", "Price": 1.0, "SellerId": "nope"}
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.get_json() == {"error": "Invalid product Id format"}


def test_create_product_malformed_body():
    resp = make_client().post(
        "/api/v1/products", data="{not json", content_type="application/json"
    )
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.get_json() == {"error": "Failed to parse request body"}


def test_create_product_service_failure():
    client = make_client(product_service=FakeProductService(fail=True))
    resp = client.post(
        "/api/v1/products", json={"Name": "X", "Price": 1.0, "SellerId": SELLER_ID}
    )
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_json() == {"error": "Failed to create product"}


def test_get_product_by_id():
    product = ProductResult(id=uuid4(), name="TestProduct", price=9.99)
    client = make_client(product_service=FakeProductService(products=[product]))

    resp = client.get(f"/api/v1/products/{product.id}")
    assert resp.status_code == HTTPStatus.OK
    assert resp.get_json()["Name"] == "TestProduct"

    missing = client.get(f"/api/v1/products/{uuid4()}")
    assert missing.status_code == HTTPStatus.NOT_FOUND
    assert missing.get_json() == {"error": "Product not found"}

    bad = client.get("/api/v1/products/not-a-uuid")
    assert bad.status_code == HTTPStatus.BAD_REQUEST
    assert bad.get_json() == {"error": "Invalid product Id format"}


def test_create_seller():
    service = FakeSellerService()
    client = make_client(seller_service=service)
    payload = {
        "Id": str(uuid4()),
        "CreatedAt": "2024-01-01T00:00:00Z",
        "UpdatedAt": "2024-01-01T00:00:00Z",
        "Name": "TestSeller",
    }

    resp = client.post("/api/v1/sellers", json=payload)

    assert resp.status_code == HTTPStatus.CREATED
    assert resp.get_json()["Name"] == "TestSeller"
    assert [s.name for s in service.sellers.values()] == ["TestSeller"]


def test_put_seller():
    service = FakeSellerService()
    created = service.create_seller(CreateSellerCommand(name="TestSeller"))
    client = make_client(seller_service=service)

    resp = client.put(
        "/api/v1/sellers", json={"Id": str(created.id), "Name": "updatedName"}
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.get_json()["Name"] == "updatedName"


def test_put_seller_invalid_id():
    resp = make_client().put("/api/v1/sellers", json={"Id": "bad", "Name": "x"})
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.get_json() == {"error": "Failed to parse request body"}


def test_put_seller_service_failure():
    resp = make_client().put("/api/v1/sellers", json={"Id": str(uuid4()), "Name": "x"})
    assert resp.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert resp.get_json() == {"error": "Failed to update seller"}


def test_delete_seller():
    service = FakeSellerService()
    created = service.create_seller(CreateSellerCommand(name="TestSeller"))
    client = make_client(seller_service=service)

    resp = client.delete(f"/api/v1/sellers/{created.id}")

    assert resp.status_code == HTTPStatus.NO_CONTENT
    assert resp.data == b""
    assert service.sellers == {}


def test_delete_seller_invalid_id():
    resp = make_client().delete("/api/v1/sellers/xyz")
    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.get_json() == {"error": "Invalid seller Id format"}


def test_get_seller_by_id():
    service = FakeSellerService()
    created = service.create_seller(CreateSellerCommand(name="TestSeller"))
    client = make_client(seller_service=service)

    resp = client.get(f"/api/v1/sellers/{created.id}")

    assert resp.status_code == HTTPStatus.OK
    body = resp.get_json()
    assert body["Id"] == str(created.id)
    assert body["Name"] == created.name

    missing = client.get(f"/api/v1/sellers/{uuid4()}")
    assert missing.status_code == HTTPStatus.NOT_FOUND
    assert missing.get_json() == {"error": "Seller not found"}


def test_get_all_sellers():
    service = FakeSellerService()
    service.create_seller(CreateSellerCommand(name="TestSeller1"))
    service.create_seller(CreateSellerCommand(name="TestSeller2"))
    client = make_client(seller_service=service)

    resp = client.get("/api/v1/sellers")

    assert resp.status_code == HTTPStatus.OK
    assert len(resp.get_json()["Sellers"]) == 2


def test_create_product_request_round_trip():
    req = CreateProductRequest.from_json({"name": "Lamp", "PRICE": 3, "SellerId": SELLER_ID})
    assert req == CreateProductRequest(name="Lamp", price=3.0, seller_id=SELLER_ID)
    command = req.to_command()
    assert (command.name, command.price, command.seller_id) == ("Lamp", 3.0, UUID(SELLER_ID))


def test_create_product_request_rejects_bad_types():
    with pytest.raises(ValueError):
        CreateProductRequest.from_json({"Price": True})
    with pytest.raises(ValueError):
        CreateProductRequest.from_json({"Name": 5})
    with pytest.raises(ValueError):
        CreateProductRequest.from_json([1, 2])
    with pytest.raises(ValueError):
        CreateProductRequest(seller_id="").to_command()


def test_seller_requests():
    assert CreateSellerRequest.from_json({"Name": "Ann"}).to_command() == CreateSellerCommand(
        name="Ann"
    )
    seller_id = uuid4()
    update = UpdateSellerRequest.from_json({"Id": str(seller_id), "Name": "Bo"})
    assert update.to_command() == UpdateSellerCommand(id=seller_id, name="Bo")
    assert UpdateSellerRequest.from_json({}).id == UUID(int=0)
    with pytest.raises(ValueError):
        UpdateSellerRequest.from_json({"Id": ""})


def test_response_mappers():
    stamp = datetime(2024, 1, 2, 3, 4, 5, 120000, tzinfo=timezone.utc)
    product = ProductResult(id=uuid4(), name="P", price=2.5, created_at=stamp, updated_at=stamp)
    response = to_product_response(product)
    assert response == ProductResponse(
        id=str(product.id), name="P", price=2.5, created_at=stamp, updated_at=stamp
    )
    assert response.to_json()["CreatedAt"] == "2024-01-02T03:04:05.12Z"
    assert to_product_list_response([product, product]) == [response, response]

    seller = SellerResult(id=uuid4(), name="S")
    seller_response = to_seller_response(seller)
    assert seller_response == SellerResponse(id=str(seller.id), name="S")
    assert seller_response.to_json() == {
        "Id": str(seller.id),
        "Name": "S",
        "CreatedAt": "0001-01-01T00:00:00Z",
        "UpdatedAt": "0001-01-01T00:00:00Z",
    }
    assert to_seller_list_response([]) == []