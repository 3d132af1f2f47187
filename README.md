# marketplace

A small marketplace service that keeps track of sellers and the products
they offer. It exposes a JSON HTTP API built on Flask and stores its data
in a SQL database through SQLAlchemy.

The code is split into layers:

- `marketplace.entities`: the domain model. `Seller` and `Product` (each
  with `create`, `validate` and `update_name`; `Product` also has
  `update_price`), and their checked forms `ValidatedSeller` and
  `ValidatedProduct`, made by `validate_seller` and `validate_product`.
  Invalid data raises `ValidationError`.
- `marketplace.repositories`: the abstract storage contracts
  `SellerRepository` and `ProductRepository` (`create`, `find_by_id`,
  `find_all`, `update`, `delete`), and `NotFoundError`.
- `marketplace.results`: the commands `CreateProductCommand`,
  `CreateSellerCommand` and `UpdateSellerCommand`, the results
  `SellerResult` and `ProductResult`, and `seller_result_from_entity` /
  `product_result_from_entity`.
- `marketplace.services`: `ProductService` (`create_product`,
  `find_all_products`, `find_product_by_id`) and `SellerService`
  (`create_seller`, `find_all_sellers`, `find_seller_by_id`,
  `update_seller`, `delete_seller`).
- `marketplace.storage`: the SQLAlchemy tables `SellerRow` and
  `ProductRow` (on `Base`), `connect(dsn)`, `create_schema(engine)`, and
  the repositories `SqlSellerRepository` and `SqlProductRepository`.
- `marketplace.api`: request and response shapes, `ProductController`,
  `SellerController` and `create_app(product_service, seller_service)`.
- `marketplace.app`: `build_app(dsn)` and the `marketplace` command.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
marketplace
```

Options:

- `--dsn URL`: SQLAlchemy database URL. Defaults to the `MARKETPLACE_DSN`
  environment variable, or `sqlite:///marketplace.db` if that is unset.
- `--host ADDRESS`: address to listen on (default `0.0.0.0`).
- `--port PORT`: port to listen on (default `8080`).

At start-up the seller and product tables are created if they are missing.
If the database cannot be reached or the server cannot start, an error is
printed to standard error and the command exits with status 1. The server
is Flask's built-in development server.

## Using it from Python

```python
from marketplace.app import build_app

app = build_app("sqlite:///marketplace.db")
app.run(port=8080)
```

The services can also be used directly with any implementation of the
repository contracts:

```python
from marketplace.results import CreateSellerCommand
from marketplace.services import SellerService
from marketplace.storage import SqlSellerRepository, connect, create_schema

engine = connect("sqlite://")
create_schema(engine)
sellers = SellerService(SqlSellerRepository(engine))
seller = sellers.create_seller(CreateSellerCommand(name="Example Seller"))
```

## HTTP API

All bodies are JSON. Keys in request bodies are matched exactly first and
then without regard to case.

| Method | Path                    | Body                                                   | Success |
|--------|-------------------------|--------------------------------------------------------|---------|
| POST   | `/api/v1/sellers`       | `{"Name": "..."}`                                      | 201     |
| GET    | `/api/v1/sellers`       |                                                        | 200     |
| GET    | `/api/v1/sellers/<id>`  |                                                        | 200     |
| PUT    | `/api/v1/sellers`       | `{"Id": "<uuid>", "Name": "..."}`                      | 200     |
| DELETE | `/api/v1/sellers/<id>`  |                                                        | 204     |
| POST   | `/api/v1/products`      | `{"Name": "...", "Price": 9.99, "SellerId": "<uuid>"}` | 201     |
| GET    | `/api/v1/products`      |                                                        | 200     |
| GET    | `/api/v1/products/<id>` |                                                        | 200     |

A seller is returned as `{"Id", "Name", "CreatedAt", "UpdatedAt"}` and a
product as `{"Id", "Name", "Price", "CreatedAt", "UpdatedAt"}`, with
timestamps in RFC 3339 form. Lists come back as `{"Sellers": [...]}` and
`{"Products": [...]}`; an empty list is sent as `null`.

Errors are returned as `{"error": "<message>"}`:

- 400 for a body that is not JSON or has fields of the wrong type, or an
  id that is not a UUID;
- 404 when a service returns nothing for the requested id;
- 500 when the service raises, which includes a failed validation and,
  with the SQL repositories, an id that is not stored.

Deleting a seller id that does not exist still answers 204.

## Rules

- A seller must have a non-empty name.
- A product must have a non-empty name and a price greater than zero,
  and must belong to an existing seller.
- For both, the creation time may not be later than the last update.

## What it does not do

- Products can only be created and read over HTTP; the repositories can
  update and delete them, but there are no routes for it.
- Sellers read back from `SqlSellerRepository` carry only their id and
  name, so their timestamps are reported as `0001-01-01T00:00:00Z`.
- There is no authentication and no schema migration beyond creating
  missing tables.