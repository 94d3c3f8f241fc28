"""HTTP application assembly and the command that serves it."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv
from flask import Flask, jsonify

from ordermgmt import logger as log
from ordermgmt.config import Database, connect_db
from ordermgmt.handlers.cart import CartHandler
from ordermgmt.handlers.customer import CustomerHandler
from ordermgmt.handlers.order import OrderHandler
from ordermgmt.handlers.product import ProductHandler
from ordermgmt.repository.cart import MongoCartRepository
from ordermgmt.repository.customer import MongoCustomerRepository
from ordermgmt.repository.order import MongoOrderRepository
from ordermgmt.repository.product import MongoProductRepository
from ordermgmt.usecases import CartUsecase, CustomerUsecase, OrderUsecase, ProductUsecase

DEFAULT_PORT = "8080"


def _crud_routes(app: Flask, prefix: str, name: str, handler: Any) -> None:
    app.add_url_rule(f"{prefix}/", f"{name}.get_all", handler.get_all, methods=["GET"])
    app.add_url_rule(f"{prefix}/", f"{name}.create", handler.create, methods=["POST"])
    item = f"{prefix}/<item_id>"
    app.add_url_rule(item, f"{name}.get_by_id", handler.get_by_id, methods=["GET"])
    app.add_url_rule(item, f"{name}.update", handler.update, methods=["PUT"])
    app.add_url_rule(item, f"{name}.delete", handler.delete, methods=["DELETE"])


def create_app(
    customer_usecase: Any,
    product_usecase: Any,
    order_usecase: Any,
    cart_usecase: Any,
) -> Flask:
    """Build the Flask application with every route wired to its use case."""
    app = Flask(__name__)
    app.json.sort_keys = False

    @app.get("/health")
    def health() -> Any:
        return jsonify({"status": "ok", "message": "API is running"}), 200

    _crud_routes(app, "/api/customers", "customers", CustomerHandler(customer_usecase))
    _crud_routes(app, "/api/products", "products", ProductHandler(product_usecase))
    _crud_routes(app, "/api/orders", "orders", OrderHandler(order_usecase))

    carts = CartHandler(cart_usecase)
    cart = "/api/customers/<customer_id>/cart"
    app.add_url_rule(f"{cart}/item", "carts.add_to_cart", carts.add_to_cart, methods=["POST"])
    app.add_url_rule(cart, "carts.get", carts.get_cart_by_customer_id, methods=["GET"])
    app.add_url_rule(f"{cart}/item", "carts.update_item", carts.update_cart_item, methods=["PUT"])
    app.add_url_rule(
        f"{cart}/item/<product_id>",
        "carts.remove_item",
        carts.remove_cart_item,
        methods=["DELETE"],
    )
    app.add_url_rule(cart, "carts.clear", carts.clear_cart, methods=["DELETE"])
    return app


def build_app(database: Database) -> Flask:
    """Build the application on top of MongoDB repositories of a database."""
    db = database.db
    customers = MongoCustomerRepository(db)
    products = MongoProductRepository(db)
    orders = MongoOrderRepository(db)
    carts = MongoCartRepository(db)
    return create_app(
        CustomerUsecase(customers),
        ProductUsecase(products),
        OrderUsecase(orders),
        CartUsecase(carts, products, customers),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Load .env, connect to MongoDB and serve the API on PORT (default 8080)."""
    parser = argparse.ArgumentParser(prog="ordermgmt", description="Order management HTTP API.")
    parser.parse_args(argv)

    env_file = Path(".env")
    if not env_file.is_file():
        raise RuntimeError("Error loading .env file")
    load_dotenv(env_file)
    log.setup_logging()

    try:
        database = connect_db()
    except Exception as exc:
        raise RuntimeError(f"Failed to connect to database: {exc}") from exc

    with database:
        app = build_app(database)
        port = os.environ.get("PORT") or DEFAULT_PORT
        app.run(host="0.0.0.0", port=int(port))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())