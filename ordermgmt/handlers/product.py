"""HTTP handlers for products."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request

from ordermgmt.domain import ProductRequest, RequestError, parse_request, to_json

Reply = tuple[Response, int]


def _reply(body: Any, status: int) -> Reply:
    return jsonify(body), status


def _missing_id() -> Reply:
    return _reply({"error": "ID parameter is required"}, 400)


def _invalid_body() -> Reply:
    return _reply({"error": "Invalid request body"}, 400)


def _not_found() -> Reply:
    return _reply({"message": "Product not found"}, 404)


def _bind() -> ProductRequest:
    return parse_request(ProductRequest, request.get_json(force=True, silent=True))


class ProductHandler:
    """Request handlers that delegate to a product use case."""

    def __init__(self, usecase: Any) -> None:
        self._usecase = usecase

    def get_all(self) -> Reply:
        try:
            products = self._usecase.get_all()
        except Exception:
            return _reply({"error": "Failed to retrieve products"}, 500)
        if not products:
            return _reply({"message": "No products found"}, 404)
        return _reply(to_json(products), 200)

    def get_by_id(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            product = self._usecase.get_by_id(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to retrieve product", "details": str(exc)}, 500)
        if product is None:
            return _not_found()
        return _reply(to_json(product), 200)

    def create(self) -> Reply:
        try:
            product_request = _bind()
        except RequestError:
            return _invalid_body()
        try:
            product = self._usecase.create(product_request)
        except Exception as exc:
            return _reply({"error": "Failed to create product", "details": str(exc)}, 500)
        return _reply(to_json(product), 201)

    def update(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            product_request = _bind()
        except RequestError:
            return _invalid_body()
        if not product_request.name and product_request.price <= 0 and product_request.stock < 0:
            return _reply({"error": "At least one field must be provided for update"}, 400)
        try:
            product = self._usecase.update(item_id, product_request)
        except Exception as exc:
            return _reply({"error": "Failed to update product", "details": str(exc)}, 500)
        return _reply({"message": "Product updated successfully", "product": to_json(product)}, 200)

    def delete(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            product = self._usecase.delete(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to delete product", "details": str(exc)}, 500)
        if product is None:
            return _not_found()
        return _reply({"message": "Product deleted successfully", "product": to_json(product)}, 200)