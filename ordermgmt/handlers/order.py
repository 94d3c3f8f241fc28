"""HTTP handlers for orders."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request

from ordermgmt.domain import OrderRequest, RequestError, parse_request, to_json

Reply = tuple[Response, int]


def _reply(body: Any, status: int) -> Reply:
    return jsonify(body), status


def _missing_id() -> Reply:
    return _reply({"error": "Order ID is required"}, 400)


def _invalid_body() -> Reply:
    return _reply({"error": "Invalid request body"}, 400)


def _not_found() -> Reply:
    return _reply({"message": "Order not found"}, 404)


def _bind() -> OrderRequest:
    return parse_request(OrderRequest, request.get_json(force=True, silent=True))


class OrderHandler:
    """Request handlers that delegate to an order use case."""

    def __init__(self, usecase: Any) -> None:
        self._usecase = usecase

    def get_all(self) -> Reply:
        try:
            orders = self._usecase.get_all()
        except Exception:
            return _reply({"error": "Failed to retrieve orders"}, 500)
        if not orders:
            return _reply({"message": "No orders found"}, 404)
        return _reply({"message": "Orders retrieved successfully", "orders": to_json(orders)}, 200)

    def get_by_id(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            order = self._usecase.get_by_id(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to retrieve order", "details": str(exc)}, 500)
        if order is None:
            return _not_found()
        return _reply({"message": "Order retrieved successfully", "order": to_json(order)}, 200)

    def create(self) -> Reply:
        try:
            order_request = _bind()
        except RequestError:
            return _invalid_body()
        try:
            order = self._usecase.create(order_request)
        except Exception as exc:
            return _reply({"error": "Failed to create order", "details": str(exc)}, 500)
        return _reply(to_json(order), 201)

    def update(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            order_request = _bind()
        except RequestError:
            return _invalid_body()
        try:
            order = self._usecase.update(item_id, order_request)
        except Exception as exc:
            return _reply({"error": "Failed to update order", "details": str(exc)}, 500)
        if order is None:
            return _not_found()
        return _reply({"message": "Order updated successfully", "order": to_json(order)}, 200)

    def delete(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            order = self._usecase.delete(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to delete order", "details": str(exc)}, 500)
        if order is None:
            return _not_found()
        return _reply({"message": "Order deleted successfully", "order": to_json(order)}, 200)