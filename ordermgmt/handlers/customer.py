"""HTTP handlers for customers."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request

from ordermgmt.domain import CustomerRequest, RequestError, parse_request, to_json

Reply = tuple[Response, int]


def _reply(body: Any, status: int) -> Reply:
    return jsonify(body), status


def _missing_id() -> Reply:
    return _reply({"error": "ID parameter is required"}, 400)


def _bind() -> CustomerRequest:
    return parse_request(CustomerRequest, request.get_json(force=True, silent=True))


class CustomerHandler:
    """Request handlers that delegate to a customer use case."""

    def __init__(self, usecase: Any) -> None:
        self._usecase = usecase

    def get_all(self) -> Reply:
        try:
            customers = self._usecase.get_all()
        except Exception:
            return _reply({"error": "Failed to retrieve customers"}, 500)
        if not customers:
            return _reply({"message": "No customers found"}, 404)
        return _reply(to_json(customers), 200)

    def get_by_id(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            customer = self._usecase.get_by_id(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to retrieve customer", "details": str(exc)}, 500)
        if customer is None:
            return _reply({"message": "Customer not found"}, 404)
        return _reply(to_json(customer), 200)

    def create(self) -> Reply:
        try:
            customer_request = _bind()
        except RequestError:
            return _reply({"error": "Invalid request"}, 400)
        try:
            customer = self._usecase.create(customer_request)
        except Exception as exc:
            return _reply({"error": "Failed to create customer", "details": str(exc)}, 500)
        return _reply({"message": "Customer created successfully", "customer": to_json(customer)}, 201)

    def update(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            customer_request = _bind()
        except RequestError:
            return _reply({"error": "Invalid request"}, 400)
        if not (customer_request.name or customer_request.email or customer_request.phone):
            return _reply({"error": "At least one field must be provided for update"}, 400)
        try:
            customer = self._usecase.update(item_id, customer_request)
        except Exception as exc:
            return _reply({"error": "Failed to update customer", "details": str(exc)}, 500)
        return _reply({"message": "Customer updated successfully", "customer": to_json(customer)}, 200)

    def delete(self, item_id: str) -> Reply:
        if not item_id:
            return _missing_id()
        try:
            customer = self._usecase.delete(item_id)
        except Exception as exc:
            return _reply({"error": "Failed to delete customer", "details": str(exc)}, 500)
        if customer is None:
            return _reply({"message": "Customer not found"}, 404)
        return _reply({"message": "Customer deleted successfully", "customer": to_json(customer)}, 200)