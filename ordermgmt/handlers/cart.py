"""HTTP handlers for a customer's cart."""

from __future__ import annotations

from typing import Any, Callable

from flask import Response, jsonify, request

from ordermgmt.domain import CartItemRequest, RequestError, parse_request, to_json

Reply = tuple[Response, int]


def _reply(body: Any, status: int) -> Reply:
    return jsonify(body), status


def _run(action: Callable[..., Any], *args: Any, render: Callable[[Any], Any] = to_json) -> Reply:
    """Call a use case; 200 with the rendered result, or 500 with the error."""
    try:
        result = action(*args)
    except Exception as exc:
        return _reply({"error": str(exc)}, 500)
    return _reply(render(result), 200)


def _run_with_item(action: Callable[..., Any], customer_id: str) -> Reply:
    """Bind a cart item from the JSON body, then run the action with it."""
    try:
        item = parse_request(CartItemRequest, request.get_json(force=True, silent=True))
    except RequestError:
        return _reply({"error": "Invalid request body"}, 400)
    return _run(action, customer_id, item)


class CartHandler:
    """Request handlers that delegate to a cart use case."""

    def __init__(self, usecase: Any) -> None:
        self._usecase = usecase

    def add_to_cart(self, customer_id: str) -> Reply:
        return _run_with_item(self._usecase.add_to_cart, customer_id)

    def get_cart_by_customer_id(self, customer_id: str) -> Reply:
        return _run(self._usecase.get_cart_by_customer_id, customer_id)

    def update_cart_item(self, customer_id: str) -> Reply:
        return _run_with_item(self._usecase.update_cart_item, customer_id)

    def remove_cart_item(self, customer_id: str, product_id: str) -> Reply:
        return _run(self._usecase.remove_cart_item, customer_id, product_id)

    def clear_cart(self, customer_id: str) -> Reply:
        return _run(
            self._usecase.clear_cart,
            customer_id,
            render=lambda _: {"message": "Cart cleared successfully"},
        )