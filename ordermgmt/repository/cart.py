"""Cart storage in a MongoDB collection, one cart document per customer."""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from ordermgmt import logger as log
from ordermgmt.domain import (
    Cart,
    CartItem,
    NotFoundError,
    from_document,
    to_document,
)

COLLECTION = "carts"


def recalculate_totals(cart: Cart) -> None:
    """Recompute the item count and total price of a cart from its items."""
    cart.total_items = sum(item.quantity for item in cart.items)
    cart.total_price = sum((item.product_price * item.quantity for item in cart.items), 0.0)


class MongoCartRepository:
    """Carts kept in the "carts" collection, keyed by customer id."""

    def __init__(self, db: Any) -> None:
        self._db = db

    @property
    def _collection(self) -> Any:
        return self._db[COLLECTION]

    def _find_document(self, customer_id: str, failure_message: str) -> dict | None:
        try:
            return self._collection.find_one({"customer_id": customer_id})
        except Exception as exc:
            log.error(failure_message, customer_id=customer_id, error=str(exc))
            raise

    def _load(self, customer_id: str) -> Cart:
        doc = self._find_document(customer_id, "Failed to find cart for customer")
        if doc is None:
            log.error("Customer's cart is empty", customer_id=customer_id)
            raise NotFoundError(f"cart of customer {customer_id} not found")
        return from_document(Cart, doc)

    def _save(self, cart: Cart, failure_message: str) -> None:
        fields = to_document(cart)
        fields.pop("_id", None)
        try:
            self._collection.update_one({"_id": cart.id}, {"$set": fields})
        except Exception as exc:
            log.error(failure_message, error=str(exc))
            raise

    def _create(self, customer_id: str, item: CartItem) -> Cart:
        log.info("Creating new cart for customer", customer_id=customer_id, reason="cart_not_found")
        cart = Cart(
            customer_id=customer_id,
            items=[item],
            total_items=item.quantity,
            total_price=item.product_price * item.quantity,
        )
        try:
            result = self._collection.insert_one(to_document(cart))
        except Exception as exc:
            log.error("Failed to create new cart", error=str(exc))
            raise
        if isinstance(result.inserted_id, ObjectId):
            cart.id = result.inserted_id
        log.info(
            "New cart created successfully",
            customer_id=customer_id,
            cart_id=str(cart.id) if cart.id is not None else "0" * 24,
            total_items=cart.total_items,
            total_price=cart.total_price,
        )
        return cart

    def add_to_cart(self, customer_id: str, item: CartItem) -> Cart:
        """Add an item, merging quantities with an item of the same product."""
        log.info("Adding item to cart", customerID=customer_id, item=repr(item))
        doc = self._find_document(customer_id, "Failed to find existing cart")
        if doc is None:
            return self._create(customer_id, item)

        cart = from_document(Cart, doc)
        existing = next((entry for entry in cart.items if entry.product_id == item.product_id), None)
        if existing is not None:
            existing.quantity += item.quantity
        else:
            cart.items.append(item)
        recalculate_totals(cart)
        self._save(cart, "Failed to update existing cart")
        return cart

    def get_cart_by_customer_id(self, customer_id: str) -> Cart:
        """Return the customer's cart or raise NotFoundError."""
        return self._load(customer_id)

    def update_cart_item(self, customer_id: str, item: CartItem) -> Cart | None:
        """Set quantity and subtotal of an item; None when the item is not in the cart."""
        cart = self._load(customer_id)
        existing = next((entry for entry in cart.items if entry.product_id == item.product_id), None)
        if existing is None:
            log.error("Item not found in cart", product_id=item.product_id, customer_id=customer_id)
            return None
        existing.quantity = item.quantity
        existing.subtotal = item.product_price * item.quantity
        recalculate_totals(cart)
        self._save(cart, "Failed to update cart")
        return cart

    def remove_cart_item(self, customer_id: str, product_id: str) -> Cart | None:
        """Drop every item of a product; None when the product is not in the cart."""
        cart = self._load(customer_id)
        remaining = [entry for entry in cart.items if entry.product_id != product_id]
        if len(remaining) == len(cart.items):
            log.error("Item not found in cart", product_id=product_id, customer_id=customer_id)
            return None
        cart.items = remaining
        recalculate_totals(cart)
        self._save(cart, "Failed to update cart after removing item")
        return cart

    def clear_cart(self, customer_id: str) -> None:
        """Delete the customer's cart; a missing cart is only logged."""
        try:
            result = self._collection.delete_one({"customer_id": customer_id})
        except Exception as exc:
            log.error("Failed to clear cart for customer", customer_id=customer_id, error=str(exc))
            raise
        if result.deleted_count == 0:
            log.warn("Customer's cart is already empty", customer_id=customer_id)