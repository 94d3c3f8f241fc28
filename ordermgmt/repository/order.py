"""Order storage in a MongoDB collection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ordermgmt.domain import Order, OrderRequest, to_document
from ordermgmt.repository.customer import _MongoRepository


class MongoOrderRepository(_MongoRepository):
    """Orders kept in the "orders" collection."""

    collection_name = "orders"
    model = Order
    entity = "order"

    def get_all(self) -> list[Order]:
        return self._find_all()

    def get_by_id(self, item_id: str) -> Order:
        return self._find_by_id(item_id)

    def create(self, request: OrderRequest) -> Order:
        order = Order(
            customer_id=request.customer_id,
            product_ids=list(request.product_ids),
            total_amount=request.total_amount,
            created_at=datetime.now(timezone.utc),
        )
        order.id = self._insert(to_document(order))
        return order

    def update(self, item_id: str, request: OrderRequest) -> Order | None:
        """Set the given fields; None when no order has this id."""
        fields: dict[str, Any] = {}
        if request.customer_id:
            fields["customer_id"] = request.customer_id
        if request.product_ids:
            fields["productids"] = list(request.product_ids)
        if request.total_amount > 0:
            fields["totalamount"] = request.total_amount
        return self._set_fields(item_id, fields)

    def delete(self, item_id: str) -> Order | None:
        """Remove an order; None when no order has this id."""
        return self._delete_one(item_id)