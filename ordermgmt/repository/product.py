"""Product storage in a MongoDB collection."""

from __future__ import annotations

from typing import Any

from ordermgmt.domain import Product, ProductRequest, to_document
from ordermgmt.repository.customer import _MongoRepository


class MongoProductRepository(_MongoRepository):
    """Products kept in the "products" collection."""

    collection_name = "products"
    model = Product
    entity = "product"

    def get_all(self) -> list[Product]:
        return self._find_all()

    def get_by_id(self, item_id: str) -> Product:
        return self._find_by_id(item_id)

    def create(self, request: ProductRequest) -> Product:
        return Product(
            id=self._insert(to_document(request)),
            name=request.name,
            price=request.price,
            stock=request.stock,
        )

    def update(self, item_id: str, request: ProductRequest) -> Product | None:
        """Set name if given, price if positive, stock if not negative.

        Returns None when no product has this id.
        """
        fields: dict[str, Any] = {}
        if request.name:
            fields["name"] = request.name
        if request.price > 0:
            fields["price"] = request.price
        if request.stock >= 0:
            fields["stock"] = request.stock
        return self._set_fields(item_id, fields)

    def delete(self, item_id: str) -> Product | None:
        """Remove a product; None when no product has this id."""
        return self._delete_one(item_id)