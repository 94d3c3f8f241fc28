"""Customer storage in a MongoDB collection, and the shared collection base."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ClassVar, Iterator

from bson import ObjectId
from pymongo import ReturnDocument

from ordermgmt import logger as log
from ordermgmt.domain import (
    Customer,
    CustomerRequest,
    NotFoundError,
    from_document,
    parse_object_id,
    to_document,
)


@contextmanager
def _logged_failure(message: str, **fields: Any) -> Iterator[None]:
    """Log any exception raised in the block, then let it propagate."""
    try:
        yield
    except Exception as exc:
        log.error(message, error=str(exc), **fields)
        raise


class _MongoRepository:
    """Common lookups for a repository over one collection."""

    collection_name: ClassVar[str]
    model: ClassVar[type]
    entity: ClassVar[str]
    invalid_id_message: ClassVar[str] = "Invalid ID format"

    def __init__(self, db: Any) -> None:
        self._db = db

    @property
    def _collection(self) -> Any:
        return self._db[self.collection_name]

    @property
    def _title(self) -> str:
        return self.entity.capitalize()

    def _object_id(self, item_id: str) -> ObjectId:
        with _logged_failure(self.invalid_id_message, id=item_id):
            return parse_object_id(item_id)

    def _find_all(self) -> list[Any]:
        return [from_document(self.model, doc) for doc in self._collection.find({})]

    def _find_by_id(self, item_id: str) -> Any:
        object_id = self._object_id(item_id)
        doc = self._collection.find_one({"_id": object_id})
        if doc is None:
            log.error(f"{self._title} not found", id=item_id)
            raise NotFoundError(f"{self.entity} {item_id} not found")
        return from_document(self.model, doc)

    def _delete_one(self, item_id: str) -> Any | None:
        """Remove a document; None when nothing has this id."""
        object_id = self._object_id(item_id)
        with _logged_failure(f"Failed to delete {self.entity}", id=item_id):
            doc = self._collection.find_one_and_delete({"_id": object_id})
        if doc is None:
            log.error(f"{self._title} not found for deletion", id=item_id)
            return None
        with _logged_failure(f"Failed to decode deleted {self.entity}", id=item_id):
            return from_document(self.model, doc)

    def _insert(self, document: dict[str, Any]) -> ObjectId:
        with _logged_failure(f"Failed to create {self.entity}"):
            result = self._collection.insert_one(document)
        if not isinstance(result.inserted_id, ObjectId):
            log.error("Failed to convert inserted ID to ObjectID", insertedID=result.inserted_id)
            raise RuntimeError(f"failed to convert inserted ID to ObjectID: {result.inserted_id}")
        return result.inserted_id

    def _set_fields(self, item_id: str, fields: dict[str, Any]) -> Any | None:
        """Apply $set and return the updated model, or None when nothing matched."""
        object_id = self._object_id(item_id)
        with _logged_failure(f"Failed to update {self.entity}", id=item_id):
            doc = self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        if doc is None:
            log.error(f"{self._title} not found", id=item_id)
            return None
        with _logged_failure(f"Failed to decode updated {self.entity}", id=item_id):
            return from_document(self.model, doc)


class MongoCustomerRepository(_MongoRepository):
    """Customers kept in the "customers" collection."""

    collection_name = "customers"
    model = Customer
    entity = "customer"
    invalid_id_message = "Error converting ID to ObjectID"

    def get_all(self) -> list[Customer]:
        return self._find_all()

    def get_by_id(self, item_id: str) -> Customer:
        return self._find_by_id(item_id)

    def create(self, request: CustomerRequest) -> Customer:
        return Customer(
            id=self._insert(to_document(request)),
            name=request.name,
            email=request.email,
            phone=request.phone,
        )

    def update(self, item_id: str, request: CustomerRequest) -> Customer | None:
        """Set the non-empty fields; None when no customer has this id."""
        object_id = self._object_id(item_id)
        fields = {
            key: value
            for key, value in (
                ("name", request.name),
                ("email", request.email),
                ("phone", request.phone),
            )
            if value
        }
        with _logged_failure("Failed to update customer"):
            result = self._collection.update_one({"_id": object_id}, {"$set": fields})
        if result.matched_count == 0:
            log.error("No customer found with the given ID", id=item_id)
            return None
        return self.get_by_id(item_id)

    def delete(self, item_id: str) -> Customer:
        deleted = self._delete_one(item_id)
        if deleted is None:
            raise NotFoundError(f"customer {item_id} not found")
        return deleted