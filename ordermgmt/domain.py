"""Domain models, request payloads, repository protocols and conversions."""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar, get_args, get_origin

from bson import ObjectId
from bson.errors import InvalidId

T = TypeVar("T")

_ZERO_OBJECT_ID = "0" * 24
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class NotFoundError(LookupError):
    """Raised when a requested document does not exist."""


class InvalidIdError(ValueError):
    """Raised when a string is not a valid 24-digit hex object id."""


class RequestError(ValueError):
    """Raised when a request body cannot be bound to a request type."""


def _id_field() -> Any:
    return field(default=None, metadata={"bson": "_id"})


@dataclass
class Customer:
    id: ObjectId | None = _id_field()
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass
class CustomerRequest:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass
class Product:
    id: ObjectId | None = _id_field()
    name: str = ""
    price: float = 0.0
    stock: int = 0


@dataclass
class ProductRequest:
    name: str = ""
    price: float = 0.0
    stock: int = 0


@dataclass
class Order:
    id: ObjectId | None = _id_field()
    customer_id: str = field(default="", metadata={"bson": "customerid"})
    product_ids: list[str] = field(default_factory=list, metadata={"bson": "productids"})
    total_amount: float = field(default=0.0, metadata={"bson": "totalamount"})
    created_at: datetime = field(default=_ZERO_TIME, metadata={"bson": "createdat"})


@dataclass
class OrderRequest:
    customer_id: str = ""
    product_ids: list[str] = field(default_factory=list)
    total_amount: float = 0.0


@dataclass
class CartItem:
    product_id: str = ""
    product_name: str = ""
    product_price: float = 0.0
    quantity: int = 0
    subtotal: float = 0.0


@dataclass
class CartItemRequest:
    product_id: str = ""
    product_name: str = ""
    quantity: int = 0


@dataclass
class Cart:
    id: ObjectId | None = _id_field()
    customer_id: str = ""
    items: list[CartItem] = field(default_factory=list)
    total_items: int = 0
    total_price: float = 0.0


class CustomerRepository(Protocol):
    """Storage of customers."""

    def get_all(self) -> list[Customer]:
        """Return every customer."""

    def get_by_id(self, item_id: str) -> Customer:
        """Return one customer or raise NotFoundError."""

    def create(self, request: CustomerRequest) -> Customer:
        """Store a new customer and return it."""

    def update(self, item_id: str, request: CustomerRequest) -> Customer | None:
        """Apply the non-empty fields of the request."""

    def delete(self, item_id: str) -> Customer:
        """Remove a customer and return what was removed."""


class ProductRepository(Protocol):
    """Storage of products."""

    def get_all(self) -> list[Product]:
        """Return every product."""

    def get_by_id(self, item_id: str) -> Product:
        """Return one product or raise NotFoundError."""

    def create(self, request: ProductRequest) -> Product:
        """Store a new product and return it."""

    def update(self, item_id: str, request: ProductRequest) -> Product | None:
        """Apply the request to a product."""

    def delete(self, item_id: str) -> Product | None:
        """Remove a product and return what was removed."""


class OrderRepository(Protocol):
    """Storage of orders."""

    def get_all(self) -> list[Order]:
        """Return every order."""

    def get_by_id(self, item_id: str) -> Order:
        """Return one order or raise NotFoundError."""

    def create(self, request: OrderRequest) -> Order:
        """Store a new order and return it."""

    def update(self, item_id: str, request: OrderRequest) -> Order | None:
        """Apply the request to an order."""

    def delete(self, item_id: str) -> Order | None:
        """Remove an order and return what was removed."""


class CartRepository(Protocol):
    """Storage of carts, one per customer."""

    def add_to_cart(self, customer_id: str, item: CartItem) -> Cart:
        """Add an item, creating the cart when needed."""

    def get_cart_by_customer_id(self, customer_id: str) -> Cart:
        """Return the customer's cart or raise NotFoundError."""

    def update_cart_item(self, customer_id: str, item: CartItem) -> Cart | None:
        """Set the quantity of an item already in the cart."""

    def remove_cart_item(self, customer_id: str, product_id: str) -> Cart | None:
        """Remove a product from the cart."""

    def clear_cart(self, customer_id: str) -> None:
        """Delete the customer's cart."""


def parse_object_id(value: str) -> ObjectId:
    """Convert a 24-digit hex string into an ObjectId."""
    if not isinstance(value, str):
        raise InvalidIdError(f"the provided hex string is not a valid ObjectID: {value!r}")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdError(f"the provided hex string is not a valid ObjectID: {value!r}") from exc


def _bson_name(f: dataclasses.Field) -> str:
    return f.metadata.get("bson", f.name)


def _zero(hint: Any) -> Any:
    if hint is str:
        return ""
    if hint is int:
        return 0
    if hint is float:
        return 0.0
    if get_origin(hint) is list:
        return []
    return None


def _coerce(name: str, hint: Any, value: Any) -> Any:
    if value is None:
        return _zero(hint)
    if hint is str:
        if not isinstance(value, str):
            raise RequestError(f"field {name!r} must be a string")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise RequestError(f"field {name!r} must be an integer")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RequestError(f"field {name!r} must be a number")
        return float(value)
    if get_origin(hint) is list:
        if not isinstance(value, list):
            raise RequestError(f"field {name!r} must be an array")
        (item_hint,) = get_args(hint)
        return [_coerce(name, item_hint, item) for item in value]
    raise RequestError(f"field {name!r} cannot be bound")


def parse_request(request_cls: type[T], data: Any) -> T:
    """Bind a decoded JSON object to a request type.

    Unknown keys are ignored, keys match field names without regard to case,
    missing or null fields keep their zero value.
    """
    if not isinstance(data, dict):
        raise RequestError("request body must be a JSON object")
    fields = {f.name: f for f in dataclasses.fields(request_cls)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        target = fields.get(key)
        if target is None and isinstance(key, str):
            target = next((f for n, f in fields.items() if n.lower() == key.lower()), None)
        if target is None:
            continue
        values[target.name] = _coerce(target.name, target.type, value)
    return request_cls(**values)


def _from_bson(hint: Any, value: Any) -> Any:
    if get_origin(hint) is list:
        (item_hint,) = get_args(hint)
        if dataclasses.is_dataclass(item_hint):
            return [from_document(item_hint, item) for item in value]
        return list(value)
    if hint is float:
        return float(value)
    if hint is int:
        return int(value)
    return value


def from_document(model_cls: type[T], doc: dict) -> T:
    """Build a model from a stored document."""
    values: dict[str, Any] = {}
    for f in dataclasses.fields(model_cls):
        key = _bson_name(f)
        if doc.get(key) is None:
            continue
        values[f.name] = _from_bson(f.type, doc[key])
    return model_cls(**values)


def _to_bson(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_document(value)
    if isinstance(value, list):
        return [_to_bson(item) for item in value]
    return value


def to_document(model: Any) -> dict:
    """Turn a model or request into a document for storage; an unset id is left out."""
    doc: dict[str, Any] = {}
    for f in dataclasses.fields(model):
        key = _bson_name(f)
        value = getattr(model, f.name)
        if key == "_id" and value is None:
            continue
        doc[key] = _to_bson(value)
    return doc


def _json_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_json(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(item) for item in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        text = value.isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    return value


def to_json(model: Any) -> Any:
    """Render a model, a list of models or None as JSON-ready data."""
    if model is None:
        return None
    if isinstance(model, (list, tuple)):
        return [_json_value(item) for item in model]
    result: dict[str, Any] = {}
    for f in dataclasses.fields(model):
        value = getattr(model, f.name)
        if _bson_name(f) == "_id" and value is None:
            result[f.name] = _ZERO_OBJECT_ID
        else:
            result[f.name] = _json_value(value)
    return result