"""Business operations on customers, products, orders and carts."""

from __future__ import annotations

from ordermgmt.domain import (
    Cart,
    CartItem,
    CartItemRequest,
    CartRepository,
    Customer,
    CustomerRepository,
    CustomerRequest,
    Order,
    OrderRepository,
    OrderRequest,
    Product,
    ProductRepository,
    ProductRequest,
)


class CustomerUsecase:
    """Customer operations backed by a repository."""

    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def get_all(self) -> list[Customer]:
        return self._repository.get_all()

    def get_by_id(self, item_id: str) -> Customer:
        return self._repository.get_by_id(item_id)

    def create(self, request: CustomerRequest) -> Customer:
        return self._repository.create(request)

    def update(self, item_id: str, request: CustomerRequest) -> Customer | None:
        return self._repository.update(item_id, request)

    def delete(self, item_id: str) -> Customer | None:
        return self._repository.delete(item_id)


class ProductUsecase:
    """Product operations backed by a repository."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    def get_all(self) -> list[Product]:
        return self._repository.get_all()

    def get_by_id(self, item_id: str) -> Product:
        return self._repository.get_by_id(item_id)

    def create(self, request: ProductRequest) -> Product:
        return self._repository.create(request)

    def update(self, item_id: str, request: ProductRequest) -> Product | None:
        return self._repository.update(item_id, request)

    def delete(self, item_id: str) -> Product | None:
        return self._repository.delete(item_id)


class OrderUsecase:
    """Order operations backed by a repository."""

    def __init__(self, repository: OrderRepository) -> None:
        self._repository = repository

    def get_all(self) -> list[Order]:
        return self._repository.get_all()

    def get_by_id(self, item_id: str) -> Order:
        return self._repository.get_by_id(item_id)

    def create(self, request: OrderRequest) -> Order:
        return self._repository.create(request)

    def update(self, item_id: str, request: OrderRequest) -> Order | None:
        return self._repository.update(item_id, request)

    def delete(self, item_id: str) -> Order | None:
        return self._repository.delete(item_id)


class CartUsecase:
    """Cart operations; item prices are taken from the product store."""

    def __init__(
        self,
        cart_repository: CartRepository,
        product_repository: ProductRepository,
        customer_repository: CustomerRepository,
    ) -> None:
        self._carts = cart_repository
        self._products = product_repository
        self._customers = customer_repository

    def _priced_item(self, request: CartItemRequest) -> CartItem:
        product = self._products.get_by_id(request.product_id)
        return CartItem(
            product_id=request.product_id,
            product_name=request.product_name,
            product_price=product.price,
            quantity=request.quantity,
            subtotal=request.quantity * product.price,
        )

    def add_to_cart(self, customer_id: str, request: CartItemRequest) -> Cart:
        return self._carts.add_to_cart(customer_id, self._priced_item(request))

    def get_cart_by_customer_id(self, customer_id: str) -> Cart:
        return self._carts.get_cart_by_customer_id(customer_id)

    def update_cart_item(self, customer_id: str, request: CartItemRequest) -> Cart | None:
        return self._carts.update_cart_item(customer_id, self._priced_item(request))

    def remove_cart_item(self, customer_id: str, product_id: str) -> Cart | None:
        return self._carts.remove_cart_item(customer_id, product_id)

    def clear_cart(self, customer_id: str) -> None:
        self._carts.clear_cart(customer_id)