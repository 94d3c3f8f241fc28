"""Order management HTTP API for customers, products, orders and carts, backed by MongoDB."""

__version__ = "2.0.0"