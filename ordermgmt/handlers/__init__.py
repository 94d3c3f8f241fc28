"""Flask request handlers for customers, products, orders and carts."""