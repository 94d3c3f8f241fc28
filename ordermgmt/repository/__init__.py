"""MongoDB repositories for customers, products, orders and carts."""