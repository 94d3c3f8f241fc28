[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ordermgmt"
version = "2.0.0"
description = "JSON HTTP API for managing customers, products, orders and shopping carts stored in MongoDB"
requires-python = ">=3.10"
keywords = ["orders", "shopping-cart", "rest", "api", "mongodb", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask>=2.2",
    "pymongo>=4.0",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
ordermgmt = "ordermgmt.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ordermgmt"]

[tool.pytest.ini_options]
addopts = "-ra"
