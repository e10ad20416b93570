"""Storefront route paths used as redirect targets."""

from __future__ import annotations

ROOT_PATH = "/"
CART_PATH = "/cart"
PRODUCTS_PATH = "/products"


def checkout_state_path(state: str) -> str:
    return f"/checkout/{state}"


def order_path(number: str) -> str:
    return f"/orders/{number}"


def edit_order_path(number: str) -> str:
    return f"/orders/{number}/edit"


def product_path(slug: str) -> str:
    return f"/products/{slug}"


def nested_taxons_path(permalink: str) -> str:
    return f"/t/{permalink}"
