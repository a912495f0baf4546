"""Accessory catalog: vendor product posts as browsable products"""

from typing import Optional

from ..models.cart import Product
from .api_client import PawFamClient
from .normalizer import display_rating, normalize_products

CATEGORIES = ("food", "grooming", "accessories", "toys")

SORT_KEYS = {
    "price-low": (lambda p: p.price, False),
    "price-high": (lambda p: p.price, True),
    "rating": (lambda p: display_rating(p.rating), True),
    "name": (lambda p: p.name.lower(), False),
}


def filter_products(
    products: list[Product],
    category: Optional[str] = None,
    search: str = "",
    sort_by: str = "name",
) -> list[Product]:
    """Filter by category and keyword, then sort"""
    needle = search.strip().lower()
    selected = [
        p for p in products
        if (not category or category == "all" or p.category == category)
        and (
            not needle
            or needle in p.name.lower()
            or needle in p.description.lower()
            or needle in p.category.lower()
        )
    ]
    key, reverse = SORT_KEYS.get(sort_by, SORT_KEYS["name"])
    return sorted(selected, key=key, reverse=reverse)


class CatalogService:

    def __init__(self, client: PawFamClient):
        self.client = client

    async def list_products(
        self,
        category: Optional[str] = None,
        search: str = "",
        sort_by: str = "name",
    ) -> list[Product]:
        products = normalize_products(await self.client.get_products())
        return filter_products(products, category=category, search=search, sort_by=sort_by)
