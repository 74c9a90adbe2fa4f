from __future__ import annotations

from ..models import Store
from ..models_catalog import CategoryProduct, Product, StoreProduct
from .base import BaseClient, parse_list


class CatalogClient(BaseClient):
    """Read-only lookups shared by the sales, inventory and cash-closing screens."""

    def list_products(self) -> list[Product]:
        data = self._request("GET", "/api/product", module="catalog", operation="list_products")
        return parse_list(data, Product, "product list")

    def list_categories(self) -> list[CategoryProduct]:
        data = self._request("GET", "/api/category-product", module="catalog", operation="list_categories")
        return parse_list(data, CategoryProduct, "category list")

    def list_stores(self) -> list[Store]:
        data = self._request("GET", "/api/store", module="catalog", operation="list_stores")
        return parse_list(data, Store, "store list")

    def list_store_products(self, store_id: str) -> list[StoreProduct]:
        data = self._request(
            "GET",
            f"/api/store-product/store/{store_id}",
            module="catalog",
            operation="list_store_products",
        )
        return parse_list(data, StoreProduct, "store product list")
