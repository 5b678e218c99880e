"""Catalog storage backends for SNPHub."""

from .base import CatalogStorage
from .duckdb_catalog import DuckDBCatalogStorage

__all__ = ["CatalogStorage", "DuckDBCatalogStorage"]
