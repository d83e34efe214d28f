from bizdash.catalog.loader import (
    DEFAULT_CATALOG_FILE,
    CatalogError,
    NavCatalog,
    default_catalog,
    load_catalog,
    parse_catalog,
)

__all__ = [
    "DEFAULT_CATALOG_FILE",
    "CatalogError",
    "NavCatalog",
    "default_catalog",
    "load_catalog",
    "parse_catalog",
]
