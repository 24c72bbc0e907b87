from .connection import (
    EMPTY_BUNDLED_ITEM,
    BundleItemEdge,
    BundleItemsConnection,
    ProductConnectionResolver,
    enrich_bundle_item_edges,
    get_bundle_item_ids,
)
from .exceptions import (
    BundleCartError,
    BundleConfigurationInvalidError,
    BundleUserError,
    ProductBundlesError,
    RegistryError,
)
from .hooks import FilterRegistry
from .models import BUNDLE_PRODUCT_TYPE, AbstractBundledItem, BundleProductMixin
from .notices import extract_stock_notice
from .registry import (
    BundleCartHandler,
    CartHandler,
    ProductSchema,
    SchemaRegistry,
)
from .schema import register

__version__ = "0.3.0"

__all__ = [
    "BUNDLE_PRODUCT_TYPE",
    "EMPTY_BUNDLED_ITEM",
    "AbstractBundledItem",
    "BundleCartError",
    "BundleCartHandler",
    "BundleConfigurationInvalidError",
    "BundleItemEdge",
    "BundleItemsConnection",
    "BundleProductMixin",
    "BundleUserError",
    "CartHandler",
    "FilterRegistry",
    "ProductBundlesError",
    "ProductConnectionResolver",
    "ProductSchema",
    "RegistryError",
    "SchemaRegistry",
    "enrich_bundle_item_edges",
    "extract_stock_notice",
    "get_bundle_item_ids",
    "register",
]
