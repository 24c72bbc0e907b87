from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .connection import enrich_bundle_item_edges
from .hooks import CONNECTION_EDGES
from .mutations import register_add_to_cart_mutation
from .types import register_bundle_product_filters, register_bundle_product_type

if TYPE_CHECKING:
    from .registry import SchemaRegistry

logger = logging.getLogger(__name__)


def register(registry: SchemaRegistry) -> SchemaRegistry:
    """Add product bundle support to a host product schema.

    The filters adding the bundle product type, its enum value and its field
    group flags are registered right away, so the host types built afterwards
    already include them. `BundleProduct` and the `addToCartProductBundle`
    mutation are created once the host calls `registry.register_types`.

    Usage:
        >>> registry = SchemaRegistry()
        >>> register(registry)
        >>> # build the host product enum, interfaces and filter here
        >>> registry.register_types(ProductSchema(...))
        >>> schema = strawberry.Schema(..., types=registry.types)
    """
    register_bundle_product_filters(registry)
    registry.hooks.add_filter(CONNECTION_EDGES, enrich_bundle_item_edges)
    registry.on_register_types(register_bundle_product_type)
    registry.on_register_types(register_add_to_cart_mutation)
    logger.debug("Product bundles registered")
    return registry
