"""The `BundleProduct` object type and the filters making products aware of it."""

from typing import TYPE_CHECKING, Any, Optional

import strawberry_django
from strawberry import Info

from .connection import create_bundle_items_field
from .hooks import (
    PRODUCT_TYPES,
    PRODUCT_TYPES_ENUM_VALUES,
    field_group_flag,
    return_false,
    return_true,
)
from .models import BUNDLE_PRODUCT_TYPE
from .utils import value_or_none

if TYPE_CHECKING:
    from .registry import ProductSchema, SchemaRegistry

BUNDLE_PRODUCT_TYPE_NAME = "BundleProduct"
BUNDLE_PRODUCT_ENUM_NAME = "BUNDLE"

#: Product field groups computed (True) or skipped (False) for bundle products
BUNDLE_FIELD_GROUPS = {
    "pricing_and_tax": True,
    "inventory": True,
    "virtual_data": True,
    "variation_pricing": False,
    "external": False,
    "grouped": False,
}


def add_bundle_product_type(product_types: dict[str, str]) -> dict[str, str]:
    return {**product_types, BUNDLE_PRODUCT_TYPE: BUNDLE_PRODUCT_TYPE_NAME}


def add_bundle_enum_value(
    values: dict[str, dict[str, Any]],
) -> dict[str, dict[str, Any]]:
    return {
        **values,
        BUNDLE_PRODUCT_ENUM_NAME: {
            "value": BUNDLE_PRODUCT_TYPE,
            "description": "A bundle product",
        },
    }


def register_bundle_product_filters(registry: "SchemaRegistry") -> None:
    hooks = registry.hooks
    hooks.add_filter(PRODUCT_TYPES, add_bundle_product_type)
    hooks.add_filter(PRODUCT_TYPES_ENUM_VALUES, add_bundle_enum_value)
    for group, enabled in BUNDLE_FIELD_GROUPS.items():
        hooks.add_filter(
            field_group_flag(BUNDLE_PRODUCT_TYPE, group),
            return_true if enabled else return_false,
        )


def create_bundle_product_type(registry: "SchemaRegistry", host: "ProductSchema"):
    """Create the `BundleProduct` type from the host product schema.

    The type implements every host product interface, getting the generic,
    pricing, shipping and inventory fields from them, and adds the bundle
    options and the `bundleItems` connection.
    """
    product_model = host.product_model

    @strawberry_django.type(
        product_model,
        name=BUNDLE_PRODUCT_TYPE_NAME,
        description="A product bundle object",
    )
    class BundleProduct(*host.product_interfaces):
        bundle_items = create_bundle_items_field(registry, host)

        @classmethod
        def is_type_of(cls, obj: Any, info: Info) -> bool:
            if isinstance(obj, cls):
                return True

            return (
                isinstance(obj, product_model)
                and registry.resolve_product_type_name(obj) == BUNDLE_PRODUCT_TYPE_NAME
            )

        @strawberry_django.field(
            only=["bundle_min_price"],
            description="Minimum bundle price",
        )
        def bundle_price_min(self, root: product_model) -> Optional[str]:
            price = value_or_none(root.get_bundle_price("min"))
            return str(price) if price is not None else None

        @strawberry_django.field(
            only=["bundle_max_price"],
            description="Maximum bundle price",
        )
        def bundle_price_max(self, root: product_model) -> Optional[str]:
            price = value_or_none(root.get_bundle_price("max"))
            return str(price) if price is not None else None

        @strawberry_django.field(
            only=["bundle_layout"],
            description="Layout option state",
        )
        def layout(self, root: product_model) -> Optional[str]:
            return value_or_none(root.bundle_layout)

        @strawberry_django.field(
            only=["bundle_group_mode"],
            description="Item grouping option state",
        )
        def group_mode(self, root: product_model) -> Optional[str]:
            return value_or_none(root.bundle_group_mode)

        @strawberry_django.field(
            only=["bundle_add_to_cart_form_location"],
            description="Form location option state",
        )
        def add_to_cart_form_location(self, root: product_model) -> Optional[str]:
            return value_or_none(root.bundle_add_to_cart_form_location)

        @strawberry_django.field(
            only=["bundle_editable_in_cart"],
            description="Whether the bundle is editable in the cart.",
        )
        def editable_in_cart(self, root: product_model) -> Optional[bool]:
            return root.bundle_editable_in_cart

    return BundleProduct


def register_bundle_product_type(
    registry: "SchemaRegistry",
    host: "ProductSchema",
) -> None:
    registry.register_object_type(create_bundle_product_type(registry, host))

