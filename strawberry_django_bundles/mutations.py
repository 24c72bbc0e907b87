"""The `addToCartProductBundle` mutation."""

import logging
from typing import TYPE_CHECKING, Optional

import strawberry
import strawberry_django
from strawberry import Info
from strawberry_django.resolvers import django_resolver

from .exceptions import (
    BundleCartError,
    BundleConfigurationInvalidError,
    BundleUserError,
)
from .notices import extract_stock_notice, last_notice_text
from .utils import decode_json

if TYPE_CHECKING:
    from .registry import ProductSchema, SchemaRegistry

logger = logging.getLogger(__name__)

NO_PRODUCT_ID_MESSAGE = "No product ID provided"
NO_BUNDLE_ITEMS_MESSAGE = "No bundle items provided"
PRODUCT_NOT_FOUND_MESSAGE = "No product found matching the ID provided"
BUNDLE_CART_MISSING_MESSAGE = (
    "Product bundles cart is not available. "
    "Ensure that the product bundles extension is active."
)
ADD_TO_CART_FAILED_MESSAGE = "Failed to add cart item. Please check input."


def cart_error_message(error: BundleCartError) -> str:
    """Get the message shown to the API consumer for a bundle cart failure.

    A rejected configuration reports stock shortages through its notices,
    in which case the stock detail of the last notice is used. Anything else
    surfaces the error message itself.
    """
    if isinstance(error, BundleConfigurationInvalidError):
        stock_notice = extract_stock_notice(last_notice_text(error.notices))
        if stock_notice:
            return stock_notice

    return error.message or ADD_TO_CART_FAILED_MESSAGE


def add_bundle_to_cart(
    info: Info,
    host: "ProductSchema",
    product_id: int,
    quantity: Optional[int],
    extra_data: Optional[str],
) -> str:
    """Validate the input and add the configured bundle to the cart.

    Returns:
        The key of the new cart item.

    Raises:
        BundleUserError: The input is invalid or the cart rejected the bundle.

    """
    host.cart.check_session_token(info)

    if not product_id:
        raise BundleUserError(NO_PRODUCT_ID_MESSAGE)

    configuration = decode_json(extra_data)
    if configuration is None:
        raise BundleUserError(NO_BUNDLE_ITEMS_MESSAGE)

    if not host.product_model._default_manager.filter(pk=product_id).exists():
        raise BundleUserError(PRODUCT_NOT_FOUND_MESSAGE)

    if host.bundle_cart is None:
        logger.warning("Bundle %s not added: no bundle cart configured", product_id)
        raise BundleUserError(BUNDLE_CART_MISSING_MESSAGE)

    try:
        key = host.bundle_cart.add_bundle_to_cart(
            info,
            product_id,
            quantity or 1,
            configuration,
        )
    except BundleCartError as e:
        logger.warning(
            "Bundle %s not added to cart (%s): %s",
            product_id,
            e.code,
            e.message,
        )
        raise BundleUserError(cart_error_message(e)) from e

    if not key:
        logger.warning("Bundle %s not added to cart: no cart item key", product_id)
        raise BundleUserError(ADD_TO_CART_FAILED_MESSAGE)

    return key


def create_add_to_cart_mutation(registry: "SchemaRegistry", host: "ProductSchema"):
    """Create the mutation type holding `addToCartProductBundle`."""
    cart_type = host.cart_type
    cart_item_type = host.cart_item_type

    @strawberry.type(
        name="AddToCartProductBundlePayload",
        description="The payload of the addToCartProductBundle mutation.",
    )
    class AddToCartProductBundlePayload:
        key: strawberry.Private[str]

        @strawberry.field(description="The cart item the bundle was added as.")
        @django_resolver
        def cart_item(self, info: Info) -> Optional[cart_item_type]:
            return host.cart.get_cart_item(info, self.key)

        @strawberry.field(description="The cart after the bundle was added.")
        @django_resolver
        def cart(self, info: Info) -> Optional[cart_type]:
            return host.cart.get_cart(info)

    @strawberry.type(name="ProductBundlesMutation")
    class ProductBundlesMutation:
        @strawberry_django.input_mutation(
            name="addToCartProductBundle",
            description="Add a configured product bundle to the cart.",
        )
        def add_to_cart_product_bundle(
            self,
            info: Info,
            product_id: int,
            quantity: Optional[int] = None,
            extra_data: Optional[str] = None,
        ) -> AddToCartProductBundlePayload:
            key = add_bundle_to_cart(info, host, product_id, quantity, extra_data)
            return AddToCartProductBundlePayload(key=key)

    return ProductBundlesMutation


def register_add_to_cart_mutation(
    registry: "SchemaRegistry",
    host: "ProductSchema",
) -> None:
    registry.register_mutation(create_add_to_cart_mutation(registry, host))


__all__ = [
    "add_bundle_to_cart",
    "cart_error_message",
    "create_add_to_cart_mutation",
    "register_add_to_cart_mutation",
]
