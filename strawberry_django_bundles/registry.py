"""Schema registry shared by the host product schema and the bundle extension.

The host creates a `SchemaRegistry`, lets extensions register their filters,
builds its own product types (which read the filters), and finally calls
`register_types` with a `ProductSchema` describing those types. Extensions
queue their type registration with `on_register_types` so it only runs once
the host types exist.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from strawberry.types import get_object_definition

from .exceptions import RegistryError
from .hooks import (
    PRODUCT_TYPES,
    PRODUCT_TYPES_ENUM_VALUES,
    FilterRegistry,
    field_group_flag,
)

if TYPE_CHECKING:
    from django.db import models
    from strawberry import Info

    from .models import AbstractBundledItem

logger = logging.getLogger(__name__)


class CartHandler(Protocol):
    """Access to the cart of the current request."""

    def check_session_token(self, info: Info) -> None:
        """Raise if the request doesn't carry a valid cart session."""

    def get_cart(self, info: Info) -> Any: ...

    def get_cart_item(self, info: Info, key: str) -> Any: ...


class BundleCartHandler(Protocol):
    """Bundle aware cart operations provided by the bundle runtime."""

    def add_bundle_to_cart(
        self,
        info: Info,
        product_id: int,
        quantity: int,
        configuration: Any,
    ) -> Optional[str]:
        """Add a configured bundle to the cart and return the cart item key.

        Raises `BundleCartError` (or a subclass) when the bundle can't be added.
        """


@dataclasses.dataclass
class ProductSchema:
    """Host product schema pieces bundle types are composed from.

    Attributes:
        product_model: Model backing every product type.
        bundled_item_model: Concrete `AbstractBundledItem` subclass.
        product_type: Interface used as node type by product connections.
        product_interfaces: Interfaces providing the shared product field groups
            (generic, pricing and tax, shipping, inventory).
        product_filter: strawberry-django filter type for connection `where` args.
        cart_type: Type of the `cart` field in cart mutation payloads.
        cart_item_type: Type of the `cartItem` field in cart mutation payloads.
        cart: Handler for the cart of the current request.
        bundle_cart: Bundle cart operations, `None` when no bundle runtime exists.

    """

    product_model: type[models.Model]
    bundled_item_model: type[AbstractBundledItem]
    product_type: type
    product_interfaces: tuple[type, ...]
    product_filter: type
    cart_type: type
    cart_item_type: type
    cart: CartHandler
    bundle_cart: Optional[BundleCartHandler] = None


RegisterTypesCallback = Callable[["SchemaRegistry", ProductSchema], None]


class SchemaRegistry:
    def __init__(self, hooks: Optional[FilterRegistry] = None):
        self.hooks = hooks if hooks is not None else FilterRegistry()
        self.host: Optional[ProductSchema] = None
        self._types: dict[str, type] = {}
        self._mutations: list[type] = []
        self._callbacks: list[RegisterTypesCallback] = []

    @property
    def types(self) -> list[type]:
        return list(self._types.values())

    @property
    def mutations(self) -> list[type]:
        return list(self._mutations)

    def on_register_types(
        self,
        callback: RegisterTypesCallback,
    ) -> RegisterTypesCallback:
        if self.host is not None:
            raise RegistryError("Types were already registered for this registry")

        self._callbacks.append(callback)
        return callback

    def register_types(self, host: ProductSchema) -> None:
        if self.host is not None:
            raise RegistryError("Types were already registered for this registry")
        if host is None:
            raise RegistryError("A host product schema is required to register types")

        self.host = host
        for callback in self._callbacks:
            callback(self, host)

        logger.debug(
            "Registered %d extension types and %d mutations",
            len(self._types),
            len(self._mutations),
        )

    def register_object_type(self, type_: type) -> type:
        name = get_object_definition(type_, strict=True).name
        if name in self._types:
            raise RegistryError(f"Type {name!r} is already registered")

        self._types[name] = type_
        return type_

    def register_mutation(self, mutation_type: type) -> type:
        self._mutations.append(mutation_type)
        return mutation_type

    def product_types(self) -> dict[str, str]:
        """Return the mapping of product `type` values to GraphQL type names."""
        return self.hooks.apply_filters(PRODUCT_TYPES, {})

    def resolve_product_type_name(self, obj: Any) -> Optional[str]:
        return self.product_types().get(getattr(obj, "type", None))

    def product_types_enum_values(
        self,
        values: dict[str, dict[str, Any]],
    ) -> dict[str, dict[str, Any]]:
        return self.hooks.apply_filters(PRODUCT_TYPES_ENUM_VALUES, dict(values))

    def use_field_group(self, product_type: str, group: str, default: bool) -> bool:
        return bool(
            self.hooks.apply_filters(field_group_flag(product_type, group), default)
        )
