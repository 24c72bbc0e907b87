"""The `bundleItems` connection between a bundle product and its products.

Resolving the connection happens in three steps:

1. `get_bundle_item_ids` reads the product ids of the bundle's members.
2. `ProductConnectionResolver` builds a regular product connection limited
   to those ids; pagination is left to `DjangoListConnection`.
3. `enrich_bundle_item_edges`, listening on the `connection_edges` filter,
   attaches the bundled item configuration to each edge.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

import strawberry
import strawberry_django
from django.db import models
from strawberry import Info, relay
from strawberry_django.relay import DjangoListConnection
from strawberry_django.resolvers import django_resolver

from .hooks import BUNDLE_ITEM_LIMIT, CONNECTION_EDGES
from .models import BUNDLE_PRODUCT_TYPE, AbstractBundledItem
from .settings import strawberry_django_bundles_settings
from .utils import int_or_none, json_or_none, value_or_none, yes_no

if TYPE_CHECKING:
    from .registry import ProductSchema, SchemaRegistry

logger = logging.getLogger(__name__)

BUNDLE_ITEMS_FIELD = "bundleItems"


class EmptyBundledItem:
    """Configuration of an edge whose node isn't a member of the bundle."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY_BUNDLED_ITEM"


EMPTY_BUNDLED_ITEM = EmptyBundledItem()

BundledItem = Union[AbstractBundledItem, EmptyBundledItem]


def is_bundle_source(source: Any) -> bool:
    if not source:
        return False

    return getattr(source, "type", None) == BUNDLE_PRODUCT_TYPE


def get_bundle_item_ids(
    source: Any,
    args: dict[str, Any],
    info: Optional[Info],
    *,
    registry: "SchemaRegistry",
) -> list[int]:
    """Get the ids of the products contained in a bundle.

    The amount of ids is capped by the `BUNDLE_ITEM_LIMIT` setting, which the
    `product_bundles_item_connector_limit` filter can change per request. The
    cap is not a pagination cursor: members past it are never listed.

    Args:
        source: The product the connection is resolved for.
        args: The arguments given to the connection field.
        info: The resolve info of the connection field.
        registry: The registry the bundle types were registered in.

    Returns:
        The ids in the order they are stored, empty when source isn't a bundle.

    """
    if not is_bundle_source(source):
        return []

    bundle_id = getattr(source, "pk", None)
    if not bundle_id:
        return []

    assert registry.host is not None
    limit = registry.hooks.apply_filters(
        BUNDLE_ITEM_LIMIT,
        strawberry_django_bundles_settings()["BUNDLE_ITEM_LIMIT"],
        source,
        args,
        info,
    )
    limit = int_or_none(limit) or 0
    if limit <= 0:
        return []

    logger.debug("Listing at most %d items of bundle %s", limit, bundle_id)
    return list(
        registry.host.bundled_item_model._default_manager.filter(
            bundle_id=bundle_id,
        ).values_list("product_id", flat=True)[:limit]
    )


class ProductConnectionResolver:
    """Resolve a connection of products for a field.

    Query args set with `set_query_arg` are applied as lookups to the product
    queryset. Once the connection is built its edges go through the
    `connection_edges` filter together with this resolver, so listeners can
    inspect `source`, `args`, `info` and `field_name`.
    """

    def __init__(
        self,
        source: Any,
        args: dict[str, Any],
        info: Info,
        *,
        registry: "SchemaRegistry",
        connection_type: type[DjangoListConnection] = DjangoListConnection,
    ):
        if registry.host is None:
            raise ValueError("The registry has no host product schema yet")

        self.source = source
        self.args = args
        self.info = info
        self.registry = registry
        self.connection_type = connection_type
        self.query_args: dict[str, Any] = {}

    @property
    def host(self) -> "ProductSchema":
        assert self.registry.host is not None
        return self.registry.host

    @property
    def field_name(self) -> Optional[str]:
        if self.info is None:
            return None

        return self.info.field_name

    def set_query_arg(self, key: str, value: Any) -> "ProductConnectionResolver":
        self.query_args[key] = value
        return self

    def get_query(self) -> models.QuerySet:
        qs = self.host.product_model._default_manager.all()

        where = self.args.get("where")
        if where is not None:
            qs = strawberry_django.filters.apply(where, qs, info=self.info)

        if self.query_args:
            qs = qs.filter(**self.query_args)

        return qs.order_by("pk")

    def get_connection(self) -> DjangoListConnection:
        connection = self.connection_type.resolve_connection(
            self.get_query(),
            info=self.info,
            before=self.args.get("before"),
            after=self.args.get("after"),
            first=self.args.get("first"),
            last=self.args.get("last"),
        )
        connection.edges = self.registry.hooks.apply_filters(
            CONNECTION_EDGES,
            list(connection.edges),
            self,
        )
        return connection


def enrich_bundle_item_edges(
    edges: list[relay.Edge],
    resolver: ProductConnectionResolver,
) -> list[relay.Edge]:
    """Attach the bundled item configuration to the edges of `bundleItems`.

    Listens on every connection resolution, so edges of any other connection
    are returned untouched. Each edge gets the configuration of the first
    bundled item whose product is the edge node, or `EMPTY_BUNDLED_ITEM`.
    Existing values are ignored: the match is recomputed on every call.

    The bundled items are indexed once per call, keeping the cost linear in
    the amount of edges plus bundled items; the configuration of every
    matched item is then fetched by its bundled item id.
    """
    source = resolver.source
    if not is_bundle_source(source):
        return edges

    if resolver.field_name != BUNDLE_ITEMS_FIELD:
        return edges

    by_product_id: dict[Any, AbstractBundledItem] = {}
    for data_item in source.get_bundled_data_items():
        by_product_id.setdefault(data_item.product_id, data_item)

    for edge in edges:
        data_item = by_product_id.get(getattr(edge.node, "pk", None))
        if data_item is None:
            edge.bundled_item = EMPTY_BUNDLED_ITEM
            continue

        bundled_item = type(data_item).get_bundled_item(data_item.bundled_item_id)
        edge.bundled_item = (
            bundled_item if bundled_item is not None else EMPTY_BUNDLED_ITEM
        )

    logger.debug(
        "Attached %d bundled items of bundle %s to %d edges",
        len(by_product_id),
        source.pk,
        len(edges),
    )
    return edges


@strawberry.type(name="BundleItemEdge", description="An edge in a bundle items connection.")
class BundleItemEdge(relay.Edge[relay.NodeType]):
    bundled_item: strawberry.Private[BundledItem] = EMPTY_BUNDLED_ITEM

    def _meta(self, key: str) -> Any:
        if not isinstance(self.bundled_item, AbstractBundledItem):
            return None

        return self.bundled_item.get_meta(key)

    @strawberry.field(description="The quantity minimum")
    def quantity_min(self) -> Optional[int]:
        return int_or_none(self._meta("quantity_min"))

    @strawberry.field(description="The quantity maximum")
    def quantity_max(self) -> Optional[int]:
        return int_or_none(self._meta("quantity_max"))

    @strawberry.field(description="The bundled item ID")
    def bundled_item_id(self) -> Optional[int]:
        if not isinstance(self.bundled_item, AbstractBundledItem):
            return None

        return self.bundled_item.bundled_item_id or None

    @strawberry.field(description="Bundled item menu order")
    def menu_order(self) -> Optional[int]:
        if not isinstance(self.bundled_item, AbstractBundledItem):
            return None

        return self.bundled_item.menu_order or None

    @strawberry.field(
        description=(
            "Whether the price of the bundled item is added to the price of the"
            " parent bundle product."
        )
    )
    def price_individually(self) -> Optional[bool]:
        return yes_no(self._meta("priced_individually"))

    @strawberry.field(description="Whether the bundled item is shipped individually.")
    def shipped_individually(self) -> Optional[bool]:
        return yes_no(self._meta("shipped_individually"))

    @strawberry.field(description="Whether to override the bundled item title.")
    def override_title(self) -> Optional[bool]:
        return yes_no(self._meta("override_title"))

    @strawberry.field(description="The overwritten title.")
    def title(self) -> Optional[str]:
        return value_or_none(self._meta("title"))

    @strawberry.field(description="Whether to override the bundled item description.")
    def override_description(self) -> Optional[bool]:
        return yes_no(self._meta("override_description"))

    @strawberry.field(description="The overwritten description.")
    def description(self) -> Optional[str]:
        return value_or_none(self._meta("description"))

    @strawberry.field(description="Whether the bundled item is optional.")
    def optional(self) -> Optional[bool]:
        return yes_no(self._meta("optional"))

    @strawberry.field(description="Whether to hide the thumbnail.")
    def hide_thumbnail(self) -> Optional[bool]:
        return yes_no(self._meta("hide_thumbnail"))

    @strawberry.field(description="Bundle item discount if priced individually.")
    def discount(self) -> Optional[str]:
        discount = value_or_none(self._meta("discount"))
        return str(discount) if discount is not None else None

    @strawberry.field(description="Whether the bundle item overrides the variations.")
    def override_variations(self) -> Optional[bool]:
        return yes_no(self._meta("override_variations"))

    # TODO: expose allowed variations and default attributes as types instead of JSON
    @strawberry.field(description="Curated list of variations, JSON encoded.")
    def allowed_variations(self) -> Optional[str]:
        return json_or_none(self._meta("allowed_variations"))

    @strawberry.field(
        description="Whether the bundled item overrides the default attributes."
    )
    def override_default_variation_attributes(self) -> Optional[bool]:
        return yes_no(self._meta("override_default_variation_attributes"))

    @strawberry.field(description="The default variation attributes, JSON encoded.")
    def default_variation_attributes(self) -> Optional[str]:
        return json_or_none(self._meta("default_variation_attributes"))

    @strawberry.field(
        description="Whether the bundle item is visible on the product page"
    )
    def single_product_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("single_product_visibility"))

    @strawberry.field(description="Whether the bundle item is visible on the cart page")
    def cart_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("cart_visibility"))

    @strawberry.field(
        description="Whether the bundle item is visible on the order page"
    )
    def order_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("order_visibility"))

    @strawberry.field(
        description="Whether the bundle item price is visible on the product page"
    )
    def single_product_price_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("single_product_price_visibility"))

    @strawberry.field(
        description="Whether the bundle item price is visible on the cart page"
    )
    def cart_price_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("cart_price_visibility"))

    @strawberry.field(
        description="Whether the bundle item price is visible on the order page"
    )
    def order_price_visibility(self) -> Optional[str]:
        return value_or_none(self._meta("order_price_visibility"))


@strawberry.type(
    name="BundleItemsConnection",
    description="A connection to the products contained in a bundle.",
)
class BundleItemsConnection(DjangoListConnection[relay.NodeType]):
    edges: list[BundleItemEdge[relay.NodeType]] = strawberry.field(
        description="Contains the nodes in this connection",
    )


def create_bundle_items_field(registry: "SchemaRegistry", host: "ProductSchema"):
    """Create the `bundleItems` field for the bundle product type."""
    product_model = host.product_model
    product_filter = host.product_filter

    @django_resolver
    def resolve_bundle_items(
        root: product_model,
        info: Info,
        where: Optional[product_filter] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
        first: Optional[int] = None,
        last: Optional[int] = None,
    ) -> BundleItemsConnection[host.product_type]:
        args = {
            "where": where,
            "before": before,
            "after": after,
            "first": first,
            "last": last,
        }
        resolver = ProductConnectionResolver(
            root,
            args,
            info,
            registry=registry,
            connection_type=BundleItemsConnection,
        )
        # Only list the products that belong to this bundle
        resolver.set_query_arg(
            "pk__in",
            get_bundle_item_ids(root, args, info, registry=registry),
        )
        return resolver.get_connection()

    return strawberry.field(
        resolver=resolve_bundle_items,
        name=BUNDLE_ITEMS_FIELD,
        description="The products contained in the bundle.",
    )
