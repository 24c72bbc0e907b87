import contextlib
from typing import Union, cast

import pytest
from django.test.client import AsyncClient, Client
from strawberry_django.optimizer import DjangoOptimizerExtension

from strawberry_django_bundles import SchemaRegistry
from tests.shop.faker import BundledItemFactory, BundleProductFactory, ProductFactory
from tests.shop.registry import registry as shop_registry
from tests.utils import GraphQLTestClient


@pytest.fixture(params=["sync", "async", "sync_no_optimizer", "async_no_optimizer"])
def gql_client(request):
    client, path, with_optimizer = cast(
        dict[str, tuple[Union[type[Client], type[AsyncClient]], str, bool]],
        {
            "sync": (Client, "/graphql/", True),
            "async": (AsyncClient, "/graphql_async/", True),
            "sync_no_optimizer": (Client, "/graphql/", False),
            "async_no_optimizer": (AsyncClient, "/graphql_async/", False),
        },
    )[request.param]

    if with_optimizer:
        optimizer_ctx = contextlib.nullcontext
    else:
        optimizer_ctx = DjangoOptimizerExtension.disabled

    with optimizer_ctx():
        yield GraphQLTestClient(path, client())


@pytest.fixture
def registry():
    return SchemaRegistry()


@pytest.fixture
def add_shop_filter():
    """Add a filter to the shop schema hooks for the duration of the test."""
    added = []

    def add_filter(name, callback, priority=10):
        added.append((name, callback))
        return shop_registry.hooks.add_filter(name, callback, priority)

    yield add_filter

    for name, callback in added:
        shop_registry.hooks.remove_filter(name, callback)


@pytest.fixture
def bundle(db):
    """A bundle of three products, stored in reverse menu order."""
    bundle = BundleProductFactory.create(name="Breakfast bundle")
    products = ProductFactory.create_batch(3)
    for menu_order, product in reversed(list(enumerate(products))):
        BundledItemFactory.create(
            bundle=bundle,
            product=product,
            menu_order=menu_order,
            meta={
                "quantity_min": "1",
                "quantity_max": "2",
                "optional": "no",
                "priced_individually": "yes",
            },
        )
    return bundle
