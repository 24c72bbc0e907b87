from decimal import Decimal
from typing import Any, ClassVar, Generic, TypeVar

import factory
from factory.declarations import Sequence, SubFactory
from factory.faker import Faker

from .models import BundledItem, Cart, CartItem, Product

_T = TypeVar("_T")


class _BaseFactory(factory.django.DjangoModelFactory, Generic[_T]):
    Meta: ClassVar[Any]

    @classmethod
    def create(cls, **kwargs) -> _T:
        return super().create(**kwargs)

    @classmethod
    def create_batch(cls, size: int, **kwargs) -> list[_T]:
        return super().create_batch(size, **kwargs)


class ProductFactory(_BaseFactory[Product]):
    class Meta:
        model = Product

    name = Sequence(lambda n: f"Product {n}")
    type = Product.Type.SIMPLE
    price = Decimal("9.99")


class BundleProductFactory(ProductFactory):
    type = Product.Type.BUNDLE
    name = Sequence(lambda n: f"Bundle {n}")
    bundle_min_price = Decimal("10.00")
    bundle_max_price = Decimal("25.50")


class BundledItemFactory(_BaseFactory[BundledItem]):
    class Meta:
        model = BundledItem

    bundle = SubFactory(BundleProductFactory)
    product = SubFactory(ProductFactory)
    menu_order = Sequence(lambda n: n)
    meta = factory.LazyFunction(dict)


class CartFactory(_BaseFactory[Cart]):
    class Meta:
        model = Cart

    session_key = Sequence(lambda n: f"session-{n}")


class CartItemFactory(_BaseFactory[CartItem]):
    class Meta:
        model = CartItem

    cart = SubFactory(CartFactory)
    key = Faker("md5")
    product = SubFactory(BundleProductFactory)
