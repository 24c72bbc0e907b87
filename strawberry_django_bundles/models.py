"""Abstract models describing bundle products and their bundled items.

The concrete tables belong to the host project: it subclasses
`AbstractBundledItem` adding the `bundle` and `product` foreign keys and mixes
`BundleProductMixin` into its product model.
"""

from __future__ import annotations

import decimal
from typing import TYPE_CHECKING, Any, Optional

from django.db import models

if TYPE_CHECKING:
    from django.db.models.manager import RelatedManager
    from typing_extensions import Self

BUNDLE_PRODUCT_TYPE = "bundle"


class AbstractBundledItem(models.Model):
    """A product contained in a bundle together with its configuration.

    Concrete subclasses must declare:
    - `bundle`: foreign key to the product model with `related_name="bundled_items"`
    - `product`: foreign key to the product model (the contained product)
    """

    class Meta:
        abstract = True

    bundle_id: int
    product_id: int

    menu_order = models.IntegerField(
        verbose_name="Menu order",
        default=0,
    )
    meta = models.JSONField(
        verbose_name="Configuration",
        default=dict,
        blank=True,
        help_text=(
            "Bundled item configuration: quantity bounds, pricing/shipping flags,"
            " title and description overrides, variation overrides and visibility."
        ),
    )

    @property
    def bundled_item_id(self) -> int:
        return self.pk

    def get_meta(self, key: str, default: Any = None) -> Any:
        return (self.meta or {}).get(key, default)

    @classmethod
    def get_bundled_item(cls, bundled_item_id: int) -> Optional[Self]:
        """Fetch the full bundled item record, or None when it doesn't exist."""
        return cls._default_manager.filter(pk=bundled_item_id).first()


class BundleProductMixin(models.Model):
    """Bundle specific options for a product model.

    The host model must expose a `type` attribute whose value is
    `BUNDLE_PRODUCT_TYPE` for bundle products.
    """

    class Meta:
        abstract = True

    class Layout(models.TextChoices):
        DEFAULT = "default", "Standard"
        TABULAR = "tabular", "Tabular"
        GRID = "grid", "Grid"

    class GroupMode(models.TextChoices):
        PARENT = "parent", "Grouped"
        NOPARENT = "noparent", "Flat"
        NONE = "none", "None"

    class FormLocation(models.TextChoices):
        DEFAULT = "default", "Default"
        AFTER_SUMMARY = "after_summary", "Before tabs"

    if TYPE_CHECKING:
        type: str
        bundled_items: RelatedManager[Any]

    bundle_layout = models.CharField(
        verbose_name="Layout",
        max_length=32,
        choices=Layout.choices,
        default=Layout.DEFAULT,
        blank=True,
    )
    bundle_group_mode = models.CharField(
        verbose_name="Item grouping",
        max_length=32,
        choices=GroupMode.choices,
        default=GroupMode.PARENT,
        blank=True,
    )
    bundle_add_to_cart_form_location = models.CharField(
        verbose_name="Form location",
        max_length=32,
        choices=FormLocation.choices,
        default=FormLocation.DEFAULT,
        blank=True,
    )
    bundle_editable_in_cart = models.BooleanField(
        verbose_name="Editable in cart",
        default=False,
    )
    bundle_min_price = models.DecimalField(
        verbose_name="Minimum bundle price",
        max_digits=24,
        decimal_places=2,
        null=True,
        blank=True,
    )
    bundle_max_price = models.DecimalField(
        verbose_name="Maximum bundle price",
        max_digits=24,
        decimal_places=2,
        null=True,
        blank=True,
    )

    @property
    def is_bundle(self) -> bool:
        return getattr(self, "type", None) == BUNDLE_PRODUCT_TYPE

    def get_bundle_price(self, min_or_max: str = "min") -> Optional[decimal.Decimal]:
        if min_or_max == "min":
            return self.bundle_min_price
        if min_or_max == "max":
            return self.bundle_max_price

        raise ValueError(f"Expected 'min' or 'max', got {min_or_max!r}")

    def get_bundled_data_items(self) -> list[Any]:
        """Return the membership records of this bundle ordered by menu order.

        Only the identifiers are loaded: the configuration of a matched item
        is fetched separately through `get_bundled_item`.
        """
        return list(
            self.bundled_items.order_by("menu_order", "pk").only("bundle", "product")
        )
