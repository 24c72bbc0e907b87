"""Code for interacting with Django settings."""

from typing import cast

from django.conf import settings
from typing_extensions import TypedDict


class StrawberryDjangoBundlesSettings(TypedDict):
    """Dictionary defining the shape `settings.STRAWBERRY_DJANGO_BUNDLES` should have.

    All settings are optional and have defaults as described in their docstrings and
    defined in `DEFAULT_BUNDLES_SETTINGS`.
    """

    #: Maximum amount of bundled products listed by the `bundleItems` connection
    #: before the `product_bundles_item_connector_limit` filter is applied.
    BUNDLE_ITEM_LIMIT: int

    #: Phrase marking the start of the stock shortage detail inside a bundle
    #: configuration notice. Change it when the cart notices are localized.
    STOCK_NOTICE_MARKER: str


DEFAULT_BUNDLES_SETTINGS = StrawberryDjangoBundlesSettings(
    BUNDLE_ITEM_LIMIT=10,
    STOCK_NOTICE_MARKER="There is not enough stock ",
)


def strawberry_django_bundles_settings() -> StrawberryDjangoBundlesSettings:
    """Get strawberry django bundles settings.

    Return the dictionary from `settings.STRAWBERRY_DJANGO_BUNDLES`, with defaults
    for missing keys.
    """
    defaults = DEFAULT_BUNDLES_SETTINGS
    return cast(
        "StrawberryDjangoBundlesSettings",
        {**defaults, **getattr(settings, "STRAWBERRY_DJANGO_BUNDLES", {})},
    )
