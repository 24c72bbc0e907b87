from __future__ import annotations

from typing import Any, Optional


class ProductBundlesError(Exception):
    """Base class for errors raised by strawberry_django_bundles."""


class BundleUserError(ProductBundlesError):
    """Error whose message is shown to the API consumer as is."""


class RegistryError(ProductBundlesError):
    """The schema registry was used in an unsupported way."""


class BundleCartError(ProductBundlesError):
    """Adding a bundle to the cart failed.

    Raised by the host bundle cart. `code` identifies the failure kind and
    `data` carries whatever structured details the host attached to it.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        data: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.data = data or {}
        super().__init__(message)


class BundleConfigurationInvalidError(BundleCartError):
    """The requested bundle configuration was rejected.

    `notices` holds the cart notices collected while validating it, each a
    mapping with at least a `notice` key containing the (HTML) notice text.
    """

    code_name = "bundle_configuration_invalid"

    def __init__(
        self,
        message: str,
        *,
        notices: Optional[list[dict[str, Any]]] = None,
        data: Optional[dict[str, Any]] = None,
    ):
        self.notices = list(notices or [])
        super().__init__(message, code=self.code_name, data=data)
