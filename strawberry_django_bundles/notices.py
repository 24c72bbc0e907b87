"""Extraction of user friendly messages from bundle cart notices.

The bundle cart reports stock shortages as a notice prefixed with markup
(a "View cart" link) that the API consumer has no use for. There is no
structured way of getting the detail text out of it, so the notice text is
searched for a marker phrase and everything before it is dropped.

This couples the API to the exact wording of the host notice: when the host
changes or translates it the marker stops matching and the generic error
message is used instead. The marker can be changed with the
`STOCK_NOTICE_MARKER` setting.

A notice that starts with the marker counts as matching and is returned
whole. The WooCommerce plugin checked the offset with `empty()`, so a marker
at offset 0 fell back to the generic message there.
"""

from __future__ import annotations

import html
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .settings import strawberry_django_bundles_settings


def last_notice_text(notices: Sequence[Mapping[str, Any]]) -> Optional[str]:
    """Return the text of the last notice, None when missing or empty."""
    if not notices:
        return None

    text = notices[-1].get("notice")
    return text or None


def extract_stock_notice(
    notice: Optional[str],
    marker: Optional[str] = None,
) -> Optional[str]:
    """Extract the stock shortage detail from a cart notice.

    Args:
        notice: Notice text, possibly containing HTML markup and entities.
        marker: Phrase the detail starts with. Defaults to the
            `STOCK_NOTICE_MARKER` setting.

    Returns:
        The notice text from the marker onward with HTML entities decoded, or
        None when the notice is empty or doesn't contain the marker.

    """
    if not notice:
        return None

    if marker is None:
        marker = strawberry_django_bundles_settings()["STOCK_NOTICE_MARKER"]

    offset = notice.find(marker)
    if offset == -1:
        return None

    return html.unescape(notice[offset:])
