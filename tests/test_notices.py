import pytest
from django.test import override_settings

from strawberry_django_bundles.notices import extract_stock_notice, last_notice_text

NOTICE = (
    '<a href="/cart/" class="button wc-forward">View cart</a> '
    "There is not enough stock of &quot;Coffee&quot; (1 remaining)."
)


def test_extract_stock_notice():
    assert extract_stock_notice(NOTICE) == (
        'There is not enough stock of "Coffee" (1 remaining).'
    )


def test_extract_stock_notice_marker_at_start():
    assert extract_stock_notice("There is not enough stock of tea.") == (
        "There is not enough stock of tea."
    )


@pytest.mark.parametrize(
    "notice",
    [None, "", "Sorry, this product cannot be purchased."],
)
def test_extract_stock_notice_without_marker(notice):
    assert extract_stock_notice(notice) is None


def test_extract_stock_notice_custom_marker():
    notice = "<p>Erreur</p> Stock insuffisant pour &laquo;Caf&eacute;&raquo;"

    assert extract_stock_notice(notice, "Stock insuffisant ") == (
        "Stock insuffisant pour «Café»"
    )


def test_extract_stock_notice_marker_setting():
    with override_settings(
        STRAWBERRY_DJANGO_BUNDLES={"STOCK_NOTICE_MARKER": "Out of stock: "},
    ):
        assert extract_stock_notice("<b>!</b> Out of stock: Tea") == (
            "Out of stock: Tea"
        )
        assert extract_stock_notice(NOTICE) is None


def test_last_notice_text():
    notices = [{"notice": "first"}, {"notice": "last", "type": "error"}]

    assert last_notice_text(notices) == "last"
    assert last_notice_text([{"notice": ""}]) is None
    assert last_notice_text([{"type": "error"}]) is None
    assert last_notice_text([]) is None
