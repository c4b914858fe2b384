import json

import pytest

from ebay_buy import EbayClient
from ebay_buy.config import HEADER_END_USER_CTX, HEADER_MARKETPLACE_ID
from ebay_buy.exceptions import ErrorData
from ebay_buy.options import (
    opt_browse_contextual_location,
    opt_browse_search,
    opt_browse_search_fieldgroups,
    opt_browse_search_limit,
    opt_buy_marketplace,
)
from ebay_buy.resources.browse import (
    COMPATIBILITY_COMPATIBLE,
    CompatibilityProperty,
    CompactItem,
    Item,
    ItemsByGroup,
    Search,
)

BROWSE = "https://api.ebay.com/buy/browse/v1"
ITEM_ID = "v1|202117468662|0"
QUOTED_ITEM_ID = "v1%7C202117468662%7C0"


@pytest.fixture
def client():
    return EbayClient()


def test_get_item_by_legacy_id(client, requests_mock):
    matcher = requests_mock.get(
        f"{BROWSE}/item/get_item_by_legacy_id",
        json={"itemId": ITEM_ID, "price": {"value": "10.00", "currency": "USD"}},
    )

    item = client.buy.browse.get_item_by_legacy_id("202117468662")

    assert isinstance(item, CompactItem)
    assert item.item_id == ITEM_ID
    assert item.price.value == "10.00"
    assert matcher.last_request.url == f"{BROWSE}/item/get_item_by_legacy_id?legacy_item_id=202117468662"


def test_get_compact_item(client, requests_mock):
    matcher = requests_mock.get(
        f"{BROWSE}/item/{ITEM_ID}",
        json={
            "itemId": ITEM_ID,
            "sellerItemRevision": "1",
            "estimatedAvailabilities": [{"estimatedAvailableQuantity": 4}],
            "topRatedBuyingExperience": True,
        },
    )

    item = client.buy.browse.get_compact_item(ITEM_ID, opt_buy_marketplace("EBAY_US"))

    assert item.estimated_availabilities[0].estimated_available_quantity == 4
    assert item.top_rated_buying_experience is True
    sent = matcher.last_request
    assert sent.method == "GET"
    assert sent.url == f"{BROWSE}/item/{QUOTED_ITEM_ID}?fieldgroups=COMPACT"
    assert sent.headers[HEADER_MARKETPLACE_ID] == "EBAY_US"


def test_get_item(client, requests_mock):
    matcher = requests_mock.get(
        f"{BROWSE}/item/{ITEM_ID}",
        json={
            "itemId": ITEM_ID,
            "title": "Drone",
            "price": {"value": "99.99", "currency": "USD"},
            "buyingOptions": ["AUCTION"],
            "itemEndDate": "2024-03-01T18:00:00.000Z",
            "currentBidPrice": {"value": "12.50", "currency": "USD"},
            "seller": {"username": "seller1", "feedbackScore": 42},
            "product": {
                "title": "Drone X",
                "aspectGroups": [
                    {"localizedGroupName": "Specs", "aspects": [{"localizedName": "Color", "localizedValues": ["Black"]}]}
                ],
            },
            "unknownField": {"ignored": True},
        },
    )

    item = client.buy.browse.get_item(ITEM_ID, opt_browse_contextual_location("US", "19406"))

    assert isinstance(item, Item)
    assert item.is_auction()
    assert item.current_bid_price.value == "12.50"
    assert item.item_end_date.year == 2024
    assert item.seller.feedback_score == 42
    assert item.product.aspect_groups[0].aspects[0].localized_values == ["Black"]
    sent = matcher.last_request
    assert sent.url == f"{BROWSE}/item/{QUOTED_ITEM_ID}?fieldgroups=PRODUCT"
    assert sent.headers[HEADER_END_USER_CTX] == "contextualLocation=country%3DUS%2Czip%3D19406"


def test_get_items_by_group_id(client, requests_mock):
    matcher = requests_mock.get(
        f"{BROWSE}/item/get_items_by_item_group",
        json={
            "items": [{"itemId": "v1|1|0", "color": "Red"}, {"itemId": "v1|1|1", "color": "Blue"}],
            "commonDescriptions": [{"description": "Shirt", "itemIds": ["v1|1|0", "v1|1|1"]}],
        },
    )

    group = client.buy.browse.get_items_by_group_id("151915076499")

    assert isinstance(group, ItemsByGroup)
    assert [item.color for item in group.items] == ["Red", "Blue"]
    assert group.common_descriptions[0].item_ids == ["v1|1|0", "v1|1|1"]
    assert matcher.last_request.url == f"{BROWSE}/item/get_items_by_item_group?item_group_id=151915076499"


def test_check_compatibility(client, requests_mock):
    matcher = requests_mock.post(
        f"{BROWSE}/item/{ITEM_ID}/check_compatibility",
        json={"compatibilityStatus": "COMPATIBLE", "warnings": []},
    )
    properties = [
        CompatibilityProperty(name="0", value="1"),
        CompatibilityProperty(name="2", value="3"),
    ]

    result = client.buy.browse.check_compatibility(ITEM_ID, "EBAY_US", properties)

    assert result.compatibility_status == COMPATIBILITY_COMPATIBLE
    sent = matcher.last_request
    assert sent.method == "POST"
    assert sent.headers[HEADER_MARKETPLACE_ID] == "EBAY_US"
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.text == (
        '{"compatibilityProperties":[{"name":"0","value":"1"},{"name":"2","value":"3"}]}'
    )


def test_check_compatibility_marketplace_argument_wins(client, requests_mock):
    matcher = requests_mock.post(f"{BROWSE}/item/{ITEM_ID}/check_compatibility", json={})

    client.buy.browse.check_compatibility(ITEM_ID, "EBAY_US", [], opt_buy_marketplace("EBAY_GB"))

    assert matcher.last_request.headers[HEADER_MARKETPLACE_ID] == "EBAY_US"
    assert json.loads(matcher.last_request.text) == {"compatibilityProperties": []}


def test_search(client, requests_mock):
    matcher = requests_mock.get(
        f"{BROWSE}/item_summary/search",
        json={
            "href": f"{BROWSE}/item_summary/search?q=drone&limit=3&offset=0",
            "total": 2,
            "limit": 3,
            "offset": 0,
            "itemSummaries": [
                {"itemId": "v1|1|0", "title": "Drone A", "price": {"value": "5.00", "currency": "USD"}},
                {"itemId": "v1|2|0", "title": "Drone B", "buyingOptions": ["AUCTION"]},
            ],
        },
    )

    page = client.buy.browse.search(opt_browse_search("Drone"), opt_browse_search_limit(3))

    assert isinstance(page, Search)
    assert page.total == 2
    assert [summary.title for summary in page.item_summaries] == ["Drone A", "Drone B"]
    assert page.item_summaries[1].buying_options == ["AUCTION"]
    assert matcher.last_request.url == f"{BROWSE}/item_summary/search?q=Drone&limit=3"


def test_browse_errors_surface_as_error_data(client, requests_mock):
    requests_mock.get(
        f"{BROWSE}/item/{ITEM_ID}",
        status_code=404,
        json={"errors": [{"errorId": 11001, "domain": "API_BROWSE", "message": "The specified item Id was not found."}]},
    )

    with pytest.raises(ErrorData) as excinfo:
        client.buy.browse.get_item(ITEM_ID)

    assert excinfo.value.error_ids == [11001]


def test_query_option_does_not_replace_wrapper_query(client, requests_mock):
    matcher = requests_mock.get(f"{BROWSE}/item/{ITEM_ID}", json={})

    client.buy.browse.get_item(ITEM_ID, opt_browse_search_fieldgroups("COMPACT"))

    assert matcher.last_request.url == (
        f"{BROWSE}/item/{QUOTED_ITEM_ID}?fieldgroups=PRODUCT&fieldgroups=COMPACT"
    )
