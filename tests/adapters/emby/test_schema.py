from __future__ import annotations

from channelkeeper.adapters.emby import EmbyItem, EmbyItemsResponse
from channelkeeper.config import EmbyClientIdentity


def test_item_derived_fields() -> None:
    item = EmbyItem.model_validate(
        {
            "Id": "1",
            "Name": "Film",
            "RunTimeTicks": 0,
            "GenreItems": [],
            "Unknown": {"nested": True},
        }
    )

    assert item.duration_seconds is None
    assert item.genre is None
    assert item.image_tags == {}


def test_items_response_defaults() -> None:
    response = EmbyItemsResponse.model_validate({})

    assert response.items == []
    assert response.total_record_count == 0


def test_authorization_header_carries_identity_and_token() -> None:
    identity = EmbyClientIdentity(client="ck", device="box", device_id="d1", version="2.0")

    assert identity.authorization_header() == (
        'MediaBrowser Client="ck", Device="box", DeviceId="d1", Version="2.0"'
    )
    assert identity.authorization_header("t").endswith(', Token="t"')
