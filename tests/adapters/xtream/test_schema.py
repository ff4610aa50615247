from __future__ import annotations

from datetime import UTC, datetime

from channelkeeper.adapters.xtream import XtreamAuthResponse, XtreamLiveStream, XtreamSeries


def test_live_stream_tolerates_string_numbers_and_blanks() -> None:
    stream = XtreamLiveStream.model_validate(
        {
            "num": "12",
            "name": "CNN",
            "stream_id": "1001",
            "stream_icon": "",
            "epg_channel_id": None,
            "category_id": 3,
            "tv_archive": "",
            "unexpected": "ignored",
        }
    )

    assert stream.num == 12
    assert stream.stream_id == 1001
    assert stream.stream_icon is None
    assert stream.epg_channel_id is None
    assert stream.category_id == "3"
    assert stream.tv_archive == 0


def test_series_accepts_both_release_date_spellings_and_single_backdrop() -> None:
    camel = XtreamSeries.model_validate(
        {"series_id": 7, "name": "Show", "releaseDate": "2019-05-01", "backdrop_path": "http://b"}
    )
    snake = XtreamSeries.model_validate(
        {"series_id": "7", "name": "Show", "release_date": "2019", "backdrop_path": ["x", ""]}
    )

    assert camel.release_date == "2019-05-01"
    assert camel.backdrop_path == ("http://b",)
    assert snake.release_date == "2019"
    assert snake.backdrop_path == ("x",)


def test_auth_response_expiry() -> None:
    response = XtreamAuthResponse.model_validate(
        {"user_info": {"auth": 1, "status": "Active", "exp_date": "1700000000"}}
    )

    assert response.is_authenticated
    assert response.user_info.is_expired(datetime(2024, 1, 1, tzinfo=UTC))
    assert not response.user_info.is_expired(datetime(2023, 1, 1, tzinfo=UTC))


def test_missing_expiry_never_expires() -> None:
    response = XtreamAuthResponse.model_validate({"user_info": {"auth": "1", "exp_date": None}})

    assert not response.user_info.is_expired(datetime(2100, 1, 1, tzinfo=UTC))
