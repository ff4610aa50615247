from __future__ import annotations

from channelkeeper.domain.reconciliation import MERGED_FIELDS, channel_from_entry, merge_channel
from tests.helpers.catalog import T0, make_channel, make_entry


def test_identical_entry_is_unchanged() -> None:
    channel = make_channel("c1", name="CNN", stream_url="http://a", group_name="News")

    outcome = merge_channel(channel, make_entry("CNN", stream_url="http://a", group_name="News"))

    assert not outcome.changed
    assert outcome.changed_fields == ()


def test_changed_fields_are_applied_in_place() -> None:
    channel = make_channel("c1", name="CNN", stream_url="http://a", is_favorite=True)

    outcome = merge_channel(
        channel, make_entry("CNN International", stream_url="http://b", channel_number=7)
    )

    assert outcome.changed
    assert set(outcome.changed_fields) == {"name", "stream_url", "channel_number"}
    assert channel.id == "c1"
    assert channel.is_favorite
    assert channel.name == "CNN International"
    assert channel.stream_url == "http://b"
    assert channel.channel_number == 7


def test_incoming_none_clears_existing_value() -> None:
    channel = make_channel("c1", name="CNN", stream_url="http://a", logo_url="http://logo")

    outcome = merge_channel(channel, make_entry("CNN", stream_url="http://a"))

    assert outcome.changed_fields == ("logo_url",)
    assert channel.logo_url is None


def test_deleted_channel_is_reactivated_even_without_field_changes() -> None:
    channel = make_channel(
        "c1", name="CNN", stream_url="http://a", is_deleted=True, deleted_at=T0
    )

    outcome = merge_channel(channel, make_entry("CNN", stream_url="http://a"))

    assert outcome.changed
    assert outcome.reactivated
    assert not channel.is_deleted
    assert channel.deleted_at is None


def test_new_channel_copies_every_merged_field() -> None:
    entry = make_entry(
        "CNN",
        source_channel_id="s1",
        group_name="News",
        logo_url="http://logo",
        epg_id="cnn.epg",
        tvg_id="cnn.tvg",
        channel_number=5,
    )

    channel = channel_from_entry(entry, playlist_id="p1", channel_id="c9")

    assert channel.id == "c9"
    assert channel.playlist_id == "p1"
    assert not channel.is_favorite
    assert not channel.is_deleted
    for name in MERGED_FIELDS:
        assert getattr(channel, name) == getattr(entry, name)
