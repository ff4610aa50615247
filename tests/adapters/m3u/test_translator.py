from __future__ import annotations

from channelkeeper.adapters.m3u import M3UEntry, translate_channel, translate_vod
from channelkeeper.domain.model import VodType


def test_live_entry_uses_tvg_id_as_source_and_guide_id() -> None:
    entry = M3UEntry(
        name="CNN",
        stream_url="http://s.test/cnn",
        group_title="News",
        tvg_id="cnn.us",
        tvg_logo="http://logo/cnn.png",
        channel_number=5,
    )

    channel = translate_channel(entry)

    assert channel.source_channel_id == "cnn.us"
    assert channel.tvg_id == "cnn.us"
    assert channel.epg_id is None
    assert channel.group_name == "News"
    assert channel.logo_url == "http://logo/cnn.png"
    assert channel.channel_number == 5


def test_vod_entry_becomes_movie_with_year() -> None:
    entry = M3UEntry(
        name="Heat (1995)", stream_url="http://s.test/heat.mp4", group_title="Action", duration=6000
    )

    vod = translate_vod(entry)

    assert vod.media_type is VodType.MOVIE
    assert vod.year == 1995
    assert vod.genre == "Action"
    assert vod.duration_seconds == 6000


def test_series_groups_map_to_series() -> None:
    for group in ("TV Series", "Episodes EN"):
        entry = M3UEntry(name="Show", stream_url="http://s.test/1", group_title=group, duration=60)
        assert translate_vod(entry).media_type is VodType.SERIES
