from __future__ import annotations

from datetime import UTC, datetime

import pytest

from channelkeeper.domain.catalog_sync import RefreshResult
from channelkeeper.domain.errors import ChannelNotFoundError
from channelkeeper.domain.model import SourceType
from channelkeeper.domain.reconciliation import ImportResult, VodImportResult
from channelkeeper.ui import cli
from tests.helpers.catalog import make_channel, make_playlist

SYNCED = datetime(2025, 3, 1, tzinfo=UTC)


def test_playlist_add_passes_arguments(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_create(**kwargs: object) -> object:
        captured.update(kwargs)
        return make_playlist("new-id")

    monkeypatch.setattr(cli, "create_playlist", fake_create)

    cli.main(
        [
            "playlist",
            "add",
            "--name",
            "Panel",
            "--type",
            "xtream",
            "--url",
            "http://panel.test",
            "--username",
            "joe",
            "--password",
            "pw",
            "--refresh-hours",
            "6",
        ]
    )

    assert captured["source_type"] is SourceType.XTREAM
    assert captured["username"] == "joe"
    assert captured["refresh_hours"] == 6
    assert captured["epg_url"] is None
    assert capsys.readouterr().out.strip() == "new-id"


def test_refresh_single_playlist_reports_counts(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_refresh(playlist_id: str) -> RefreshResult:
        return RefreshResult(
            playlist_id=playlist_id,
            channels=ImportResult(added=2, updated=1, soft_deleted=1, unchanged=5),
            vod=VodImportResult(added=10, removed=9),
            synced_at=SYNCED,
        )

    monkeypatch.setattr(cli, "refresh_playlist", fake_refresh)

    cli.main(["refresh", "p1"])

    out = capsys.readouterr().out
    assert "p1: 2 added, 1 updated, 1 removed, 5 unchanged" in out
    assert "p1: 10 VOD items" in out


def test_refresh_stale(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_stale() -> list[RefreshResult]:
        calls.append("stale")
        return []

    monkeypatch.setattr(cli, "refresh_stale_playlists", fake_stale)

    cli.main(["refresh", "--stale"])

    assert calls == ["stale"]


def test_refresh_needs_a_target() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["refresh"])

    assert exc.value.code == 2


def test_purge_retention_days(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_purge(**kwargs: object) -> int:
        captured.update(kwargs)
        return 3

    monkeypatch.setattr(cli, "purge_deleted_channels", fake_purge)

    cli.main(["purge", "--retention-days", "7"])

    assert captured == {"retention_days": 7}


def test_channels_listing_filters(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_list(playlist_id: str, **kwargs: object) -> list[object]:
        captured.update(kwargs, playlist_id=playlist_id)
        return [make_channel("c1", name="CNN", channel_number=4, is_favorite=True)]

    monkeypatch.setattr(cli, "list_channels", fake_list)

    cli.main(["channels", "p1", "--search", "cn", "--favorites"])

    assert captured == {"playlist_id": "p1", "search": "cn", "favorites_only": True}
    assert capsys.readouterr().out.startswith("4\tCNN*")


def test_invalid_request_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_purge(**_: object) -> int:
        raise ValueError("Retention days must be non-negative")

    monkeypatch.setattr(cli, "purge_deleted_channels", fake_purge)

    with pytest.raises(SystemExit) as exc:
        cli.main(["purge", "--retention-days", "-1"])

    assert exc.value.code == 2


def test_failures_exit_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_toggle(channel_id: str) -> object:
        raise ChannelNotFoundError(channel_id)

    monkeypatch.setattr(cli, "toggle_favorite", fake_toggle)

    with pytest.raises(SystemExit) as exc:
        cli.main(["favorite", "c1"])

    assert exc.value.code == 1
