# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from channelkeeper.app import (
    create_playlist,
    list_channels,
    list_playlists,
    purge_deleted_channels,
    refresh_playlist,
    refresh_stale_playlists,
    remove_playlist,
    toggle_favorite,
)
from channelkeeper.config import ConfigurationError, configure_logging
from channelkeeper.domain.model import SourceType

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from channelkeeper.domain.catalog_sync import RefreshResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage and refresh IPTV playlists")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    playlist = subparsers.add_parser("playlist", help="Playlist management commands")
    playlist_sub = playlist.add_subparsers(dest="playlist_command", required=True)
    playlist_add = playlist_sub.add_parser("add", help="Register a playlist")
    playlist_add.add_argument("--name", type=str, required=True, help="Display name")
    playlist_add.add_argument(
        "--type",
        dest="source_type",
        type=SourceType,
        choices=list(SourceType),
        default=SourceType.M3U,
        help="Provider type (default: %(default)s)",
    )
    playlist_add.add_argument(
        "--url",
        type=str,
        required=True,
        help="Playlist URL or path (M3U) or server URL (Xtream, Emby)",
    )
    playlist_add.add_argument("--username", type=str, help="Account username")
    playlist_add.add_argument("--password", type=str, help="Account password")
    playlist_add.add_argument("--epg-url", type=str, help="Program guide URL")
    playlist_add.add_argument(
        "--refresh-hours",
        type=int,
        help="Hours between automatic refreshes (defaults to config)",
    )
    playlist_sub.add_parser("list", help="List playlists")
    playlist_remove = playlist_sub.add_parser("remove", help="Delete a playlist and its catalog")
    playlist_remove.add_argument("playlist_id", type=str)

    refresh = subparsers.add_parser("refresh", help="Refresh playlist catalogs")
    refresh_target = refresh.add_mutually_exclusive_group(required=True)
    refresh_target.add_argument("playlist_id", nargs="?", type=str, help="Playlist to refresh")
    refresh_target.add_argument(
        "--stale",
        action="store_true",
        help="Refresh every active playlist that is due",
    )

    purge = subparsers.add_parser("purge", help="Hard-delete long soft-deleted channels")
    purge.add_argument(
        "--retention-days",
        type=int,
        help="Keep soft-deleted channels this many days (defaults to config)",
    )

    favorite = subparsers.add_parser("favorite", help="Toggle a channel's favorite flag")
    favorite.add_argument("channel_id", type=str)

    channels = subparsers.add_parser("channels", help="List active channels of a playlist")
    channels.add_argument("playlist_id", type=str)
    channels.add_argument("--search", type=str, help="Case-insensitive name filter")
    channels.add_argument("--favorites", action="store_true", help="Only favorite channels")

    return parser.parse_args(list(argv))


def _report(result: RefreshResult) -> None:
    channels = result.channels
    if channels is not None:
        print(
            f"{result.playlist_id}: {channels.added} added, {channels.updated} updated, "
            f"{channels.soft_deleted} removed, {channels.unchanged} unchanged"
        )
    if result.vod is not None:
        print(f"{result.playlist_id}: {result.vod.added} VOD items")
    if result.issues:
        print(f"{result.playlist_id}: {len(result.issues)} playlist parse issues")


def _run(args: argparse.Namespace) -> None:
    if args.command == "playlist" and args.playlist_command == "add":
        playlist = create_playlist(
            name=args.name,
            source_type=args.source_type,
            url=args.url,
            username=args.username,
            password=args.password,
            epg_url=args.epg_url,
            refresh_hours=args.refresh_hours,
        )
        print(playlist.id)
    elif args.command == "playlist" and args.playlist_command == "list":
        for playlist in list_playlists():
            last_sync = playlist.last_sync.isoformat() if playlist.last_sync else "never"
            print(f"{playlist.id}\t{playlist.source_type}\t{playlist.name}\t{last_sync}")
    elif args.command == "playlist" and args.playlist_command == "remove":
        remove_playlist(args.playlist_id)
    elif args.command == "refresh" and args.stale:
        for result in refresh_stale_playlists():
            _report(result)
    elif args.command == "refresh":
        _report(refresh_playlist(args.playlist_id))
    elif args.command == "purge":
        removed = purge_deleted_channels(retention_days=args.retention_days)
        print(f"Purged {removed} channels")
    elif args.command == "favorite":
        channel = toggle_favorite(args.channel_id)
        print(f"{channel.name}: {'favorite' if channel.is_favorite else 'not favorite'}")
    elif args.command == "channels":
        for channel in list_channels(
            args.playlist_id, search=args.search, favorites_only=args.favorites
        ):
            number = "" if channel.channel_number is None else channel.channel_number
            star = "*" if channel.is_favorite else ""
            print(f"{number}\t{channel.name}{star}\t{channel.group_name or ''}\t{channel.id}")
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        _run(parsed_args)
    except (ValueError, ConfigurationError) as exc:
        log.error("Invalid request: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
