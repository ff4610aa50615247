from __future__ import annotations

import json
import stat
from typing import TYPE_CHECKING

import pytest

from channelkeeper.adapters.credentials import JsonFileCredentialStore
from channelkeeper.config import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path


def test_put_get_delete_round_trip(tmp_path: Path) -> None:
    store = JsonFileCredentialStore(tmp_path / "secrets" / "credentials.json")

    assert store.get("xtream-p1") is None
    store.put("xtream-p1", "hunter2")
    store.put("emby-p2", "pw")
    store.delete("emby-p2")
    store.delete("never-stored")

    assert store.get("xtream-p1") == "hunter2"
    assert json.loads(store.path.read_text()) == {"xtream-p1": "hunter2"}


def test_file_is_private(tmp_path: Path) -> None:
    store = JsonFileCredentialStore(tmp_path / "credentials.json")

    store.put("ref", "secret")

    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600


def test_corrupt_file_raises_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text("not json")

    with pytest.raises(ConfigurationError):
        JsonFileCredentialStore(path).get("ref")
