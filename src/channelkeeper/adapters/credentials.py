"""File-backed credential store keeping provider passwords out of the catalog."""

from __future__ import annotations

import json
import os
from logging import getLogger
from typing import TYPE_CHECKING

from channelkeeper.config import ConfigurationError, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

_FILE_MODE = 0o600


class JsonFileCredentialStore:
    """Secrets keyed by reference in a single JSON object, readable only by the owner."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, ref: str) -> str | None:
        return self._load().get(ref)

    def put(self, ref: str, secret: str) -> None:
        secrets = self._load()
        secrets[ref] = secret
        self._save(secrets)

    def delete(self, ref: str) -> None:
        secrets = self._load()
        if secrets.pop(ref, None) is None:
            return
        self._save(secrets)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Credential file {self.path} is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Credential file {self.path} must hold a JSON object")
        return {str(key): str(value) for key, value in payload.items()}

    def _save(self, secrets: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(secrets, handle, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
        os.chmod(self.path, _FILE_MODE)
        log.debug("Stored %s credential entries in %s", len(secrets), self.path)


def default_credential_store() -> JsonFileCredentialStore:
    return JsonFileCredentialStore(get_storage_config().credentials_path())


if TYPE_CHECKING:
    from channelkeeper.domain.ports.fetching import CredentialStore

    def _check(path: Path) -> None:
        _store: CredentialStore = JsonFileCredentialStore(path)
