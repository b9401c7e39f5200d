from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from cryptography.fernet import Fernet, InvalidToken


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = ".cache"
STORAGE_FILENAME = "local_storage.json"


def default_storage_file(base_dir: Optional[os.PathLike[str] | str] = None) -> Path:
    return Path(base_dir or DEFAULT_STORAGE_DIR) / STORAGE_FILENAME


class LocalStorage:
    """
    File-backed string key/value storage that survives between runs.

    - Backed by a single JSON object file: { key: value, ... } with str values.
    - Every read goes to disk, so a change made by another process (a logout
      in a second terminal) is seen on the next read.
    - With a Fernet key the file holds a Fernet token instead of plain JSON;
      a file that fails to decrypt or parse reads as empty storage.
    - Writes are best-effort: failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        path: Optional[os.PathLike[str] | str] = None,
        *,
        fernet_key: str | bytes | None = None,
    ) -> None:
        self._path = Path(path) if path else default_storage_file()
        # Fernet accepts the urlsafe base64 key as str or bytes
        self._fernet = Fernet(fernet_key) if fernet_key else None

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def clear(self) -> None:
        self._save({})

    # --------------- Internal ---------------
    def _load(self) -> Dict[str, str]:
        try:
            if not self._path.exists():
                return {}
            blob = self._path.read_bytes()
        except OSError as exc:
            logger.warning("Cannot read local storage %s: %s", self._path, exc)
            return {}

        if self._fernet is not None:
            try:
                blob = self._fernet.decrypt(blob)
            except InvalidToken:
                logger.warning("Local storage %s is not a valid Fernet token; ignoring it", self._path)
                return {}

        try:
            raw = json.loads(blob.decode("utf-8"))
        except ValueError:
            # Corrupt storage: start fresh
            logger.warning("Local storage %s is not valid JSON; ignoring it", self._path)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _save(self, data: Dict[str, str]) -> None:
        blob = json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8")
        if self._fernet is not None:
            blob = self._fernet.encrypt(blob)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(blob)
        except OSError as exc:
            logger.warning("Cannot write local storage %s: %s", self._path, exc)


__all__ = ["LocalStorage", "default_storage_file"]
