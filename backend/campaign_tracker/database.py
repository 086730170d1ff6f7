"""
JSON file storage for campaigns.

The whole collection lives in a single JSON document that is read and
rewritten as a unit. All access goes through CampaignStore.
"""
import json
import logging
import os
import random
import string
import tempfile
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import get_settings

logger = logging.getLogger(__name__)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_RANDOM_LENGTH = 8


class StorageError(Exception):
    """Raised when the campaigns document cannot be read or written."""


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(ID_ALPHABET[remainder])
    return "".join(reversed(digits))


class CampaignStore:
    """
    Whole-document store for the campaign collection.

    Every read returns the full list and every write replaces it. Callers
    that read, modify and write back must hold `lock` for the whole cycle.
    The lock only serializes threads inside this process; other processes
    writing the same file can still race.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.lock = threading.RLock()

    def init(self) -> None:
        """Create the data directory and an empty document if missing."""
        with self.lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                if not self.path.exists():
                    self.path.write_text("[]", encoding="utf-8")
                    logger.info(f"Created empty campaigns document at {self.path}")
            except OSError as e:
                raise StorageError(f"Could not initialize {self.path}: {e}") from e

    def load_all(self) -> List[Dict[str, Any]]:
        """
        Read every campaign from disk.

        Malformed content is logged and treated as an empty collection.

        Raises:
            StorageError: If the file cannot be created or read
        """
        with self.lock:
            self.init()
            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise StorageError(f"Could not read {self.path}: {e}") from e

            try:
                data = json.loads(raw or "[]")
            except json.JSONDecodeError as e:
                logger.warning(f"Campaigns document {self.path} is not valid JSON ({e}); treating as empty")
                return []

            if not isinstance(data, list):
                logger.warning(f"Campaigns document {self.path} does not hold a list; treating as empty")
                return []

            if not all(isinstance(item, dict) for item in data):
                logger.warning(f"Campaigns document {self.path} holds entries that are not objects; treating as empty")
                return []
            return data

    def save_all(self, campaigns: List[Dict[str, Any]]) -> None:
        """
        Replace the document with the given campaigns.

        The content goes to a temporary file first and is then moved over
        the document, so a reader sees either the old or the new version.

        Raises:
            StorageError: If the file cannot be written
        """
        payload = json.dumps(campaigns, indent=2, ensure_ascii=False)
        with self.lock:
            tmp_name: Optional[str] = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except OSError as e:
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StorageError(f"Could not write {self.path}: {e}") from e

    @staticmethod
    def generate_id() -> str:
        """Millisecond timestamp in base 36 followed by random base-36 characters."""
        prefix = _to_base36(int(time.time() * 1000))
        suffix = "".join(random.choices(ID_ALPHABET, k=ID_RANDOM_LENGTH))
        return prefix + suffix


# Singleton instance
_store: Optional[CampaignStore] = None
_store_lock = threading.Lock()


def get_store() -> CampaignStore:
    """Dependency returning the process-wide campaign store."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = CampaignStore(get_settings().campaigns_path)
    return _store


def init_db() -> CampaignStore:
    """Make sure the campaigns document exists on disk."""
    store = get_store()
    store.init()
    logger.info(f"Campaign store ready at {store.path}")
    return store
