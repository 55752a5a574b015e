"""Durable local key/value state kept as JSON files.

Holds the data-entry staging area, the set of records awaiting spreadsheet
sync, and cached settings, so an interrupted session survives a restart on
the same machine.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def default_state_dir() -> Path:
    """Return the state directory.

    Checks the OFFERBOOK_STATE_DIR environment variable, then defaults
    to ~/.offerbook
    """
    state_dir = os.environ.get("OFFERBOOK_STATE_DIR")
    if state_dir:
        return Path(state_dir)
    return Path.home() / ".offerbook"


class LocalStore:
    """JSON-file backed key/value store, one file per key."""

    def __init__(self, state_dir: Optional[str | Path] = None):
        """Initialize local store.

        Args:
            state_dir: Directory for state files. If None, uses
                default_state_dir()
        """
        self.state_dir = Path(state_dir) if state_dir is not None else default_state_dir()
        self.state_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    def load(self, key: str, default: Any = None) -> Any:
        """Load the value stored under key, or default if absent or unreadable."""
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", path, e)
            return default

    def save(self, key: str, value: Any) -> None:
        """Atomically replace the value stored under key."""
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.state_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str) -> None:
        """Remove key; missing keys are ignored."""
        path = self._path(key)
        if path.exists():
            path.unlink()
