"""Explicit cache for static JSON datasets."""
import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class JsonCache:
    """Loads JSON files with an environment-dependent reload rule.

    - development: every ``load`` re-reads the file, so edits apply instantly
      and a file created later is picked up.
    - production: each path is read once and retained, including the empty
      result of a failed read.

    Failed reads (missing file, unreadable file, invalid JSON) log a warning
    and return ``{}``.
    """

    def __init__(self, production: bool = False):
        self.production = production
        self._entries: dict[Path, Any] = {}

    def load(self, path: Path, default: Optional[Any] = None) -> Any:
        """Load ``path``, honoring the reload rule.

        Args:
            path: JSON file to read
            default: Returned (and cached in production) when the read fails.
                Defaults to an empty dict.
        """
        key = Path(path)
        if self.production and key in self._entries:
            logger.debug(f"JSON cache hit: {key}")
            return self._entries[key]

        fallback = {} if default is None else default
        try:
            with open(key, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"{key.name} not found at {key}")
            data = fallback
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Failed to load {key.name}: {e}")
            data = fallback

        if self.production:
            self._entries[key] = data
        return data

    def clear(self) -> None:
        """Drop every retained entry."""
        self._entries.clear()

    def __contains__(self, path: Path) -> bool:
        return Path(path) in self._entries
