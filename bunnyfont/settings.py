"""
Indexer settings.

Keeps the last used font and cell geometry between sessions.
Uses QSettings for cross-platform storage.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Tuple

from PyQt6.QtCore import QSettings


class IndexerSettings:
    """
    Settings store of the indexer demo.

    Settings live in:
    - Windows: registry HKEY_CURRENT_USER\\Software\\BunnyFont\\Indexer
    - Linux: ~/.config/BunnyFont/Indexer.conf
    - macOS: ~/Library/Preferences/com.bunnyfont.Indexer.plist

    Passing ``path`` stores them in that INI file instead.
    """

    KEY_FONT_PATH = "Font/path"
    KEY_CHAR_WIDTH = "Font/charWidth"
    KEY_CHAR_HEIGHT = "Font/charHeight"
    KEY_SCALING = "View/scaling"

    def __init__(self, path: Optional[str | Path] = None):
        if path is None:
            self._settings = QSettings("BunnyFont", "Indexer")
        else:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.value(key, default)

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)

    def sync(self) -> None:
        """Force writing to storage."""
        self._settings.sync()

    def _get_int(self, key: str) -> Optional[int]:
        value = self.get(key)
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def get_font_path(self) -> Optional[Path]:
        path_str = self.get(self.KEY_FONT_PATH)
        return Path(path_str) if path_str else None

    def set_font_path(self, path: Path | str) -> None:
        self.set(self.KEY_FONT_PATH, str(path))

    def get_char_size(self) -> Optional[Tuple[int, int]]:
        width = self._get_int(self.KEY_CHAR_WIDTH)
        height = self._get_int(self.KEY_CHAR_HEIGHT)
        if width is None or height is None:
            return None
        return (width, height)

    def set_char_size(self, size: Tuple[int, int]) -> None:
        self.set(self.KEY_CHAR_WIDTH, int(size[0]))
        self.set(self.KEY_CHAR_HEIGHT, int(size[1]))

    def get_scaling(self) -> int:
        return self._get_int(self.KEY_SCALING) or 1

    def set_scaling(self, scaling: int) -> None:
        self.set(self.KEY_SCALING, int(scaling))
