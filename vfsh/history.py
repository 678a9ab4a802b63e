"""Linear history of submitted command lines."""

import json
import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class HistoryNavigator:
    """Append-only log of submitted lines with a cursor for back/forward recall.

    The cursor is an offset from the end of the log: ``0`` means the user is
    editing live input, ``k`` selects the k-th most recent entry.
    """

    def __init__(self, history_file: Optional[Path] = None, max_entries: Optional[int] = None):
        """Initialize history navigator.

        Args:
            history_file: Optional JSON file the log is loaded from and saved to
            max_entries: Maximum number of entries to keep (oldest dropped first)
        """
        self.history_file = Path(history_file) if history_file else None
        self.max_entries = max_entries
        self._entries: List[str] = []
        self._offset = 0
        self._dirty = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[str]:
        """Copy of the log, oldest first."""
        return list(self._entries)

    @property
    def offset(self) -> int:
        return self._offset

    def append(self, line: str) -> "HistoryNavigator":
        """Record a submitted line and return to live input."""
        self._entries.append(line)
        self._trim()
        self._offset = 0
        self._dirty = True
        return self

    def _trim(self) -> bool:
        """Drop the oldest entries beyond max_entries; True if any were dropped."""
        if self.max_entries is None:
            return False
        excess = len(self._entries) - max(self.max_entries, 0)
        if excess <= 0:
            return False
        del self._entries[:excess]
        return True

    def previous(self) -> Optional[str]:
        """Step back one entry; stays on the oldest entry once reached."""
        self._offset = min(self._offset + 1, len(self._entries))
        return self.selected()

    def next(self) -> Optional[str]:
        """Step forward one entry; ``None`` once back at live input."""
        self._offset = max(self._offset - 1, 0)
        return self.selected()

    def selected(self) -> Optional[str]:
        """Entry under the cursor, or ``None`` for live input."""
        if self._offset < 1:
            return None
        index = len(self._entries) - self._offset
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def load(self):
        """Load entries from the history file."""
        self._entries = []
        self._offset = 0
        self._dirty = False
        if self.history_file is None or not self.history_file.exists():
            return

        try:
            with open(self.history_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            entries = data.get("history", [])
            self._entries = [entry for entry in entries if isinstance(entry, str)]
        except (json.JSONDecodeError, IOError, AttributeError) as e:
            logger.warning("Ignoring unreadable history file %s: %s", self.history_file, e)
            self._entries = []
            return

        if self._trim():
            self._dirty = True

    def save(self):
        """Save entries to the history file if they changed."""
        if self.history_file is None or not self._dirty:
            return

        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.history_file, 'w', encoding='utf-8') as f:
                json.dump({"history": self._entries}, f, indent=2)
            self._dirty = False
        except IOError as e:
            logger.warning("Could not save history to %s: %s", self.history_file, e)
