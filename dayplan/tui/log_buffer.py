"""
Bounded in-memory log handler so recent log lines show up in the TUI.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import List, Optional


class LogBuffer(logging.Handler):
    """Keeps the last ``max_lines`` formatted records."""

    def __init__(self, max_lines: int = 200, level: int = logging.INFO):
        super().__init__(level=level)
        self._lines: deque = deque(maxlen=max_lines)
        self._lines_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        line = f"[{ts}] {record.levelname.lower()}: {record.getMessage()}"
        with self._lines_lock:
            self._lines.append(line)

    def lines(self, count: Optional[int] = None) -> List[str]:
        with self._lines_lock:
            lines = list(self._lines)
        if count is None:
            return lines
        return lines[-count:] if count > 0 else []
