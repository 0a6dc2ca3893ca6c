"""
State Manager - Persists the last automatic check time and throttles auto checks.
"""

import json
import logging
import math
import os
import time
from typing import Dict, Any, Optional
from threading import Lock

from .registry import CACHE_FILE

AUTO_CHECK_INTERVAL_MS = 6 * 60 * 60 * 1000  # 6 hours


def now_ms() -> int:
    """Current wall clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class StateManager:
    """
    Owns the single ``{"lastCheckedAt": <ms>}`` cache record.

    A missing or unreadable file means "never checked". Write failures are
    logged and otherwise ignored; nothing here ever raises.
    """

    def __init__(self, cache_file: str = None):
        """
        Initialize state manager.

        Args:
            cache_file: Path to the cache JSON file
        """
        if cache_file is None:
            cache_file = CACHE_FILE

        self.cache_file = cache_file
        self.logger = logging.getLogger('StateManager')
        self._lock = Lock()

    def read_cache(self) -> Dict[str, Any]:
        """Load the cache record, or {} when there is none."""
        with self._lock:
            if not os.path.exists(self.cache_file):
                return {}
            try:
                with open(self.cache_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                self.logger.warning(f"Could not load cache file: {e}")
                return {}
            return data if isinstance(data, dict) else {}

    def write_cache(self, cache: Dict[str, Any]) -> None:
        """Overwrite the cache record."""
        with self._lock:
            try:
                directory = os.path.dirname(self.cache_file)
                if directory:
                    os.makedirs(directory, exist_ok=True)

                with open(self.cache_file, 'w', encoding='utf-8') as f:
                    json.dump(cache, f)
            except OSError as e:
                self.logger.warning(f"Error saving cache file: {e}")

    def get_last_checked(self) -> Optional[int]:
        """Epoch milliseconds of the last automatic check, if any."""
        value = self.read_cache().get('lastCheckedAt')
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        # json accepts NaN and Infinity
        if not math.isfinite(value):
            return None
        return int(value)

    def should_run_auto_check(self, now: Optional[int] = None) -> bool:
        """
        Check whether an automatic check is due.

        Args:
            now: Current time in epoch milliseconds (defaults to the clock)

        Returns:
            True if at least AUTO_CHECK_INTERVAL_MS passed since the last mark
        """
        if now is None:
            now = now_ms()
        last_checked = self.get_last_checked() or 0
        return now - last_checked >= AUTO_CHECK_INTERVAL_MS

    def mark_auto_check(self, now: Optional[int] = None) -> None:
        """Record ``now`` as the last check time, whatever the check's outcome."""
        if now is None:
            now = now_ms()
        self.write_cache({'lastCheckedAt': now})
