"""Outcome of the last send attempt per webhook."""

import threading
from typing import Dict, Optional


class FailureTracker:
    """
    Maps webhook ID -> last outcome.

    None = never attempted, True = failed, False = succeeded.
    Safe to share between threads; writes to the same ID still have to be
    ordered by the caller.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._failed: Dict[str, Optional[bool]] = {}

    def set(self, webhook_id: str, failed: Optional[bool]) -> None:
        with self._lock:
            self._failed[webhook_id] = failed

    def get(self, webhook_id: str) -> Optional[bool]:
        with self._lock:
            return self._failed.get(webhook_id)

    def init(self, webhook_id: str) -> None:
        """Register *webhook_id* as never attempted, keeping any known outcome."""
        with self._lock:
            self._failed.setdefault(webhook_id, None)

    def reset(self, webhook_id: str) -> None:
        """Forget the outcome so the webhook counts as never attempted."""
        self.set(webhook_id, None)

    def all_succeeded(self) -> bool:
        """True only if every tracked webhook's last attempt succeeded."""
        with self._lock:
            return all(failed is False for failed in self._failed.values())

    def snapshot(self) -> Dict[str, Optional[bool]]:
        with self._lock:
            return dict(self._failed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._failed)
