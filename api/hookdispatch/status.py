"""Latest-version state of the service a webhook belongs to."""

import threading


class ServiceStatus:
    def __init__(self, service_id: str = "", latest_version: str = ""):
        self.service_id = service_id
        self._lock = threading.Lock()
        self._latest_version = latest_version

    @property
    def latest_version(self) -> str:
        with self._lock:
            return self._latest_version

    def set_latest_version(self, version: str) -> None:
        with self._lock:
            self._latest_version = version or ""
