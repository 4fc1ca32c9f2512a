import pytest

from hookdispatch.config import settings
from hookdispatch.failures import FailureTracker
from hookdispatch.schemas.webhook import WebHookTier
from hookdispatch.status import ServiceStatus
from hookdispatch.webhook import WebHook


@pytest.fixture(autouse=True)
def _fast_retries(monkeypatch):
    """No real sleeping between delivery tries."""
    monkeypatch.setattr(settings, "retry_interval", 0)
    monkeypatch.setattr(settings, "jitter", "0s")


@pytest.fixture
def make_webhook():
    """
    Factory for a GitHub webhook owned by a service polled every 12m.

    Root values can be overridden with keyword arguments.
    """

    def _make(webhook_id: str = "test", **root) -> WebHook:
        values = {
            "type": "github",
            "url": "https://release-argus.io/hooks/{{ version }}",
            "secret": "argus-secret",
            "max_tries": 0,
            "desired_status_code": 0,
            "delay": "0s",
            "allow_invalid_certs": False,
            "silent_fails": False,
        }
        values.update(root)
        return WebHook(
            webhook_id,
            root=WebHookTier(**values),
            main=WebHookTier(),
            defaults=WebHookTier(),
            service_status=ServiceStatus(service_id="release-argus/Argus"),
            failed=FailureTracker(),
            parent_interval="12m",
        )

    return _make
