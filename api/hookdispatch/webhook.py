"""A webhook, its override chain and its scheduling state."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

import httpx

from hookdispatch.channels import RequestContext
from hookdispatch.channels.builder import build_request
from hookdispatch.config import settings
from hookdispatch.duration import parse_duration
from hookdispatch.failures import FailureTracker
from hookdispatch.resolver import hard_defaults, resolve_field
from hookdispatch.scheduler import compute_backoff
from hookdispatch.schemas.webhook import Header, WebHookTier
from hookdispatch.status import ServiceStatus
from hookdispatch.template import render_template

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class WebHook:
    """
    A single webhook target.

    Every ``get_*`` accessor walks root -> main -> defaults -> hard_defaults
    and returns the first value that is set. ``next_runnable`` starts at the
    zero time, so a new webhook is runnable straight away.
    """

    def __init__(
        self,
        webhook_id: str,
        root: Optional[WebHookTier] = None,
        main: Optional[WebHookTier] = None,
        defaults: Optional[WebHookTier] = None,
        hard_defaults_tier: Optional[WebHookTier] = None,
        service_status: Optional[ServiceStatus] = None,
        failed: Optional[FailureTracker] = None,
        parent_interval: str = "",
    ):
        self.id = webhook_id
        self.root = root or WebHookTier()
        self.main = main or WebHookTier()
        self.defaults = defaults or WebHookTier()
        self.hard_defaults = hard_defaults_tier or hard_defaults()
        self.service_status = service_status or ServiceStatus()
        self.failed = failed if failed is not None else FailureTracker()
        self.parent_interval = parent_interval

        self._lock = threading.Lock()
        self._next_runnable = _EPOCH
        self.failed.init(self.id)

    def __repr__(self) -> str:
        return f"WebHook(id={self.id!r}, type={self.get_type()!r})"

    # -- Resolution -------------------------------------------------------

    def _resolve(self, field: str):
        return resolve_field((self.root, self.main, self.defaults, self.hard_defaults), field)

    def get_type(self) -> str:
        return self._resolve("type") or ""

    def get_secret(self) -> str:
        return self._resolve("secret") or ""

    def get_delay(self) -> str:
        return self._resolve("delay") or ""

    def get_delay_duration(self) -> timedelta:
        """The delay as a timedelta; an unparseable delay counts as none."""
        delay = self.get_delay()
        if not delay:
            return timedelta(0)
        try:
            return parse_duration(delay)
        except ValueError:
            logger.warning("WebHook %s has an invalid delay %r, ignoring it", self.id, delay)
            return timedelta(0)

    def get_desired_status_code(self) -> int:
        return self._resolve("desired_status_code") or 0

    def get_max_tries(self) -> int:
        return self._resolve("max_tries") or 0

    def get_allow_invalid_certs(self) -> bool:
        return bool(self._resolve("allow_invalid_certs"))

    def get_silent_fails(self) -> bool:
        return bool(self._resolve("silent_fails"))

    def get_custom_headers(self) -> list[Header]:
        """Custom headers with their values version-templated."""
        headers = self._resolve("custom_headers") or []
        version = self.service_status.latest_version
        return [
            Header(key=header.key, value=render_template(header.value, version))
            for header in headers
        ]

    def get_method(self) -> str:
        return self._resolve("method") or "POST"

    def get_body(self) -> str:
        return render_template(self._resolve("body") or "", self.service_status.latest_version)

    def get_url(self) -> str:
        """The URL with ``{{ version }}`` replaced by the latest version."""
        return render_template(self._resolve("url") or "", self.service_status.latest_version)

    def get_interval(self) -> timedelta:
        """Polling interval of the owning service."""
        interval = self.parent_interval or settings.default_interval
        try:
            return parse_duration(interval)
        except ValueError:
            logger.warning(
                "WebHook %s has an invalid interval %r, using %s",
                self.id, interval, settings.default_interval,
            )
            return parse_duration(settings.default_interval)

    # -- Request ----------------------------------------------------------

    def build_request(self) -> Optional[httpx.Request]:
        """
        Build the request for this webhook's type.

        Returns None if the URL is malformed; the caller treats that as a
        failed attempt.
        """
        ctx = RequestContext(
            webhook_id=self.id,
            url=self.get_url(),
            secret=self.get_secret(),
            custom_headers=self.get_custom_headers(),
            method=self.get_method(),
            body=self.get_body(),
        )
        return build_request(self.get_type(), ctx)

    def is_success(self, status_code: int) -> bool:
        """Whether *status_code* counts as a successful delivery."""
        desired = self.get_desired_status_code()
        if desired == 0:
            return 200 <= status_code < 300
        return status_code == desired

    # -- Scheduling -------------------------------------------------------

    @property
    def next_runnable(self) -> datetime:
        with self._lock:
            return self._next_runnable

    def set_next_runnable(self, when: Optional[datetime]) -> None:
        """Set the time the webhook becomes runnable (None resets to the zero time)."""
        if when is None:
            when = _EPOCH
        elif when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        with self._lock:
            self._next_runnable = when

    def is_runnable(self) -> bool:
        return datetime.now(timezone.utc) >= self.next_runnable

    def set_executing(self, add_delay: bool, sending: bool) -> None:
        """
        Push next_runnable back after an attempt starts (sending=True) or
        finishes (sending=False). The outcome must already be recorded in
        the failure tracker when sending is False.
        """
        backoff = compute_backoff(
            failed=self.failed.get(self.id),
            sending=sending,
            interval=self.get_interval(),
            delay=self.get_delay_duration() if add_delay else timedelta(0),
            max_tries=self.get_max_tries(),
            add_delay=add_delay,
        )
        self.set_next_runnable(datetime.now(timezone.utc) + backoff)
        logger.debug("WebHook %s next runnable in %s", self.id, backoff)
