import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    debug: bool = False
    log_level: str = "INFO"

    # Scheduler
    sending_base_delay: str = "1h15s"
    per_try_allowance: str = "3s"
    failure_backoff: str = "15s"
    success_interval_multiplier: int = 2
    jitter: str = "0s"
    # Polling interval of the owning service when a webhook doesn't carry one
    default_interval: str = "10m"

    # Delivery
    request_timeout: float = 10.0
    retry_interval: float = 10.0

    # Hard defaults (last tier of the override chain)
    default_type: str = "github"
    default_delay: str = "0s"
    default_max_tries: int = 3
    default_desired_status_code: int = 0
    default_allow_invalid_certs: bool = False
    default_silent_fails: bool = False
    default_method: str = "POST"

    model_config = {"env_file": ".env", "env_prefix": "HOOKDISPATCH_", "extra": "ignore"}


settings = Settings()


def configure_logging(level: str = "") -> None:
    """Apply the configured log level to the root logger."""
    if settings.debug and not level:
        level = "DEBUG"
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
