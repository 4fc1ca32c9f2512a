from typing import Optional

from pydantic import BaseModel, Field


class Header(BaseModel):
    key: str
    value: str = ""


class WebHookTier(BaseModel):
    """
    One level of the override chain (root, main, defaults or hard defaults).

    Every field is optional: None (or "" for strings) means "not set here",
    and the next tier is consulted.
    """

    type: Optional[str] = Field(None, description="github, gitlab or custom")
    url: Optional[str] = Field(None, description="Target URL, may contain {{ version }}")
    secret: Optional[str] = Field(None, description="Shared secret for signatures/tokens")
    custom_headers: Optional[list[Header]] = Field(
        None, description="Extra headers, applied after the provider's own"
    )
    desired_status_code: Optional[int] = Field(
        None, description="Expected response status (0 = any 2xx)"
    )
    delay: Optional[str] = Field(None, description="Duration to wait before sending, e.g. '30m'")
    max_tries: Optional[int] = Field(None, ge=0, description="Attempts per send")
    allow_invalid_certs: Optional[bool] = None
    silent_fails: Optional[bool] = None
    method: Optional[str] = Field(None, description="HTTP method for custom webhooks")
    body: Optional[str] = Field(None, description="Request body for custom webhooks")

    model_config = {"validate_assignment": True}
