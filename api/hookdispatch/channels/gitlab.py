"""GitLab pipeline-trigger webhook."""

from typing import Optional
from urllib.parse import urlencode

import httpx

from hookdispatch.channels import RequestContext, assemble_request

GITLAB_REF = "master"


def build_gitlab(ctx: RequestContext) -> Optional[httpx.Request]:
    """
    Build a GitLab trigger request.

    The token goes in both the form body (pipeline trigger API) and the
    X-Gitlab-Token header (webhook receivers).
    """
    body = urlencode({"token": ctx.secret, "ref": GITLAB_REF}).encode()
    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "X-Gitlab-Token": ctx.secret,
    }
    return assemble_request("POST", ctx, headers, body)
