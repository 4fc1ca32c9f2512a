"""Generic webhook, shaped entirely by its configuration."""

from typing import Optional

import httpx

from hookdispatch.channels import RequestContext, assemble_request


def build_custom(ctx: RequestContext) -> Optional[httpx.Request]:
    method = (ctx.method or "POST").upper()
    return assemble_request(method, ctx, {}, ctx.body.encode())
