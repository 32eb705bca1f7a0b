"""Authentication for webhook callers."""

import secrets

from fastapi import Header, HTTPException, Query, status

from jobrunner.config import get_settings


def require_webhook_token(
    token: str | None = Query(default=None),
    x_webhook_token: str | None = Header(default=None, alias="X-Webhook-Token"),
):
    """Validate the shared webhook secret sent as ``?token=`` or X-Webhook-Token."""
    settings = get_settings()
    if not settings.WEBHOOK_TOKEN:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="WEBHOOK_TOKEN not configured")
    supplied = token or x_webhook_token
    if not supplied or not secrets.compare_digest(supplied.encode(), settings.WEBHOOK_TOKEN.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook token")
    return True
