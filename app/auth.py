"""Request guards: API key verification and owner resolution."""

from fastapi import HTTPException, Header

from app.config import settings


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Validate API key via X-API-Key or Authorization: Bearer.

    If TRACKER_API_KEY is not set, passes through (no auth).
    If set, requires matching key or raises 401.
    """
    if settings.tracker_api_key is None:
        return ""

    key = x_api_key
    if key is None and authorization and authorization.startswith("Bearer "):
        key = authorization[7:].strip()

    if key != settings.tracker_api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return key


async def current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Owner every query is scoped to: X-User-Id, else DEFAULT_USER_ID, else 401."""
    user_id = (x_user_id or "").strip() or settings.default_user_id
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing user identity")
    return user_id
