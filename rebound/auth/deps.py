"""Request identity for profile-scoped routes."""
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from rebound import settings

MAX_USER_ID_LENGTH = 64


def get_current_user_id(
    request: Request,
    x_user_id: Optional[str] = Header(default=None),
) -> str:
    """Resolve the caller from the X-User-Id header.

    Without the header every request shares DEFAULT_USER_ID, matching a
    single-user install.
    """
    user_id = (x_user_id or "").strip() or settings.DEFAULT_USER_ID
    if len(user_id) > MAX_USER_ID_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"X-User-Id must be at most {MAX_USER_ID_LENGTH} characters",
        )
    request.state.user_id = user_id
    return user_id
