from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request


def user_rate_key(request: Request) -> str:
    """Return a per-user key when the caller identifies itself; otherwise the IP."""
    uid = (request.headers.get("x-user-id") or "").strip()
    if uid:
        return f"user:{uid}"
    return get_remote_address(request)


limiter = Limiter(key_func=user_rate_key, default_limits=[])
