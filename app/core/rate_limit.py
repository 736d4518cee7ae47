"""Request rate limiting (slowapi), keyed by client address."""

from slowapi import Limiter
from starlette.requests import Request


def client_address(request: Request) -> str:
    """First forwarded address when behind a proxy, else the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.client.host if request.client else "127.0.0.1"


limiter = Limiter(key_func=client_address)
