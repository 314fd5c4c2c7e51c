from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded


def actor_key_func(request: Request) -> str:
    """Rate limit per acting account when known, per client address otherwise."""
    actor_id = request.headers.get("X-Actor-Id")
    if actor_id:
        return f"actor:{actor_id}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=actor_key_func,
)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Return a 429 with a JSON error body when a rate limit is hit."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"message": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting for the FastAPI application.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    """
    Returns the limiter instance.
    """
    return limiter
