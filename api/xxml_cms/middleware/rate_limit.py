"""Rate limiting using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from xxml_cms.auth.api_key import hash_api_key
from xxml_cms.config import settings


def caller_key(request: Request) -> str:
    """Limit per API key when one is sent, otherwise per client address."""
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"key:{hash_api_key(api_key)[:16]}"
    return get_remote_address(request)


limiter = Limiter(key_func=caller_key)

create_post_limit = settings.create_post_rate_limit
create_comment_limit = settings.create_comment_rate_limit


def reset_limiter() -> None:
    """Reset the limiter storage. Used in tests to clear rate limit state."""
    limiter.reset()
