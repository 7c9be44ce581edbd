import httpx
from .config import get_settings


def create_api_client(access_token: str, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """
    Returns an httpx client for the upstream reviews API that carries the
    admin's bearer token on every request.
    """
    settings = get_settings()
    return httpx.Client(
        base_url=settings.REVIEWS_API_URL,
        timeout=settings.REVIEWS_API_TIMEOUT,
        headers={
            "x-platform": "web",
            "Authorization": f"Bearer {access_token}",
        },
        transport=transport,
    )
