from typing import Iterator

import httpx
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .api_client import create_api_client
from .services.reviews import ReviewService

security = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: HTTPAuthorizationCredentials | None = Security(security),
) -> str:
    """
    Returns the admin's bearer token. It is forwarded as-is to the reviews API,
    which is the authority on whether it is valid.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")
    return credentials.credentials


def get_api_client(token: str = Depends(get_access_token)) -> Iterator[httpx.Client]:
    client = create_api_client(token)
    try:
        yield client
    finally:
        client.close()


def get_review_service(client: httpx.Client = Depends(get_api_client)) -> ReviewService:
    return ReviewService(client)
