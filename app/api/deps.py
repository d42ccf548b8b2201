from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """GitHub access token from the Authorization header, None when absent"""
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials
