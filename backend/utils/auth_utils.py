from typing import Dict, List
import os

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request, status
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

load_dotenv()

# Tokens are issued by the auth service; this backend only verifies them.
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")


def get_current_user(request: Request) -> Dict[str, any]:
    """
    FastAPI dependency to validate the bearer JWT from the Authorization header.

    Usage:
        @router.get("/secure-data")
        def secure_endpoint(user: dict = Depends(get_current_user)):
            ...
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
        )

    # The token is expected to be in the format "Bearer <token>"
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return jwt.decode(parts[1], JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token has expired"
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Invalid or expired token: {e}"
        )


def get_user_identifier(user: Dict[str, any]) -> str:
    """Best identity to put in log lines."""
    if not user:
        return "anonymous"
    return str(user.get("username") or user.get("user_id") or user.get("sub") or "unknown")


def require_role(roles: List[str]):
    """Dependency factory restricting a route to users holding one of `roles`."""
    def checker(user: dict = Depends(get_current_user)):
        if user.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(roles)}"
            )
        return user
    return checker
